# =============================================================================
# immich_tools/__init__.py
# =============================================================================
# The tool layer between the agent framework and the Immich client.
#
# Each domain module (albums, assets, search, people, server) defines a
# ToolAdapter with:
#   1. a catalog of ToolSpecs (name, description, pydantic input model),
#   2. one handler per tool that builds the request, calls ImmichClient and
#      reshapes the response where the raw payload is too large.
#
# mcp_server.py publishes every catalog entry as a FastMCP tool.  Adapters
# never call each other; they share only the process-wide client and cache.
# =============================================================================
