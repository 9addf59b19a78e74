# =============================================================================
# immich_core/__init__.py
# =============================================================================
# The engine of the Immich tool server: configuration, the error taxonomy,
# data models, the response cache, the HTTP client and the upload pipeline.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  Every module here can be used
#   from a plain asyncio script; the MCP wiring lives in immich_tools/.
# =============================================================================
