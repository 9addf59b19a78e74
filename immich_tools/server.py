# =============================================================================
# immich_tools/server.py  -  Server & Housekeeping Tools
# =============================================================================
#
# server_validate_connection runs the same probe main.py runs at start-up.
# server_clear_cache flushes the response cache so the next reads go to the
# server; use it after changes made outside this process.
# =============================================================================

from typing import Any

from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import NoInput, ServerStatisticsInput


class ServerTool(ToolAdapter):
    DOMAIN = "server"
    TOOLS = (
        ToolSpec(
            "server_get_info",
            "Get the Immich server version and build information.",
            NoInput,
            "get_info",
        ),
        ToolSpec(
            "server_get_statistics",
            "Get server-wide usage statistics (photos, videos, disk usage per user).",
            ServerStatisticsInput,
            "get_statistics",
        ),
        ToolSpec(
            "server_validate_connection",
            "Check that the Immich server is reachable and the API key is accepted.",
            NoInput,
            "validate_connection",
        ),
        ToolSpec(
            "server_clear_cache",
            "Clear cached responses so subsequent reads fetch fresh data from Immich.",
            NoInput,
            "clear_cache",
        ),
    )

    async def get_info(self, params: NoInput) -> Any:
        return await self.client.get("/api/server/about")

    async def get_statistics(self, params: ServerStatisticsInput) -> Any:
        return await self.client.get("/api/server/statistics", params.to_params())

    async def validate_connection(self, params: NoInput) -> dict[str, Any]:
        return {"connected": await self.client.validate_connection()}

    async def clear_cache(self, params: NoInput) -> dict[str, Any]:
        self.client.clear_cache()
        return {"success": True, "message": "Cache cleared"}
