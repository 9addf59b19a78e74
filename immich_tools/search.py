# =============================================================================
# immich_tools/search.py  -  Search Tools
# =============================================================================

from typing import Any

from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import (
    FilenameSearchInput,
    MetadataSearchInput,
    NoInput,
    SearchInput,
    SmartSearchInput,
)


class SearchTool(ToolAdapter):
    DOMAIN = "search"
    TOOLS = (
        ToolSpec(
            "search_general",
            "General search across Immich assets, albums, and people.",
            SearchInput,
            "general_search",
        ),
        ToolSpec(
            "search_smart",
            "Smart search using AI-powered image recognition and metadata.",
            SmartSearchInput,
            "smart_search",
        ),
        ToolSpec(
            "search_metadata",
            "Search assets by EXIF metadata and location information.",
            MetadataSearchInput,
            "metadata_search",
        ),
        ToolSpec(
            "search_explore",
            "Explore assets by detected objects, faces, or places.",
            NoInput,
            "explore",
        ),
        ToolSpec(
            "search_by_filename",
            "Search assets by original filename. Supports exact match or pattern matching.",
            FilenameSearchInput,
            "filename_search",
        ),
    )

    async def general_search(self, params: SearchInput) -> Any:
        return await self.client.get("/api/search", params.to_params())

    async def smart_search(self, params: SmartSearchInput) -> Any:
        return await self.client.get("/api/search/smart", params.to_params())

    async def metadata_search(self, params: MetadataSearchInput) -> Any:
        return await self.client.get("/api/search/metadata", params.to_params())

    async def explore(self, params: NoInput) -> Any:
        return await self.client.get("/api/search/explore")

    async def filename_search(self, params: FilenameSearchInput) -> Any:
        # originalFileName is only honoured in the POST form of this endpoint
        return await self.client.post(
            "/api/search/metadata",
            {"originalFileName": params.filename, "page": params.page, "size": params.size},
        )
