# =============================================================================
# immich_tools/albums.py  -  Album Tools
# =============================================================================
#
# albums_list / albums_get / albums_create / albums_update / albums_delete
# map one-to-one onto the /api/albums endpoints.  Two tools reshape the
# response to keep the agent's context small:
#
#   albums_get_summary  - album metadata and counts, without the asset list
#   albums_check_assets - membership flags for a handful of asset ids
# =============================================================================

from typing import Any

from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import (
    AlbumAssetsInput,
    AlbumIdInput,
    CreateAlbumInput,
    ListAlbumsInput,
    UpdateAlbumInput,
)


class AlbumsTool(ToolAdapter):
    DOMAIN = "albums"
    TOOLS = (
        ToolSpec(
            "albums_list",
            "List all albums from Immich. Can optionally filter by shared status or specific asset.",
            ListAlbumsInput,
            "list_albums",
        ),
        ToolSpec(
            "albums_create",
            "Create a new album in Immich with optional assets.",
            CreateAlbumInput,
            "create_album",
        ),
        ToolSpec(
            "albums_get",
            "Get details of a specific album by ID.",
            AlbumIdInput,
            "get_album",
        ),
        ToolSpec(
            "albums_update",
            "Update an existing album's name or description.",
            UpdateAlbumInput,
            "update_album",
        ),
        ToolSpec(
            "albums_delete",
            "Delete an album from Immich.",
            AlbumIdInput,
            "delete_album",
        ),
        ToolSpec(
            "albums_add_assets",
            "Add assets to an existing album.",
            AlbumAssetsInput,
            "add_assets",
        ),
        ToolSpec(
            "albums_remove_assets",
            "Remove assets from an album.",
            AlbumAssetsInput,
            "remove_assets",
        ),
        ToolSpec(
            "albums_get_summary",
            "Get lightweight album summary without the full asset list. Returns album metadata, "
            "asset count, and date range only. Use this instead of albums_get when you only need "
            "album info without asset details.",
            AlbumIdInput,
            "get_album_summary",
        ),
        ToolSpec(
            "albums_check_assets",
            "Check if specific assets are members of an album. Returns membership status for "
            "each asset ID without fetching the full album.",
            AlbumAssetsInput,
            "check_assets",
        ),
    )

    async def list_albums(self, params: ListAlbumsInput) -> Any:
        return await self.client.get("/api/albums", params.to_params())

    async def create_album(self, params: CreateAlbumInput) -> Any:
        return await self.client.post(
            "/api/albums",
            {
                "albumName": params.album_name,
                "description": params.description or "",
                "assetIds": params.asset_ids or [],
            },
        )

    async def get_album(self, params: AlbumIdInput) -> Any:
        return await self.client.get(f"/api/albums/{params.album_id}")

    async def update_album(self, params: UpdateAlbumInput) -> Any:
        changes = params.to_params(exclude=("album_id",))
        if not changes.get("albumName"):
            changes.pop("albumName", None)
        return await self.client.patch(f"/api/albums/{params.album_id}", changes)

    async def delete_album(self, params: AlbumIdInput) -> dict[str, Any]:
        await self.client.delete(f"/api/albums/{params.album_id}")
        return {"success": True, "message": f"Album {params.album_id} deleted successfully"}

    async def add_assets(self, params: AlbumAssetsInput) -> Any:
        return await self.client.put(f"/api/albums/{params.album_id}/assets", {"ids": params.asset_ids})

    async def remove_assets(self, params: AlbumAssetsInput) -> Any:
        return await self.client.delete(f"/api/albums/{params.album_id}/assets", {"ids": params.asset_ids})

    async def get_album_summary(self, params: AlbumIdInput) -> dict[str, Any]:
        album = await self.client.get(f"/api/albums/{params.album_id}")
        return {
            "id": album["id"],
            "albumName": album.get("albumName"),
            "description": album.get("description") or "",
            "assetCount": album.get("assetCount") or len(album.get("assets") or []),
            "startDate": album.get("startDate"),
            "endDate": album.get("endDate"),
            "createdAt": album.get("createdAt"),
            "updatedAt": album.get("updatedAt"),
            "ownerId": album.get("ownerId"),
            "shared": bool(album.get("shared", False)),
        }

    async def check_assets(self, params: AlbumAssetsInput) -> dict[str, Any]:
        album = await self.client.get(f"/api/albums/{params.album_id}")
        members = {asset["id"] for asset in album.get("assets") or []}

        results = {asset_id: asset_id in members for asset_id in params.asset_ids}
        # counts follow the query list, so a repeated id is counted each time
        member_count = sum(1 for asset_id in params.asset_ids if asset_id in members)
        return {
            "albumId": params.album_id,
            "results": results,
            "memberCount": member_count,
            "nonMemberCount": len(params.asset_ids) - member_count,
        }
