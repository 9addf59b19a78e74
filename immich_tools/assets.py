# =============================================================================
# immich_tools/assets.py  -  Asset Tools
# =============================================================================
#
# Listing, reading, editing and deleting assets, plus:
#   assets_get_random      - never cached; each call should be a new draw
#   assets_get_metadata    - the EXIF slice of an asset, without thumbnails etc.
#   assets_upload          - the multi-file upload pipeline
#                            (immich_core/upload.py)
# =============================================================================

from typing import Any

from immich_core.upload import upload_assets
from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import (
    AssetIdInput,
    AssetStatisticsInput,
    BulkUpdateAssetsInput,
    GetAssetInput,
    ListAssetsInput,
    RandomAssetsInput,
    UpdateAssetInput,
    UpdateAssetMetadataInput,
    UploadAssetsInput,
)

METADATA_FIELDS = ("id", "originalFileName", "type", "fileCreatedAt", "description", "exifInfo")


class AssetsTool(ToolAdapter):
    DOMAIN = "assets"
    TOOLS = (
        ToolSpec(
            "assets_list",
            "List assets from Immich with pagination and filtering options.",
            ListAssetsInput,
            "list_assets",
        ),
        ToolSpec(
            "assets_get",
            "Get details of a specific asset by ID.",
            GetAssetInput,
            "get_asset",
        ),
        ToolSpec(
            "assets_update",
            "Update an asset's properties like favorite status, archive status, or description.",
            UpdateAssetInput,
            "update_asset",
        ),
        ToolSpec(
            "assets_delete",
            "Delete an asset from Immich.",
            AssetIdInput,
            "delete_asset",
        ),
        ToolSpec(
            "assets_bulk_update",
            "Update multiple assets at once with the same properties.",
            BulkUpdateAssetsInput,
            "bulk_update",
        ),
        ToolSpec(
            "assets_get_statistics",
            "Get statistics about assets (total count, by type, etc.).",
            AssetStatisticsInput,
            "get_statistics",
        ),
        ToolSpec(
            "assets_get_random",
            "Get random assets from the library.",
            RandomAssetsInput,
            "get_random",
        ),
        ToolSpec(
            "assets_get_metadata",
            "Get the EXIF metadata (camera, lens, location, capture time) of an asset.",
            AssetIdInput,
            "get_metadata",
        ),
        ToolSpec(
            "assets_update_metadata",
            "Update an asset's description, GPS location or capture time.",
            UpdateAssetMetadataInput,
            "update_metadata",
        ),
        ToolSpec(
            "assets_upload",
            "Upload one or more files to the Immich library. Optionally add to an album.",
            UploadAssetsInput,
            "upload",
        ),
    )

    async def list_assets(self, params: ListAssetsInput) -> Any:
        return await self.client.get("/api/assets", params.to_params())

    async def get_asset(self, params: GetAssetInput) -> Any:
        return await self.client.get(f"/api/assets/{params.asset_id}", params.to_params(exclude=("asset_id",)))

    async def update_asset(self, params: UpdateAssetInput) -> Any:
        return await self.client.put(f"/api/assets/{params.asset_id}", params.to_params(exclude=("asset_id",)))

    async def delete_asset(self, params: AssetIdInput) -> dict[str, Any]:
        await self.client.delete(f"/api/assets/{params.asset_id}")
        return {"success": True, "message": f"Asset {params.asset_id} deleted successfully"}

    async def bulk_update(self, params: BulkUpdateAssetsInput) -> dict[str, Any]:
        payload = {"ids": params.asset_ids, **params.to_params(exclude=("asset_ids",))}
        await self.client.put("/api/assets", payload)
        count = len(params.asset_ids)
        return {
            "success": True,
            "message": f"{count} assets updated successfully",
            "updatedCount": count,
        }

    async def get_statistics(self, params: AssetStatisticsInput) -> Any:
        return await self.client.get("/api/assets/statistics", params.to_params())

    async def get_random(self, params: RandomAssetsInput) -> Any:
        return await self.client.get("/api/assets/random", params.to_params(), use_cache=False)

    async def get_metadata(self, params: AssetIdInput) -> dict[str, Any]:
        asset = await self.client.get(f"/api/assets/{params.asset_id}")
        return {name: asset.get(name) for name in METADATA_FIELDS}

    async def update_metadata(self, params: UpdateAssetMetadataInput) -> Any:
        return await self.client.put(f"/api/assets/{params.asset_id}", params.to_params(exclude=("asset_id",)))

    async def upload(self, params: UploadAssetsInput) -> dict[str, Any]:
        result = await upload_assets(
            self.client,
            params.file_paths,
            album_id=params.album_id,
            album_name=params.album_name,
        )
        return result.to_dict()
