# =============================================================================
# immich_core/upload.py  -  Batch Upload Pipeline
# =============================================================================
#
# HOW A BATCH RUNS:
#   1. Files are uploaded one at a time, in the order given.  A failure on
#      one file is recorded and the loop moves on to the next.
#   2. If at least one file made it AND the caller named a target album
#      (by id or by name), the album is resolved:
#        - an id is used as-is;
#        - a name is looked up case-insensitively among all albums, and the
#          album is created when no match exists (find-or-create).
#   3. Every uploaded asset id is attached to that album in a single call.
#
# Album problems never change the batch verdict: the files are already on the
# server, so a failed lookup, create or attach is logged and the result
# reports the uploads as they happened.
# =============================================================================

import logging
from typing import Any, Optional, Sequence

from immich_core.client import ImmichClient
from immich_core.errors import ImmichApiError, ImmichToolError
from immich_core.models import FailedUpload, UploadBatchResult, UploadedAsset

logger = logging.getLogger(__name__)


async def find_or_create_album(client: ImmichClient, album_name: str) -> str:
    """Return the id of the album called album_name, creating it if needed.

    The match is exact but case-insensitive: "summer trip" finds an existing
    "Summer Trip" instead of creating a second album.  The album list is
    always read fresh, so an album created moments ago is found.
    """
    wanted = album_name.lower()
    albums: Sequence[dict[str, Any]] = await client.get("/api/albums", use_cache=False) or []
    for album in albums:
        if str(album.get("albumName", "")).lower() == wanted:
            logger.info("Found existing album: %s (%s)", album_name, album["id"])
            return album["id"]

    created = await client.post("/api/albums", {"albumName": album_name})
    logger.info("Created new album: %s (%s)", album_name, created["id"])
    return created["id"]


async def upload_assets(
    client: ImmichClient,
    file_paths: Sequence[str],
    album_id: Optional[str] = None,
    album_name: Optional[str] = None,
) -> UploadBatchResult:
    """Upload file_paths sequentially and optionally file them into an album."""
    result = UploadBatchResult(album_id=album_id)

    for file_path in file_paths:
        try:
            response = await client.upload_asset(file_path)
        except (ImmichToolError, OSError) as exc:
            result.failed.append(FailedUpload(file_path=file_path, error=str(exc) or "Unknown error"))
            logger.error("Failed to upload asset: %s (%s)", file_path, exc)
            continue

        if not isinstance(response, dict) or not response.get("id"):
            result.failed.append(
                FailedUpload(file_path=file_path, error="Upload response did not include an asset id")
            )
            logger.error("Unexpected upload response for %s: %r", file_path, response)
            continue

        uploaded = UploadedAsset(
            file_path=file_path,
            asset_id=response["id"],
            status=response.get("status") or "created",
        )
        result.uploaded.append(uploaded)
        logger.info("Uploaded asset: %s -> %s", file_path, uploaded.asset_id)

    if result.uploaded and (album_id or album_name):
        await _attach_to_album(client, result, album_id, album_name)

    return result


async def _attach_to_album(
    client: ImmichClient,
    result: UploadBatchResult,
    album_id: Optional[str],
    album_name: Optional[str],
) -> None:
    try:
        target = album_id or await find_or_create_album(client, album_name)
    except (ImmichApiError, KeyError, TypeError) as exc:
        logger.error("Failed to resolve album %r: %s", album_name, exc)
        return
    result.album_id = target

    asset_ids = [item.asset_id for item in result.uploaded]
    try:
        await client.put(f"/api/albums/{target}/assets", {"ids": asset_ids})
    except ImmichApiError as exc:
        logger.error("Failed to add assets to album %s: %s", target, exc)
        return
    logger.info("Added %d assets to album %s", len(asset_ids), target)
