# =============================================================================
# immich_core/models.py  -  Data Models
# =============================================================================
#
# Plain dataclasses for the values that flow through the engine:
#
#   CacheEntry         - a cached GET payload and the moment it was stored
#   UploadOptions      - optional metadata overrides for one file upload
#   UploadedAsset      - a file that reached the server (and its asset id)
#   FailedUpload       - a file that did not, with the reason
#   UploadBatchResult  - the outcome of a whole multi-file upload call
#
# The result types expose to_dict() producing the camelCase JSON shape the
# tools return, matching the field names Immich itself uses.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# CacheEntry - owned exclusively by ResponseCache
# -----------------------------------------------------------------------------
@dataclass
class CacheEntry:
    """A cached response body with the clock reading taken when it was stored."""

    payload: Any
    stored_at: float


# -----------------------------------------------------------------------------
# UploadOptions - metadata Immich requires on every upload
# -----------------------------------------------------------------------------
# Any field left as None is derived from the file itself at upload time
# (see ImmichClient.upload_asset).
# -----------------------------------------------------------------------------
@dataclass
class UploadOptions:
    """Caller overrides for the four form fields sent with an upload."""

    device_asset_id: Optional[str] = None
    device_id: Optional[str] = None
    file_created_at: Optional[str] = None     # ISO-8601
    file_modified_at: Optional[str] = None    # ISO-8601


# -----------------------------------------------------------------------------
# Per-file upload outcomes
# -----------------------------------------------------------------------------
@dataclass
class UploadedAsset:
    """A file the server accepted."""

    file_path: str
    asset_id: str
    status: str = "created"                   # "created" or "duplicate"

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "assetId": self.asset_id, "status": self.status}


@dataclass
class FailedUpload:
    """A file that could not be uploaded."""

    file_path: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "error": self.error}


# -----------------------------------------------------------------------------
# UploadBatchResult - the whole batch, in the caller's original file order
# -----------------------------------------------------------------------------
@dataclass
class UploadBatchResult:
    """Outcome of uploading several files, with optional album attachment."""

    uploaded: list[UploadedAsset] = field(default_factory=list)
    failed: list[FailedUpload] = field(default_factory=list)
    album_id: Optional[str] = None

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "uploaded": [item.to_dict() for item in self.uploaded],
            "failed": [item.to_dict() for item in self.failed],
            "albumId": self.album_id,
        }
