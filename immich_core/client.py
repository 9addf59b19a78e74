# =============================================================================
# immich_core/client.py  -  Immich REST API Client (the transport)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps one httpx.AsyncClient configured with the Immich base URL, the
#   X-API-Key header and a fixed timeout, and exposes one coroutine per HTTP
#   verb: get / post / put / patch / delete.  Every verb funnels through
#   _request(), the single choke point that:
#     1. logs the outgoing request,
#     2. sends it (no retries: one attempt, one outcome),
#     3. logs the response,
#     4. converts any failure into an ImmichApiError,
#     5. decodes the body (JSON, text, or None for an empty body).
#
# CACHING:
#   get() consults the ResponseCache before dispatch and fills it after a
#   successful response, unless called with use_cache=False.  The other verbs
#   never touch the cache.
#
# UPLOADS:
#   upload_asset() sends a multipart body instead of JSON, with the timeout
#   disabled so large videos are not cut off.  The batch logic (many files,
#   album find-or-create) lives in immich_core/upload.py.
# =============================================================================

import asyncio
import logging
import mimetypes
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx

from immich_core.cache import ResponseCache
from immich_core.config import get_settings
from immich_core.errors import ImmichApiError, NotFoundError
from immich_core.models import UploadOptions

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_DEVICE_ID = "mcp-server"
UNKNOWN_ERROR_MESSAGE = "Unknown Immich API error"

# Probed in order by validate_connection().  Different Immich releases expose
# different health endpoints; the first that answers wins.
HEALTH_CHECK_ENDPOINTS = (
    "/api/users/me",
    "/api/server/info",
    "/api/server-info",
    "/api/server/version",
    "/api/server-info/version",
)
FALLBACK_ENDPOINT = "/api"


def _clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop parameters that were not supplied."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def _iso_timestamp(epoch_seconds: float) -> str:
    """Render a filesystem timestamp the way Immich expects (UTC, ms, 'Z')."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_from_response(response: httpx.Response) -> ImmichApiError:
    """Normalize a non-2xx response, preferring the service's own error body."""
    message = None
    error_code = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        raw_message = body.get("message")
        if isinstance(raw_message, list):
            # class-validator failures arrive as a list of messages
            message = "; ".join(str(item) for item in raw_message)
        elif raw_message:
            message = str(raw_message)
        if body.get("error"):
            error_code = str(body["error"])

    return ImmichApiError(
        message=message or response.reason_phrase or UNKNOWN_ERROR_MESSAGE,
        status_code=response.status_code,
        error_code=error_code,
    )


def _inspect_file(file_path: str) -> tuple[Path, os.stat_result]:
    absolute_path = Path(file_path).expanduser().resolve()
    if not absolute_path.is_file():
        raise NotFoundError(str(absolute_path))
    return absolute_path, absolute_path.stat()


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ImmichClient:
    """Async client for the Immich REST API.

    Args:
        base_url: Root of the Immich instance, e.g. "https://photos.example.com".
        api_key: Sent as X-API-Key on every request.
        cache_ttl: Lifetime of cached GET responses, in seconds.
        timeout: Per-request timeout in seconds (uploads ignore it).
        cache: Use this cache instead of creating one.
        transport: Custom httpx transport (tests pass an httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        cache_ttl: float = 300,
        timeout: float = DEFAULT_TIMEOUT,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else ResponseCache(cache_ttl)
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-API-Key": api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ImmichClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # The choke point
    # =========================================================================
    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        disable_timeout: bool = False,
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json
        if data is not None:
            kwargs["data"] = data
        if files is not None:
            kwargs["files"] = files
        if disable_timeout:
            kwargs["timeout"] = None

        logger.debug("Immich API request: %s %s params=%s", method, endpoint, params)
        try:
            response = await self._http.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as exc:
            detail = f": {exc}" if str(exc) else ""
            error = ImmichApiError(
                message=f"Request to {endpoint} timed out{detail}",
                status_code=500,
                error_code="timeout",
            )
            logger.error("Immich API error: %r", error)
            raise error from exc
        except httpx.RequestError as exc:
            error = ImmichApiError(
                message=str(exc) or UNKNOWN_ERROR_MESSAGE,
                status_code=500,
                error_code="transport_error",
            )
            logger.error("Immich API error: %r", error)
            raise error from exc

        logger.debug("Immich API response: %s %s", response.status_code, endpoint)
        if not response.is_success:
            error = _error_from_response(response)
            logger.error("Immich API error: %r", error)
            raise error
        return _decode_body(response)

    # =========================================================================
    # Verbs
    # =========================================================================
    async def get(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        use_cache: bool = True,
    ) -> Any:
        """GET a resource, answering from the cache when a fresh entry exists."""
        params = _clean_params(params)
        cache_key = ResponseCache.make_key("GET", endpoint, params)

        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        result = await self._request("GET", endpoint, params=params)

        # an empty body decodes to None, which the cache cannot tell from a miss
        if use_cache and result is not None:
            self.cache.set(cache_key, result)
        return result

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("PUT", endpoint, json=data)

    async def patch(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("PATCH", endpoint, json=data)

    async def delete(self, endpoint: str, data: Any = None) -> Any:
        """DELETE a resource; Immich takes a JSON body for bulk removals."""
        return await self._request("DELETE", endpoint, json=data)

    # =========================================================================
    # Uploads
    # =========================================================================
    async def upload_asset(self, file_path: str, options: Optional[UploadOptions] = None) -> Any:
        """Upload one local file as a new asset.

        Relative paths resolve against the working directory.  Metadata the
        caller leaves out is derived from the file: the device asset id from
        its name and the current time, the timestamps from its stat() record.

        Returns:
            The decoded response, normally {"id": ..., "status": "created"}
            (or "duplicate" when the server already holds the same file).

        Raises:
            NotFoundError: the path does not point to an existing file.
            ImmichApiError: the server rejected the upload.
        """
        options = options or UploadOptions()
        absolute_path, stats = await asyncio.to_thread(_inspect_file, file_path)
        filename = absolute_path.name
        # st_birthtime is missing on most Linux filesystems
        created = getattr(stats, "st_birthtime", stats.st_ctime)

        form = {
            "deviceAssetId": options.device_asset_id or f"{filename}-{int(time.time() * 1000)}",
            "deviceId": options.device_id or DEFAULT_DEVICE_ID,
            "fileCreatedAt": options.file_created_at or _iso_timestamp(created),
            "fileModifiedAt": options.file_modified_at or _iso_timestamp(stats.st_mtime),
        }
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        logger.debug(
            "Uploading asset: %s (deviceAssetId=%s)", absolute_path, form["deviceAssetId"]
        )
        # httpx streams the multipart body in small chunks, so the event loop
        # never waits on more than one chunk read at a time
        with absolute_path.open("rb") as stream:
            return await self._request(
                "POST",
                "/api/assets",
                data=form,
                files={"assetData": (filename, stream, content_type)},
                disable_timeout=True,
            )

    # =========================================================================
    # Housekeeping
    # =========================================================================
    async def validate_connection(self) -> bool:
        """Check that the instance is reachable and the API key is accepted.

        Tries each health-check endpoint in order and stops at the first one
        that answers.  When none does, a plain GET of /api decides.
        """
        for endpoint in HEALTH_CHECK_ENDPOINTS:
            try:
                await self.get(endpoint, use_cache=False)
            except ImmichApiError:
                logger.debug("Endpoint not available, trying next: %s", endpoint)
                continue
            logger.info("Immich API connection validated via %s", endpoint)
            return True

        try:
            await self._request("GET", FALLBACK_ENDPOINT)
        except ImmichApiError:
            logger.error("All validation endpoints failed, API may be unreachable")
            return False
        logger.info("Immich API connection validated (base API accessible)")
        return True

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Immich API cache cleared")


# =============================================================================
# Process-wide client
# =============================================================================
# One client (and so one cache) per process, built from the settings on first
# use.  reset_client() forgets it; the next get_client() builds a new one.
# =============================================================================
_client: Optional[ImmichClient] = None


def get_client() -> ImmichClient:
    global _client
    if _client is None:
        settings = get_settings()
        _client = ImmichClient(
            base_url=settings.immich_instance_url,
            api_key=settings.immich_api_key,
            cache_ttl=settings.cache_ttl,
            timeout=settings.request_timeout,
        )
    return _client


def reset_client() -> None:
    global _client
    _client = None
