# =============================================================================
# immich_core/cache.py  -  Response Cache
# =============================================================================
#
# A time-to-live cache for GET responses, keyed by request signature:
#
#     "GET:/api/albums:{\"shared\":true}"
#
# Rules:
#   - An entry is valid while  now - stored_at < ttl.
#   - Expired entries are removed lazily, when a lookup finds them.  There is
#     no background sweep.
#   - set() always overwrites, stamping the entry with the current time.
#   - clear() drops everything at once, for callers that need fresh data.
#
# Only the HTTP client's get() uses this cache.  Writes (POST/PUT/PATCH/
# DELETE) never read it and never invalidate it, so a read cached before a
# write can stay stale until its TTL runs out.
#
# The store is a plain dict with no lock.  The server runs on a single
# asyncio event loop, and the dict is only touched between awaits.
# =============================================================================

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional

from immich_core.models import CacheEntry

logger = logging.getLogger(__name__)


class ResponseCache:
    """In-process TTL cache for decoded response bodies.

    Args:
        ttl: Lifetime of an entry, in seconds.
        clock: Monotonic time source; injectable so tests can move time.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def make_key(method: str, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the cache key for a request.

        Parameters are serialized with sorted keys, so two requests with the
        same parameters collide regardless of insertion order.
        """
        serialized = json.dumps(params or {}, sort_keys=True, separators=(",", ":"), default=str)
        return f"{method.upper()}:{endpoint}:{serialized}"

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < self.ttl:
            logger.debug("Cache hit: %s", key)
            return entry.payload
        del self._entries[key]
        logger.debug("Cache expired: %s", key)
        return None

    def set(self, key: str, payload: Any) -> None:
        self._entries[key] = CacheEntry(payload=payload, stored_at=self._clock())
        logger.debug("Cache set: %s", key)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
