"""
Listing cache with path-scoped invalidation.

Cached reads live in one Valkey hash per logical listing path
(e.g. "/dashboard/invoices"), one hash field per distinct read (query, page).
Invalidating a path deletes the whole hash, so every read under that path
goes back to the store next time. Deleting a missing hash is a no-op, which
makes invalidation idempotent.
"""

import logging
from typing import Callable

from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class ListingCache:
    """
    Read-through cache for listing views.

    Usage:
        cache = ListingCache(valkey, ttl_seconds=300)
        rows = cache.get_or_load("/dashboard/invoices", "filtered:lee:1", load_rows)
        cache.invalidate("/dashboard/invoices")  # after a successful mutation
    """

    KEY_PREFIX = "listing:"

    def __init__(self, valkey: ValkeyClient, ttl_seconds: int = 300):
        self._valkey = valkey
        self._ttl_seconds = ttl_seconds

    def _key(self, path: str) -> str:
        """Generate Valkey key for a listing path."""
        return f"{self.KEY_PREFIX}{path}"

    def get_or_load(self, path: str, read_key: str, loader: Callable[[], dict | list]) -> dict | list:
        """
        Return the cached value for read_key under path, loading it on a miss.

        The loader's result must be JSON-serializable.
        """
        cached = self._valkey.hget_json(self._key(path), read_key)
        if cached is not None:
            return cached

        value = loader()
        self._valkey.hset_json(self._key(path), read_key, value, expire_seconds=self._ttl_seconds)
        return value

    def invalidate(self, path: str) -> None:
        """Mark every cached read under path as stale."""
        existed = self._valkey.delete(self._key(path))
        logger.debug(f"Invalidated listing {path} (had entries: {existed})")
