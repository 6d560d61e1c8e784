"""
Valkey client for the dashboard's ephemeral state.

Three things live in Valkey: session records (JSON strings), login attempt
counters, and listing cache hashes (one hash per listing path, one JSON field
per cached read). Connection errors propagate as redis.ConnectionError.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


def _decode(raw: str | None, where: str) -> dict | list | None:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {where}: {e}") from e


class ValkeyClient:
    """
    Thin wrapper over redis-py with string responses.

    Usage:
        valkey = ValkeyClient(get_valkey_url())
        valkey.set_json("session:abc", {...}, expire_seconds=86400)
        valkey.hset_json("listing:/dashboard/invoices", "count:", {"count": 13})
    """

    def __init__(self, url: str):
        self._client = redis.from_url(url, decode_responses=True)
        self._client.ping()
        logger.info("Connected to Valkey")

    def ping(self) -> bool:
        """True when the server answers. Raises redis.ConnectionError otherwise."""
        return bool(self._client.ping())

    # -- strings and counters --------------------------------------------------

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(self, key: str, value: str, expire_seconds: int | None = None) -> None:
        self._client.set(key, value, ex=expire_seconds)

    def delete(self, key: str) -> bool:
        """Remove key. False when there was nothing to remove."""
        return self._client.delete(key) > 0

    def incr(self, key: str) -> int:
        """Add one to a counter, creating it at 1."""
        return self._client.incr(key)

    def expire(self, key: str, seconds: int) -> bool:
        return bool(self._client.expire(key, seconds))

    def ttl(self, key: str) -> int:
        """Seconds left; -1 for no expiry, -2 when the key is absent."""
        return self._client.ttl(key)

    # -- JSON values -----------------------------------------------------------

    def set_json(self, key: str, value: dict | list, expire_seconds: int | None = None) -> None:
        self.set(key, json.dumps(value), expire_seconds)

    def get_json(self, key: str) -> dict | list | None:
        """Decoded value, or None when missing. Corrupt JSON raises ValueError."""
        return _decode(self.get(key), f"key '{key}'")

    def hget_json(self, key: str, field: str) -> dict | list | None:
        return _decode(self._client.hget(key, field), f"hash '{key}' field '{field}'")

    def hset_json(self, key: str, field: str, value: dict | list, expire_seconds: int | None = None) -> None:
        """
        Write one hash field. expire_seconds applies to the whole hash and is
        refreshed by every write.
        """
        pipe = self._client.pipeline()
        pipe.hset(key, field, json.dumps(value))
        if expire_seconds is not None:
            pipe.expire(key, expire_seconds)
        pipe.execute()

    def close(self) -> None:
        self._client.close()
        logger.info("Valkey connection closed")
