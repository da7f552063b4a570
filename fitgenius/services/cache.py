"""Session-scoped result cache for AI responses.

The cache is an optimization only: reads never raise (a corrupt or
unreadable entry is a miss) and writes never raise (a failed write is logged
and dropped). Entries live for the session; there is no eviction.
"""

import json
from typing import Any, Dict, Optional

import redis.asyncio as aioredis

from fitgenius.config.settings import settings
from fitgenius.services.errors import StorageWriteFailure
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class SessionStore:
    """String key/value storage with session lifetime."""

    async def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def clear(self) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        """Release connections; the default store holds none."""


class MemorySessionStore(SessionStore):
    """In-process store. ``quota_bytes`` bounds the total stored size."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._items: Dict[str, str] = {}

    def _size_with(self, key: str, value: str) -> int:
        size = len(key) + len(value)
        for other_key, other_value in self._items.items():
            if other_key != key:
                size += len(other_key) + len(other_value)
        return size

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageWriteFailure(f"Session store quota of {self.quota_bytes} bytes exceeded")
        self._items[key] = value

    async def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class RedisSessionStore(SessionStore):
    """Redis-backed store; keys are namespaced per session and expire with it."""

    def __init__(self, client: "aioredis.Redis", session_id: str, ttl: Optional[int] = None):
        self.client = client
        self.session_id = session_id
        self.ttl = ttl if ttl is not None else settings.session_timeout

    @classmethod
    def from_url(cls, url: str, session_id: str, ttl: Optional[int] = None) -> "RedisSessionStore":
        client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
        logger.info(f"Using Redis session store for session {session_id}")
        return cls(client, session_id, ttl)

    def _key(self, key: str) -> str:
        return f"fitgenius:{self.session_id}:{key}"

    async def get_item(self, key: str) -> Optional[str]:
        return await self.client.get(self._key(key))

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self.client.set(self._key(key), value, ex=self.ttl or None)
        except aioredis.RedisError as e:
            raise StorageWriteFailure(str(e)) from e

    async def clear(self) -> None:
        keys = [key async for key in self.client.scan_iter(match=self._key("*"))]
        if keys:
            await self.client.delete(*keys)

    async def close(self) -> None:
        await self.client.aclose()


def build_session_store(session_id: str, redis_url: Optional[str] = None) -> SessionStore:
    """Pick the store for a new session: Redis when configured, memory otherwise."""
    url = settings.redis_url if redis_url is None else redis_url
    if url:
        return RedisSessionStore.from_url(url, session_id)
    return MemorySessionStore()


class ResultCache:
    """Read-through/write-through JSON cache over a session store."""

    def __init__(self, store: Optional[SessionStore] = None):
        self.store = store if store is not None else MemorySessionStore()

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on miss or unreadable data."""
        try:
            raw = await self.store.get_item(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding malformed cache entry {key}")
            return None

    async def set(self, key: str, value: Any) -> None:
        """Store ``value``; failures are logged and ignored."""
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning(f"Value for {key} is not JSON-serializable, not cached: {e}")
            return
        try:
            await self.store.set_item(key, raw)
        except StorageWriteFailure as e:
            logger.warning(f"Cache write skipped for {key}: {e}")
        except Exception as e:
            logger.error(f"Unexpected cache write error for {key}: {e}", exc_info=True)

    async def clear(self) -> None:
        """Drop every entry; a failing store is logged and left as is."""
        try:
            await self.store.clear()
        except Exception as e:
            logger.warning(f"Cache clear failed: {e}")

    async def close(self) -> None:
        try:
            await self.store.close()
        except Exception as e:
            logger.warning(f"Closing the session store failed: {e}")
