import time
from typing import Dict, Optional, Tuple
from redis.asyncio import Redis
from geosocial.config import settings

class RedisService:
    def __init__(self, url: Optional[str] = None):
        self.redis: Redis = Redis.from_url(url or settings.redis_url, decode_responses=True)

    async def setex(self, key: str, expire: int, value: str):
        """Set a key that expires after the given number of seconds"""
        await self.redis.setex(key, expire, value)

    async def get(self, key: str) -> Optional[str]:
        """Get the value of a key"""
        return await self.redis.get(key)

    async def close(self):
        """Close the Redis connection"""
        await self.redis.aclose()

class InMemorySessionStore:
    """Process-local stand-in for RedisService used by the test environment"""

    def __init__(self):
        self._data: Dict[str, Tuple[str, float]] = {}

    async def setex(self, key: str, expire: int, value: str):
        self._data[key] = (value, time.monotonic() + expire)

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= time.monotonic():
            del self._data[key]
            return None
        return value

    async def close(self):
        self._data.clear()

    def reset(self):
        self._data.clear()

_session_store = None

def get_session_store():
    """Singleton session store: Redis normally, in-memory under testing"""
    global _session_store
    if _session_store is None:
        if settings.is_testing:
            _session_store = InMemorySessionStore()
        else:
            _session_store = RedisService()
    return _session_store
