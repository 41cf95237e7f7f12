# eventrepo/infrastructure/redis_client.py

from typing import Iterable

import redis.asyncio as redis

from eventrepo.config.settings import settings


class RedisClient:
    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.client = redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
            socket_timeout=timeout or settings.storage_timeout_seconds,
        )

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def mget(self, keys: list[str]) -> list[str | None]:
        """Values for keys in order; None where a key is missing."""
        if not keys:
            return []
        return await self.client.mget(keys)

    async def set_indexed(
        self,
        key: str,
        value: str,
        index_keys: Iterable[str],
        member: str,
    ) -> bool:
        """
        Store value at key if absent, then add member to every lexicographic index in one MULTI.
        Returns False without touching the indexes if key already exists.
        """
        if not await self.client.set(key, value, nx=True):
            return False
        async with self.client.pipeline(transaction=True) as pipe:
            for index_key in index_keys:
                pipe.zadd(index_key, {member: 0})
            await pipe.execute()
        return True

    async def range_by_lex(self, key: str, lower: str, upper: str) -> list[str]:
        """Members of a zero-score sorted set between lower and upper, both inclusive, ascending."""
        return await self.client.zrangebylex(key, f"[{lower}", f"[{upper}")

    async def aclose(self) -> None:
        await self.client.aclose()
