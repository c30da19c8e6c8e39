"""Read-through user cache using Redis"""

import logging
from typing import List, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from pydantic import ValidationError

from user_service.domain.entities import User
from user_service.domain.repositories import UserRepository

logger = logging.getLogger("user-service.infrastructure.user_cache")

KEY_PREFIX = "user:"


def create_redis_client(redis_url: str) -> aioredis.Redis:
    """Create a Redis client that decodes responses to str"""
    return aioredis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
    )


def cache_key(user_id: int) -> str:
    return f"{KEY_PREFIX}{user_id}"


def invalidation_key(user_id: int) -> str:
    return f"{KEY_PREFIX}{user_id}:invalidated"


class CachedUserRepository(UserRepository):
    """
    UserRepository decorator that caches find_by_id in Redis.

    Only lookups by ID are cached. save and delete_by_id write through to
    the wrapped repository, then set an invalidation marker (living as
    long as a cache entry) and drop the cached entry. While the marker
    exists, lookups are not written back, so a reader that loaded the row
    before a concurrent write, or before that write was committed, cannot
    re-cache the old state.

    Any Redis failure is logged and the call falls through to the wrapped
    repository (fail open), so results never depend on the cache.
    """

    def __init__(self, inner: UserRepository, redis: aioredis.Redis, ttl_seconds: int = 300):
        self._inner = inner
        self._redis = redis
        self._ttl = ttl_seconds

    async def find_by_id(self, user_id: int) -> Optional[User]:
        key = cache_key(user_id)
        try:
            cached = await self._redis.get(key)
            if cached is not None:
                logger.debug(f"Cache hit: {key}")
                return User.model_validate_json(cached)
        except (RedisError, ValidationError) as e:
            logger.warning(f"User cache read failed for {key}: {e}")

        user = await self._inner.find_by_id(user_id)
        if user is not None:
            await self._write_back(user_id, user)
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self._inner.find_by_username(username)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._inner.find_by_email(email)

    async def save(self, user: User) -> User:
        saved = await self._inner.save(user)
        await self._evict(saved.id)
        return saved

    async def delete_by_id(self, user_id: int) -> None:
        await self._inner.delete_by_id(user_id)
        await self._evict(user_id)

    async def find_all(self) -> List[User]:
        return await self._inner.find_all()

    async def exists_by_username(self, username: str) -> bool:
        return await self._inner.exists_by_username(username)

    async def exists_by_email(self, email: str) -> bool:
        return await self._inner.exists_by_email(email)

    async def _write_back(self, user_id: int, user: User) -> None:
        key = cache_key(user_id)
        marker = invalidation_key(user_id)
        try:
            if await self._redis.exists(marker):
                logger.debug(f"Skipping write-back of recently changed {key}")
                return
            await self._redis.set(key, user.model_dump_json(), ex=self._ttl)
            # An invalidation that landed between the check and the set wins
            if await self._redis.exists(marker):
                await self._redis.delete(key)
        except RedisError as e:
            logger.warning(f"User cache write failed for {key}: {e}")

    async def _evict(self, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        key = cache_key(user_id)
        try:
            await self._redis.set(invalidation_key(user_id), "1", ex=self._ttl)
            await self._redis.delete(key)
        except RedisError as e:
            logger.warning(f"User cache eviction failed for {key}: {e}")
