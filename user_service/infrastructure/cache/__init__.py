"""Redis-backed caching adapters."""

from .user_cache import CachedUserRepository, cache_key, create_redis_client, invalidation_key

__all__ = ["CachedUserRepository", "cache_key", "create_redis_client", "invalidation_key"]
