"""
Cache Service Singleton - Nine-Box Talent Review
ninebox/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability or CACHE_ENABLED=false.
"""
import logging
import redis
from typing import Optional
from ninebox.services.redis_cache import RedisCache
from ninebox.config import settings

logger = logging.getLogger(__name__)

# TTL constants (in seconds)
TTL_SCORING_CONFIG = settings.CACHE_TTL_SCORING_CONFIG

CACHE_KEY_SCORING_CONFIG = "scoring:config"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if caching is enabled and Redis is reachable,
        None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if not settings.CACHE_ENABLED:
        return None
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning(f"Redis unavailable, continuing without cache: {e}")
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None
