"""
Services module for the Nine-Box Talent Review service.
"""

from ninebox.services.advice_service import AdviceResult, AdviceService
from ninebox.services.cache import get_cache, reset_cache
from ninebox.services.redis_cache import RedisCache
from ninebox.services.scoring_service import ScoringService

__all__ = [
    "AdviceResult",
    "AdviceService",
    "get_cache",
    "reset_cache",
    "RedisCache",
    "ScoringService",
]
