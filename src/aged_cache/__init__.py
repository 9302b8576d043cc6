"""Time-based expiring key/value cache."""

from aged_cache.cache import AgedCache
from aged_cache.clock import Clock, ManualClock, SystemClock
from aged_cache.errors import AgedCacheError, ValidationError

__all__ = (
    "AgedCache",
    "AgedCacheError",
    "Clock",
    "ManualClock",
    "SystemClock",
    "ValidationError",
)
