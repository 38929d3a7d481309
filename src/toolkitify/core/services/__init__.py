"""Domain services for toolkitify."""

from toolkitify.core.services.cache_service import CACHE_KEY_PREFIX, Cache, global_cache
from toolkitify.core.services.events import (
    CacheEvent,
    CacheEventPayload,
    EventEmitter,
    EventHandler,
)
from toolkitify.core.services.rate_limiter import (
    EXTERNAL_KEY_PREFIX,
    RATE_LIMIT_KEY_PREFIX,
    KeyedRateLimit,
    RateLimiter,
    create_rate_limit,
)

__all__ = [
    "Cache",
    "global_cache",
    "CACHE_KEY_PREFIX",
    # Events
    "CacheEvent",
    "CacheEventPayload",
    "EventEmitter",
    "EventHandler",
    # Rate limiting
    "RateLimiter",
    "KeyedRateLimit",
    "create_rate_limit",
    "RATE_LIMIT_KEY_PREFIX",
    "EXTERNAL_KEY_PREFIX",
]
