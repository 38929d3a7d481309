"""toolkitify - caching and rate limiting over pluggable storage.

A small utility library with a key/value cache supporting TTL and
use-count expiry plus lifecycle events, and a fixed-window rate limiter
with a block-duration override. Both run against an in-process store,
browser storage (under Pyodide) or, for the rate limiter, Redis.

Example:
    from toolkitify import Cache, CacheOptions, RateLimiter

    cache = Cache(CacheOptions(ttl="5m", max_uses=3))
    cache.add_event_listener("expire", lambda event: print(event.key))
    cache.set("token", "abc")
    cache.get("token")  # "abc"

    limiter = RateLimiter()
    result = await limiter.check(5, "10s", block_duration="1m", key="ip:1.2.3.4")
    if not result.success:
        retry_at = result.reset

Per-identity limiting with Redis:
    from toolkitify import RedisRateLimitStore, create_rate_limit

    per_user = create_rate_limit(
        100,
        "1h",
        "user",
        storage="redis",
        external_client=RedisRateLimitStore.from_url("redis://localhost:6379"),
    )
    result = await per_user.limit(user_id)
"""

from toolkitify.core.entities import (
    UNBOUNDED,
    CacheEntry,
    CacheOptions,
    LogsMode,
    RateLimitOptions,
    RateLimitRecord,
    RateLimitResult,
    StorageKind,
)
from toolkitify.core.errors import (
    EnvironmentMismatchError,
    InvalidTimeFormatError,
    MissingDependencyError,
    ToolkitifyError,
)
from toolkitify.core.interfaces import (
    IDocument,
    IExternalStore,
    ISerializer,
    IStorageAdapter,
    IWebStorage,
)
from toolkitify.core.services import (
    Cache,
    CacheEvent,
    CacheEventPayload,
    KeyedRateLimit,
    RateLimiter,
    create_rate_limit,
    global_cache,
)
from toolkitify.decorators import cache_function, cached, configure
from toolkitify.infrastructure import (
    ClientContext,
    CookieStorageAdapter,
    InMemoryStorageAdapter,
    JsonSerializer,
    NullStorageAdapter,
    RedisRateLimitStore,
    SerializationError,
    WebStorageAdapter,
    detect_client_context,
)
from toolkitify.utils.time import parse_time

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheEntry",
    "CacheOptions",
    "UNBOUNDED",
    "LogsMode",
    "StorageKind",
    "RateLimitOptions",
    "RateLimitRecord",
    "RateLimitResult",
    # Errors
    "ToolkitifyError",
    "InvalidTimeFormatError",
    "EnvironmentMismatchError",
    "MissingDependencyError",
    "SerializationError",
    # Core interfaces
    "IStorageAdapter",
    "ISerializer",
    "IExternalStore",
    "IWebStorage",
    "IDocument",
    # Core services
    "Cache",
    "CacheEvent",
    "CacheEventPayload",
    "global_cache",
    "RateLimiter",
    "KeyedRateLimit",
    "create_rate_limit",
    # Infrastructure implementations
    "InMemoryStorageAdapter",
    "WebStorageAdapter",
    "CookieStorageAdapter",
    "NullStorageAdapter",
    "RedisRateLimitStore",
    "JsonSerializer",
    "ClientContext",
    "detect_client_context",
    # Utilities
    "parse_time",
    # Decorators
    "cached",
    "cache_function",
    "configure",
]
