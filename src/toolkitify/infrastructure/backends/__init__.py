"""Storage adapter implementations."""

from toolkitify.infrastructure.backends.cookies import CookieStorageAdapter
from toolkitify.infrastructure.backends.memory import InMemoryStorageAdapter
from toolkitify.infrastructure.backends.null import NullStorageAdapter
from toolkitify.infrastructure.backends.redis import RedisRateLimitStore
from toolkitify.infrastructure.backends.web_storage import WebStorageAdapter

__all__ = [
    "InMemoryStorageAdapter",
    "WebStorageAdapter",
    "CookieStorageAdapter",
    "NullStorageAdapter",
    "RedisRateLimitStore",
]
