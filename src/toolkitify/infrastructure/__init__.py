"""Infrastructure layer implementations for toolkitify."""

from toolkitify.infrastructure.backends import (
    CookieStorageAdapter,
    InMemoryStorageAdapter,
    NullStorageAdapter,
    RedisRateLimitStore,
    WebStorageAdapter,
)
from toolkitify.infrastructure.client import ClientContext, detect_client_context
from toolkitify.infrastructure.serializers import JsonSerializer, SerializationError

__all__ = [
    "InMemoryStorageAdapter",
    "WebStorageAdapter",
    "CookieStorageAdapter",
    "NullStorageAdapter",
    "RedisRateLimitStore",
    "ClientContext",
    "detect_client_context",
    "JsonSerializer",
    "SerializationError",
]
