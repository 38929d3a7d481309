"""Core domain layer for toolkitify."""

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
from toolkitify.core.services import Cache, RateLimiter

__all__ = [
    # Entities
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
    # Interfaces
    "IStorageAdapter",
    "ISerializer",
    "IExternalStore",
    "IWebStorage",
    "IDocument",
    # Services
    "Cache",
    "RateLimiter",
]
