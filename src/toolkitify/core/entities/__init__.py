"""Domain entities for toolkitify."""

from toolkitify.core.entities.cache_entry import CacheEntry
from toolkitify.core.entities.cache_options import UNBOUNDED, CacheOptions
from toolkitify.core.entities.rate_limit import (
    RateLimitOptions,
    RateLimitRecord,
    RateLimitResult,
)
from toolkitify.core.entities.storage import LogsMode, StorageKind

__all__ = [
    "CacheEntry",
    "CacheOptions",
    "UNBOUNDED",
    "LogsMode",
    "StorageKind",
    "RateLimitOptions",
    "RateLimitRecord",
    "RateLimitResult",
]
