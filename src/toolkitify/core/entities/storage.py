"""Storage backend and logging mode enumerations."""

from enum import Enum


class StorageKind(str, Enum):
    """Backends an engine can persist into.

    MEMORY: In-process mapping owned by the engine.
    LOCAL_STORAGE / SESSION_STORAGE: Browser Web Storage.
    COOKIES: One browser cookie per entry (cache only).
    REDIS: External key-value store (rate limiter only).
    """

    MEMORY = "memory"
    LOCAL_STORAGE = "localStorage"
    SESSION_STORAGE = "sessionStorage"
    COOKIES = "cookies"
    REDIS = "redis"

    @property
    def is_client_side(self) -> bool:
        """Check if the backend lives in the browser."""
        return self in (
            StorageKind.LOCAL_STORAGE,
            StorageKind.SESSION_STORAGE,
            StorageKind.COOKIES,
        )


class LogsMode(str, Enum):
    """Cache diagnostics level."""

    NONE = "none"
    USAGE = "usage"
