"""No-op storage adapter for unreachable backends."""

from collections.abc import Mapping
from typing import Any


class NullStorageAdapter:
    """Stand-in for a browser backend when no client context exists.

    Reads always miss and writes are dropped, which lets the same
    caching code run unmodified outside the browser.
    """

    @property
    def available(self) -> bool:
        """Check if the backend is reachable."""
        return False

    def read(self, key: str) -> Mapping[str, Any] | None:
        """Always miss."""
        return None

    def write(
        self,
        key: str,
        record: Mapping[str, Any],
        ttl_hint: int | None = None,
    ) -> None:
        """Drop the record."""
        return None

    def remove(self, key: str) -> None:
        """Do nothing."""
        return None

    def keys(self) -> list[str]:
        """Return no keys."""
        return []

    def clear(self) -> None:
        """Do nothing."""
        return None
