"""Storage adapter interface."""

from collections.abc import Mapping
from typing import Any, Protocol


class IStorageAdapter(Protocol):
    """Contract for the physical store behind an engine.

    Adapters move flat records (JSON-compatible mappings) in and out of
    one backend. Backend-specific serialization stays inside the
    adapter; a record that cannot be read back is reported as absent.
    """

    @property
    def available(self) -> bool:
        """Whether the backend can be reached in this environment."""
        ...

    def read(self, key: str) -> Mapping[str, Any] | None:
        """Retrieve the record stored under key.

        Args:
            key: The engine-level key (without namespace prefix).

        Returns:
            The stored record, or None if missing or unreadable.
        """
        ...

    def write(
        self,
        key: str,
        record: Mapping[str, Any],
        ttl_hint: int | None = None,
    ) -> None:
        """Store a record.

        Args:
            key: The engine-level key.
            record: The record to store.
            ttl_hint: Optional lifetime in milliseconds for backends
                that can expire data on their own.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete the record stored under key, if any."""
        ...

    def keys(self) -> list[str]:
        """List the engine-level keys currently stored."""
        ...

    def clear(self) -> None:
        """Delete every record owned by this adapter."""
        ...
