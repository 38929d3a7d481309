"""In-memory storage adapter implementation."""

import math
from collections.abc import Mapping
from typing import Any

from cachetools import Cache  # type: ignore[import-untyped]


class InMemoryStorageAdapter:
    """In-process storage adapter.

    Records are kept as-is (no serialization) in an unbounded
    cachetools ``Cache``, so nothing is ever evicted for size: expiry is
    decided by the engine on access. Not safe for concurrent mutation
    from several threads.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._store: Cache[str, Mapping[str, Any]] = Cache(maxsize=math.inf)

    @property
    def available(self) -> bool:
        """The in-process store is always reachable."""
        return True

    def read(self, key: str) -> Mapping[str, Any] | None:
        """Retrieve the record stored under key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored record, or None if not found.
        """
        return self._store.get(key)

    def write(
        self,
        key: str,
        record: Mapping[str, Any],
        ttl_hint: int | None = None,
    ) -> None:
        """Store a record.

        The TTL hint is ignored; expiry is checked lazily by the engine.

        Args:
            key: The key.
            record: The record to store.
            ttl_hint: Unused.
        """
        self._store[key] = record

    def remove(self, key: str) -> None:
        """Delete the record stored under key, if any."""
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        """List stored keys in insertion order."""
        return list(self._store.keys())

    def clear(self) -> None:
        """Delete every record."""
        self._store.clear()

    def __len__(self) -> int:
        """Return the number of stored records."""
        return len(self._store)
