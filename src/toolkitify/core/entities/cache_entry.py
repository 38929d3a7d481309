"""Cache entry entity."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a cached value with its creation time (milliseconds since the
    epoch), the number of successful reads so far, and the optional
    time and use-count limits that govern its expiry.
    """

    value: Any
    created_at: int
    uses: int = 0
    ttl: int | None = None
    max_uses: int | None = None

    def is_expired(self, now: int) -> bool:
        """Check if the entry outlived its TTL.

        Args:
            now: Current time in milliseconds.

        Returns:
            True if a TTL is set and has elapsed, False otherwise.
        """
        if not self.ttl:
            return False
        return now - self.created_at > self.ttl

    @property
    def is_exhausted(self) -> bool:
        """Check if the entry reached its maximum number of uses."""
        if self.max_uses is None:
            return False
        return self.uses >= self.max_uses

    def used(self) -> "CacheEntry":
        """Return a copy of this entry with one more recorded use."""
        return replace(self, uses=self.uses + 1)

    def to_record(self) -> dict[str, Any]:
        """Convert the entry to its flat storage representation."""
        return {
            "value": self.value,
            "createdAt": self.created_at,
            "uses": self.uses,
            "ttl": self.ttl,
            "maxUses": self.max_uses,
        }

    @classmethod
    def from_record(cls, record: Any) -> "CacheEntry":
        """Build an entry from its flat storage representation.

        Args:
            record: A mapping previously produced by ``to_record``.

        Returns:
            The rebuilt CacheEntry.

        Raises:
            ValueError: If the record does not have the expected shape.
        """
        if not isinstance(record, Mapping) or "value" not in record:
            raise ValueError("Cache record must be a mapping with a value")

        created_at = record.get("createdAt")
        uses = record.get("uses", 0)
        ttl = record.get("ttl")
        max_uses = record.get("maxUses")

        if not _is_number(created_at) or not _is_number(uses):
            raise ValueError("Cache record has invalid createdAt or uses")
        if ttl is not None and not _is_number(ttl):
            raise ValueError("Cache record has invalid ttl")
        if max_uses is not None and not _is_number(max_uses):
            raise ValueError("Cache record has invalid maxUses")

        return cls(
            value=record["value"],
            created_at=created_at,
            uses=int(uses),
            ttl=ttl,
            max_uses=max_uses,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
