"""Rate limiting entities."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from toolkitify.core.entities.storage import StorageKind
from toolkitify.utils.time import TimeValue


@dataclass(frozen=True)
class RateLimitRecord:
    """Fixed-window counter for a single key.

    Attributes:
        count: Requests observed in the current window.
        reset_at: Time in milliseconds when the window (or block) ends.
    """

    count: int
    reset_at: int

    def is_stale(self, now: int) -> bool:
        """Check if the window has already ended."""
        return now > self.reset_at

    def to_record(self) -> dict[str, int]:
        """Convert the record to its flat storage representation."""
        return {"count": self.count, "resetAt": self.reset_at}

    @classmethod
    def fresh(cls, now: int, interval_ms: int) -> "RateLimitRecord":
        """Create a record for a window starting at ``now``."""
        return cls(count=0, reset_at=now + interval_ms)

    @classmethod
    def from_record(cls, record: Any) -> "RateLimitRecord":
        """Build a record from its flat storage representation.

        Raises:
            ValueError: If the record does not have the expected shape.
        """
        if not isinstance(record, Mapping):
            raise ValueError("Rate limit record must be a mapping")
        count = record.get("count")
        reset_at = record.get("resetAt")
        for item in (count, reset_at):
            if not isinstance(item, (int, float)) or isinstance(item, bool):
                raise ValueError("Rate limit record has invalid count or resetAt")
        return cls(count=int(count), reset_at=reset_at)  # type: ignore[arg-type]


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    Attributes:
        success: Whether the request is allowed to proceed.
        limit: Maximum requests per window.
        remaining: Requests left in the current window (0 when blocked).
        reset: Time in milliseconds when the window or block ends.
    """

    success: bool
    limit: int
    remaining: int
    reset: int


@dataclass(frozen=True)
class RateLimitOptions:
    """Rate limiter configuration.

    ``limit`` and ``interval`` have no defaults: they must be given either
    when the RateLimiter is built or on every ``check`` call.

    Attributes:
        limit: Maximum requests per window.
        interval: Window length (milliseconds, string or ``timedelta``).
        block_duration: Cooldown applied once the limit is reached.
            Defaults to ``interval``.
        storage: Backend that holds the counters.
        key: Identity being limited.
        logs: Log rejected requests.
        external_client: Store used with ``StorageKind.REDIS``.
    """

    limit: int | None = None
    interval: TimeValue | None = None
    block_duration: TimeValue | None = None
    storage: StorageKind = StorageKind.MEMORY
    key: str = "default"
    logs: bool = False
    external_client: Any = None

    def __post_init__(self) -> None:
        """Coerce a plain storage string into its enum value."""
        object.__setattr__(self, "storage", StorageKind(self.storage))

    def merged(self, **overrides: Any) -> "RateLimitOptions":
        """Return a copy with the non-None overrides applied.

        Raises:
            TypeError: If an override does not name a field.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown rate limit options: {', '.join(sorted(unknown))}")

        changes = {name: value for name, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)
