"""Cache configuration entity."""

import math
from dataclasses import dataclass, fields, replace
from typing import Any

from toolkitify.core.entities.storage import LogsMode, StorageKind
from toolkitify.utils.time import TimeValue

# Sentinel accepted by ``max_uses`` meaning "never expire by use count".
UNBOUNDED = math.inf


@dataclass(frozen=True)
class CacheOptions:
    """Cache configuration.

    Instance-level defaults for a Cache. Every operation accepts
    keyword overrides that are shallow-merged on top, call values
    winning.

    Attributes:
        ttl: Time-to-live in milliseconds, as a human-readable string
            (``"30s"``) or a ``timedelta``. A falsy value disables
            time-based expiry.
        max_uses: Number of reads after which an entry is evicted.
            ``UNBOUNDED`` (or 0) disables use-count expiry.
        storage: Backend entries are written to.
        logs: Whether reads are logged.
    """

    ttl: TimeValue | None = 60_000
    max_uses: int | float = UNBOUNDED
    storage: StorageKind = StorageKind.MEMORY
    logs: LogsMode = LogsMode.NONE

    def __post_init__(self) -> None:
        """Coerce plain strings into their enum values."""
        object.__setattr__(self, "storage", StorageKind(self.storage))
        object.__setattr__(self, "logs", LogsMode(self.logs))

    def merged(self, **overrides: Any) -> "CacheOptions":
        """Return a copy with the non-None overrides applied.

        Args:
            **overrides: Field values given for a single call.

        Returns:
            A new CacheOptions instance.

        Raises:
            TypeError: If an override does not name a field.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown cache options: {', '.join(sorted(unknown))}")

        changes = {name: value for name, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @property
    def normalized_max_uses(self) -> int | None:
        """Return ``max_uses`` as an int, or None when unbounded."""
        if not self.max_uses or self.max_uses == UNBOUNDED:
            return None
        return int(self.max_uses)
