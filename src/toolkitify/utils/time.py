"""Human-readable duration parsing."""

import re
from datetime import timedelta
from typing import Union

from toolkitify.core.errors import InvalidTimeFormatError

TimeValue = Union[int, float, str, timedelta]

_TIME_PATTERN = re.compile(r"(\d+)([a-zA-Z]+)", re.ASCII)

_SECOND = 1_000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# Months and years use the mean Gregorian lengths.
_UNIT_MS: dict[str, int] = {
    "ms": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": _SECOND,
    "sec": _SECOND,
    "secs": _SECOND,
    "second": _SECOND,
    "seconds": _SECOND,
    "m": _MINUTE,
    "min": _MINUTE,
    "mins": _MINUTE,
    "minute": _MINUTE,
    "minutes": _MINUTE,
    "h": _HOUR,
    "hr": _HOUR,
    "hrs": _HOUR,
    "hour": _HOUR,
    "hours": _HOUR,
    "d": _DAY,
    "day": _DAY,
    "days": _DAY,
    "w": 7 * _DAY,
    "week": 7 * _DAY,
    "weeks": 7 * _DAY,
    "mo": 2_629_746_000,
    "month": 2_629_746_000,
    "months": 2_629_746_000,
    "y": 31_556_952_000,
    "yr": 31_556_952_000,
    "yrs": 31_556_952_000,
    "year": 31_556_952_000,
    "years": 31_556_952_000,
}


def parse_time(value: TimeValue) -> int:
    """Convert a duration into milliseconds.

    Numbers are treated as exact milliseconds and returned unchanged.
    Strings must look like ``"30s"`` or ``"2hours"``: a positive integer
    immediately followed by a unit, case-insensitive.

    Args:
        value: Milliseconds, a ``timedelta`` or a human-readable string.

    Returns:
        The duration in milliseconds.

    Raises:
        InvalidTimeFormatError: If the string is malformed or the unit
            is not recognized.
    """
    if isinstance(value, (int, float)):
        return value  # type: ignore[return-value]

    if isinstance(value, timedelta):
        return int(value.total_seconds() * 1000)

    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormatError(f"Invalid time format: {value}")

    amount, unit = match.groups()
    multiplier = _UNIT_MS.get(unit.lower())
    if multiplier is None:
        raise InvalidTimeFormatError(f"Unknown time unit: {unit}")

    return int(amount) * multiplier
