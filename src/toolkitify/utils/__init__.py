"""Shared utilities for toolkitify."""

from toolkitify.utils.time import TimeValue, parse_time

__all__ = [
    "TimeValue",
    "parse_time",
]
