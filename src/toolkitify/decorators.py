"""Memoization helpers built on Cache.

Results are keyed by the function name and its JSON-encoded arguments.
Two functions sharing a name (lambdas included) share entries, and
arguments that are not JSON-serializable are keyed by their ``str()``,
which may collide.
"""

import functools
import inspect
import json
from collections.abc import Callable
from typing import Any, TypeVar

from toolkitify.core.services.cache_service import Cache, global_cache
from toolkitify.utils.time import TimeValue

F = TypeVar("F", bound=Callable[..., Any])

_MISSING = object()

# Module-level cache reference
_cache: Cache = global_cache


def configure(cache: Cache) -> None:
    """Set the cache used by ``cached`` and ``cache_function``.

    Args:
        cache: The cache instance to use when none is passed explicitly.

    Example:
        configure(Cache(CacheOptions(ttl="5m")))
    """
    global _cache
    _cache = cache


def get_cache() -> Cache:
    """Get the configured cache."""
    return _cache


def cached(
    ttl: TimeValue = "30s",
    cache: Cache | None = None,
) -> Callable[[F], F]:
    """Decorator caching a function's return value.

    Works for plain and ``async def`` functions. ``None`` results are
    cached like any other value.

    Args:
        ttl: Time-to-live for cached results.
        cache: Cache to use. Defaults to the configured cache.

    Returns:
        Decorated function.

    Example:
        @cached(ttl="10m")
        def load_settings(tenant: str) -> dict:
            return fetch_settings(tenant)
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                store = cache or _cache
                key = build_key(func, args, kwargs)
                hit = store.get(key, _MISSING)
                if hit is not _MISSING:
                    return hit
                result = await func(*args, **kwargs)
                store.set(key, result, ttl=ttl)
                return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            store = cache or _cache
            key = build_key(func, args, kwargs)
            hit = store.get(key, _MISSING)
            if hit is not _MISSING:
                return hit
            result = func(*args, **kwargs)
            store.set(key, result, ttl=ttl)
            return result

        return wrapper  # type: ignore

    return decorator


def cache_function(func: F, ttl: TimeValue = "30s", cache: Cache | None = None) -> F:
    """Wrap a function so its results are cached.

    Equivalent to ``cached(ttl, cache)(func)``.
    """
    return cached(ttl=ttl, cache=cache)(func)


def build_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    """Build the cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.

    Returns:
        ``"<name>:<json args>"``, with sorted kwargs appended when given.
    """
    key = f"{func.__name__}:{json.dumps(list(args), default=str)}"
    if kwargs:
        key += f":{json.dumps(kwargs, sort_keys=True, default=str)}"
    return key
