"""Fixed-window rate limiter with a block-duration override."""

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from toolkitify.core.entities.rate_limit import (
    RateLimitOptions,
    RateLimitRecord,
    RateLimitResult,
)
from toolkitify.core.entities.storage import StorageKind
from toolkitify.core.errors import EnvironmentMismatchError, MissingDependencyError
from toolkitify.core.interfaces.external_store import IExternalStore
from toolkitify.core.interfaces.serializer import ISerializer
from toolkitify.core.interfaces.storage_adapter import IStorageAdapter
from toolkitify.infrastructure.backends import InMemoryStorageAdapter, WebStorageAdapter
from toolkitify.infrastructure.client import ClientContext, detect_client_context
from toolkitify.infrastructure.serializers.json import JsonSerializer, SerializationError
from toolkitify.utils.time import TimeValue, parse_time

logger = logging.getLogger(__name__)

RATE_LIMIT_KEY_PREFIX = "toolkitify:ratelimit:"
EXTERNAL_KEY_PREFIX = "@toolkitify/ratelimit/"


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """Fixed-window request counter per key.

    Each key gets ``limit`` requests per ``interval``. The request that
    uses up the window pushes its reset out to ``now + block_duration``;
    rejected requests never touch the stored record, so a block keeps
    the same reset time until it elapses.

    There is no locking. Concurrent checks against the same in-process
    key may both succeed at the boundary.
    """

    def __init__(
        self,
        options: RateLimitOptions | None = None,
        *,
        client: ClientContext | None = None,
        adapters: Mapping[StorageKind | str, IStorageAdapter] | None = None,
        serializer: ISerializer | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            options: Instance defaults merged under every check.
            client: Browser primitives. Detected from the runtime if not
                provided.
            adapters: Adapters replacing the default one for a backend.
            serializer: Serializer for browser and external records.
            clock: Time source returning milliseconds since the epoch.
        """
        self._options = options or RateLimitOptions()
        self._clock = clock or _now_ms
        self._serializer = serializer or JsonSerializer()

        if client is None:
            client = detect_client_context()

        self._adapters: dict[StorageKind, IStorageAdapter] = {
            StorageKind.MEMORY: InMemoryStorageAdapter(),
        }
        if client is not None:
            self._adapters[StorageKind.LOCAL_STORAGE] = WebStorageAdapter(
                client.local_storage, RATE_LIMIT_KEY_PREFIX, self._serializer
            )
            self._adapters[StorageKind.SESSION_STORAGE] = WebStorageAdapter(
                client.session_storage, RATE_LIMIT_KEY_PREFIX, self._serializer
            )
        for kind, adapter in (adapters or {}).items():
            self._adapters[StorageKind(kind)] = adapter

    @property
    def options(self) -> RateLimitOptions:
        """Get the instance defaults."""
        return self._options

    async def check(
        self,
        limit: int | None = None,
        interval: TimeValue | None = None,
        *,
        block_duration: TimeValue | None = None,
        key: str | None = None,
        storage: StorageKind | str | None = None,
        logs: bool | None = None,
        external_client: IExternalStore | None = None,
    ) -> RateLimitResult:
        """Count one request against a key.

        Args:
            limit: Maximum requests per window.
            interval: Window length.
            block_duration: Cooldown once the limit is reached. Defaults
                to the interval.
            key: Identity being limited.
            storage: Backend holding the counters.
            logs: Log rejected requests.
            external_client: Store used with ``StorageKind.REDIS``.

        Returns:
            The RateLimitResult for this request.

        Raises:
            ValueError: If limit or interval is missing or invalid, or
                the backend is not supported.
            EnvironmentMismatchError: If browser storage is selected
                outside a browser.
            MissingDependencyError: If the external backend is selected
                without a client.
            InvalidTimeFormatError: If a duration string is malformed.
        """
        config = self._options.merged(
            limit=limit,
            interval=interval,
            block_duration=block_duration,
            key=key,
            storage=storage,
            logs=logs,
            external_client=external_client,
        )
        if config.limit is None or config.interval is None:
            raise ValueError("limit and interval are required")
        if config.limit < 1:
            raise ValueError("limit must be >= 1")

        interval_ms = parse_time(config.interval)
        block_ms = parse_time(config.block_duration) if config.block_duration else interval_ms

        if config.storage == StorageKind.REDIS:
            return await self._check_external(config, interval_ms, block_ms)
        return self._check_local(config, interval_ms, block_ms)

    def _check_local(
        self,
        config: RateLimitOptions,
        interval_ms: int,
        block_ms: int,
    ) -> RateLimitResult:
        """Run a check against the in-process or browser backend."""
        adapter = self._local_adapter(config.storage)
        now = self._clock()

        record = self._load_local(adapter, config.key)
        if record is None or record.is_stale(now):
            # Persist the new window before evaluating so readers agree on its start.
            record = RateLimitRecord.fresh(now, interval_ms)
            adapter.write(config.key, record.to_record())
            logger.debug("Starting new rate limit window for key %s", config.key)

        result, updated = self._evaluate(config, record, now, block_ms)
        if updated is not None:
            adapter.write(config.key, updated.to_record())
        return result

    async def _check_external(
        self,
        config: RateLimitOptions,
        interval_ms: int,
        block_ms: int,
    ) -> RateLimitResult:
        """Run a check against the external store."""
        store: IExternalStore | None = config.external_client
        if store is None:
            raise MissingDependencyError("External store client not provided")

        store_key = EXTERNAL_KEY_PREFIX + config.key
        now = self._clock()

        record = await self._load_external(store, store_key)
        if record is None:
            record = RateLimitRecord.fresh(now, interval_ms)
            await store.set(store_key, self._serializer.serialize(record.to_record()), interval_ms)
            logger.debug("Starting new rate limit window for key %s", config.key)
        elif record.is_stale(now):
            record = RateLimitRecord.fresh(now, interval_ms)

        result, updated = self._evaluate(config, record, now, block_ms)
        if updated is not None:
            await store.set(
                store_key,
                self._serializer.serialize(updated.to_record()),
                max(updated.reset_at - now, 1),
            )
        return result

    def _evaluate(
        self,
        config: RateLimitOptions,
        record: RateLimitRecord,
        now: int,
        block_ms: int,
    ) -> tuple[RateLimitResult, RateLimitRecord | None]:
        """Decide on a request given the current window.

        Returns:
            The result, and the record to persist (None when rejected).
        """
        limit: int = config.limit  # type: ignore[assignment]

        if record.count >= limit:
            if config.logs:
                logger.info("Rate limit exceeded for key: %s", config.key)
            return RateLimitResult(success=False, limit=limit, remaining=0, reset=record.reset_at), None

        count = record.count + 1
        reset_at = record.reset_at
        if count >= limit:
            reset_at = now + block_ms

        result = RateLimitResult(success=True, limit=limit, remaining=limit - count, reset=reset_at)
        return result, RateLimitRecord(count=count, reset_at=reset_at)

    def _local_adapter(self, kind: StorageKind) -> IStorageAdapter:
        if kind == StorageKind.COOKIES:
            raise ValueError("RateLimiter does not support cookie storage")
        adapter = self._adapters.get(kind)
        if adapter is None or not adapter.available:
            raise EnvironmentMismatchError("Client-side rate limit can only run in a browser")
        return adapter

    @staticmethod
    def _load_local(adapter: IStorageAdapter, key: str) -> RateLimitRecord | None:
        record = adapter.read(key)
        if record is None:
            return None
        try:
            return RateLimitRecord.from_record(record)
        except ValueError:
            logger.debug("Ignoring malformed rate limit record for key %s", key)
            return None

    async def _load_external(self, store: IExternalStore, store_key: str) -> RateLimitRecord | None:
        data = await store.get(store_key)
        if not data:
            return None
        try:
            return RateLimitRecord.from_record(self._serializer.deserialize(data))
        except (SerializationError, ValueError):
            logger.debug("Ignoring malformed rate limit record for key %s", store_key)
            return None


class KeyedRateLimit:
    """Rate limiter bound to fixed parameters and a key prefix.

    Example:
        per_user = create_rate_limit(10, "1m", "user")
        result = await per_user.limit(user_id)
    """

    def __init__(self, limiter: RateLimiter, key_prefix: str) -> None:
        self._limiter = limiter
        self._key_prefix = key_prefix

    @property
    def limiter(self) -> RateLimiter:
        """Get the underlying RateLimiter."""
        return self._limiter

    async def limit(self, value: Any) -> RateLimitResult:
        """Count one request for ``value`` under the bound prefix."""
        return await self._limiter.check(key=f"{self._key_prefix}:{value}")


def create_rate_limit(
    limit: int,
    interval: TimeValue,
    key_prefix: str,
    *,
    block_duration: TimeValue | None = None,
    storage: StorageKind | str = StorageKind.MEMORY,
    logs: bool = False,
    external_client: IExternalStore | None = None,
    client: ClientContext | None = None,
    clock: Callable[[], int] | None = None,
) -> KeyedRateLimit:
    """Create a per-identity rate limit with fixed parameters.

    Each call owns a fresh RateLimiter, so in-process counters are not
    shared between factories.

    Args:
        limit: Maximum requests per window.
        interval: Window length.
        key_prefix: Prefix composed with each value into the key.
        block_duration: Cooldown once the limit is reached.
        storage: Backend holding the counters.
        logs: Log rejected requests.
        external_client: Store used with ``StorageKind.REDIS``.
        client: Browser primitives for browser storage.
        clock: Time source returning milliseconds since the epoch.

    Returns:
        A KeyedRateLimit exposing ``limit(value)``.
    """
    options = RateLimitOptions(
        limit=limit,
        interval=parse_time(interval),
        block_duration=block_duration,
        storage=StorageKind(storage),
        logs=logs,
        external_client=external_client,
    )
    limiter = RateLimiter(options, client=client, clock=clock)
    return KeyedRateLimit(limiter, key_prefix)
