"""Cache service - key/value caching with TTL and use-count expiry."""

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from toolkitify.core.entities.cache_entry import CacheEntry
from toolkitify.core.entities.cache_options import UNBOUNDED, CacheOptions
from toolkitify.core.entities.storage import LogsMode, StorageKind
from toolkitify.core.interfaces.serializer import ISerializer
from toolkitify.core.interfaces.storage_adapter import IStorageAdapter
from toolkitify.core.services.events import (
    CacheEvent,
    CacheEventPayload,
    EventEmitter,
    EventHandler,
)
from toolkitify.infrastructure.backends import (
    CookieStorageAdapter,
    InMemoryStorageAdapter,
    NullStorageAdapter,
    WebStorageAdapter,
)
from toolkitify.infrastructure.client import ClientContext, detect_client_context
from toolkitify.utils.time import TimeValue, parse_time

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "toolkitify:cache:"


def _now_ms() -> int:
    return int(time.time() * 1000)


class Cache:
    """Key/value cache over interchangeable storage backends.

    Entries expire lazily: a read that finds an entry past its TTL, or
    a read that consumes its last allowed use, deletes it. Nothing is
    swept in the background.

    Backends are chosen once at construction. Browser backends
    (``localStorage``, ``sessionStorage``, cookies) come from the client
    context; outside a browser they silently do nothing.
    """

    def __init__(
        self,
        options: CacheOptions | None = None,
        *,
        client: ClientContext | None = None,
        adapters: Mapping[StorageKind | str, IStorageAdapter] | None = None,
        serializer: ISerializer | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            options: Instance defaults. Uses CacheOptions() if not provided.
            client: Browser primitives. Detected from the runtime if not
                provided.
            adapters: Adapters replacing the default one for a backend.
            serializer: Serializer for browser-backed records.
            clock: Time source returning milliseconds since the epoch.
        """
        self._options = options or CacheOptions()
        self._clock = clock or _now_ms
        self._events = EventEmitter()

        if client is None:
            client = detect_client_context()
        self._adapters = self._build_adapters(client, serializer)
        for kind, adapter in (adapters or {}).items():
            self._adapters[StorageKind(kind)] = adapter

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def options(self) -> CacheOptions:
        """Get the instance defaults."""
        return self._options

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def set(
        self,
        key: str,
        value: Any,
        *,
        ttl: TimeValue | None = None,
        max_uses: int | float | None = None,
        storage: StorageKind | str | None = None,
    ) -> CacheEntry:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to cache. Must be JSON-serializable for
                browser-backed storage.
            ttl: Overrides the default time-to-live.
            max_uses: Overrides the default maximum number of reads.
            storage: Overrides the default backend.

        Returns:
            The created CacheEntry.
        """
        config = self._options.merged(ttl=ttl, max_uses=max_uses, storage=storage)
        adapter = self._adapter(config.storage)

        entry = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=(parse_time(config.ttl) if config.ttl else None) or None,
            max_uses=config.normalized_max_uses,
        )

        if not adapter.available:
            return entry

        adapter.write(key, entry.to_record(), entry.ttl)
        self._emit(CacheEvent.SET, config.storage, key)
        return entry

    def get(
        self,
        key: str,
        default: Any = None,
        *,
        storage: StorageKind | str | None = None,
        logs: LogsMode | str | None = None,
    ) -> Any:
        """Read a value, counting one use.

        Args:
            key: The cache key.
            default: Returned when the key is missing or expired.
            storage: Overrides the default backend.
            logs: Overrides the default logging mode.

        Returns:
            The cached value, or ``default``.
        """
        config = self._options.merged(storage=storage, logs=logs)
        adapter = self._adapter(config.storage)

        entry = self._load(adapter, key)
        if entry is None:
            self._misses += 1
            return default

        now = self._clock()
        if entry.is_expired(now):
            adapter.remove(key)
            logger.debug("Cache entry %s expired", key)
            self._misses += 1
            self._emit(CacheEvent.EXPIRE, config.storage, key)
            return default

        entry = entry.used()
        if entry.is_exhausted:
            adapter.remove(key)
            logger.debug("Cache entry %s reached %d uses", key, entry.uses)
            self._emit(CacheEvent.DELETE, config.storage, key)
        else:
            adapter.write(key, entry.to_record(), self._remaining_ttl(entry, now))

        self._hits += 1
        # The read that consumes the last use still counts as a get.
        self._emit(CacheEvent.GET, config.storage, key)

        if config.logs == LogsMode.USAGE:
            logger.info("Cache usage: %s", key)

        return entry.value

    def reset(self, key: str, storage: StorageKind | str | None = None) -> None:
        """Delete a single entry.

        Args:
            key: The cache key.
            storage: Overrides the default backend.
        """
        kind = self._options.merged(storage=storage).storage
        adapter = self._adapter(kind)
        if not adapter.available:
            return

        adapter.remove(key)
        self._emit(CacheEvent.DELETE, kind, key)

    def clear_all(self, storage: StorageKind | str | None = None) -> None:
        """Delete every entry in a backend.

        Emits ``DELETE`` for each key, then ``CLEAR`` once. Does nothing
        when the backend is unreachable.

        Args:
            storage: Overrides the default backend.
        """
        kind = self._options.merged(storage=storage).storage
        adapter = self._adapter(kind)
        if not adapter.available:
            return

        for key in adapter.keys():
            adapter.remove(key)
            self._emit(CacheEvent.DELETE, kind, key)

        adapter.clear()
        self._emit(CacheEvent.CLEAR, kind)

    def get_all(self, storage: StorageKind | str | None = None) -> dict[str, CacheEntry]:
        """Snapshot every readable entry in a backend.

        Use counts are left untouched and no events are emitted.

        Args:
            storage: Overrides the default backend.

        Returns:
            Mapping of key to CacheEntry. Empty when the backend is
            unreachable.
        """
        kind = self._options.merged(storage=storage).storage
        adapter = self._adapter(kind)

        snapshot: dict[str, CacheEntry] = {}
        for key in adapter.keys():
            entry = self._load(adapter, key)
            if entry is not None:
                snapshot[key] = entry
        return snapshot

    def add_event_listener(self, event: CacheEvent | str, handler: EventHandler) -> None:
        """Subscribe a handler to a lifecycle event.

        Handlers run synchronously, in registration order, on the stack
        of the operation that triggered them. Their exceptions are not
        caught.

        Args:
            event: One of ``set``, ``get``, ``expire``, ``delete``, ``clear``.
            handler: Callable receiving a CacheEventPayload.
        """
        self._events.subscribe(event, handler)

    def remove_event_listener(self, event: CacheEvent | str, handler: EventHandler) -> bool:
        """Unsubscribe a handler. Returns False if it was not registered."""
        return self._events.unsubscribe(event, handler)

    def _adapter(self, kind: StorageKind) -> IStorageAdapter:
        if kind == StorageKind.REDIS:
            raise ValueError("Cache does not support redis storage")
        return self._adapters[kind]

    def _load(self, adapter: IStorageAdapter, key: str) -> CacheEntry | None:
        """Read and validate the entry stored under key."""
        record = adapter.read(key)
        if record is None:
            return None
        try:
            return CacheEntry.from_record(record)
        except ValueError:
            logger.debug("Ignoring malformed cache record for key %s", key)
            return None

    def _emit(self, event: CacheEvent, storage: StorageKind, key: str | None = None) -> None:
        self._events.emit(event, CacheEventPayload(storage=storage, key=key))

    @staticmethod
    def _remaining_ttl(entry: CacheEntry, now: int) -> int | None:
        if not entry.ttl:
            return None
        return max(entry.created_at + entry.ttl - now, 1)

    def _build_adapters(
        self,
        client: ClientContext | None,
        serializer: ISerializer | None,
    ) -> dict[StorageKind, IStorageAdapter]:
        """Create one adapter per supported backend."""
        adapters: dict[StorageKind, IStorageAdapter] = {
            StorageKind.MEMORY: InMemoryStorageAdapter(),
        }

        if client is None:
            for kind in StorageKind:
                if kind.is_client_side:
                    adapters[kind] = NullStorageAdapter()
            return adapters

        adapters[StorageKind.LOCAL_STORAGE] = WebStorageAdapter(
            client.local_storage, CACHE_KEY_PREFIX, serializer
        )
        adapters[StorageKind.SESSION_STORAGE] = WebStorageAdapter(
            client.session_storage, CACHE_KEY_PREFIX, serializer
        )
        adapters[StorageKind.COOKIES] = CookieStorageAdapter(
            client.document, CACHE_KEY_PREFIX, serializer, clock=self._clock
        )
        return adapters


# Shared cache used by the memoization helpers.
global_cache = Cache(CacheOptions(ttl=60_000, max_uses=UNBOUNDED, storage=StorageKind.MEMORY))
