"""Browser Web Storage adapter implementation."""

import logging
from collections.abc import Mapping
from typing import Any

from toolkitify.core.interfaces.client import IWebStorage
from toolkitify.core.interfaces.serializer import ISerializer
from toolkitify.infrastructure.serializers.json import JsonSerializer, SerializationError

logger = logging.getLogger(__name__)


class WebStorageAdapter:
    """Adapter over ``localStorage`` or ``sessionStorage``.

    The storage area is shared by the whole origin, so every key is
    namespaced with ``prefix`` and only namespaced keys are enumerated
    or cleared. Records are stored as serialized text.
    """

    def __init__(
        self,
        storage: IWebStorage,
        prefix: str,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            storage: The browser storage area to wrap.
            prefix: Namespace prepended to every key.
            serializer: Serializer for records. Defaults to JSON.
        """
        self._storage = storage
        self._prefix = prefix
        self._serializer = serializer or JsonSerializer()

    @property
    def available(self) -> bool:
        """Check if the backend is reachable."""
        return True

    @property
    def prefix(self) -> str:
        """Return the key namespace."""
        return self._prefix

    def read(self, key: str) -> Mapping[str, Any] | None:
        """Retrieve and deserialize the record stored under key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored record, or None if missing or unparseable.
        """
        data = self._storage.get_item(self._prefix + key)
        if not data:
            return None
        try:
            return self._serializer.deserialize(data)
        except SerializationError:
            logger.debug("Ignoring unreadable record for key %s", key)
            return None

    def write(
        self,
        key: str,
        record: Mapping[str, Any],
        ttl_hint: int | None = None,
    ) -> None:
        """Serialize and store a record.

        Web Storage has no expiry, so the TTL hint is ignored.
        """
        self._storage.set_item(self._prefix + key, self._serializer.serialize(record))

    def remove(self, key: str) -> None:
        """Delete the record stored under key."""
        self._storage.remove_item(self._prefix + key)

    def keys(self) -> list[str]:
        """List namespaced keys with the prefix stripped."""
        return [
            name[len(self._prefix):]
            for name in self._storage.keys()
            if name.startswith(self._prefix)
        ]

    def clear(self) -> None:
        """Delete every namespaced key, leaving foreign data alone."""
        for key in self.keys():
            self.remove(key)
