"""Cookie storage adapter implementation."""

import logging
import time
from collections.abc import Callable, Mapping
from email.utils import formatdate
from typing import Any
from urllib.parse import quote, unquote

from toolkitify.core.interfaces.client import IDocument
from toolkitify.core.interfaces.serializer import ISerializer
from toolkitify.infrastructure.serializers.json import JsonSerializer, SerializationError

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CookieStorageAdapter:
    """Adapter storing one cookie per record.

    Cookie names are the URL-encoded, namespaced key and values are the
    URL-encoded serialized record. A TTL hint turns into an ``expires``
    attribute; without one a session cookie is written.
    """

    def __init__(
        self,
        document: IDocument,
        prefix: str,
        serializer: ISerializer | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize the adapter.

        Args:
            document: Object exposing the ``cookie`` property.
            prefix: Namespace prepended to every key.
            serializer: Serializer for records. Defaults to JSON.
            clock: Time source returning milliseconds since the epoch.
        """
        self._document = document
        self._prefix = prefix
        self._serializer = serializer or JsonSerializer()
        self._clock = clock

    @property
    def available(self) -> bool:
        """Check if the backend is reachable."""
        return True

    def read(self, key: str) -> Mapping[str, Any] | None:
        """Retrieve and deserialize the cookie for key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored record, or None if missing or unparseable.
        """
        data = self._cookies().get(self._cookie_name(key))
        if not data:
            return None
        try:
            return self._serializer.deserialize(unquote(data))
        except SerializationError:
            logger.debug("Ignoring unreadable cookie for key %s", key)
            return None

    def write(
        self,
        key: str,
        record: Mapping[str, Any],
        ttl_hint: int | None = None,
    ) -> None:
        """Write the record as a cookie.

        Args:
            key: The key.
            record: The record to store.
            ttl_hint: Lifetime in milliseconds. None makes a session cookie.
        """
        value = quote(self._serializer.serialize(record), safe="")
        expires = ""
        if ttl_hint:
            expires_at = (self._clock() + ttl_hint) / 1000
            expires = f"; expires={formatdate(expires_at, usegmt=True)}"
        self._document.cookie = f"{self._cookie_name(key)}={value}{expires}; path=/"

    def remove(self, key: str) -> None:
        """Expire the cookie for key."""
        self._document.cookie = f"{self._cookie_name(key)}=; Max-Age=0; path=/"

    def keys(self) -> list[str]:
        """List namespaced cookie keys with the prefix stripped."""
        keys = []
        for name in self._cookies():
            decoded = unquote(name)
            if decoded.startswith(self._prefix):
                keys.append(decoded[len(self._prefix):])
        return keys

    def clear(self) -> None:
        """Expire every namespaced cookie."""
        for key in self.keys():
            self.remove(key)

    def _cookie_name(self, key: str) -> str:
        """Build the encoded cookie name for key."""
        return quote(self._prefix + key, safe="")

    def _cookies(self) -> dict[str, str]:
        """Parse ``document.cookie`` into a name to raw value mapping."""
        cookies: dict[str, str] = {}
        raw = self._document.cookie or ""
        for part in raw.split(";"):
            name, sep, value = part.strip().partition("=")
            if name and sep:
                cookies[name] = value
        return cookies
