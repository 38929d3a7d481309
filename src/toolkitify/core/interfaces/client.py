"""Browser primitives interfaces."""

from typing import Protocol


class IWebStorage(Protocol):
    """Contract mirroring the browser Web Storage API.

    Implemented by ``localStorage`` and ``sessionStorage`` wrappers.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if missing."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a string under key."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        ...

    def keys(self) -> list[str]:
        """List every key in the storage area."""
        ...


class IDocument(Protocol):
    """Contract for the part of ``document`` that handles cookies.

    Reading ``cookie`` yields ``"name=value; other=value"``; assigning it
    a ``Set-Cookie``-style string creates, updates or deletes one cookie.
    """

    cookie: str
