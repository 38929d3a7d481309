"""Browser client context detection."""

import sys
from dataclasses import dataclass
from typing import Any

from toolkitify.core.interfaces.client import IDocument, IWebStorage


@dataclass(frozen=True)
class ClientContext:
    """Browser primitives available to client-side storage adapters."""

    local_storage: IWebStorage
    session_storage: IWebStorage
    document: IDocument


class JsWebStorage:
    """Wrap a JavaScript ``Storage`` object exposed by Pyodide."""

    def __init__(self, storage: Any) -> None:
        self._storage = storage

    def get_item(self, key: str) -> str | None:
        value = self._storage.getItem(key)
        # JS null may surface as a proxy object rather than None.
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        self._storage.setItem(key, value)

    def remove_item(self, key: str) -> None:
        self._storage.removeItem(key)

    def keys(self) -> list[str]:
        return [self._storage.key(index) for index in range(self._storage.length)]


def detect_client_context() -> ClientContext | None:
    """Build a context from the running browser, if any.

    Returns:
        A ClientContext backed by ``window.localStorage``,
        ``window.sessionStorage`` and ``document`` when running under
        Pyodide, None in every other environment.
    """
    if sys.platform != "emscripten":
        return None

    import js  # type: ignore[import-not-found]

    if getattr(js, "document", None) is None:
        # Web worker: no DOM, no storage.
        return None

    return ClientContext(
        local_storage=JsWebStorage(js.localStorage),
        session_storage=JsWebStorage(js.sessionStorage),
        document=js.document,
    )
