"""Cache lifecycle events."""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from toolkitify.core.entities.storage import StorageKind


class CacheEvent(str, Enum):
    """Lifecycle events emitted by a Cache."""

    SET = "set"
    GET = "get"
    EXPIRE = "expire"
    DELETE = "delete"
    CLEAR = "clear"


@dataclass(frozen=True)
class CacheEventPayload:
    """Data delivered to event handlers.

    ``key`` is None for ``CLEAR``, which concerns a whole backend.
    """

    storage: StorageKind
    key: str | None = None


EventHandler = Callable[[CacheEventPayload], object]


class EventEmitter:
    """Synchronous publish/subscribe registry.

    Handlers run in registration order on the caller's stack. Exceptions
    raised by a handler propagate and skip the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[CacheEvent, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event: CacheEvent | str, handler: EventHandler) -> None:
        """Register a handler for an event.

        Raises:
            ValueError: If the event name is unknown.
        """
        self._handlers[CacheEvent(event)].append(handler)

    def unsubscribe(self, event: CacheEvent | str, handler: EventHandler) -> bool:
        """Remove a previously registered handler.

        Returns:
            True if the handler was registered, False otherwise.
        """
        handlers = self._handlers.get(CacheEvent(event), [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, event: CacheEvent, payload: CacheEventPayload) -> None:
        """Invoke every handler registered for event."""
        for handler in list(self._handlers.get(event, ())):
            handler(payload)
