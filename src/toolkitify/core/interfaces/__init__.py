"""Core interfaces (Protocol classes) for toolkitify."""

from toolkitify.core.interfaces.client import IDocument, IWebStorage
from toolkitify.core.interfaces.external_store import IExternalStore
from toolkitify.core.interfaces.serializer import ISerializer
from toolkitify.core.interfaces.storage_adapter import IStorageAdapter

__all__ = [
    "IStorageAdapter",
    "ISerializer",
    "IExternalStore",
    "IWebStorage",
    "IDocument",
]
