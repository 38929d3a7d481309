"""Tests for NullStorageAdapter."""

from toolkitify.infrastructure.backends.null import NullStorageAdapter


def test_null_adapter_is_inert() -> None:
    """Every operation is a no-op and reads always miss."""
    backend = NullStorageAdapter()

    backend.write("key", {"value": 1}, ttl_hint=10)
    backend.remove("key")
    backend.clear()

    assert backend.available is False
    assert backend.read("key") is None
    assert backend.keys() == []
