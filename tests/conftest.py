"""Pytest configuration for toolkitify tests."""

from unittest.mock import Mock

import pytest

from toolkitify.infrastructure.client import ClientContext


class FakeWebStorage:
    """In-process stand-in for localStorage/sessionStorage."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self.data)


class FakeDocument:
    """In-process stand-in for ``document.cookie``.

    Keeps the last assignment for every cookie so tests can inspect
    attributes such as ``expires``.
    """

    def __init__(self) -> None:
        self.jar: dict[str, str] = {}
        self.assignments: list[str] = []

    @property
    def cookie(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self.jar.items())

    @cookie.setter
    def cookie(self, raw: str) -> None:
        self.assignments.append(raw)
        pair, *attributes = [part.strip() for part in raw.split(";")]
        name, _, value = pair.partition("=")
        if any(attr.lower() == "max-age=0" for attr in attributes):
            self.jar.pop(name, None)
        else:
            self.jar[name] = value


@pytest.fixture
def local_storage() -> FakeWebStorage:
    return FakeWebStorage()


@pytest.fixture
def session_storage() -> FakeWebStorage:
    return FakeWebStorage()


@pytest.fixture
def document() -> FakeDocument:
    return FakeDocument()


@pytest.fixture
def client(
    local_storage: FakeWebStorage,
    session_storage: FakeWebStorage,
    document: FakeDocument,
) -> ClientContext:
    """Browser context backed by in-process fakes."""
    return ClientContext(
        local_storage=local_storage,
        session_storage=session_storage,
        document=document,
    )


@pytest.fixture
def clock() -> Mock:
    """Controllable time source in milliseconds."""
    return Mock(return_value=1_700_000_000_000)


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import toolkitify.decorators

    # Store original value
    original_cache = toolkitify.decorators._cache

    yield

    # Restore original value after test
    toolkitify.decorators._cache = original_cache
