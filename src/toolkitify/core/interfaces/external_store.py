"""External key-value store interface."""

from typing import Protocol


class IExternalStore(Protocol):
    """Contract for a network-backed store used by the rate limiter.

    Methods are async since every call is a network round trip. Every
    write carries an expiry so abandoned counters clean themselves up.
    """

    async def get(self, key: str) -> str | None:
        """Retrieve the text stored under key.

        Args:
            key: The fully namespaced key.

        Returns:
            The stored text, or None if not found or expired.
        """
        ...

    async def set(self, key: str, value: str, expiry_ms: int) -> None:
        """Store text under key with an expiry.

        Args:
            key: The fully namespaced key.
            value: The text to store.
            expiry_ms: Lifetime in milliseconds.
        """
        ...
