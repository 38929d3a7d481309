"""Redis store for the rate limiter."""

from typing import Optional

import redis.asyncio as redis


class RedisRateLimitStore:
    """Redis-backed external store for distributed rate limiting.

    Wraps a ``redis.asyncio`` client. Every write uses ``SET ... PX`` so
    counters expire on their own even if never read again.
    """

    def __init__(self, client: redis.Redis) -> None:
        """Initialize the store.

        Args:
            client: A connected ``redis.asyncio.Redis`` client.
        """
        self._redis = client

    @classmethod
    def from_url(cls, redis_url: str = "redis://localhost:6379") -> "RedisRateLimitStore":
        """Create a store from a Redis connection URL."""
        return cls(redis.from_url(redis_url))  # type: ignore

    async def get(self, key: str) -> Optional[str]:
        """Retrieve the text stored under key.

        Args:
            key: The namespaced key.

        Returns:
            The stored text, or None if not found or expired.
        """
        value = await self._redis.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, expiry_ms: int) -> None:
        """Store text with an expiry in milliseconds."""
        await self._redis.set(key, value, px=max(int(expiry_ms), 1))

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisRateLimitStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
