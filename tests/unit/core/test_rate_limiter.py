"""Tests for RateLimiter."""

import json
from unittest.mock import Mock

import pytest

from toolkitify import (
    EnvironmentMismatchError,
    InvalidTimeFormatError,
    MissingDependencyError,
    RateLimiter,
    RateLimitOptions,
    create_rate_limit,
)


class FakeExternalStore:
    """In-process stand-in for RedisRateLimitStore."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.expiries: dict[str, int] = {}
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str, expiry_ms: int) -> None:
        self.set_calls += 1
        self.data[key] = value
        self.expiries[key] = expiry_ms


@pytest.fixture
def limiter(clock: Mock) -> RateLimiter:
    """Create an in-memory limiter with a controllable clock."""
    return RateLimiter(clock=clock)


class TestRateLimiterMemory:
    """Tests for the in-memory backend."""

    @pytest.mark.asyncio
    async def test_allows_under_the_limit(self, limiter: RateLimiter) -> None:
        """Test remaining decreases strictly down to zero."""
        remaining = []
        for _ in range(3):
            result = await limiter.check(3, 1_000, key="user1")
            assert result.success is True
            remaining.append(result.remaining)

        assert remaining == [2, 1, 0]

    @pytest.mark.asyncio
    async def test_blocks_over_the_limit(self, limiter: RateLimiter) -> None:
        """Test the call after the limit is rejected."""
        await limiter.check(2, 500, key="user2")
        await limiter.check(2, 500, key="user2")
        result = await limiter.check(2, 500, key="user2")

        assert result.success is False
        assert result.remaining == 0
        assert result.limit == 2

    @pytest.mark.asyncio
    async def test_block_duration_scenario(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test blocking for block_duration rather than the interval."""
        options = {"key": "x", "block_duration": 60_000}

        remaining = []
        for _ in range(5):
            result = await limiter.check(5, 10_000, **options)
            assert result.success is True
            remaining.append(result.remaining)
        assert remaining == [4, 3, 2, 1, 0]

        clock.return_value += 25
        blocked = await limiter.check(5, 10_000, **options)

        assert blocked.success is False
        assert 50_000 < blocked.reset - clock.return_value <= 60_000

    @pytest.mark.asyncio
    async def test_block_defaults_to_interval(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test interval is used when no block duration is given."""
        for _ in range(3):
            await limiter.check(3, 5_000, key="no-block")

        blocked = await limiter.check(3, 5_000, key="no-block")

        assert blocked.success is False
        assert blocked.reset - clock.return_value == 5_000

    @pytest.mark.asyncio
    async def test_block_is_sticky(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test repeated rejections keep the same reset time."""
        options = {"key": "sticky", "block_duration": 10_000}
        await limiter.check(2, 1_000, **options)
        await limiter.check(2, 1_000, **options)

        first = await limiter.check(2, 1_000, **options)
        clock.return_value += 5_000
        second = await limiter.check(2, 1_000, **options)

        assert first.success is False
        assert second.success is False
        assert second.reset == first.reset

    @pytest.mark.asyncio
    async def test_resets_after_window(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test counting restarts from one once the reset time passes."""
        first = await limiter.check(1, 100, key="user3")
        assert (await limiter.check(1, 100, key="user3")).success is False

        clock.return_value = first.reset + 1
        result = await limiter.check(1, 100, key="user3")

        assert result.success is True
        assert result.remaining == 0
        assert result.reset == clock.return_value + 100

    @pytest.mark.asyncio
    async def test_window_reset_keeps_original_reset(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test requests under the limit keep the window's reset time."""
        start = clock.return_value
        first = await limiter.check(3, 1_000, key="w")
        clock.return_value += 400
        second = await limiter.check(3, 1_000, key="w")

        assert first.reset == second.reset == start + 1_000

    @pytest.mark.asyncio
    async def test_keys_are_isolated(self, limiter: RateLimiter) -> None:
        """Test keys have independent counters."""
        assert (await limiter.check(1, 1_000, key="k1")).success is True
        assert (await limiter.check(1, 1_000, key="k1")).success is False
        assert (await limiter.check(1, 1_000, key="k2")).success is True

    @pytest.mark.asyncio
    async def test_default_key(self, limiter: RateLimiter) -> None:
        """Test checks without a key share the default counter."""
        await limiter.check(1, 1_000)

        assert (await limiter.check(1, 1_000)).success is False

    @pytest.mark.asyncio
    async def test_human_readable_durations(self, limiter: RateLimiter, clock: Mock) -> None:
        """Test string intervals and block durations."""
        result = await limiter.check(1, "10s", block_duration="1m", key="h")

        assert result.reset == clock.return_value + 60_000

    @pytest.mark.asyncio
    async def test_instance_defaults(self, clock: Mock) -> None:
        """Test options given at construction apply to every check."""
        limiter = RateLimiter(RateLimitOptions(limit=1, interval="1s", key="shared"), clock=clock)

        assert (await limiter.check()).success is True
        assert (await limiter.check()).success is False
        assert (await limiter.check(limit=2)).success is True

    @pytest.mark.asyncio
    async def test_logs_rejections(self, clock: Mock, caplog: pytest.LogCaptureFixture) -> None:
        """Test rejected requests are logged when enabled."""
        limiter = RateLimiter(RateLimitOptions(logs=True), clock=clock)

        with caplog.at_level("INFO", logger="toolkitify.core.services.rate_limiter"):
            await limiter.check(1, 1_000, key="noisy")
            await limiter.check(1, 1_000, key="noisy")

        assert [r.getMessage() for r in caplog.records] == ["Rate limit exceeded for key: noisy"]

    @pytest.mark.asyncio
    async def test_requires_limit_and_interval(self, limiter: RateLimiter) -> None:
        """Test missing parameters are rejected."""
        with pytest.raises(ValueError, match="required"):
            await limiter.check(interval=1_000)
        with pytest.raises(ValueError, match="required"):
            await limiter.check(limit=1)

    @pytest.mark.asyncio
    async def test_rejects_non_positive_limit(self, limiter: RateLimiter) -> None:
        """Test limit must be positive."""
        with pytest.raises(ValueError, match=">= 1"):
            await limiter.check(0, 1_000)

    @pytest.mark.asyncio
    async def test_invalid_interval(self, limiter: RateLimiter) -> None:
        """Test malformed durations propagate."""
        with pytest.raises(InvalidTimeFormatError):
            await limiter.check(1, "ten seconds")

    @pytest.mark.asyncio
    async def test_cookies_not_supported(self, limiter: RateLimiter) -> None:
        """Test the cookie backend is rejected."""
        with pytest.raises(ValueError, match="cookie"):
            await limiter.check(1, 1_000, storage="cookies")


class TestRateLimiterBrowserStorage:
    """Tests for localStorage and sessionStorage backends."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("storage", ["localStorage", "sessionStorage"])
    async def test_counts_in_browser_storage(self, client, clock: Mock, storage: str) -> None:
        """Test counters persist across limiter instances."""
        first = RateLimiter(client=client, clock=clock)
        second = RateLimiter(client=client, clock=clock)

        assert (await first.check(2, 1_000, key="b", storage=storage)).remaining == 1
        assert (await second.check(2, 1_000, key="b", storage=storage)).remaining == 0
        assert (await first.check(2, 1_000, key="b", storage=storage)).success is False

    @pytest.mark.asyncio
    async def test_record_format(self, client, clock: Mock, local_storage) -> None:
        """Test the stored record shape and key namespace."""
        limiter = RateLimiter(client=client, clock=clock)

        await limiter.check(5, 1_000, key="ip", storage="localStorage")

        assert json.loads(local_storage.data["toolkitify:ratelimit:ip"]) == {
            "count": 1,
            "resetAt": clock.return_value + 1_000,
        }

    @pytest.mark.asyncio
    async def test_malformed_record_starts_new_window(self, client, clock: Mock, local_storage) -> None:
        """Test unreadable data is replaced with a fresh window."""
        local_storage.data["toolkitify:ratelimit:ip"] = "garbage"
        limiter = RateLimiter(client=client, clock=clock)

        result = await limiter.check(2, 1_000, key="ip", storage="localStorage")

        assert result.success is True
        assert result.remaining == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("storage", ["localStorage", "sessionStorage"])
    async def test_environment_mismatch(self, limiter: RateLimiter, storage: str) -> None:
        """Test browser storage fails loudly outside a browser."""
        with pytest.raises(EnvironmentMismatchError):
            await limiter.check(1, 1_000, storage=storage)


class TestRateLimiterExternalStore:
    """Tests for the external (Redis) backend."""

    @pytest.fixture
    def store(self) -> FakeExternalStore:
        """Create a fake external store."""
        return FakeExternalStore()

    @pytest.mark.asyncio
    async def test_missing_client(self, limiter: RateLimiter) -> None:
        """Test the external backend requires a client."""
        with pytest.raises(MissingDependencyError):
            await limiter.check(1, 1_000, storage="redis")

    @pytest.mark.asyncio
    async def test_limits_through_store(self, limiter: RateLimiter, store: FakeExternalStore) -> None:
        """Test counting and blocking against the store."""
        options = {"key": "api", "storage": "redis", "external_client": store}

        results = [await limiter.check(2, 1_000, **options) for _ in range(3)]

        assert [r.success for r in results] == [True, True, False]
        assert [r.remaining for r in results] == [1, 0, 0]

    @pytest.mark.asyncio
    async def test_writes_carry_expiry(self, limiter: RateLimiter, store: FakeExternalStore, clock: Mock) -> None:
        """Test the first write uses the interval as expiry."""
        await limiter.check(5, 1_000, key="api", storage="redis", external_client=store)

        stored = json.loads(store.data["@toolkitify/ratelimit/api"])
        assert stored == {"count": 1, "resetAt": clock.return_value + 1_000}
        assert store.expiries["@toolkitify/ratelimit/api"] == 1_000
        # Fresh window written, then the incremented record.
        assert store.set_calls == 2

    @pytest.mark.asyncio
    async def test_block_expiry(self, limiter: RateLimiter, store: FakeExternalStore) -> None:
        """Test the final allowed request stores the block duration."""
        options = {"key": "api", "storage": "redis", "external_client": store, "block_duration": 30_000}

        await limiter.check(1, 1_000, **options)

        assert store.expiries["@toolkitify/ratelimit/api"] == 30_000

    @pytest.mark.asyncio
    async def test_rejection_does_not_write(self, limiter: RateLimiter, store: FakeExternalStore) -> None:
        """Test a blocked request leaves the store untouched."""
        options = {"key": "api", "storage": "redis", "external_client": store}
        await limiter.check(1, 1_000, **options)
        calls = store.set_calls

        await limiter.check(1, 1_000, **options)

        assert store.set_calls == calls

    @pytest.mark.asyncio
    async def test_stale_record_restarts_window(self, limiter: RateLimiter, store: FakeExternalStore, clock: Mock) -> None:
        """Test a record past its reset is replaced with a new window."""
        store.data["@toolkitify/ratelimit/api"] = json.dumps({"count": 9, "resetAt": clock.return_value - 1})

        result = await limiter.check(2, 1_000, key="api", storage="redis", external_client=store)

        assert result.success is True
        assert result.remaining == 1


class TestCreateRateLimit:
    """Tests for the create_rate_limit factory."""

    @pytest.mark.asyncio
    async def test_limits_by_value(self, clock: Mock) -> None:
        """Test each value gets its own counter under the prefix."""
        per_user = create_rate_limit(2, "1s", "userId", clock=clock)

        assert (await per_user.limit("USER123")).success is True
        assert (await per_user.limit("USER123")).success is True
        assert (await per_user.limit("USER123")).success is False
        assert (await per_user.limit("OTHER")).success is True

    @pytest.mark.asyncio
    async def test_resets_automatically(self, clock: Mock) -> None:
        """Test the window resets after the interval."""
        per_user = create_rate_limit(2, 100, "userId", clock=clock)

        await per_user.limit("USER456")
        last = await per_user.limit("USER456")
        clock.return_value = last.reset + 1

        assert (await per_user.limit("USER456")).success is True

    @pytest.mark.asyncio
    async def test_composes_key_with_prefix(self) -> None:
        """Test the external key is prefix and value joined by a colon."""
        store = FakeExternalStore()
        per_ip = create_rate_limit(5, "1m", "ip", storage="redis", external_client=store)

        await per_ip.limit("10.0.0.1")

        assert list(store.data) == ["@toolkitify/ratelimit/ip:10.0.0.1"]

    @pytest.mark.asyncio
    async def test_factories_do_not_share_memory(self, clock: Mock) -> None:
        """Test every factory call owns its in-process counters."""
        first = create_rate_limit(1, "1s", "user", clock=clock)
        second = create_rate_limit(1, "1s", "user", clock=clock)

        await first.limit("a")

        assert (await second.limit("a")).success is True
        assert first.limiter is not second.limiter
