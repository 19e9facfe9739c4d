"""Unit tests for the rate limiters."""

from journal.adapter.ratelimit.limiter import FixedWindowRateLimiter, MockRateLimiter


class TestFixedWindowRateLimiter:
    def test_blocks_after_budget_is_spent(self):
        limiter = FixedWindowRateLimiter("3/60 seconds")

        results = [limiter.consume("203.0.113.7", "login") for _ in range(4)]

        assert results == [True, True, True, False]

    def test_budgets_are_per_key_and_scope(self):
        limiter = FixedWindowRateLimiter("1/60 seconds")

        assert limiter.consume("203.0.113.7", "login")
        assert not limiter.consume("203.0.113.7", "login")
        assert limiter.consume("198.51.100.2", "login")
        assert limiter.consume("203.0.113.7", "register")

    def test_reset_restores_budget(self):
        limiter = FixedWindowRateLimiter("1/60 seconds")
        limiter.consume("203.0.113.7")

        limiter.reset()

        assert limiter.consume("203.0.113.7")


class TestMockRateLimiter:
    def test_always_allows_and_records(self):
        limiter = MockRateLimiter()

        assert all(limiter.consume("203.0.113.7", "login") for _ in range(100))
        assert limiter.calls[0] == ("login", "203.0.113.7")
        assert len(limiter.calls) == 100
