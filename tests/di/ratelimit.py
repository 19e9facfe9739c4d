"""Mock rate limiter provider for testing."""

from dishka import Scope, provide

from journal.adapter.ratelimit.limiter import MockRateLimiter, RateLimiter
from journal.util.di.infrastructure.ratelimit import RateLimitProvider


class MockRateLimitProvider(RateLimitProvider):
    """Rate limiter that allows every request."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_rate_limiter(self) -> RateLimiter:
        return MockRateLimiter()
