"""Rate limiting infrastructure providers."""

from dishka import Scope, provide

from journal.adapter.ratelimit.limiter import FixedWindowRateLimiter, RateLimiter
from journal.config import Settings
from journal.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limiter component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter with in-process fixed windows."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_rate_limiter(self, settings: Settings) -> RateLimiter:
        """Provide the process-wide rate limiter."""
        return FixedWindowRateLimiter(settings.rate_limit.rate)
