"""Request rate limiting backed by the limits library."""

from abc import ABC, abstractmethod

import logfire
from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter as _FixedWindowStrategy


class RateLimiter(ABC):
    """Per-key request budget."""

    @abstractmethod
    def consume(self, key: str, scope: str = "default") -> bool:
        """Take one request from the key's budget.

        Args:
            key: Caller identity, usually the client IP
            scope: Endpoint group sharing the budget

        Returns:
            True if the request is allowed, False once the budget is spent
        """
        pass


class FixedWindowRateLimiter(RateLimiter):
    """Fixed-window limiter with in-process storage."""

    def __init__(self, rate: str) -> None:
        """Initialize limiter.

        Args:
            rate: Rate in limits notation, e.g. "60/60 seconds"
        """
        self.item: RateLimitItem = parse(rate)
        self.storage = MemoryStorage()
        self.strategy = _FixedWindowStrategy(self.storage)

    def consume(self, key: str, scope: str = "default") -> bool:
        allowed = self.strategy.hit(self.item, scope, key)
        if not allowed:
            logfire.warn("Rate limit exceeded", key=key, scope=scope)
        return allowed

    def reset(self) -> None:
        self.storage.reset()


class MockRateLimiter(RateLimiter):
    """Rate limiter that never blocks, recording every key it sees."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def consume(self, key: str, scope: str = "default") -> bool:
        self.calls.append((scope, key))
        return True
