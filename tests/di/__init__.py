"""Mock providers for testing."""

from .container import build_test_container
from .hasher import MockHasherProvider
from .oauth import MockOAuthProvider
from .persistence import MockPersistenceProvider
from .ratelimit import MockRateLimitProvider

__all__ = [
    "MockHasherProvider",
    "MockOAuthProvider",
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "build_test_container",
]
