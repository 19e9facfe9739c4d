"""Password hashing adapters."""

import hashlib
import hmac
import secrets

from bcrypt import checkpw, gensalt, hashpw

from journal.domain.service.password_hasher import PasswordHasher

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt password hasher with a configurable cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        """Initialize bcrypt hasher.

        Args:
            rounds: Cost factor (log2 of iterations), at least 10
        """
        if rounds < 10:
            raise ValueError("bcrypt cost factor must be at least 10")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return hashpw(_encode(password), gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False


class MockPasswordHasher(PasswordHasher):
    """Fast salted SHA-256 hasher for tests.

    Keeps the salted-hash contract without paying the bcrypt cost.
    """

    PREFIX = "mock-sha256"

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(8)
        digest = hashlib.sha256(f"{salt}:{password}".encode("utf-8")).hexdigest()
        return f"{self.PREFIX}${salt}${digest}"

    def verify(self, password: str, hashed: str) -> bool:
        try:
            prefix, salt, digest = hashed.split("$", 2)
        except ValueError:
            return False
        if prefix != self.PREFIX:
            return False
        candidate = hashlib.sha256(f"{salt}:{password}".encode("utf-8")).hexdigest()
        return hmac.compare_digest(candidate, digest)
