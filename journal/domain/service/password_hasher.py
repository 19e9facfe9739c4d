"""Password hashing port."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Salted, adaptive one-way password hashing.

    Implementations must compare in constant time.
    """

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password

        Returns:
            Encoded hash, salt included
        """
        pass

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash.

        Args:
            password: Plaintext password
            hashed: Stored hash

        Returns:
            True if the password matches
        """
        pass
