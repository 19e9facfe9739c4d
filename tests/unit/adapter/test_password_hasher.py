"""Unit tests for the password hashers."""

import pytest

from journal.adapter.security.hasher import BcryptPasswordHasher, MockPasswordHasher


@pytest.fixture(scope="module")
def bcrypt_hasher() -> BcryptPasswordHasher:
    # Lowest accepted cost keeps the suite fast
    return BcryptPasswordHasher(rounds=10)


class TestBcryptPasswordHasher:
    def test_hash_verifies_and_is_salted(self, bcrypt_hasher):
        first = bcrypt_hasher.hash("correct-horse")
        second = bcrypt_hasher.hash("correct-horse")

        assert first != "correct-horse"
        assert first != second
        assert first.startswith("$2b$10$")
        assert bcrypt_hasher.verify("correct-horse", first)
        assert bcrypt_hasher.verify("correct-horse", second)

    def test_wrong_password_does_not_verify(self, bcrypt_hasher):
        hashed = bcrypt_hasher.hash("correct-horse")

        assert not bcrypt_hasher.verify("correct-horsf", hashed)

    def test_non_bcrypt_hash_does_not_verify(self, bcrypt_hasher):
        assert not bcrypt_hasher.verify("correct-horse", "plaintext")

    def test_only_first_72_bytes_count(self, bcrypt_hasher):
        base = "x" * 72
        hashed = bcrypt_hasher.hash(base + "tail-one")

        assert bcrypt_hasher.verify(base + "tail-two", hashed)

    def test_low_cost_factor_rejected(self):
        with pytest.raises(ValueError):
            BcryptPasswordHasher(rounds=9)


class TestMockPasswordHasher:
    def test_round_trip_and_salting(self):
        hasher = MockPasswordHasher()

        hashed = hasher.hash("correct-horse")

        assert hashed.startswith("mock-sha256$")
        assert hashed != hasher.hash("correct-horse")
        assert hasher.verify("correct-horse", hashed)
        assert not hasher.verify("battery-staple", hashed)

    def test_foreign_hash_does_not_verify(self):
        assert not MockPasswordHasher().verify("correct-horse", "$2b$10$abc")
