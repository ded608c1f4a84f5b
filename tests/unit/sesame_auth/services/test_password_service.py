"""Unit tests for PasswordHashingService."""

import pytest

from sesame_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        """Test that hash returns a valid bcrypt hash."""
        hashed = self.service.hash("secure_password123")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_verify_correct_password(self):
        """Test that verify returns True for correct password."""
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("my_secret_password", hashed) is True

    def test_verify_incorrect_password(self):
        """Test that verify returns False for incorrect password."""
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        """Test that verify returns False for invalid hash format."""
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_hash_produces_different_hashes(self):
        """Test that hashing same password twice produces different hashes."""
        hash1 = self.service.hash("same_password")
        hash2 = self.service.hash("same_password")

        # Due to random salt, hashes should differ
        assert hash1 != hash2
        assert self.service.verify("same_password", hash1)
        assert self.service.verify("same_password", hash2)

    def test_unicode_password(self):
        """Test that non-ASCII passwords hash and verify."""
        hashed = self.service.hash("pässwörd-密码")

        assert self.service.verify("pässwörd-密码", hashed)
        assert not self.service.verify("passwort-密码", hashed)


class TestLongPasswords:
    """Tests for passwords beyond bcrypt's 72-byte input limit."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    def test_long_password_round_trips(self):
        """Test that a 100-character password hashes and verifies."""
        password = "p" * 100
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed)

    def test_long_passwords_differing_after_byte_72_are_distinct(self):
        """Test that characters past the 72nd byte still matter."""
        prefix = "x" * 72
        hashed = self.service.hash(prefix + "tail-one")

        assert self.service.verify(prefix + "tail-one", hashed)
        assert not self.service.verify(prefix + "tail-two", hashed)

    def test_exactly_72_bytes_is_hashed_directly(self):
        """Test the boundary: 72 bytes is accepted as-is."""
        password = "y" * 72
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed)
        assert not self.service.verify(password + "z", hashed)


class TestWorkFactor:
    """Tests for the configured bcrypt cost."""

    def test_default_rounds_is_14(self):
        """Test that the production cost factor is 14."""
        assert PasswordHashingService().rounds == 14
        assert PasswordHashingService.DEFAULT_ROUNDS == 14

    @pytest.mark.slow
    def test_default_hash_encodes_cost_14(self):
        """Test that a default hash carries cost 14 in its prefix."""
        hashed = PasswordHashingService().hash("secret")

        assert hashed.startswith("$2b$14$")

    def test_hash_of_other_cost_still_verifies(self):
        """Test that the cost is read from the stored hash on verify."""
        hashed = PasswordHashingService(rounds=5).hash("secret")

        assert PasswordHashingService(rounds=4).verify("secret", hashed)
