"""Unit tests for PasswordHashingService."""

import bcrypt

from warden_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        """Hash is a bcrypt string carrying the configured cost."""
        hashed = self.service.hash("Secure-Password1")

        assert hashed.startswith("$2")
        assert hashed.split("$")[2] == "04"
        assert len(hashed) == 60

    def test_hash_does_not_contain_plaintext(self):
        password = "Secure-Password1"
        assert password not in self.service.hash(password)

    def test_verify_correct_password(self):
        hashed = self.service.hash("My-Secret-Pass1")

        assert self.service.verify("My-Secret-Pass1", hashed) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("My-Secret-Pass1")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        """Malformed hashes never verify and never raise."""
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_hash_produces_different_hashes(self):
        """Hashing the same password twice uses different salts."""
        password = "Same-Password1"
        hash1 = self.service.hash(password)
        hash2 = self.service.hash(password)

        assert hash1 != hash2
        assert self.service.verify(password, hash1)
        assert self.service.verify(password, hash2)

    def test_unicode_password(self):
        password = "Pässwörd-123"
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed)
        assert not self.service.verify("Passwort-123", hashed)


class TestWorkFactor:
    def test_default_rounds(self):
        assert PasswordHashingService().rounds == 10


class TestLongPasswords:
    """Passwords beyond bcrypt's 72-byte input limit."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_long_password_round_trip(self):
        password = "Aa1!" + "x" * 80
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed) is True

    def test_long_passwords_differ_after_72_bytes(self):
        """The tail beyond 72 bytes still counts."""
        prefix = "Aa1!" + "x" * 80
        hashed = self.service.hash(prefix + "a")

        assert self.service.verify(prefix + "b", hashed) is False

    def test_multibyte_password_over_limit(self):
        password = "Ää1!" * 20  # 120 bytes in UTF-8
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed) is True
        assert self.service.verify(password[:-1], hashed) is False

    def test_exactly_72_bytes_hashed_directly(self):
        password = "Aa1!" + "x" * 68
        hashed = self.service.hash(password)

        assert bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
