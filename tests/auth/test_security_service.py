"""Unit tests for SecurityService"""
import pytest

from app.auth.security import SecurityService


class TestSecurityService:
    """Tests for password hashing and verification"""

    def test_hash_password_is_not_plaintext(self, security):
        """Test hash_password returns a bcrypt hash, never the input"""
        hashed = security.hash_password("secret1")

        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_hash_password_is_salted(self, security):
        """Test two hashes of the same password differ"""
        assert security.hash_password("secret1") != security.hash_password("secret1")

    def test_verify_password_correct(self, security):
        """Test verify_password accepts the right password"""
        hashed = security.hash_password("secret1")
        assert security.verify_password("secret1", hashed) is True

    def test_verify_password_wrong(self, security):
        """Test verify_password rejects a wrong password"""
        hashed = security.hash_password("secret1")
        assert security.verify_password("wrong", hashed) is False

    def test_hash_shaped_password_is_hashed(self, security):
        """Test input that looks like a bcrypt hash is still hashed as plaintext"""
        lookalike = security.hash_password("other")

        hashed = security.hash_password(lookalike)

        assert hashed != lookalike
        assert security.verify_password(lookalike, hashed) is True
        assert security.verify_password("other", hashed) is False

    def test_hash_password_empty_raises(self, security):
        """Test empty password is rejected"""
        with pytest.raises(ValueError):
            security.hash_password("")

    def test_long_password_truncated_to_72_bytes(self, security):
        """Test passwords longer than 72 bytes verify by their first 72 bytes"""
        long_password = "a" * 100
        hashed = security.hash_password(long_password)

        assert security.verify_password(long_password, hashed) is True
        assert security.verify_password("a" * 72 + "different", hashed) is True

    def test_verify_against_non_hash_returns_false(self, security):
        """Test a plaintext stored value never verifies"""
        assert security.verify_password("secret1", "secret1") is False

    def test_verify_empty_values_return_false(self, security):
        """Test empty password or hash never verifies"""
        hashed = security.hash_password("secret1")
        assert security.verify_password("", hashed) is False
        assert security.verify_password("secret1", "") is False

    def test_default_rounds(self):
        """Test default cost factor is 10"""
        service = SecurityService()
        hashed = service.hash_password("secret1")
        assert hashed.split("$")[2] == "10"
