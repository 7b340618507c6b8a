"""
Unit tests for infrastructure.security
"""
from infrastructure.security import hash_password, verify_password


class TestHashPassword:
    """Tests for hash_password"""

    def test_returns_non_empty_string(self):
        result = hash_password("mypassword", rounds=4)
        assert isinstance(result, str)
        assert len(result) > 0

    def test_different_salts_per_call(self):
        """Each hash should use a new salt, so hashes differ."""
        h1 = hash_password("same", rounds=4)
        h2 = hash_password("same", rounds=4)
        assert h1 != h2
        assert verify_password("same", h1) is True
        assert verify_password("same", h2) is True

    def test_hash_not_equal_to_plain(self):
        result = hash_password("secret123", rounds=4)
        assert result != "secret123"

    def test_default_work_factor_is_ten(self):
        assert hash_password("s3cret").startswith("$2b$10$")

    def test_custom_work_factor_embedded(self):
        assert hash_password("s3cret", rounds=5).startswith("$2b$05$")


class TestVerifyPassword:
    """Tests for verify_password"""

    def test_matching_password_returns_true(self):
        hashed = hash_password("correct", rounds=4)
        assert verify_password("correct", hashed) is True

    def test_wrong_password_returns_false(self):
        hashed = hash_password("correct", rounds=4)
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash_returns_false(self):
        assert verify_password("correct", "not-a-bcrypt-hash") is False

    def test_unicode_password(self):
        hashed = hash_password("pässwörd-🔑", rounds=4)
        assert verify_password("pässwörd-🔑", hashed) is True
        assert verify_password("passwoerd", hashed) is False
