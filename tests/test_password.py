"""
Tests for bcrypt hashing and password strength scoring.
"""

import pytest

from auth.password import (
    get_rounds,
    hash_password,
    is_valid_hash,
    needs_rehash,
    password_strength,
    password_strength_label,
    verify_password,
)
from config.settings import config


class TestHashing:
    def test_hash_verifies_against_plaintext(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_blank_password_raises(self):
        with pytest.raises(ValueError):
            hash_password("   ")
        with pytest.raises(ValueError):
            hash_password(None)

    def test_password_over_72_bytes_raises(self):
        with pytest.raises(ValueError, match="72 bytes"):
            hash_password("가" * 25 + "Aa1!")

    def test_rounds_out_of_range_raises(self):
        with pytest.raises(ValueError, match="rounds"):
            hash_password("secret123", rounds=3)
        with pytest.raises(ValueError, match="rounds"):
            hash_password("secret123", rounds=32)

    def test_explicit_rounds_are_encoded(self):
        assert get_rounds(hash_password("secret123", rounds=5)) == 5

    def test_verify_rejects_missing_or_garbage_hash(self):
        assert not verify_password("secret123", None)
        assert not verify_password("secret123", "")
        assert not verify_password("secret123", "not-a-bcrypt-hash")
        assert not verify_password(None, hash_password("secret123"))


class TestHashInspection:
    def test_is_valid_hash(self):
        assert is_valid_hash(hash_password("secret123"))
        assert not is_valid_hash("plaintext")
        assert not is_valid_hash(None)

    def test_get_rounds_invalid_hash(self):
        assert get_rounds("plaintext") == -1

    def test_needs_rehash_when_cost_is_below_config(self, monkeypatch):
        hashed = hash_password("secret123", rounds=4)
        monkeypatch.setattr(config, "bcrypt_rounds", 5)
        assert needs_rehash(hashed)

    def test_no_rehash_at_current_cost(self):
        assert not needs_rehash(hash_password("secret123"))
        assert not needs_rehash("plaintext")


class TestStrength:
    @pytest.mark.parametrize(
        "password, expected",
        [
            ("", 0),
            ("abc", 15),          # one class, too short for length points
            ("abcdef", 30),       # 15 length + 15 lower
            ("abcdef12", 55),     # 20 + 30 + 5 bonus
            ("Abcdef12", 75),     # 20 + 45 + 10 bonus
            ("Abcdef12!xyz", 95), # 25 + 60 + 10 bonus
        ],
    )
    def test_scores(self, password, expected):
        assert password_strength(password) == expected

    def test_long_mixed_password_scores_high(self):
        assert password_strength("Aa1!" * 20) == 95

    @pytest.mark.parametrize(
        "password, label",
        [
            ("abc", "Very weak"),
            ("abcdefgh", "Weak"),
            ("abcdef12", "Medium"),
            ("Abcdef12", "Strong"),
            ("Abcdef12!xyz", "Very strong"),
        ],
    )
    def test_labels(self, password, label):
        assert password_strength_label(password) == label
