from __future__ import annotations

from habit_api.core.security import hash_password, verify_password


def test_hash_is_prefixed_and_salted():
    first = hash_password("Abc123!")
    second = hash_password("Abc123!")
    assert first.startswith("argon2$")
    assert first != second
    assert "Abc123!" not in first


def test_verify_password():
    stored = hash_password("Abc123!")
    assert verify_password("Abc123!", stored) is True
    assert verify_password("abc123!", stored) is False


def test_verify_rejects_plaintext_and_garbage():
    assert verify_password("Abc123!", "Abc123!") is False
    assert verify_password("Abc123!", None) is False
    assert verify_password("Abc123!", "argon2$not-a-hash") is False
