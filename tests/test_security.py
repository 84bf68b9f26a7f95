"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest

from agora.shared.core.exceptions import UnauthorizedError
from agora.shared.utils.security import SecurityUtils


def test_hash_and_verify_password():
    hashed = SecurityUtils.hash_password("Passw0rd!")

    assert hashed != "Passw0rd!"
    assert SecurityUtils.verify_password("Passw0rd!", hashed) is True
    assert SecurityUtils.verify_password("wrong", hashed) is False


def test_verify_without_hash_is_false():
    assert SecurityUtils.verify_password("anything", None) is False


def test_token_round_trip():
    token = SecurityUtils.create_access_token(user_id="u1", email="a@example.com")

    payload = SecurityUtils.decode_access_token(token)

    assert payload["user_id"] == "u1"
    assert payload["email"] == "a@example.com"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected():
    token = SecurityUtils.create_access_token(
        user_id="u1",
        email="a@example.com",
        expires_delta=timedelta(seconds=-10),
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        SecurityUtils.decode_access_token(token)

    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_key_is_invalid():
    token = SecurityUtils.create_access_token(
        user_id="u1",
        email="a@example.com",
        secret_key="another-secret-key-that-is-long-enough",
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        SecurityUtils.decode_access_token(token)

    assert exc_info.value.message == "Invalid token"


def test_garbage_token_is_invalid():
    with pytest.raises(UnauthorizedError):
        SecurityUtils.decode_access_token("not-a-jwt")
