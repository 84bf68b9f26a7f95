"""Tests for structured logging redaction."""

import pytest
import structlog

from agora.shared.core.logging import is_redacted_field, redact_sensitive_fields


def redact(event: dict) -> dict:
    return redact_sensitive_fields(None, "info", event)


def test_top_level_secrets_are_dropped():
    event = {
        "event": "User signed in",
        "user_id": "u1",
        "password": "hunter2",
        "access_token": "eyJ...",
        "Authorization": "Bearer eyJ...",
    }

    assert redact(event) == {"event": "User signed in", "user_id": "u1"}


def test_camel_case_variants_are_dropped():
    event = {"event": "x", "accessToken": "t", "passwordHash": "h", "apiKey": "k"}

    assert redact(event) == {"event": "x"}


def test_nested_secrets_are_dropped():
    event = {
        "event": "Sign-up payload",
        "body": {"email": "a@example.com", "password": "p", "profile": {"token": "t", "bio": "b"}},
        "items": [{"secret": "s", "id": 1}],
    }

    assert redact(event) == {
        "event": "Sign-up payload",
        "body": {"email": "a@example.com", "profile": {"bio": "b"}},
        "items": [{"id": 1}],
    }


@pytest.mark.parametrize(
    "field",
    [
        "password",
        "password_hash",
        "newPassword",
        "current_password",
        "currentPassword",
        "secretKey",
        "SECRET_KEY",
        "refresh-token",
        "cookie",
    ],
)
def test_denylist_matches_every_spelling(field):
    assert is_redacted_field(field)
    assert redact({"event": "x", field: "value"}) == {"event": "x"}


def test_ordinary_fields_are_kept():
    assert not is_redacted_field("user_id")
    assert not is_redacted_field("tokens_used_count")


def test_redaction_runs_before_rendering():
    processors = structlog.get_config()["processors"]

    assert redact_sensitive_fields in processors
    assert processors.index(redact_sensitive_fields) < len(processors) - 1
