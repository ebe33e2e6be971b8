"""Unit tests for signature verification and truncation helpers."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from app.utils import bb_verify, truncate

BODY = b'{"repository": {"name": "api"}}'


def _sign(secret: str, body: bytes) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def test_valid_signature() -> None:
    assert bb_verify("s3cret", BODY, _sign("s3cret", BODY)) is True


@pytest.mark.parametrize(
    "header",
    [
        pytest.param(None, id="missing"),
        pytest.param("", id="empty"),
        pytest.param("sha1=abc", id="wrong_algorithm"),
        pytest.param(_sign("other", BODY), id="wrong_secret"),
        pytest.param(_sign("s3cret", BODY + b" "), id="tampered_body"),
    ],
)
def test_invalid_signature(header) -> None:
    assert bb_verify("s3cret", BODY, header) is False


@pytest.mark.parametrize(
    ("text", "expected"),
    [("abcde", "abcde"), ("abcdef", "abc..."), ("", "")],
)
def test_truncate(text, expected) -> None:
    assert truncate(text, 5, 3) == expected
