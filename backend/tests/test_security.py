"""Password hashing, token and rate-limit parsing tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from petadopt.api.deps import page_limit
from petadopt.api.v1.auth import parse_rate
from petadopt.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    token_subject,
    verify_password,
)


def test_hash_round_trip_and_malformed_hash() -> None:
    hashed = hash_password("Passw0rd!")
    assert hashed != "Passw0rd!"
    assert verify_password("Passw0rd!", hashed)
    assert not verify_password("passw0rd!", hashed)
    assert not verify_password("Passw0rd!", "not-a-bcrypt-hash")
    assert not verify_password("Passw0rd!", "")


def test_long_passwords_are_truncated_consistently() -> None:
    secret = "x" * 100
    hashed = hash_password(secret)
    assert verify_password(secret, hashed)
    assert verify_password("x" * 72, hashed)


def test_token_carries_subject_and_role() -> None:
    token = create_access_token(42, "shelter")
    claims = decode_access_token(token)
    assert claims["sub"] == "42"
    assert claims["role"] == "shelter"
    assert token_subject(token) == 42


def test_token_subject_rejects_expired_and_garbage() -> None:
    expired = create_access_token(7, "user", expires_delta=timedelta(seconds=-5))
    assert token_subject(expired) is None
    assert token_subject("not.a.token") is None


@pytest.mark.parametrize(
    ("rate", "expected"),
    [
        ("10/minute", (10, 60)),
        ("100 / minutes", (100, 60)),
        ("5/second", (5, 1)),
        ("1000/day", (1000, 86400)),
    ],
)
def test_parse_rate(rate: str, expected: tuple[int, int]) -> None:
    assert parse_rate(rate) == expected


@pytest.mark.parametrize("rate", ["ten/minute", "10/fortnight", "10"])
def test_parse_rate_rejects_unknown_formats(rate: str) -> None:
    with pytest.raises(ValueError):
        parse_rate(rate)


def test_page_limit_clamps_to_configured_maximum() -> None:
    assert page_limit(0) == 1
    assert page_limit(20) == 20
    assert page_limit(10_000) == 100
