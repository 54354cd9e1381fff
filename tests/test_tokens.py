"""Unit tests for auth/tokens.py -- JWT issue and verify.

Covers:
- issued tokens round-trip to the same subject with a one-hour lifetime
- the three rejection kinds are distinguishable: malformed, bad signature, expired
- expiry boundary: a token is expired exactly at exp
- alg=none and foreign-secret tokens are rejected even with well-formed claims
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.errors import BadSignature, MalformedToken, TokenExpired, TokenRejected
from auth.tokens import TokenService

TEST_SECRET = "unit-test-secret-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "another-secret-key-fedcba9876543210fedcba98765432"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET, lifetime_seconds=3600)


def test_issue_then_verify_returns_subject(tokens: TokenService) -> None:
    claims = tokens.verify(tokens.issue("abc123"))
    assert claims.subject_id == "abc123"
    assert claims.expires_at - claims.issued_at == 3600


def test_token_contains_standard_claims(tokens: TokenService) -> None:
    payload = jwt.get_unverified_claims(tokens.issue("abc123"))
    assert payload["sub"] == "abc123"
    assert set(payload) == {"sub", "iat", "exp"}


def test_expired_token_rejected(tokens: TokenService) -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    with pytest.raises(TokenExpired):
        tokens.verify(tokens.issue("abc123", issued_at=issued))


def test_expiry_boundary_is_exclusive(tokens: TokenService) -> None:
    """Valid one second before exp, expired at exactly exp."""
    issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
    token = tokens.issue("abc123", issued_at=issued)
    assert tokens.verify(token, now=issued + timedelta(seconds=3599)).subject_id == "abc123"
    with pytest.raises(TokenExpired):
        tokens.verify(token, now=issued + timedelta(seconds=3600))


def test_token_signed_with_other_secret_rejected(tokens: TokenService) -> None:
    foreign = TokenService(OTHER_SECRET).issue("abc123")
    with pytest.raises(BadSignature):
        tokens.verify(foreign)


def test_tampered_payload_rejected(tokens: TokenService) -> None:
    header, _payload, signature = tokens.issue("abc123").split(".")
    forged_payload = jwt.encode({"sub": "admin", "iat": 1, "exp": 9999999999}, "x").split(".")[1]
    with pytest.raises(BadSignature):
        tokens.verify(f"{header}.{forged_payload}.{signature}")


def test_alg_none_rejected(tokens: TokenService) -> None:
    def b64(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()

    unsigned = f"{b64({'alg': 'none', 'typ': 'JWT'})}.{b64({'sub': 'x', 'iat': 1, 'exp': 9999999999})}."
    with pytest.raises(BadSignature):
        tokens.verify(unsigned)


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "....."])
def test_garbage_is_malformed(tokens: TokenService, garbage: str) -> None:
    with pytest.raises(MalformedToken):
        tokens.verify(garbage)


def test_missing_subject_is_malformed(tokens: TokenService) -> None:
    token = jwt.encode({"iat": 1, "exp": 9999999999}, TEST_SECRET, algorithm="HS256")
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_non_integer_expiry_is_malformed(tokens: TokenService) -> None:
    token = jwt.encode({"sub": "x", "iat": 1, "exp": "tomorrow"}, TEST_SECRET, algorithm="HS256")
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_all_rejections_share_a_base_class() -> None:
    for exc_type in (MalformedToken, BadSignature, TokenExpired):
        assert issubclass(exc_type, TokenRejected)


def test_empty_secret_refused() -> None:
    with pytest.raises(ValueError):
        TokenService("")
