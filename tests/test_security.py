"""
Tests for password hashing and the HS256 access-token codec.

Verifies round-trips of claims, and that tampered, expired or foreign
tokens are rejected.
"""

import base64
import json
import time

import pytest

from app.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    normalize_role,
    verify_password,
)

SECRET = "unit-secret"
ISSUER = "schoolmeal"
AUDIENCE = "schoolmeal-clients"


def _token(roles=("student",), ttl_seconds=300, secret=SECRET, issuer=ISSUER, audience=AUDIENCE):
    return create_access_token(
        "2a8c7a39-7d1e-4d8e-9f65-8b0f1d6b5a11",
        "alva@example.com",
        roles,
        secret=secret,
        ttl_seconds=ttl_seconds,
        issuer=issuer,
        audience=audience,
    )


def _decode(token, **kwargs):
    return decode_access_token(
        token,
        secret=kwargs.get("secret", SECRET),
        issuer=kwargs.get("issuer", ISSUER),
        audience=kwargs.get("audience", AUDIENCE),
    )


# =============================================================================
# PASSWORD HASHING
# =============================================================================


def test_hash_and_verify_password():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_verify_password_rejects_missing_or_garbage_hash():
    assert not verify_password("secret123", None)
    assert not verify_password("secret123", "")
    assert not verify_password("secret123", "not-a-hash")


def test_normalize_role():
    assert normalize_role(" kitchen ") == "KITCHEN"
    assert normalize_role(None) == ""


# =============================================================================
# ACCESS TOKENS
# =============================================================================


def test_token_round_trip_claims():
    """
    Verifies:
    - sub, email, iss and aud survive the round trip
    - roles are normalized, deduplicated and sorted
    - exp lies after iat
    """
    claims = _decode(_token(roles=["student", "Admin", "STUDENT"]))

    assert claims["sub"] == "2a8c7a39-7d1e-4d8e-9f65-8b0f1d6b5a11"
    assert claims["email"] == "alva@example.com"
    assert claims["roles"] == ["ADMIN", "STUDENT"]
    assert claims["iss"] == ISSUER
    assert claims["aud"] == AUDIENCE
    assert claims["exp"] > claims["iat"]
    assert claims["jti"]


def test_token_with_wrong_secret_is_rejected():
    with pytest.raises(TokenError):
        _decode(_token(secret="other-secret"))


def test_tampered_payload_is_rejected():
    header, payload, sig = _token().split(".")
    raw = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    raw["roles"] = ["ADMIN"]
    forged = base64.urlsafe_b64encode(json.dumps(raw).encode()).rstrip(b"=").decode()

    with pytest.raises(TokenError):
        _decode(f"{header}.{forged}.{sig}")


def test_expired_token_is_rejected():
    # expired well beyond the default leeway
    with pytest.raises(TokenError):
        _decode(_token(ttl_seconds=-120))


def test_wrong_issuer_or_audience_is_rejected():
    with pytest.raises(TokenError):
        _decode(_token(issuer="someone-else"))
    with pytest.raises(TokenError):
        _decode(_token(audience="other-clients"))


def test_unsigned_token_is_rejected():
    header = base64.urlsafe_b64encode(b'{"alg":"none","typ":"JWT"}').rstrip(b"=").decode()
    payload = base64.urlsafe_b64encode(
        json.dumps({"sub": "x", "roles": [], "exp": int(time.time()) + 60}).encode()
    ).rstrip(b"=").decode()

    with pytest.raises(TokenError):
        _decode(f"{header}.{payload}.")


@pytest.mark.parametrize(
    "token",
    ["", "abc", "a.b", "a.b.c.d", "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.e30.\u00e9\u00e9"],
)
def test_malformed_token_is_rejected(token):
    with pytest.raises(TokenError):
        _decode(token)
