"""Security primitives: password hashing and HS256 access tokens.

Tokens carry:
 - sub: identity user id (UUID string)
 - email, roles (uppercase role names)
 - jti, iat, exp, iss, aud
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any, Iterable, Optional

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALG_HS256 = "HS256"


class TokenError(Exception):
    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # unknown or corrupt hash format
        return False


def normalize_role(role: Optional[str]) -> str:
    return (role or "").strip().upper()


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + pad)


def _sign(msg: bytes, secret: str) -> str:
    sig = hmac.new(secret.encode(), msg, hashlib.sha256).digest()
    return _b64url(sig)


def create_access_token(
    subject: str,
    email: str,
    roles: Iterable[str],
    *,
    secret: str,
    ttl_seconds: int,
    issuer: str,
    audience: str,
) -> str:
    now = int(time.time())
    header = {"alg": ALG_HS256, "typ": "JWT"}
    payload = {
        "sub": subject,
        "email": email,
        "roles": sorted({normalize_role(r) for r in roles if normalize_role(r)}),
        "jti": secrets.token_hex(16),
        "iat": now,
        "exp": now + ttl_seconds,
        "iss": issuer,
        "aud": audience,
    }
    header_b = _b64url(json.dumps(header, separators=(",", ":")).encode())
    payload_b = _b64url(json.dumps(payload, separators=(",", ":")).encode())
    msg = f"{header_b}.{payload_b}".encode()
    return f"{header_b}.{payload_b}.{_sign(msg, secret)}"


def decode_access_token(
    token: str,
    *,
    secret: str,
    issuer: str,
    audience: str,
    leeway: int = 30,
) -> dict[str, Any]:
    try:
        header_b, payload_b, sig = token.split(".")
    except ValueError as e:
        raise TokenError("malformed token") from e
    try:
        header = json.loads(_b64url_decode(header_b))
    except (ValueError, UnicodeDecodeError) as e:
        raise TokenError("bad header") from e
    if not isinstance(header, dict) or header.get("alg") != ALG_HS256:
        raise TokenError("alg")
    msg = f"{header_b}.{payload_b}".encode()
    # header values arrive latin-1 decoded, so the segment may hold non-ASCII text
    if not hmac.compare_digest(_sign(msg, secret).encode(), sig.encode("utf-8", "surrogateescape")):
        raise TokenError("bad signature")
    try:
        raw = json.loads(_b64url_decode(payload_b))
    except (ValueError, UnicodeDecodeError) as e:
        raise TokenError("bad payload") from e
    if not isinstance(raw, dict):
        raise TokenError("bad payload type")

    def _req(key: str, t: type) -> Any:
        if key not in raw:
            raise TokenError(f"missing claim {key}")
        val = raw[key]
        if not isinstance(val, t):
            raise TokenError(f"bad claim type {key}")
        return val

    _req("sub", str)
    _req("roles", list)
    exp = _req("exp", int)
    if _req("iss", str) != issuer:
        raise TokenError("issuer")
    if _req("aud", str) != audience:
        raise TokenError("audience")
    now = int(time.time())
    if now > exp + leeway:
        raise TokenError("expired")
    iat = raw.get("iat")
    if isinstance(iat, int) and iat > now + leeway:
        raise TokenError("iat in future")
    return raw
