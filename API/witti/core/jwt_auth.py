"""Signed bearer tokens for member sessions.

Tokens are HS256 JWTs: base64url(header).base64url(claims).base64url(mac).
The signing secret is always passed in by the caller; this module holds no
state of its own.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from witti.core.settings import settings

DEFAULT_ALGORITHM = "HS256"
# Claims the codec manages itself; callers never need to compare them.
REGISTERED_TIME_CLAIMS = ("iat", "exp")


def issue_token(
    claims: dict[str, Any],
    secret: str,
    ttl_seconds: int,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """Sign ``claims`` with an absolute expiry of ``now + ttl_seconds``.

    ``sub``, when present, must already be a string.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + timedelta(seconds=ttl_seconds)
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, *, algorithm: str = DEFAULT_ALGORITHM) -> dict[str, Any] | None:
    """Return the claims of a well-formed, correctly signed, unexpired token, else None."""
    if not token or token.count(".") != 2:
        return None
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError:
        return None


def strip_time_claims(claims: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in claims.items() if k not in REGISTERED_TIME_CLAIMS}


def create_access_token(user_id: int, email: str, name: str) -> str:
    return issue_token(
        {"sub": str(user_id), "email": email, "name": name},
        settings.jwt_secret,
        settings.token_ttl_seconds,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    return verify_token(token, settings.jwt_secret, algorithm=settings.jwt_algorithm)
