"""Bearer-token authentication for API routes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from witti.core.jwt_auth import decode_access_token
from witti.db.database import get_db
from witti.models.entities import User
from witti.repositories.users import UserRepository

BEARER_SCHEME = "bearer"
_CHALLENGE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str | None
    name: str | None
    claims: dict[str, Any] = field(default_factory=dict)


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    token = token.strip()
    return token or None


async def require_identity(request: Request) -> Identity:
    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        raise HTTPException(status_code=401, detail="Authentication required.", headers=_CHALLENGE)

    claims = decode_access_token(token)
    if claims is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token.", headers=_CHALLENGE)
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid or expired token.", headers=_CHALLENGE) from None

    return Identity(user_id=user_id, email=claims.get("email"), name=claims.get("name"), claims=claims)


async def get_current_user(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await UserRepository(db).get_by_id(identity.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found.")
    return user
