"""JWT helpers for issuing and decoding user access tokens."""
from __future__ import annotations

from datetime import timedelta
from typing import Any

from jose import jwt

from forum_stage.core.settings import settings
from forum_stage.db.time import utcnow


def create_access_token(
    user_id: int,
    *,
    username: str | None = None,
    show_nsfw: bool = False,
    expires_minutes: int | None = None,
) -> str:
    """Return a signed access token carrying the user's identity claims.

    Args:
        user_id: Identifier of the user the token is issued for.
        username: Optional display name copied into the claims.
        show_nsfw: The user's preference for displaying nsfw content.
        expires_minutes: Lifetime override; defaults to the configured value.
    """
    lifetime = expires_minutes or settings.access_token_expire_minutes
    claims: dict[str, Any] = {
        "id": user_id,
        "username": username,
        "show_nsfw": show_nsfw,
        "iss": settings.jwt_issuer,
        "exp": utcnow() + timedelta(minutes=lifetime),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a token, raising ``jose.JWTError`` when it is invalid."""
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
    )
