"""Identity resolution from opaque bearer tokens."""
from __future__ import annotations

from dataclasses import dataclass

from jose import JWTError

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.core.security import decode_access_token


@dataclass(frozen=True)
class Identity:
    """Verified identity claim derived from a token; never persisted."""

    id: int
    show_nsfw: bool = False
    username: str | None = None


class IdentityResolver:
    """Turns tokens into optional identities.

    Every decoding problem (missing token, bad signature, expiry, wrong issuer,
    malformed claims) collapses to ``None`` here so callers only ever see
    "identity" or "no identity".
    """

    def resolve(self, token: str | None) -> Identity | None:
        """Return the identity carried by ``token``, or None for anonymous."""
        if not token:
            return None
        try:
            claims = decode_access_token(token)
        except JWTError:
            return None

        user_id = claims.get("id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return None
        return Identity(
            id=user_id,
            show_nsfw=bool(claims.get("show_nsfw", False)),
            username=claims.get("username"),
        )

    def require(self, op: str, token: str | None) -> Identity:
        """Return the identity for a write path, raising ``NotAuthenticated`` if absent."""
        identity = self.resolve(token)
        if identity is None:
            raise PostApiError(op, ErrorCode.NOT_AUTHENTICATED)
        return identity
