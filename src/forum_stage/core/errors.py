"""Typed API errors shared by the service layer and the HTTP handlers."""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorCode(str, Enum):
    """Stable machine-readable failure codes returned to clients."""

    NOT_AUTHENTICATED = "not_logged_in"
    DISALLOWED_CONTENT = "no_slurs"
    COMMUNITY_BANNED = "community_ban"
    SITE_BANNED = "site_ban"
    EDIT_NOT_ALLOWED = "no_post_edit_allowed"
    NOT_FOUND = "couldnt_find_post"
    BAD_REQUEST = "bad_request"
    COULDNT_CREATE_POST = "couldnt_create_post"
    COULDNT_LIKE_POST = "couldnt_like_post"
    COULDNT_UPDATE_POST = "couldnt_update_post"
    COULDNT_SAVE_POST = "couldnt_save_post"
    COULDNT_GET_POST = "couldnt_get_post"
    COULDNT_GET_POSTS = "couldnt_get_posts"


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.DISALLOWED_CONTENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COMMUNITY_BANNED: status.HTTP_403_FORBIDDEN,
    ErrorCode.SITE_BANNED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EDIT_NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
}


class PostApiError(Exception):
    """Failure of a post operation, tagged with the originating operation name."""

    def __init__(self, op: str, code: ErrorCode) -> None:
        super().__init__(f"{op}: {code.value}")
        self.op = op
        self.code = code

    @property
    def status_code(self) -> int:
        """HTTP status used when the error crosses the transport boundary."""
        return _STATUS_BY_CODE.get(self.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def to_payload(self) -> dict[str, str]:
        """Return the wire representation of the error."""
        return {"op": self.op, "error": self.code.value}
