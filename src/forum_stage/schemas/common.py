"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Operation(str, Enum):
    """Names of the public post operations; echoed back on every response."""

    CREATE_POST = "CreatePost"
    GET_POST = "GetPost"
    GET_POSTS = "GetPosts"
    CREATE_POST_LIKE = "CreatePostLike"
    EDIT_POST = "EditPost"
    SAVE_POST = "SavePost"


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed operation."""

    op: str = Field(..., description="Operation that failed.")
    error: str = Field(..., description="Stable machine-readable failure code.")
