"""Operation-keyed dispatch endpoint.

Accepts ``{"op": "<OperationName>", "data": {...}}`` for any post operation
and returns the same response the dedicated route would.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field, ValidationError

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.schemas.common import Operation
from forum_stage.schemas.post import (
    CreatePost,
    CreatePostLike,
    EditPost,
    GetPost,
    GetPosts,
    SavePost,
)
from forum_stage.services.post_service import PostService

from ..dependencies import PostServiceDep

router = APIRouter(tags=["operations"])


class OperationRequest(BaseModel):
    """Envelope naming the operation and carrying its request record."""

    op: str = Field(..., description="Operation name, e.g. CreatePost")
    data: dict[str, Any] = Field(default_factory=dict)


_HANDLERS: dict[Operation, tuple[type[BaseModel], Callable[[PostService, Any], BaseModel]]] = {
    Operation.CREATE_POST: (CreatePost, PostService.create_post),
    Operation.GET_POST: (GetPost, PostService.get_post),
    Operation.GET_POSTS: (GetPosts, PostService.get_posts),
    Operation.CREATE_POST_LIKE: (CreatePostLike, PostService.create_post_like),
    Operation.EDIT_POST: (EditPost, PostService.edit_post),
    Operation.SAVE_POST: (SavePost, PostService.save_post),
}


@router.post("/op", name="Dispatch", response_model=None)
def dispatch(request: OperationRequest, service: PostServiceDep) -> BaseModel:
    """Run the named operation against its payload."""
    try:
        operation = Operation(request.op)
    except ValueError as exc:
        raise PostApiError(request.op, ErrorCode.BAD_REQUEST) from exc

    schema, handler = _HANDLERS[operation]
    try:
        payload = schema.model_validate(request.data)
    except ValidationError as exc:
        raise PostApiError(operation.value, ErrorCode.BAD_REQUEST) from exc
    return handler(service, payload)
