# src/forum_stage/api/v1/endpoints/posts.py
"""Post-related endpoints for the Forum API.

Each route is named after the operation it performs; the name is echoed in
every response and error envelope.
"""

from fastapi import APIRouter, Query, status

from forum_stage.schemas.common import ErrorResponse, Operation
from forum_stage.schemas.post import (
    CreatePost,
    CreatePostLike,
    EditPost,
    GetPost,
    GetPostResponse,
    GetPosts,
    GetPostsResponse,
    PostResponse,
    SavePost,
)

from ..dependencies import PostServiceDep

router = APIRouter(
    prefix="/post",
    tags=["posts"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.post("", name=Operation.CREATE_POST.value, response_model=PostResponse)
def create_post(data: CreatePost, service: PostServiceDep) -> PostResponse:
    """Create a post in a community; the author's upvote is recorded automatically."""
    return service.create_post(data)


@router.get("", name=Operation.GET_POST.value, response_model=GetPostResponse)
def get_post(
    service: PostServiceDep,
    id: int = Query(..., description="Post identifier"),
    auth: str | None = Query(None, description="Optional bearer token"),
) -> GetPostResponse:
    """Get a post with its comments, community, moderators and admins."""
    return service.get_post(GetPost(id=id, auth=auth))


@router.get("/list", name=Operation.GET_POSTS.value, response_model=GetPostsResponse)
def get_posts(
    service: PostServiceDep,
    type_: str = Query(..., description="Listing type: All, Subscribed or Community"),
    sort: str = Query(..., description="Hot, New, TopDay, TopWeek, TopMonth, TopYear or TopAll"),
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1),
    community_id: int | None = Query(None),
    auth: str | None = Query(None),
) -> GetPostsResponse:
    """List posts for a listing type and sort order."""
    return service.get_posts(
        GetPosts(
            type_=type_,
            sort=sort,
            page=page,
            limit=limit,
            community_id=community_id,
            auth=auth,
        )
    )


@router.post("/like", name=Operation.CREATE_POST_LIKE.value, response_model=PostResponse)
def create_post_like(data: CreatePostLike, service: PostServiceDep) -> PostResponse:
    """Vote on a post: 1 up, -1 down, anything else clears the vote."""
    return service.create_post_like(data)


@router.put("", name=Operation.EDIT_POST.value, response_model=PostResponse)
def edit_post(data: EditPost, service: PostServiceDep) -> PostResponse:
    """Edit a post as its creator, a community moderator or a site admin."""
    return service.edit_post(data)


@router.put("/save", name=Operation.SAVE_POST.value, response_model=PostResponse)
def save_post(data: SavePost, service: PostServiceDep) -> PostResponse:
    """Save or unsave a post for the caller."""
    return service.save_post(data)
