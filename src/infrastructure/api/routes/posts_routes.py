from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.common_dto import FieldErrors, SuccessResponse, UnauthorizedResponse
from src.application.dtos.post_dto import PostBody, PostResponse
from src.application.use_cases.comment_post import AddCommentUseCase, RemoveCommentUseCase
from src.application.use_cases.create_post import CreatePostUseCase
from src.application.use_cases.delete_post import DeletePostUseCase
from src.application.use_cases.like_post import LikePostUseCase, UnlikePostUseCase
from src.application.use_cases.post_lookup import require_post
from src.infrastructure.api.dependencies import get_current_user, get_post_repo
from src.infrastructure.auth.jwt_auth import UserInfo
from src.infrastructure.database.repositories.post_repository import PostRepository

router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
    responses={
        404: {"model": FieldErrors, "description": "Not Found - Post or comment does not exist"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)

_PRIVATE = {
    400: {"model": FieldErrors, "description": "Bad Request - Field validation or like state failed"},
    401: {
        "model": UnauthorizedResponse,
        "description": "Unauthorized - Missing or invalid token. Ownership failures return a field map instead",
    },
}


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List Posts",
    description="Return all posts, newest first.",
)
def list_posts(posts: PostRepository = Depends(get_post_repo)):
    return [PostResponse.from_entity(p) for p in posts.list_all()]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get Post",
)
def get_post(post_id: str, posts: PostRepository = Depends(get_post_repo)):
    return PostResponse.from_entity(require_post(posts, post_id))


@router.post(
    "",
    response_model=PostResponse,
    summary="Create Post",
    description="""
    Publish a post as the authenticated user.

    **Rules:**
    - `text` between 8 and 300 characters

    The author's name and avatar are taken from the user record.

    **Authentication required**: Yes (Bearer token)
    """,
    responses=_PRIVATE,
)
def create_post(
    body: PostBody,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    post = CreatePostUseCase(posts).execute(user, body.model_dump())
    return PostResponse.from_entity(post)


@router.delete(
    "/{post_id}",
    response_model=SuccessResponse,
    summary="Delete Post",
    description="Delete a post. Only its author may do so.",
    responses=_PRIVATE,
)
def delete_post(
    post_id: str,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    DeletePostUseCase(posts).execute(user.id, post_id)
    return {"success": True}


@router.post(
    "/like/{post_id}",
    response_model=PostResponse,
    summary="Like Post",
    description="Like a post. Liking the same post twice returns 400.",
    responses=_PRIVATE,
)
def like_post(
    post_id: str,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    return PostResponse.from_entity(LikePostUseCase(posts).execute(user.id, post_id))


@router.post(
    "/unlike/{post_id}",
    response_model=PostResponse,
    summary="Unlike Post",
    description="Remove the caller's like. Returns 400 if the post was not liked.",
    responses=_PRIVATE,
)
def unlike_post(
    post_id: str,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    return PostResponse.from_entity(UnlikePostUseCase(posts).execute(user.id, post_id))


@router.post(
    "/comment/{post_id}",
    response_model=PostResponse,
    summary="Comment On Post",
    description="Prepend a comment to a post. Same text rules as posts.",
    responses=_PRIVATE,
)
def add_comment(
    post_id: str,
    body: PostBody,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    post = AddCommentUseCase(posts).execute(user, post_id, body.model_dump())
    return PostResponse.from_entity(post)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=PostResponse,
    summary="Delete Comment",
    description="Remove a comment. Allowed for the comment's author and the post's author.",
    responses=_PRIVATE,
)
def delete_comment(
    post_id: str,
    comment_id: str,
    user: UserInfo = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repo),
):
    post = RemoveCommentUseCase(posts).execute(user.id, post_id, comment_id)
    return PostResponse.from_entity(post)
