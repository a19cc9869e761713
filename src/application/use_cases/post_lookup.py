from __future__ import annotations

from src.application.errors import NotFound
from src.domain.entities.post import PostEntity
from src.infrastructure.database.repositories.post_repository import PostRepository

NO_POST = {"nopostfound": "No post found with that ID"}


def require_post(posts: PostRepository, post_id: str) -> PostEntity:
    post = posts.get(post_id)
    if post is None:
        raise NotFound(dict(NO_POST))
    return post
