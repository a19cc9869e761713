from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ValidationFailed
from src.application.use_cases.post_lookup import require_post
from src.domain.entities.post import LikeEntry, PostEntity
from src.infrastructure.database.mongo_client import new_id
from src.infrastructure.database.repositories.post_repository import PostRepository


@dataclass
class LikePostUseCase:
    """
    Add the caller's like to a post.

    Uniqueness is checked against the stored likes before writing; two
    concurrent likes from the same user are not deduplicated.
    """

    posts: PostRepository

    def execute(self, user_id: str, post_id: str) -> PostEntity:
        post = require_post(self.posts, post_id)
        if post.liked_by(user_id):
            raise ValidationFailed({"alreadyliked": "User already liked this post"})
        post.likes.insert(0, LikeEntry(id=new_id(), user=user_id))
        return self.posts.save(post)


@dataclass
class UnlikePostUseCase:
    posts: PostRepository

    def execute(self, user_id: str, post_id: str) -> PostEntity:
        post = require_post(self.posts, post_id)
        if not post.liked_by(user_id):
            raise ValidationFailed({"notliked": "You have not yet liked this post"})
        post.likes = [like for like in post.likes if like.user != user_id]
        return self.posts.save(post)
