from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from src.application.errors import NotAuthorized, NotFound, ValidationFailed
from src.application.use_cases.post_lookup import require_post
from src.domain.entities.post import CommentEntry, PostEntity
from src.domain.services.validation import validate_post
from src.infrastructure.auth.jwt_auth import UserInfo
from src.infrastructure.database.mongo_client import new_id
from src.infrastructure.database.repositories.post_repository import PostRepository


@dataclass
class AddCommentUseCase:
    posts: PostRepository

    def execute(self, author: UserInfo, post_id: str, data: Mapping[str, Any]) -> PostEntity:
        result = validate_post(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        post = require_post(self.posts, post_id)
        comment = CommentEntry(
            id=new_id(),
            user=author.id,
            text=data["text"].strip(),
            name=author.name,
            avatar=author.avatar,
            date=datetime.now(UTC),
        )
        post.comments.insert(0, comment)
        return self.posts.save(post)


@dataclass
class RemoveCommentUseCase:
    """Remove a comment; allowed for the comment's author and the post's author."""

    posts: PostRepository

    def execute(self, user_id: str, post_id: str, comment_id: str) -> PostEntity:
        post = require_post(self.posts, post_id)
        comment = next((c for c in post.comments if c.id == comment_id), None)
        if comment is None:
            raise NotFound({"commentnotexists": "Comment does not exist"})
        if user_id not in (comment.user, post.user):
            raise NotAuthorized({"notauthorized": "User not authorized"})
        post.comments = [c for c in post.comments if c.id != comment_id]
        return self.posts.save(post)
