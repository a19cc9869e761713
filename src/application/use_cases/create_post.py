from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from src.application.errors import ValidationFailed
from src.domain.entities.post import PostEntity
from src.domain.services.validation import validate_post
from src.infrastructure.auth.jwt_auth import UserInfo
from src.infrastructure.database.mongo_client import new_id
from src.infrastructure.database.repositories.post_repository import PostRepository


@dataclass
class CreatePostUseCase:
    posts: PostRepository

    def execute(self, author: UserInfo, data: Mapping[str, Any]) -> PostEntity:
        """Create a post signed with the author's current name and avatar."""
        result = validate_post(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        post = PostEntity(
            id=new_id(),
            user=author.id,
            text=data["text"].strip(),
            name=author.name,
            avatar=author.avatar,
            date=datetime.now(UTC),
        )
        return self.posts.create(post)
