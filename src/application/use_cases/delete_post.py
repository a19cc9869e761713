from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotAuthorized
from src.application.use_cases.post_lookup import require_post
from src.infrastructure.database.repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)


@dataclass
class DeletePostUseCase:
    posts: PostRepository

    def execute(self, user_id: str, post_id: str) -> None:
        """
        Delete a post owned by the caller.

        Raises:
            NotFound: If the post does not exist
            NotAuthorized: If the caller is not the author
        """
        post = require_post(self.posts, post_id)
        if post.user != user_id:
            raise NotAuthorized({"notauthorized": "User not authorized"})
        self.posts.delete(post.id)
        logger.info("User %s deleted post %s", user_id, post.id)
