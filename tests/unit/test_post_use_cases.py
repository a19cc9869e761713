"""
Tests for the post use cases against a mocked repository.
"""
from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.application.errors import NotAuthorized, NotFound, ValidationFailed
from src.application.use_cases.comment_post import AddCommentUseCase, RemoveCommentUseCase
from src.application.use_cases.create_post import CreatePostUseCase
from src.application.use_cases.delete_post import DeletePostUseCase
from src.application.use_cases.like_post import LikePostUseCase, UnlikePostUseCase
from src.domain.entities.post import CommentEntry, LikeEntry, PostEntity
from src.infrastructure.auth.jwt_auth import UserInfo


@pytest.fixture()
def posts():
    repo = Mock()
    repo.save.side_effect = lambda post: post
    repo.create.side_effect = lambda post: post
    return repo


def _post(author: str = "user_1", **kwargs) -> PostEntity:
    return PostEntity(
        id="post_1",
        user=author,
        text="hello world",
        name="Author",
        avatar=None,
        date=datetime.now(UTC),
        **kwargs,
    )


class TestLikePostUseCase:
    def test_like_prepends(self, posts):
        posts.get.return_value = _post(likes=[LikeEntry(id="l1", user="user_3")])

        result = LikePostUseCase(posts).execute("user_2", "post_1")

        assert [l.user for l in result.likes] == ["user_2", "user_3"]
        assert posts.save.call_count == 1

    def test_second_like_rejected(self, posts):
        posts.get.return_value = _post(likes=[LikeEntry(id="l1", user="user_2")])

        with pytest.raises(ValidationFailed) as exc:
            LikePostUseCase(posts).execute("user_2", "post_1")

        assert exc.value.errors == {"alreadyliked": "User already liked this post"}
        posts.save.assert_not_called()

    def test_missing_post(self, posts):
        posts.get.return_value = None

        with pytest.raises(NotFound) as exc:
            LikePostUseCase(posts).execute("user_2", "nope")

        assert exc.value.status_code == 404

    def test_unlike_removes_only_callers_like(self, posts):
        posts.get.return_value = _post(
            likes=[LikeEntry(id="l1", user="user_2"), LikeEntry(id="l2", user="user_3")]
        )

        result = UnlikePostUseCase(posts).execute("user_2", "post_1")

        assert [l.user for l in result.likes] == ["user_3"]

    def test_unlike_without_like(self, posts):
        posts.get.return_value = _post()

        with pytest.raises(ValidationFailed, match="notliked"):
            UnlikePostUseCase(posts).execute("user_2", "post_1")


class TestPostOwnership:
    def test_create_uses_author_identity(self, posts):
        author = UserInfo(id="user_1", name="Jane", avatar="http://a")

        post = CreatePostUseCase(posts).execute(author, {"text": "  my first post  "})

        assert post.user == "user_1"
        assert post.name == "Jane"
        assert post.avatar == "http://a"
        assert post.text == "my first post"

    def test_create_rejects_short_text(self, posts):
        with pytest.raises(ValidationFailed) as exc:
            CreatePostUseCase(posts).execute(UserInfo(id="u", name="n", avatar=None), {"text": "short"})

        assert "text" in exc.value.errors
        posts.create.assert_not_called()

    def test_delete_by_other_user_is_unauthorized(self, posts):
        posts.get.return_value = _post(author="user_1")

        with pytest.raises(NotAuthorized) as exc:
            DeletePostUseCase(posts).execute("user_2", "post_1")

        assert exc.value.errors == {"notauthorized": "User not authorized"}
        posts.delete.assert_not_called()

    def test_delete_by_author(self, posts):
        posts.get.return_value = _post(author="user_1")

        DeletePostUseCase(posts).execute("user_1", "post_1")

        posts.delete.assert_called_once_with("post_1")


class TestComments:
    def _comment(self, cid: str, user: str) -> CommentEntry:
        return CommentEntry(id=cid, user=user, text="nice post!", name="x", avatar=None, date=datetime.now(UTC))

    def test_add_comment_prepends(self, posts):
        posts.get.return_value = _post(comments=[self._comment("c1", "user_3")])
        author = UserInfo(id="user_2", name="Bob", avatar=None)

        result = AddCommentUseCase(posts).execute(author, "post_1", {"text": "great writeup"})

        assert result.comments[0].user == "user_2"
        assert result.comments[0].name == "Bob"
        assert len(result.comments) == 2

    def test_remove_missing_comment(self, posts):
        posts.get.return_value = _post()

        with pytest.raises(NotFound, match="commentnotexists"):
            RemoveCommentUseCase(posts).execute("user_1", "post_1", "c9")

    def test_post_author_may_remove_any_comment(self, posts):
        posts.get.return_value = _post(author="user_1", comments=[self._comment("c1", "user_3")])

        result = RemoveCommentUseCase(posts).execute("user_1", "post_1", "c1")

        assert result.comments == []

    def test_stranger_cannot_remove_comment(self, posts):
        posts.get.return_value = _post(author="user_1", comments=[self._comment("c1", "user_3")])

        with pytest.raises(NotAuthorized):
            RemoveCommentUseCase(posts).execute("user_4", "post_1", "c1")
