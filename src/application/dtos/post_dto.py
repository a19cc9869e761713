from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.post import PostEntity


class PostBody(BaseModel):
    """Text payload shared by posts and comments."""
    text: str | None = Field(None, description="Body text (8-300 characters)", example="Hello from the API")


class LikeOut(BaseModel):
    id: str
    user: str


class CommentOut(BaseModel):
    id: str
    user: str
    text: str
    name: str
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    id: str
    user: str = Field(..., description="Author user id")
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeOut] = Field(default_factory=list)
    comments: list[CommentOut] = Field(default_factory=list)
    date: datetime

    @classmethod
    def from_entity(cls, post: PostEntity) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=[LikeOut(id=l.id, user=l.user) for l in post.likes],
            comments=[
                CommentOut(id=c.id, user=c.user, text=c.text, name=c.name, avatar=c.avatar, date=c.date)
                for c in post.comments
            ],
            date=post.date,
        )
