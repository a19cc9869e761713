from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class LikeEntry:
    id: str
    user: str


@dataclass
class CommentEntry:
    id: str
    user: str
    text: str
    name: str
    avatar: str | None
    date: datetime


@dataclass
class PostEntity:
    id: str
    user: str  # author id
    text: str
    name: str
    avatar: str | None
    date: datetime
    # newest first, at most one like per user
    likes: list[LikeEntry] = field(default_factory=list)
    comments: list[CommentEntry] = field(default_factory=list)

    def liked_by(self, user_id: str) -> bool:
        return any(like.user == user_id for like in self.likes)
