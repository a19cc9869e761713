"""Process-local document store used when MongoDB is not configured."""
from __future__ import annotations

from src.domain.entities.post import PostEntity
from src.domain.entities.profile import ProfileEntity
from src.domain.entities.user import UserEntity


class MemoryStore:
    def __init__(self) -> None:
        self.users: dict[str, UserEntity] = {}
        self.profiles: dict[str, ProfileEntity] = {}
        self.posts: dict[str, PostEntity] = {}

    def reset(self) -> None:
        self.users.clear()
        self.profiles.clear()
        self.posts.clear()


_STORE = MemoryStore()


def get_memory_store() -> MemoryStore:
    return _STORE
