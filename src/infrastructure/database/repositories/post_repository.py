from __future__ import annotations

import copy
from typing import Any

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from src.domain.entities.post import CommentEntry, LikeEntry, PostEntity
from src.infrastructure.database.memory_store import get_memory_store
from src.infrastructure.database.mongo_client import POSTS, parse_object_id


class PostRepository:
    def __init__(self, db: Database | None) -> None:
        self.db = db
        self._mem = get_memory_store().posts

    def _doc_to_entity(self, doc: dict) -> PostEntity:
        return PostEntity(
            id=str(doc["_id"]),
            user=str(doc["user"]),
            text=doc["text"],
            name=doc.get("name", ""),
            avatar=doc.get("avatar"),
            date=doc["date"],
            likes=[LikeEntry(id=str(l["_id"]), user=str(l["user"])) for l in doc.get("likes") or []],
            comments=[
                CommentEntry(
                    id=str(c["_id"]),
                    user=str(c["user"]),
                    text=c["text"],
                    name=c.get("name", ""),
                    avatar=c.get("avatar"),
                    date=c["date"],
                )
                for c in doc.get("comments") or []
            ],
        )

    def _entity_to_doc(self, post: PostEntity) -> dict[str, Any]:
        return {
            "_id": parse_object_id(post.id),
            "user": parse_object_id(post.user),
            "text": post.text,
            "name": post.name,
            "avatar": post.avatar,
            "date": post.date,
            "likes": [
                {"_id": parse_object_id(l.id), "user": parse_object_id(l.user)} for l in post.likes
            ],
            "comments": [
                {
                    "_id": parse_object_id(c.id),
                    "user": parse_object_id(c.user),
                    "text": c.text,
                    "name": c.name,
                    "avatar": c.avatar,
                    "date": c.date,
                }
                for c in post.comments
            ],
        }

    def get(self, post_id: str) -> PostEntity | None:
        # In-memory mode
        if self.db is None:
            return copy.deepcopy(self._mem.get(post_id))

        # Mongo mode
        oid = parse_object_id(post_id)
        if oid is None:
            return None
        try:
            doc = self.db[POSTS].find_one({"_id": oid})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo get post failed: {exc}") from exc
        return self._doc_to_entity(doc) if doc else None

    def list_all(self) -> list[PostEntity]:
        """All posts, newest first."""
        if self.db is None:
            posts = sorted(self._mem.values(), key=lambda p: p.date, reverse=True)
            return [copy.deepcopy(p) for p in posts]

        try:
            docs = list(self.db[POSTS].find().sort("date", DESCENDING))
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo list posts failed: {exc}") from exc
        return [self._doc_to_entity(doc) for doc in docs]

    def create(self, post: PostEntity) -> PostEntity:
        if self.db is None:
            self._mem[post.id] = copy.deepcopy(post)
            return post

        try:
            self.db[POSTS].insert_one(self._entity_to_doc(post))
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo insert post failed: {exc}") from exc
        return post

    def save(self, post: PostEntity) -> PostEntity:
        """Persist the whole post document, likes and comments included."""
        if self.db is None:
            self._mem[post.id] = copy.deepcopy(post)
            return post

        doc = self._entity_to_doc(post)
        try:
            self.db[POSTS].replace_one({"_id": doc["_id"]}, doc)
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo update post failed: {exc}") from exc
        return post

    def delete(self, post_id: str) -> bool:
        if self.db is None:
            return self._mem.pop(post_id, None) is not None

        oid = parse_object_id(post_id)
        if oid is None:
            return False
        try:
            res = self.db[POSTS].delete_one({"_id": oid})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo delete post failed: {exc}") from exc
        return res.deleted_count > 0
