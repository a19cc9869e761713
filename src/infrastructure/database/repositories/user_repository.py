from __future__ import annotations

from datetime import UTC, datetime

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.domain.entities.user import UserEntity
from src.infrastructure.database.memory_store import get_memory_store
from src.infrastructure.database.mongo_client import (
    USERS,
    DuplicateKeyViolation,
    duplicate_field,
    new_id,
    parse_object_id,
)


class UserRepository:
    def __init__(self, db: Database | None) -> None:
        self.db = db
        self._mem = get_memory_store().users

    def _doc_to_entity(self, doc: dict) -> UserEntity:
        return UserEntity(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            password=doc["password"],
            avatar=doc.get("avatar", ""),
            date=doc["date"],
        )

    def get(self, user_id: str) -> UserEntity | None:
        # In-memory mode
        if self.db is None:
            return self._mem.get(user_id)

        # Mongo mode
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        try:
            doc = self.db[USERS].find_one({"_id": oid})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo get user failed: {exc}") from exc
        return self._doc_to_entity(doc) if doc else None

    def get_by_email(self, email: str) -> UserEntity | None:
        if self.db is None:
            return next((u for u in self._mem.values() if u.email == email), None)

        try:
            doc = self.db[USERS].find_one({"email": email})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo find user by email failed: {exc}") from exc
        return self._doc_to_entity(doc) if doc else None

    def create(self, name: str, email: str, password_hash: str, avatar: str) -> UserEntity:
        entity = UserEntity(
            id=new_id(),
            name=name,
            email=email,
            password=password_hash,
            avatar=avatar,
            date=datetime.now(UTC),
        )

        if self.db is None:
            if self.get_by_email(email) is not None:
                raise DuplicateKeyViolation("email")
            self._mem[entity.id] = entity
            return entity

        doc = {
            "_id": parse_object_id(entity.id),
            "name": entity.name,
            "email": entity.email,
            "password": entity.password,
            "avatar": entity.avatar,
            "date": entity.date,
        }
        try:
            self.db[USERS].insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateKeyViolation(duplicate_field(exc, "email")) from exc
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo insert user failed: {exc}") from exc
        return entity

    def delete(self, user_id: str) -> bool:
        if self.db is None:
            return self._mem.pop(user_id, None) is not None

        oid = parse_object_id(user_id)
        if oid is None:
            return False
        try:
            res = self.db[USERS].delete_one({"_id": oid})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo delete user failed: {exc}") from exc
        return res.deleted_count > 0
