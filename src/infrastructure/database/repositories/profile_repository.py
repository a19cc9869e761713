from __future__ import annotations

import copy
from dataclasses import asdict
from typing import Any

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    ProfileEntity,
    SocialLinks,
)
from src.infrastructure.database.memory_store import get_memory_store
from src.infrastructure.database.mongo_client import (
    PROFILES,
    DuplicateKeyViolation,
    duplicate_field,
    parse_object_id,
)


def _experience_from_doc(doc: dict) -> ExperienceEntry:
    return ExperienceEntry(
        id=str(doc["_id"]),
        title=doc["title"],
        company=doc["company"],
        from_date=doc["from"],
        location=doc.get("location"),
        to_date=doc.get("to"),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _education_from_doc(doc: dict) -> EducationEntry:
    return EducationEntry(
        id=str(doc["_id"]),
        school=doc["school"],
        degree=doc["degree"],
        fieldofstudy=doc["fieldofstudy"],
        from_date=doc["from"],
        to_date=doc.get("to"),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _entry_to_doc(entry: ExperienceEntry | EducationEntry) -> dict[str, Any]:
    doc = asdict(entry)
    doc["_id"] = parse_object_id(doc.pop("id"))
    doc["from"] = doc.pop("from_date")
    doc["to"] = doc.pop("to_date")
    return doc


class ProfileRepository:
    def __init__(self, db: Database | None) -> None:
        self.db = db
        self._mem = get_memory_store().profiles

    def _doc_to_entity(self, doc: dict) -> ProfileEntity:
        return ProfileEntity(
            id=str(doc["_id"]),
            user=str(doc["user"]),
            handle=doc["handle"],
            status=doc["status"],
            skills=list(doc.get("skills") or []),
            date=doc["date"],
            company=doc.get("company"),
            website=doc.get("website"),
            location=doc.get("location"),
            bio=doc.get("bio"),
            githubusername=doc.get("githubusername"),
            social=SocialLinks(**(doc.get("social") or {})),
            experience=[_experience_from_doc(e) for e in doc.get("experience") or []],
            education=[_education_from_doc(e) for e in doc.get("education") or []],
        )

    def _entity_to_doc(self, profile: ProfileEntity) -> dict[str, Any]:
        return {
            "_id": parse_object_id(profile.id),
            "user": parse_object_id(profile.user),
            "handle": profile.handle,
            "status": profile.status,
            "skills": list(profile.skills),
            "date": profile.date,
            "company": profile.company,
            "website": profile.website,
            "location": profile.location,
            "bio": profile.bio,
            "githubusername": profile.githubusername,
            "social": {k: v for k, v in asdict(profile.social).items() if v is not None},
            "experience": [_entry_to_doc(e) for e in profile.experience],
            "education": [_entry_to_doc(e) for e in profile.education],
        }

    def _find_one(self, query: dict) -> ProfileEntity | None:
        try:
            doc = self.db[PROFILES].find_one(query)
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo find profile failed: {exc}") from exc
        return self._doc_to_entity(doc) if doc else None

    def get_by_user(self, user_id: str) -> ProfileEntity | None:
        # In-memory mode
        if self.db is None:
            found = next((p for p in self._mem.values() if p.user == user_id), None)
            return copy.deepcopy(found)

        # Mongo mode
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        return self._find_one({"user": oid})

    def get_by_handle(self, handle: str) -> ProfileEntity | None:
        if self.db is None:
            found = next((p for p in self._mem.values() if p.handle == handle), None)
            return copy.deepcopy(found)
        return self._find_one({"handle": handle})

    def list_all(self) -> list[ProfileEntity]:
        if self.db is None:
            return [copy.deepcopy(p) for p in self._mem.values()]

        try:
            docs = list(self.db[PROFILES].find())
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo list profiles failed: {exc}") from exc
        return [self._doc_to_entity(doc) for doc in docs]

    def _check_memory_unique(self, profile: ProfileEntity) -> None:
        for other in self._mem.values():
            if other.id == profile.id:
                continue
            if other.user == profile.user:
                raise DuplicateKeyViolation("user")
            if other.handle == profile.handle:
                raise DuplicateKeyViolation("handle")

    def create(self, profile: ProfileEntity) -> ProfileEntity:
        if self.db is None:
            self._check_memory_unique(profile)
            self._mem[profile.id] = copy.deepcopy(profile)
            return profile

        try:
            self.db[PROFILES].insert_one(self._entity_to_doc(profile))
        except DuplicateKeyError as exc:
            raise DuplicateKeyViolation(duplicate_field(exc, "handle")) from exc
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo insert profile failed: {exc}") from exc
        return profile

    def save(self, profile: ProfileEntity) -> ProfileEntity:
        """Persist the whole profile document, embedded lists included."""
        if self.db is None:
            self._check_memory_unique(profile)
            self._mem[profile.id] = copy.deepcopy(profile)
            return profile

        doc = self._entity_to_doc(profile)
        try:
            self.db[PROFILES].replace_one({"_id": doc["_id"]}, doc)
        except DuplicateKeyError as exc:
            raise DuplicateKeyViolation(duplicate_field(exc, "handle")) from exc
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo update profile failed: {exc}") from exc
        return profile

    def delete_by_user(self, user_id: str) -> bool:
        if self.db is None:
            ids = [k for k, v in self._mem.items() if v.user == user_id]
            for k in ids:
                self._mem.pop(k, None)
            return bool(ids)

        oid = parse_object_id(user_id)
        if oid is None:
            return False
        try:
            res = self.db[PROFILES].delete_one({"user": oid})
        except PyMongoError as exc:
            raise RuntimeError(f"Mongo delete profile failed: {exc}") from exc
        return res.deleted_count > 0
