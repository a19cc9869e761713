from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from src.application.errors import NotFound, ValidationFailed
from src.domain.entities.profile import EducationEntry, ExperienceEntry, ProfileEntity
from src.domain.services.validation import is_empty, validate_education, validate_experience
from src.infrastructure.database.mongo_client import new_id
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

NO_PROFILE = {"noprofile": "There is no profile for this user"}


def parse_date(value: str | None) -> datetime | None:
    if is_empty(value):
        return None
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _optional(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if is_empty(value) else value.strip()


@dataclass
class ProfileEntriesUseCase:
    """Adds and removes the experience / education entries embedded in a profile."""

    profiles: ProfileRepository

    def _require_profile(self, user_id: str) -> ProfileEntity:
        profile = self.profiles.get_by_user(user_id)
        if profile is None:
            raise NotFound(dict(NO_PROFILE))
        return profile

    def add_experience(self, user_id: str, data: Mapping[str, Any]) -> ProfileEntity:
        result = validate_experience(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        profile = self._require_profile(user_id)

        entry = ExperienceEntry(
            id=new_id(),
            title=data["title"].strip(),
            company=data["company"].strip(),
            from_date=parse_date(data["from"]),
            location=_optional(data, "location"),
            to_date=parse_date(data.get("to")),
            current=bool(data.get("current")),
            description=_optional(data, "description"),
        )
        profile.experience.insert(0, entry)
        return self.profiles.save(profile)

    def add_education(self, user_id: str, data: Mapping[str, Any]) -> ProfileEntity:
        result = validate_education(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        profile = self._require_profile(user_id)

        entry = EducationEntry(
            id=new_id(),
            school=data["school"].strip(),
            degree=data["degree"].strip(),
            fieldofstudy=data["fieldofstudy"].strip(),
            from_date=parse_date(data["from"]),
            to_date=parse_date(data.get("to")),
            current=bool(data.get("current")),
            description=_optional(data, "description"),
        )
        profile.education.insert(0, entry)
        return self.profiles.save(profile)

    def remove_experience(self, user_id: str, exp_id: str) -> ProfileEntity:
        profile = self._require_profile(user_id)
        remaining = [e for e in profile.experience if e.id != exp_id]
        if len(remaining) == len(profile.experience):
            raise NotFound({"experience": "Experience not found"})
        profile.experience = remaining
        return self.profiles.save(profile)

    def remove_education(self, user_id: str, edu_id: str) -> ProfileEntity:
        profile = self._require_profile(user_id)
        remaining = [e for e in profile.education if e.id != edu_id]
        if len(remaining) == len(profile.education):
            raise NotFound({"education": "Education not found"})
        profile.education = remaining
        return self.profiles.save(profile)
