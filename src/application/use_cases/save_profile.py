from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping

from src.application.errors import ValidationFailed
from src.domain.entities.profile import ProfileEntity, SocialLinks
from src.domain.services.validation import SOCIAL_FIELDS, is_empty, parse_skills, validate_profile
from src.infrastructure.database.mongo_client import DuplicateKeyViolation, new_id
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

HANDLE_TAKEN = {"handle": "That handle already exists"}

SCALAR_FIELDS = ("handle", "company", "website", "location", "status", "bio", "githubusername")


@dataclass
class SaveProfileUseCase:
    """
    Create the caller's profile, or update it when one already exists.

    Only fields present in the payload are written on update. The social
    sub-record is always replaced as a whole.
    """

    profiles: ProfileRepository

    def execute(self, user_id: str, data: Mapping[str, Any]) -> ProfileEntity:
        result = validate_profile(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        fields = {k: data[k].strip() for k in SCALAR_FIELDS if not is_empty(data.get(k))}
        skills = parse_skills(data["skills"])
        social = SocialLinks(
            **{k: data[k].strip() for k in SOCIAL_FIELDS if not is_empty(data.get(k))}
        )

        owner = self.profiles.get_by_handle(fields["handle"])
        if owner is not None and owner.user != user_id:
            raise ValidationFailed(dict(HANDLE_TAKEN))

        profile = self.profiles.get_by_user(user_id)
        try:
            if profile is not None:
                for key, value in fields.items():
                    setattr(profile, key, value)
                profile.skills = skills
                profile.social = social
                return self.profiles.save(profile)

            profile = ProfileEntity(
                id=new_id(),
                user=user_id,
                skills=skills,
                social=social,
                date=datetime.now(UTC),
                **fields,
            )
            return self.profiles.create(profile)
        except DuplicateKeyViolation as exc:
            if exc.field == "handle":
                raise ValidationFailed(dict(HANDLE_TAKEN)) from exc
            raise
