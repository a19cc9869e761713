from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.profile import EducationEntry, ExperienceEntry, ProfileEntity
from src.domain.entities.user import UserEntity


class ProfileBody(BaseModel):
    """Create-or-edit payload for the caller's profile."""
    handle: str | None = Field(None, description="Unique public handle (2-40 characters)", example="jdoe")
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = Field(None, example="Developer")
    skills: str | list[str] | None = Field(None, description="Comma separated list or array of skills", example="python,fastapi")
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    from_date: str | None = Field(None, alias="from", description="ISO-8601 start date", example="2020-01-01")
    to_date: str | None = Field(None, alias="to", description="ISO-8601 end date")
    current: bool | None = False
    description: str | None = None


class EducationBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None
    from_date: str | None = Field(None, alias="from", description="ISO-8601 start date", example="2016-09-01")
    to_date: str | None = Field(None, alias="to", description="ISO-8601 end date")
    current: bool | None = False
    description: str | None = None


class ProfileUser(BaseModel):
    id: str
    name: str
    avatar: str | None = None


class SocialLinksOut(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_date: datetime = Field(..., alias="from")
    to_date: datetime | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @classmethod
    def from_entity(cls, entry: ExperienceEntry) -> "ExperienceOut":
        return cls(
            id=entry.id,
            title=entry.title,
            company=entry.company,
            location=entry.location,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class EducationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to_date: datetime | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @classmethod
    def from_entity(cls, entry: EducationEntry) -> "EducationOut":
        return cls(
            id=entry.id,
            school=entry.school,
            degree=entry.degree,
            fieldofstudy=entry.fieldofstudy,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class ProfileResponse(BaseModel):
    """A profile with its owner populated as ``{id, name, avatar}``."""
    id: str
    user: ProfileUser | None = Field(None, description="Owning user; null when the user no longer exists")
    handle: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    githubusername: str | None = None
    social: SocialLinksOut = Field(default_factory=SocialLinksOut)
    experience: list[ExperienceOut] = Field(default_factory=list)
    education: list[EducationOut] = Field(default_factory=list)
    date: datetime

    @classmethod
    def from_entity(cls, profile: ProfileEntity, owner: UserEntity | None) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user=ProfileUser(id=owner.id, name=owner.name, avatar=owner.avatar) if owner else None,
            handle=profile.handle,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            status=profile.status,
            skills=list(profile.skills),
            bio=profile.bio,
            githubusername=profile.githubusername,
            social=SocialLinksOut(
                youtube=profile.social.youtube,
                twitter=profile.social.twitter,
                facebook=profile.social.facebook,
                linkedin=profile.social.linkedin,
                instagram=profile.social.instagram,
            ),
            experience=[ExperienceOut.from_entity(e) for e in profile.experience],
            education=[EducationOut.from_entity(e) for e in profile.education],
            date=profile.date,
        )
