from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SocialLinks:
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


@dataclass
class ExperienceEntry:
    id: str
    title: str
    company: str
    from_date: datetime
    location: str | None = None
    to_date: datetime | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime
    to_date: datetime | None = None
    current: bool = False
    description: str | None = None


@dataclass
class ProfileEntity:
    id: str
    user: str  # owning user id, one profile per user
    handle: str
    status: str
    skills: list[str]
    date: datetime
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    # newest first
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
