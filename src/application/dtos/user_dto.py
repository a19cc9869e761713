from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.user import UserEntity


class RegisterBody(BaseModel):
    """Registration payload. Fields are optional so validation can report each one."""
    name: str | None = Field(None, description="Display name (2-30 characters)", example="Jane Doe")
    email: str | None = Field(None, description="Unique email address", example="jane@example.com")
    password: str | None = Field(None, description="Password (6-30 characters)")
    password2: str | None = Field(None, description="Password confirmation")


class LoginBody(BaseModel):
    email: str | None = Field(None, example="jane@example.com")
    password: str | None = None


class UserResponse(BaseModel):
    """A registered user, without the password hash."""
    id: str = Field(..., description="Unique identifier of the user")
    name: str
    email: str
    avatar: str = Field(..., description="Gravatar URL derived from the email")
    date: datetime = Field(..., description="Registration timestamp")

    @classmethod
    def from_entity(cls, user: UserEntity) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, avatar=user.avatar, date=user.date)


class LoginResponse(BaseModel):
    success: bool = Field(True)
    token: str = Field(..., description="Bearer token to send in the Authorization header", example="Bearer eyJhbGciOi...")


class CurrentUserResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    avatar: str | None = None
