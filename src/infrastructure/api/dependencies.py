from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.infrastructure.auth.jwt_auth import JwtAuthAdapter, UserInfo
from src.infrastructure.database.mongo_client import get_mongo_database
from src.infrastructure.database.repositories.post_repository import PostRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

_bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_adapter() -> JwtAuthAdapter:
    return JwtAuthAdapter()


def get_user_repo() -> UserRepository:
    return UserRepository(get_mongo_database())


def get_profile_repo() -> ProfileRepository:
    return ProfileRepository(get_mongo_database())


def get_post_repo() -> PostRepository:
    return PostRepository(get_mongo_database())


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(_bearer_scheme)] = None,
    auth: Annotated[JwtAuthAdapter, Depends(get_auth_adapter)] = None,
    users: Annotated[UserRepository, Depends(get_user_repo)] = None,
) -> UserInfo:
    """Resolve the bearer token to the calling user, or fail with 401."""
    if not credentials or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise _unauthorized()
    token = credentials.credentials
    if not token:
        raise _unauthorized()
    try:
        identity = auth.validate_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    # tokens outlive deleted accounts
    user = users.get(identity.id)
    if user is None:
        raise _unauthorized()
    return UserInfo(id=user.id, name=user.name, avatar=user.avatar, email=user.email)
