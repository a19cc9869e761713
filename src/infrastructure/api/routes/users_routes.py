from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.dtos.common_dto import FieldErrors, UnauthorizedResponse
from src.application.dtos.user_dto import (
    CurrentUserResponse,
    LoginBody,
    LoginResponse,
    RegisterBody,
    UserResponse,
)
from src.application.use_cases.login_user import LoginUserUseCase
from src.application.use_cases.register_user import RegisterUserUseCase
from src.infrastructure.api.dependencies import get_auth_adapter, get_current_user, get_user_repo
from src.infrastructure.auth.jwt_auth import JwtAuthAdapter, UserInfo
from src.infrastructure.database.repositories.user_repository import UserRepository

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={
        400: {"model": FieldErrors, "description": "Bad Request - Field validation failed"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Register User",
    description="""
    Create a new user account.

    **Rules:**
    - Name between 2 and 30 characters
    - Valid, not yet registered email
    - Password between 6 and 30 characters, repeated in `password2`

    The avatar is derived from the email's gravatar. The password hash is
    never returned.

    **Authentication required**: No
    """,
    response_description="The newly registered user",
)
def register(
    body: RegisterBody,
    users: UserRepository = Depends(get_user_repo),
):
    """Register a new user."""
    user = RegisterUserUseCase(users).execute(body.model_dump())
    return UserResponse.from_entity(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="""
    Exchange email and password for a signed JWT.

    The returned `token` already carries the `Bearer ` prefix and can be sent
    as-is in the Authorization header. Tokens expire after one hour by default.

    **Authentication required**: No
    """,
    response_description="Bearer token for subsequent requests",
    responses={404: {"model": FieldErrors, "description": "Not Found - No user with this email"}},
)
def login(
    body: LoginBody,
    users: UserRepository = Depends(get_user_repo),
    auth: JwtAuthAdapter = Depends(get_auth_adapter),
):
    """Log in and receive a JWT."""
    token = LoginUserUseCase(users, auth).execute(body.model_dump())
    return {"success": True, "token": token}


@router.get(
    "/current",
    response_model=CurrentUserResponse,
    summary="Current User",
    description="Return the user the bearer token belongs to.",
    responses={
        401: {"model": UnauthorizedResponse, "description": "Unauthorized - Invalid or missing authentication token"}
    },
)
def current(user: UserInfo = Depends(get_current_user)):
    """Get the authenticated user."""
    return {"id": user.id, "name": user.name, "email": user.email, "avatar": user.avatar}
