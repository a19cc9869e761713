from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.common_dto import FieldErrors, SuccessResponse, UnauthorizedResponse
from src.application.dtos.profile_dto import (
    EducationBody,
    ExperienceBody,
    ProfileBody,
    ProfileResponse,
)
from src.application.errors import NotFound
from src.application.use_cases.delete_account import DeleteAccountUseCase
from src.application.use_cases.profile_entries import NO_PROFILE, ProfileEntriesUseCase
from src.application.use_cases.save_profile import SaveProfileUseCase
from src.domain.entities.profile import ProfileEntity
from src.infrastructure.api.dependencies import get_current_user, get_profile_repo, get_user_repo
from src.infrastructure.auth.jwt_auth import UserInfo
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

router = APIRouter(
    prefix="/api/profile",
    tags=["Profiles"],
    responses={
        404: {"model": FieldErrors, "description": "Not Found - Profile does not exist"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)

_PRIVATE = {
    400: {"model": FieldErrors, "description": "Bad Request - Field validation failed"},
    401: {"model": UnauthorizedResponse, "description": "Unauthorized - Invalid or missing authentication token"},
}


def _populate(profile: ProfileEntity, users: UserRepository) -> ProfileResponse:
    return ProfileResponse.from_entity(profile, users.get(profile.user))


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get My Profile",
    description="""
    Return the authenticated user's profile with the owner's name and avatar.

    **Authentication required**: Yes (Bearer token)
    """,
    responses=_PRIVATE,
)
def get_my_profile(
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = profiles.get_by_user(user.id)
    if profile is None:
        raise NotFound(dict(NO_PROFILE))
    return _populate(profile, users)


@router.get(
    "/all",
    response_model=list[ProfileResponse],
    summary="List Profiles",
    description="Return every profile. An empty list when nobody has created one yet.",
)
def list_profiles(
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    return [_populate(p, users) for p in profiles.list_all()]


@router.get(
    "/handle/{handle}",
    response_model=ProfileResponse,
    summary="Get Profile By Handle",
)
def get_profile_by_handle(
    handle: str,
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = profiles.get_by_handle(handle)
    if profile is None:
        raise NotFound({"noprofile": "There is no profile for this handle"})
    return _populate(profile, users)


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get Profile By User ID",
)
def get_profile_by_user(
    user_id: str,
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = profiles.get_by_user(user_id)
    if profile is None:
        raise NotFound(dict(NO_PROFILE))
    return _populate(profile, users)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create Or Edit Profile",
    description="""
    Create the authenticated user's profile, or update it if it exists.

    **Rules:**
    - `handle` (2-40 characters, unique), `status` and `skills` are required
    - `skills` is a comma separated list
    - `website` and social links must be valid URLs

    **Authentication required**: Yes (Bearer token)
    """,
    responses=_PRIVATE,
)
def save_profile(
    body: ProfileBody,
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = SaveProfileUseCase(profiles).execute(user.id, body.model_dump())
    return _populate(profile, users)


@router.post(
    "/experience",
    response_model=ProfileResponse,
    summary="Add Experience",
    description="Prepend a work experience entry. `title`, `company` and `from` are required.",
    responses=_PRIVATE,
)
def add_experience(
    body: ExperienceBody,
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = ProfileEntriesUseCase(profiles).add_experience(user.id, body.model_dump(by_alias=True))
    return _populate(profile, users)


@router.post(
    "/education",
    response_model=ProfileResponse,
    summary="Add Education",
    description="Prepend an education entry. `school`, `degree`, `fieldofstudy` and `from` are required.",
    responses=_PRIVATE,
)
def add_education(
    body: EducationBody,
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = ProfileEntriesUseCase(profiles).add_education(user.id, body.model_dump(by_alias=True))
    return _populate(profile, users)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Delete Experience",
    responses=_PRIVATE,
)
def delete_experience(
    exp_id: str,
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = ProfileEntriesUseCase(profiles).remove_experience(user.id, exp_id)
    return _populate(profile, users)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Delete Education",
    responses=_PRIVATE,
)
def delete_education(
    edu_id: str,
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    profile = ProfileEntriesUseCase(profiles).remove_education(user.id, edu_id)
    return _populate(profile, users)


@router.delete(
    "",
    response_model=SuccessResponse,
    summary="Delete Account",
    description="""
    Delete the authenticated user's profile and then the user account.

    Posts written by the user are kept.

    **Authentication required**: Yes (Bearer token)
    """,
    responses=_PRIVATE,
)
def delete_account(
    user: UserInfo = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
):
    DeleteAccountUseCase(profiles, users).execute(user.id)
    return {"success": True}
