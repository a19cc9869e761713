from __future__ import annotations

import logging
from dataclasses import dataclass

from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class DeleteAccountUseCase:
    """Remove the caller's profile, then the user record itself."""

    profiles: ProfileRepository
    users: UserRepository

    def execute(self, user_id: str) -> None:
        had_profile = self.profiles.delete_by_user(user_id)
        self.users.delete(user_id)
        logger.info("Deleted account %s (profile removed: %s)", user_id, had_profile)
