from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from src.application.errors import NotFound, ValidationFailed
from src.domain.services.validation import validate_login
from src.infrastructure.auth.jwt_auth import BEARER_PREFIX, JwtAuthAdapter
from src.infrastructure.auth.passwords import verify_password
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class LoginUserUseCase:
    users: UserRepository
    auth: JwtAuthAdapter

    def execute(self, data: Mapping[str, Any]) -> str:
        """
        Check the credentials and return a ``Bearer <jwt>`` token string.

        Raises:
            ValidationFailed: If the payload is invalid or the password is wrong
            NotFound: If no user has this email
        """
        result = validate_login(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        user = self.users.get_by_email(data["email"].strip())
        if user is None:
            logger.info("Login attempt for unknown email")
            raise NotFound({"email": "User not found"})

        if not verify_password(data["password"], user.password):
            logger.info("Login attempt with wrong password for user %s", user.id)
            raise ValidationFailed({"password": "Password incorrect"})

        token = self.auth.issue_token(user.id, user.name, user.avatar)
        return BEARER_PREFIX + token
