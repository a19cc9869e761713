from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from src.application.errors import ValidationFailed
from src.domain.entities.user import UserEntity
from src.domain.services.avatar import gravatar_url
from src.domain.services.validation import validate_register
from src.infrastructure.auth.passwords import hash_password
from src.infrastructure.database.mongo_client import DuplicateKeyViolation
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

EMAIL_TAKEN = {"email": "Email already exists"}


@dataclass
class RegisterUserUseCase:
    users: UserRepository

    def execute(self, data: Mapping[str, Any]) -> UserEntity:
        """
        Create a user account with a bcrypt password hash and a gravatar avatar.

        Raises:
            ValidationFailed: If the payload is invalid or the email is already registered
        """
        result = validate_register(data)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        email = data["email"].strip()
        if self.users.get_by_email(email) is not None:
            raise ValidationFailed(dict(EMAIL_TAKEN))

        try:
            user = self.users.create(
                name=data["name"].strip(),
                email=email,
                password_hash=hash_password(data["password"]),
                avatar=gravatar_url(email),
            )
        except DuplicateKeyViolation as exc:
            # lost a race against a concurrent registration
            raise ValidationFailed(dict(EMAIL_TAKEN)) from exc
        logger.info("Registered user %s", user.id)
        return user
