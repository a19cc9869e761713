from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "


@dataclass(slots=True)
class UserInfo:
    id: str
    name: str
    avatar: str | None
    email: str | None = None


class JwtAuthAdapter:
    """Issues and verifies the HS256 bearer tokens handed out at login.

    The secret and lifetime come from JWT_SECRET and JWT_EXPIRES_IN.
    """

    def __init__(self, secret: str | None = None, expires_in: int | None = None) -> None:
        self.secret = secret or os.getenv("JWT_SECRET", "secret")
        self.expires_in = expires_in if expires_in is not None else int(os.getenv("JWT_EXPIRES_IN", "3600"))

    def issue_token(self, user_id: str, name: str, avatar: str | None) -> str:
        now = datetime.now(UTC)
        payload = {
            "id": user_id,
            "name": name,
            "avatar": avatar,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.expires_in)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def validate_token(self, token: str) -> UserInfo:
        if not token:
            raise ValueError("Missing access token")
        try:
            claims = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("Access token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise ValueError(f"Invalid access token: {exc}") from exc
        user_id = claims.get("id")
        if not user_id:
            raise ValueError("Invalid access token: missing id claim")
        return UserInfo(id=user_id, name=claims.get("name", ""), avatar=claims.get("avatar"))
