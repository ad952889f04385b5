"""JWT access tokens for API callers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, TYPE_CHECKING

import jwt

from domain.errors import AuthenticationError

if TYPE_CHECKING:
    from app.config import AppConfig

ROLES = ("admin", "employee", "client")


@dataclass(frozen=True)
class TokenUser:
    user_id: str
    role: str


def create_access_token(
    user_id: str,
    role: str,
    config: "AppConfig",
    expires_delta: Optional[timedelta] = None,
) -> str:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=config.token_expire_days))
    payload = {"id": user_id, "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: "AppConfig") -> TokenUser:
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise AuthenticationError("Token is not valid") from exc

    user_id = payload.get("id")
    role = payload.get("role")
    if not user_id or role not in ROLES:
        raise AuthenticationError("Token is not valid")
    return TokenUser(user_id=str(user_id), role=role)
