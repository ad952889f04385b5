"""Bearer-token gate applied to every revenue route."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import AppConfig
from application.token_service import TokenUser, decode_access_token
from domain.errors import AuthenticationError, PermissionDeniedError
from interfaces import deps

# auto_error=False so a missing header goes through our own 401 body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: AppConfig = Depends(deps.get_app_settings),
) -> TokenUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token, authorization denied")
    return decode_access_token(credentials.credentials, settings)


def require_admin(user: TokenUser = Depends(get_current_user)) -> TokenUser:
    if user.role != "admin":
        raise PermissionDeniedError("Admin access required")
    return user
