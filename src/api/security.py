"""Security dependencies for routes that require a logged-in user.

The session token issued at login is accepted either as a Bearer token or
from the session cookie set on the login response. Without a usable session
cookie the remember-me cookie is tried; its token is never accepted as a
Bearer token.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.config import REMEMBER_ME_COOKIE, SESSION_COOKIE
from api.dependencies import get_user_repo
from api.models import UserResponse
from api.tokens import REMEMBER_ME_PURPOSE, SESSION_PURPOSE, verify_token
from domain.model.user import User
from port.user_repository import UserRepository

security = HTTPBearer(auto_error=False)


def to_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        registered_at=user.registered_at,
        last_login=user.last_login,
        language=user.language,
        avatar=user.avatar,
        enabled=user.enabled,
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if credentials:
        candidates = [(credentials.credentials, SESSION_PURPOSE)]
    else:
        candidates = [
            (token, purpose)
            for token, purpose in (
                (request.cookies.get(SESSION_COOKIE), SESSION_PURPOSE),
                (request.cookies.get(REMEMBER_ME_COOKIE), REMEMBER_ME_PURPOSE),
            )
            if token
        ]
    if not candidates:
        raise _unauthorized("Not authenticated")

    user_id = None
    for token, purpose in candidates:
        user_id = verify_token(token, purpose)
        if user_id:
            break
    if not user_id:
        raise _unauthorized("Invalid authentication credentials")

    user = user_repo.get_by_id(user_id)
    if not user or not user.enabled:
        raise _unauthorized("User not found")

    return to_response(user)
