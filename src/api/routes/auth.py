"""Authentication routes (login, register, activation, current and online users).

Routes are plain `def` so FastAPI runs them in its thread pool; a slow
identity provider only blocks the request waiting on it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from api.config import SESSION_COOKIE
from api.dependencies import get_authenticator, get_online_tracker, get_user_repo
from api.models import (
    AuthResponse,
    LoginRequest,
    OnlineUsersResponse,
    RegisterRequest,
    UserResponse,
    ValidationErrorResponse,
)
from api.security import get_current_user_required, to_response
from api.session import OnlineUserTracker, current_principal
from domain.model.auth import RequestContext
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.registration import RegistrationRequest, ValidationErrors
from port.auth_plugin import AuthPluginError
from port.user_repository import UserRepository
from services.account_service import activate_account
from services.authenticator import Authenticator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _request_context(request: Request) -> RequestContext:
    return RequestContext(
        remote_addr=request.client.host if request.client else None,
        headers=dict(request.headers),
    )


def _request_locale(request: Request, lang: Optional[str]) -> Optional[str]:
    """Locale from the ?lang= parameter, else the first Accept-Language tag."""
    if lang:
        return lang
    accept_language = request.headers.get("accept-language")
    if not accept_language:
        return None
    return accept_language.split(",")[0].split(";")[0].strip() or None


def _provider_unavailable(e: AuthPluginError) -> HTTPException:
    logger.error(
        "Identity provider unavailable",
        extra={"error_type": type(e).__name__, "error": str(e)},
    )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Authentication service unavailable",
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    authenticator: Authenticator = Depends(get_authenticator),
):
    """Log a user in, locally or through the identity provider.

    Raises:
        HTTPException: 401 if credentials are invalid, 503 if the identity provider is unavailable
    """
    context = _request_context(request)
    try:
        authenticated = authenticator.authenticate(
            body.username, body.password, body.remember_me, context,
        )
    except AuthPluginError as e:
        raise _provider_unavailable(e)

    if not authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    principal = current_principal()
    user = None
    if principal is not None and principal.user_id:
        user = authenticator.repo.get_by_id(principal.user_id)
    if user is None:
        user = authenticator.repo.get_by_username(body.username)

    if context.session_token:
        response.set_cookie(SESSION_COOKIE, context.session_token, httponly=True)
    for cookie in context.cookies:
        response.set_cookie(cookie.name, cookie.value, max_age=cookie.max_age, httponly=cookie.http_only)

    logger.info("User logged in", extra={"username": user.username, "ip": context.client_ip})
    return AuthResponse(token=context.session_token, user=to_response(user))


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}},
)
def register(
    body: RegisterRequest,
    request: Request,
    lang: Optional[str] = None,
    authenticator: Authenticator = Depends(get_authenticator),
):
    """Register a new user.

    Returns:
        The created user, pending activation

    Raises:
        HTTPException: 409 if the username was taken concurrently, 503 if the identity provider is unavailable
    """
    errors = ValidationErrors()
    try:
        user = authenticator.register(
            RegistrationRequest(**body.model_dump()),
            _request_locale(request, lang),
            errors,
        )
    except AuthPluginError as e:
        raise _provider_unavailable(e)
    except DuplicateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already registered",
        )

    if user is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(errors=errors.as_dict()).model_dump(),
        )
    return to_response(user)


@router.get("/activate/{activation_key}", response_model=UserResponse)
def activate(activation_key: str, repo: UserRepository = Depends(get_user_repo)):
    """Activate the account the activation mail was sent for."""
    try:
        user = activate_account(repo, activation_key)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown activation key")
    return to_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return current_user


@router.get("/online", response_model=OnlineUsersResponse)
def get_online(tracker: OnlineUserTracker = Depends(get_online_tracker)):
    """List users that logged in since the server started."""
    return OnlineUsersResponse(usernames=tracker.online_usernames())
