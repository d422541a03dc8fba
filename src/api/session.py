"""Session establishment after a successful login.

The principal of the current request lives in a context variable, so each
request (and each worker thread serving one) sees only its own identity.
"""

import logging
import threading
from contextvars import ContextVar
from datetime import datetime, timezone

from api.config import REMEMBER_ME_COOKIE, REMEMBER_ME_DAYS
from api.tokens import REMEMBER_ME_PURPOSE, create_access_token
from domain.model.auth import AuthenticatedPrincipal, Cookie, RequestContext

logger = logging.getLogger(__name__)

_current_principal: ContextVar[AuthenticatedPrincipal | None] = ContextVar(
    "current_principal", default=None,
)


def current_principal() -> AuthenticatedPrincipal | None:
    return _current_principal.get()


class OnlineUserTracker:
    """Usernames that logged in since the process started, with their last login time."""

    def __init__(self):
        self._lock = threading.Lock()
        self._seen: dict[str, datetime] = {}

    def mark_seen(self, username: str) -> None:
        with self._lock:
            self._seen[username] = datetime.now(timezone.utc)

    def online_usernames(self) -> list[str]:
        with self._lock:
            return sorted(self._seen)


online_users = OnlineUserTracker()


class TokenSessionBinder:
    """SessionBinder issuing a JWT session token."""

    def __init__(self, tracker: OnlineUserTracker = online_users):
        self.tracker = tracker

    def bind(self, principal: AuthenticatedPrincipal) -> None:
        _current_principal.set(principal)

    def on_authentication_success(
        self, principal: AuthenticatedPrincipal, context: RequestContext,
    ) -> None:
        context.session_token = create_access_token(principal.user_id)
        self.tracker.mark_seen(principal.username)
        logger.debug("Session established", extra={"username": principal.username})


class CookieRememberMeHandler:
    """RememberMeHandler storing a long-lived token in a cookie."""

    def __init__(self, days: int = REMEMBER_ME_DAYS):
        self.days = days

    def on_login_success(self, context: RequestContext, principal: AuthenticatedPrincipal) -> None:
        token = create_access_token(principal.user_id, days=self.days, purpose=REMEMBER_ME_PURPOSE)
        context.set_cookie(Cookie(
            name=REMEMBER_ME_COOKIE,
            value=token,
            max_age=self.days * 24 * 60 * 60,
        ))
