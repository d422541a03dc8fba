"""Session ports: what happens to an HTTP exchange after a successful login."""

from typing import Protocol

from domain.model.auth import AuthenticatedPrincipal, RequestContext


class SessionBinder(Protocol):
    """Binds an authenticated principal to the current request."""

    def bind(self, principal: AuthenticatedPrincipal) -> None:
        """Make the principal the current identity of this request."""
        ...

    def on_authentication_success(
        self, principal: AuthenticatedPrincipal, context: RequestContext,
    ) -> None:
        """Post-authentication hook: issue the session and track the user as online."""
        ...


class RememberMeHandler(Protocol):
    """Persists a login across browser sessions."""

    def on_login_success(
        self, context: RequestContext, principal: AuthenticatedPrincipal,
    ) -> None: ...
