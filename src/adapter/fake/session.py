"""In-memory SessionBinder and RememberMeHandler for testing."""

from domain.model.auth import AuthenticatedPrincipal, Cookie, RequestContext


class FakeSessionBinder:
    def __init__(self):
        self.current: AuthenticatedPrincipal | None = None
        self.successes: list[AuthenticatedPrincipal] = []

    def bind(self, principal: AuthenticatedPrincipal) -> None:
        self.current = principal

    def on_authentication_success(
        self, principal: AuthenticatedPrincipal, context: RequestContext,
    ) -> None:
        self.successes.append(principal)
        context.session_token = f"session-{principal.username}"


class FakeRememberMeHandler:
    def __init__(self):
        self.remembered: list[str] = []

    def on_login_success(self, context: RequestContext, principal: AuthenticatedPrincipal) -> None:
        self.remembered.append(principal.username)
        context.set_cookie(Cookie(name="remember_me", value=f"remember-{principal.username}"))
