"""Authentication value objects.

The local lookup and the credential check return explicit outcomes instead of
raising, so the fallback to an external provider is decided on values:

    lookup          verification     next step
    ------          ------------     ---------
    Found           Authenticated    establish session
    Found           Denied           plugin fallback (existing user)
    NotFound        -                plugin fallback (new user)
"""

from dataclasses import dataclass, field
from typing import Mapping, Union

from domain.model.user import User


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identity established by a successful credential check."""
    user_id: str | None
    username: str
    authorities: tuple[str, ...] = ('ROLE_USER',)


# ── Outcomes ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Found:
    user: User


@dataclass(frozen=True)
class NotFound:
    username: str


LookupResult = Union[Found, NotFound]


@dataclass(frozen=True)
class Authenticated:
    principal: AuthenticatedPrincipal


@dataclass(frozen=True)
class Denied:
    reason: str


AuthOutcome = Union[Authenticated, Denied]


# ── Request context ───────────────────────────────────────────


@dataclass
class Cookie:
    name: str
    value: str
    max_age: int | None = None
    http_only: bool = True


@dataclass
class RequestContext:
    """What the authentication flow needs to know about the current HTTP exchange.

    Collaborators write their results back here (session token, cookies) and
    the web layer copies them onto the response.
    """
    remote_addr: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: list[Cookie] = field(default_factory=list)
    session_token: str | None = None

    @property
    def client_ip(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == 'x-forwarded-for' and value:
                return value.split(',')[0].strip()
        return self.remote_addr

    def set_cookie(self, cookie: Cookie) -> None:
        self.cookies = [c for c in self.cookies if c.name != cookie.name]
        self.cookies.append(cookie)
