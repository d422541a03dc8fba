"""External authentication plugin port: outbound interface to identity providers."""

from typing import Protocol

from domain.model.plugin import PluginCapability, PluginState


class AuthPluginError(Exception):
    """Base exception for authentication plugin errors."""


class NoConnectionError(AuthPluginError):
    """The identity provider could not be reached."""


class UnexpectedProviderError(AuthPluginError):
    """The identity provider answered with something it should not have."""


class ExternalAuthPlugin(Protocol):
    """Port for an independently deployed identity provider.

    authenticate() returns the user's attributes (at least "username" and
    "email") or an empty dict when the credentials are rejected.
    register_user() returns the provider's validation error codes; an empty
    list means the account was created on the provider side.

    Both calls block and raise NoConnectionError / UnexpectedProviderError
    when the provider itself is unusable.
    """

    name: str
    state: PluginState
    capabilities: frozenset[PluginCapability]

    def authenticate(self, username: str, password_hash: str) -> dict[str, str]: ...

    def register_user(self, username: str, password_hash: str, email: str) -> list[str]: ...
