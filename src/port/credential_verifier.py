from typing import Protocol

from domain.model.auth import AuthOutcome


class CredentialVerifier(Protocol):
    """Port for checking a username/password pair against the local store.

    Rejected credentials are reported as a Denied outcome, never raised.
    Any exception escaping authenticate() is a fault of the store itself.
    """

    def authenticate(self, username: str, password: str) -> AuthOutcome: ...
