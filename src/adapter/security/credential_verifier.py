"""CredentialVerifier backed by the local user repository."""

from domain.model.auth import AuthenticatedPrincipal, Authenticated, AuthOutcome, Denied
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

BAD_CREDENTIALS = "Bad credentials"
ACCOUNT_DISABLED = "User is disabled"


class RepositoryCredentialVerifier:
    def __init__(self, repo: UserRepository, hasher: PasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def authenticate(self, username: str, password: str) -> AuthOutcome:
        user = self.repo.get_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            return Denied(reason=BAD_CREDENTIALS)
        if not user.enabled:
            return Denied(reason=ACCOUNT_DISABLED)
        return Authenticated(principal=AuthenticatedPrincipal(user_id=user.id, username=user.username))
