import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

USERNAME_MIN_LENGTH = 1
USERNAME_MAX_LENGTH = 25
PASSWORD_MIN_LENGTH = 1
PASSWORD_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 50

# New accounts are subscribed to their own topics until they change it in the profile.
DEFAULT_AUTOSUBSCRIBE = True


@dataclass
class User:
    """Domain model representing a forum user."""
    username: str
    email: str
    password_hash: str
    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    registered_at: datetime | None = None
    last_login: datetime | None = None
    language: str = 'en'
    avatar: str | None = None
    autosubscribe: bool = False
    enabled: bool = False
    activation_key: str | None = None

    @staticmethod
    def new_activation_key() -> str:
        return uuid.uuid4().hex

    def update_last_login_time(self) -> None:
        self.last_login = datetime.now(timezone.utc)

    def activate(self) -> None:
        self.enabled = True


@dataclass
class CommonUser:
    """User record owned by the shared identity store, not by the forum itself."""
    id: str
    username: str
    email: str | None = None
