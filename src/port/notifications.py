"""Side-effect ports invoked when an account is created."""

from typing import Protocol

from domain.model.user import User


class MailNotifier(Protocol):
    """Port for account-related mail."""

    def send_activation_mail(self, user: User) -> None: ...


class AvatarProvider(Protocol):
    """Port for avatar images assigned to new accounts."""

    def get_default_image(self) -> str:
        """Return a reference (path or URL) to the default avatar."""
        ...
