"""In-memory MailNotifier and AvatarProvider for testing."""

from domain.model.user import User


class FakeMailNotifier:
    def __init__(self):
        self.activation_mails: list[User] = []

    def send_activation_mail(self, user: User) -> None:
        self.activation_mails.append(user)


class FakeAvatarProvider:
    def __init__(self, image: str = "avatars/default.png"):
        self.image = image

    def get_default_image(self) -> str:
        return self.image
