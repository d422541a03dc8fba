"""MailNotifier that writes the activation link to the log.

Mail delivery is handled outside this service; whatever ships the log (or
consumes it) is responsible for sending the message.
"""

import logging

from domain.model.user import User

logger = logging.getLogger(__name__)


class LogMailNotifier:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def activation_link(self, user: User) -> str:
        return f"{self.base_url}/auth/activate/{user.activation_key}"

    def send_activation_mail(self, user: User) -> None:
        logger.info(
            "Account activation mail requested",
            extra={
                "username": user.username,
                "email": user.email,
                "activationLink": self.activation_link(user),
            },
        )
