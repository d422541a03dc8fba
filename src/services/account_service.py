"""Account service: activation of freshly registered accounts."""

import logging

from domain.model.errors import NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def activate_account(repo: UserRepository, activation_key: str) -> User:
    """Enable the account the activation mail was sent for.

    Activating an already enabled account is a no-op.

    Raises:
        NotFoundError: no account with this activation key
    """
    user = repo.get_by_activation_key(activation_key)
    if not user:
        raise NotFoundError("Unknown activation key")

    if not user.enabled:
        user.activate()
        repo.save_or_update(user)
        logger.info("Account activated", extra={"username": user.username, "userId": user.id})
    return user
