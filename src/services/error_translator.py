"""Translation of validation error codes into localized field errors.

Identity providers report registration problems as bare codes such as
"user.username.length_constraint_violation". The field a code belongs to is
derived from the code itself by substring match, checked in a fixed order:
email, then username, then password. A code naming several fields belongs to
the first one in that order.
"""

import logging

from domain.model.registration import FieldError
from domain.model.user import (
    EMAIL_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from port.message_catalog import MessageCatalog

logger = logging.getLogger(__name__)

# (field, {placeholder: value}) in match order.
FIELD_BOUNDS: tuple[tuple[str, dict[str, int]], ...] = (
    ("email", {"max": EMAIL_MAX_LENGTH}),
    ("username", {"min": USERNAME_MIN_LENGTH, "max": USERNAME_MAX_LENGTH}),
    ("password", {"min": PASSWORD_MIN_LENGTH, "max": PASSWORD_MAX_LENGTH}),
)


def _substitute(message: str, bounds: dict[str, int]) -> str:
    for placeholder, value in bounds.items():
        message = message.replace("{" + placeholder + "}", str(value))
    return message


class ErrorCodeTranslator:
    """Maps error codes to (field, message) pairs using a localized catalog."""

    def __init__(self, catalog: MessageCatalog):
        self.catalog = catalog

    def message(self, code: str, locale: str | None, **bounds: int) -> str | None:
        """Look up the message for a code and fill in the given placeholders.

        Returns None if the catalog has no entry for the code.
        """
        messages = self.catalog.messages(locale)
        if code not in messages:
            return None
        return _substitute(messages[code], bounds)

    def translate(self, code: str, locale: str | None) -> FieldError | None:
        """Translate a provider error code into a field error.

        Unknown codes and codes that don't name a field yield None.
        """
        messages = self.catalog.messages(locale)
        if code not in messages:
            logger.debug("No message for error code", extra={"code": code, "locale": locale})
            return None
        for field_name, bounds in FIELD_BOUNDS:
            if field_name in code:
                return FieldError(field=field_name, message=_substitute(messages[code], bounds))
        logger.debug("Error code names no field", extra={"code": code})
        return None
