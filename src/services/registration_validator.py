"""Local validation of registration forms.

Used when no identity provider handles registration. Messages come from the
same catalog the provider error codes are translated with.
"""

import re

from domain.model.registration import RegistrationRequest, ValidationErrors
from domain.model.user import (
    EMAIL_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from port.user_repository import UserRepository
from services.error_translator import ErrorCodeTranslator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

USERNAME_LENGTH_CODE = "user.username.length_constraint_violation"
USERNAME_DUPLICATE_CODE = "user.username.already_exists"
EMAIL_LENGTH_CODE = "user.email.illegal_length"
EMAIL_FORMAT_CODE = "user.email.wrong_format"
EMAIL_DUPLICATE_CODE = "user.email.already_exists"
PASSWORD_LENGTH_CODE = "user.password.length_constraint_violation"
PASSWORD_CONFIRM_CODE = "user.password_confirm.mismatch"


class RegistrationValidator:
    """Validates a RegistrationRequest against length rules and uniqueness."""

    def __init__(self, repo: UserRepository, translator: ErrorCodeTranslator):
        self.repo = repo
        self.translator = translator

    def validate(
        self, request: RegistrationRequest, errors: ValidationErrors, locale: str | None = None,
    ) -> None:
        self._validate_username(request.username or "", errors, locale)
        self._validate_email(request.email or "", errors, locale)
        self._validate_password(request, errors, locale)

    def _reject(
        self, errors: ValidationErrors, field: str, code: str, locale: str | None, **bounds: int,
    ) -> None:
        errors.reject(field, self.translator.message(code, locale, **bounds) or code)

    def _validate_username(self, username: str, errors: ValidationErrors, locale: str | None) -> None:
        length = len(username.strip())
        if length < USERNAME_MIN_LENGTH or len(username) > USERNAME_MAX_LENGTH:
            self._reject(
                errors, "username", USERNAME_LENGTH_CODE, locale,
                min=USERNAME_MIN_LENGTH, max=USERNAME_MAX_LENGTH,
            )
            return
        if self.repo.get_by_username(username) or self.repo.get_common_user_by_username(username):
            self._reject(errors, "username", USERNAME_DUPLICATE_CODE, locale)

    def _validate_email(self, email: str, errors: ValidationErrors, locale: str | None) -> None:
        if len(email) > EMAIL_MAX_LENGTH:
            self._reject(errors, "email", EMAIL_LENGTH_CODE, locale, max=EMAIL_MAX_LENGTH)
            return
        if not EMAIL_PATTERN.match(email):
            self._reject(errors, "email", EMAIL_FORMAT_CODE, locale)
            return
        if self.repo.get_by_email(email):
            self._reject(errors, "email", EMAIL_DUPLICATE_CODE, locale)

    def _validate_password(
        self, request: RegistrationRequest, errors: ValidationErrors, locale: str | None,
    ) -> None:
        password = request.password or ""
        if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
            self._reject(
                errors, "password", PASSWORD_LENGTH_CODE, locale,
                min=PASSWORD_MIN_LENGTH, max=PASSWORD_MAX_LENGTH,
            )
        if request.password_confirm is not None and request.password_confirm != password:
            self._reject(errors, "password_confirm", PASSWORD_CONFIRM_CODE, locale)
