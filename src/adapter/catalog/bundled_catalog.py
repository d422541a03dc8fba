"""Validation messages shipped with the application.

Catalogs are keyed by locale ("en", "ru", "ru_RU", ...). Lookups fall back
from language and country to language and then to the default catalog, the
same way a resource bundle resolves.
"""

from types import MappingProxyType
from typing import Mapping

from domain.model.language import normalize_locale

DEFAULT_LOCALE = "en"

VALIDATION_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "user.username.length_constraint_violation":
            "Username should be between {min} and {max} characters long",
        "user.username.already_exists": "User with this username already exists",
        "user.username.forbidden_symbols": "Username contains forbidden characters",
        "user.email.illegal_length": "Email should not be longer than {max} characters",
        "user.email.wrong_format": "Email has an invalid format",
        "user.email.already_exists": "User with this email already exists",
        "user.password.length_constraint_violation":
            "Password should be between {min} and {max} characters long",
        "user.password_confirm.mismatch": "Password and confirmation do not match",
        "user.registration.disabled": "Registration is temporarily unavailable",
    },
    "ru": {
        "user.username.length_constraint_violation":
            "Имя пользователя должно содержать от {min} до {max} символов",
        "user.username.already_exists": "Пользователь с таким именем уже существует",
        "user.username.forbidden_symbols": "Имя пользователя содержит запрещённые символы",
        "user.email.illegal_length": "Адрес почты не должен быть длиннее {max} символов",
        "user.email.wrong_format": "Неверный формат адреса почты",
        "user.email.already_exists": "Пользователь с таким адресом почты уже существует",
        "user.password.length_constraint_violation":
            "Пароль должен содержать от {min} до {max} символов",
        "user.password_confirm.mismatch": "Пароль и подтверждение не совпадают",
        "user.registration.disabled": "Регистрация временно недоступна",
    },
    "uk": {
        "user.username.length_constraint_violation":
            "Ім'я користувача повинно містити від {min} до {max} символів",
        "user.username.already_exists": "Користувач з таким ім'ям вже існує",
        "user.email.illegal_length": "Адреса пошти не повинна бути довшою за {max} символів",
        "user.email.wrong_format": "Невірний формат адреси пошти",
        "user.email.already_exists": "Користувач з такою адресою пошти вже існує",
        "user.password.length_constraint_violation":
            "Пароль повинен містити від {min} до {max} символів",
        "user.password_confirm.mismatch": "Пароль та підтвердження не збігаються",
    },
}


class BundledMessageCatalog:
    """MessageCatalog over in-memory catalogs with locale fallback."""

    def __init__(
        self,
        catalogs: dict[str, dict[str, str]] | None = None,
        default_locale: str = DEFAULT_LOCALE,
    ):
        self.catalogs = VALIDATION_MESSAGES if catalogs is None else catalogs
        self.default_locale = default_locale

    def _candidates(self, locale: str | None) -> list[str]:
        normalized = normalize_locale(locale)
        candidates = []
        if normalized:
            candidates.append(normalized)
            language = normalized.split("_")[0]
            if language != normalized:
                candidates.append(language)
        candidates.append(self.default_locale)
        return candidates

    def messages(self, locale: str | None) -> Mapping[str, str]:
        """Merge the catalogs along the fallback chain, most specific first."""
        merged: dict[str, str] = {}
        for candidate in reversed(self._candidates(locale)):
            merged.update(self.catalogs.get(candidate, {}))
        return MappingProxyType(merged)
