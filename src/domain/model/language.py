"""Language Value Object.

Interface languages a forum user can pick. The language is stored on the
user as its locale code and resolved from the request locale at registration.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """Immutable value object representing a supported interface language."""

    name: str
    code: str
    label_key: str


# ── Language instances ────────────────────────────────────────

ENGLISH = Language(name="English", code="en", label_key="label.english")
RUSSIAN = Language(name="Russian", code="ru", label_key="label.russian")
UKRAINIAN = Language(name="Ukrainian", code="uk", label_key="label.ukrainian")
SPANISH = Language(name="Spanish", code="es", label_key="label.spanish")

DEFAULT_LANGUAGE = ENGLISH


# ── Registry ──────────────────────────────────────────────────

LANGUAGES: dict[str, Language] = {
    lang.code: lang
    for lang in (ENGLISH, RUSSIAN, UKRAINIAN, SPANISH)
}


def normalize_locale(locale: str | None) -> str:
    """Normalize "ru-RU", "ru_ru" or "RU" to the "ru_RU" / "ru" form."""
    if not locale:
        return ""
    parts = locale.replace("-", "_").split("_")
    language = parts[0].lower()
    if len(parts) > 1 and parts[1]:
        return f"{language}_{parts[1].upper()}"
    return language


def by_locale(locale: str | None) -> Language:
    """Resolve the interface language for a locale such as "ru_RU".

    Only the language part of the locale is considered. Unknown or empty
    locales resolve to English.
    """
    code = normalize_locale(locale).split("_")[0]
    return LANGUAGES.get(code, DEFAULT_LANGUAGE)
