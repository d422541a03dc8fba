"""Unit tests for ErrorCodeTranslator: catalog lookup, field precedence, placeholders."""

import unittest

from adapter.catalog.bundled_catalog import BundledMessageCatalog
from domain.model.registration import FieldError
from services.error_translator import ErrorCodeTranslator

CATALOGS = {
    "en": {
        "user.username.too.short": "Username must be {min} to {max} long",
        "user.email.too.long": "Email must be at most {max} ({min} ignored)",
        "user.password.too.long": "Password must be {min} to {max} long",
        "duplicate.email.username": "Email or username already taken",
        "username.password.mix": "Username or password wrong",
        "user.registration.closed": "Registration closed",
        "Email.capitalized": "Capitalized code",
    },
    "de": {
        "user.username.too.short": "Benutzername muss {min} bis {max} Zeichen lang sein",
    },
}


class TestTranslate(unittest.TestCase):

    def setUp(self):
        self.translator = ErrorCodeTranslator(BundledMessageCatalog(CATALOGS))

    def test_username_code_gets_min_and_max(self):
        self.assertEqual(
            self.translator.translate("user.username.too.short", "en"),
            FieldError(field="username", message="Username must be 1 to 25 long"),
        )

    def test_email_code_gets_only_max(self):
        error = self.translator.translate("user.email.too.long", "en")

        self.assertEqual(error.field, "email")
        self.assertEqual(error.message, "Email must be at most 50 ({min} ignored)")

    def test_password_code(self):
        self.assertEqual(
            self.translator.translate("user.password.too.long", "en"),
            FieldError(field="password", message="Password must be 1 to 50 long"),
        )

    def test_unknown_code_is_dropped(self):
        for code in ("user.username.unknown", "something.else", ""):
            self.assertIsNone(self.translator.translate(code, "en"))

    def test_code_without_field_keyword_is_dropped(self):
        self.assertIsNone(self.translator.translate("user.registration.closed", "en"))

    def test_email_wins_over_username(self):
        error = self.translator.translate("duplicate.email.username", "en")

        self.assertEqual(error.field, "email")

    def test_username_wins_over_password(self):
        error = self.translator.translate("username.password.mix", "en")

        self.assertEqual(error.field, "username")

    def test_field_match_is_case_sensitive(self):
        self.assertIsNone(self.translator.translate("Email.capitalized", "en"))

    def test_locale_specific_message(self):
        error = self.translator.translate("user.username.too.short", "de_AT")

        self.assertEqual(error.message, "Benutzername muss 1 bis 25 Zeichen lang sein")

    def test_missing_locale_falls_back_to_default(self):
        error = self.translator.translate("user.password.too.long", "de")

        self.assertEqual(error.message, "Password must be 1 to 50 long")

    def test_no_locale_uses_default(self):
        self.assertIsNotNone(self.translator.translate("user.password.too.long", None))


class TestMessage(unittest.TestCase):

    def setUp(self):
        self.translator = ErrorCodeTranslator(BundledMessageCatalog(CATALOGS))

    def test_substitutes_given_bounds(self):
        self.assertEqual(
            self.translator.message("user.username.too.short", "en", min=3, max=9),
            "Username must be 3 to 9 long",
        )

    def test_unknown_code_returns_none(self):
        self.assertIsNone(self.translator.message("nope", "en"))


if __name__ == '__main__':
    unittest.main()
