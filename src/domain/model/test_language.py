"""Unit tests for Language lookup by locale."""

import unittest

from domain.model.language import ENGLISH, RUSSIAN, UKRAINIAN, by_locale, normalize_locale


class TestLanguage(unittest.TestCase):

    def test_by_locale(self):
        self.assertEqual(by_locale('ru_RU'), RUSSIAN)
        self.assertEqual(by_locale('uk'), UKRAINIAN)
        self.assertEqual(by_locale('EN-us'), ENGLISH)

    def test_unknown_or_empty_locale_is_english(self):
        for locale in ('fr_FR', '', None):
            self.assertEqual(by_locale(locale), ENGLISH)

    def test_normalize_locale(self):
        self.assertEqual(normalize_locale('ru-ru'), 'ru_RU')
        self.assertEqual(normalize_locale('RU'), 'ru')
        self.assertEqual(normalize_locale(None), '')


if __name__ == '__main__':
    unittest.main()
