"""Tests for password hashers and the repository-backed credential verifier."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from adapter.security.credential_verifier import (
    ACCOUNT_DISABLED,
    BAD_CREDENTIALS,
    RepositoryCredentialVerifier,
)
from adapter.security.password_hasher import (
    BcryptPasswordHasher,
    Sha256PasswordHasher,
    build_password_hasher,
)
from domain.model.auth import Authenticated, Denied
from domain.model.user import User


class TestBcryptPasswordHasher(unittest.TestCase):

    def setUp(self):
        # Minimum cost keeps the tests fast
        self.hasher = BcryptPasswordHasher(rounds=4)

    def test_hash_verifies(self):
        hashed = self.hasher.hash('Secret123')

        self.assertNotEqual(hashed, 'Secret123')
        self.assertTrue(self.hasher.verify('Secret123', hashed))
        self.assertFalse(self.hasher.verify('secret123', hashed))

    def test_hashes_are_salted(self):
        self.assertNotEqual(self.hasher.hash('same'), self.hasher.hash('same'))

    def test_verify_rejects_foreign_or_empty_hash(self):
        self.assertFalse(self.hasher.verify('pw', ''))
        self.assertFalse(self.hasher.verify('pw', Sha256PasswordHasher().hash('pw')))


class TestSha256PasswordHasher(unittest.TestCase):

    def test_hash_is_stable(self):
        hasher = Sha256PasswordHasher()

        self.assertEqual(hasher.hash('pw'), hasher.hash('pw'))
        self.assertEqual(
            hasher.hash(''),
            'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855',
        )

    def test_verify(self):
        hasher = Sha256PasswordHasher()

        self.assertTrue(hasher.verify('pw', hasher.hash('pw')))
        self.assertFalse(hasher.verify('pw', hasher.hash('other')))
        self.assertFalse(hasher.verify('pw', ''))


class TestBuildPasswordHasher(unittest.TestCase):

    def test_known_schemes(self):
        self.assertIsInstance(build_password_hasher('bcrypt'), BcryptPasswordHasher)
        self.assertIsInstance(build_password_hasher('sha256'), Sha256PasswordHasher)

    def test_unknown_scheme(self):
        with self.assertRaises(ValueError):
            build_password_hasher('md5')


class TestRepositoryCredentialVerifier(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.hasher = Sha256PasswordHasher()
        self.verifier = RepositoryCredentialVerifier(self.repo, self.hasher)

    def _add(self, username: str, password: str, enabled: bool = True) -> User:
        return self.repo.save_or_update(User(
            username=username,
            email=f'{username}@example.com',
            password_hash=self.hasher.hash(password),
            enabled=enabled,
        ))

    def test_correct_password(self):
        user = self._add('alice', 'pw')

        outcome = self.verifier.authenticate('alice', 'pw')

        self.assertIsInstance(outcome, Authenticated)
        self.assertEqual(outcome.principal.username, 'alice')
        self.assertEqual(outcome.principal.user_id, user.id)
        self.assertEqual(outcome.principal.authorities, ('ROLE_USER',))

    def test_wrong_password(self):
        self._add('alice', 'pw')

        self.assertEqual(self.verifier.authenticate('alice', 'nope'), Denied(reason=BAD_CREDENTIALS))

    def test_unknown_user(self):
        self.assertEqual(self.verifier.authenticate('ghost', 'pw'), Denied(reason=BAD_CREDENTIALS))

    def test_disabled_user(self):
        self._add('bob', 'pw', enabled=False)

        self.assertEqual(self.verifier.authenticate('bob', 'pw'), Denied(reason=ACCOUNT_DISABLED))

    def test_disabled_user_with_wrong_password_reports_bad_credentials(self):
        self._add('bob', 'pw', enabled=False)

        self.assertEqual(self.verifier.authenticate('bob', 'nope'), Denied(reason=BAD_CREDENTIALS))


if __name__ == '__main__':
    unittest.main()
