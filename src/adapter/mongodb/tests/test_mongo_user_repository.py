"""Tests for MongoUserRepository with mocked collections."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from pymongo.errors import DuplicateKeyError

from adapter.mongodb.connection import COMMON_USERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateError
from domain.model.user import CommonUser, User


def _user_doc(**kwargs) -> dict:
    doc = {
        '_id': 'user-1',
        'username': 'alice',
        'email': 'alice@example.com',
        'password_hash': 'hash',
        'first_name': 'Alice',
        'last_name': None,
        'registered_at': datetime(2026, 1, 1, tzinfo=timezone.utc),
        'last_login': None,
        'language': 'ru',
        'avatar': '/static/avatars/default.png',
        'autosubscribe': True,
        'enabled': True,
        'activation_key': 'key-1',
    }
    doc.update(kwargs)
    return doc


class MongoUserRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.users = MagicMock()
        self.common_users = MagicMock()
        collections = {
            USERS_COLLECTION_NAME: self.users,
            COMMON_USERS_COLLECTION_NAME: self.common_users,
        }
        self.db = MagicMock()
        self.db.__getitem__.side_effect = collections.__getitem__
        self.repo = MongoUserRepository(self.db)


class TestReads(MongoUserRepositoryTestCase):

    def test_get_by_username_maps_document(self):
        self.users.find_one.return_value = _user_doc()

        user = self.repo.get_by_username('alice')

        self.assertIsInstance(user, User)
        self.assertEqual(user.id, 'user-1')
        self.assertEqual(user.username, 'alice')
        self.assertEqual(user.language, 'ru')
        self.assertTrue(user.autosubscribe)
        self.assertTrue(user.enabled)
        self.users.find_one.assert_called_once_with({'username': 'alice'})

    def test_get_by_username_not_found(self):
        self.users.find_one.return_value = None

        self.assertIsNone(self.repo.get_by_username('nobody'))

    def test_missing_optional_fields_use_defaults(self):
        self.users.find_one.return_value = {
            '_id': 'user-2', 'username': 'old', 'email': 'old@example.com',
        }

        user = self.repo.get_by_id('user-2')

        self.assertEqual(user.password_hash, '')
        self.assertEqual(user.language, 'en')
        self.assertFalse(user.enabled)
        self.users.find_one.assert_called_once_with({'_id': 'user-2'})

    def test_get_by_email_and_activation_key_queries(self):
        self.users.find_one.return_value = None

        self.repo.get_by_email('a@example.com')
        self.repo.get_by_activation_key('key-1')

        self.users.find_one.assert_any_call({'email': 'a@example.com'})
        self.users.find_one.assert_any_call({'activation_key': 'key-1'})

    def test_get_common_user_by_username(self):
        self.common_users.find_one.return_value = {'_id': 'c-1', 'username': 'shared', 'email': 's@x.com'}

        common = self.repo.get_common_user_by_username('shared')

        self.assertEqual(common, CommonUser(id='c-1', username='shared', email='s@x.com'))
        self.common_users.find_one.assert_called_once_with({'username': 'shared'})

    def test_get_common_user_not_found(self):
        self.common_users.find_one.return_value = None

        self.assertIsNone(self.repo.get_common_user_by_username('nobody'))


class TestWrites(MongoUserRepositoryTestCase):

    @patch('adapter.mongodb.user_repository.uuid')
    def test_save_new_user_assigns_id_and_upserts(self, mock_uuid):
        mock_uuid.uuid4.return_value.hex = 'new-id'
        user = User(username='bob', email='bob@example.com', password_hash='hash')

        saved = self.repo.save_or_update(user)

        self.assertEqual(saved.id, 'new-id')
        query, doc = self.users.replace_one.call_args.args
        self.assertEqual(query, {'_id': 'new-id'})
        self.assertEqual(doc['_id'], 'new-id')
        self.assertNotIn('id', doc)
        self.assertEqual(doc['username'], 'bob')
        self.assertEqual(self.users.replace_one.call_args.kwargs, {'upsert': True})

    def test_save_existing_user_keeps_id(self):
        user = User(id='user-1', username='alice', email='a@example.com', password_hash='h')

        self.repo.save_or_update(user)

        query, _ = self.users.replace_one.call_args.args
        self.assertEqual(query, {'_id': 'user-1'})

    def test_save_duplicate_username(self):
        self.users.replace_one.side_effect = DuplicateKeyError('E11000 duplicate key error')

        with self.assertRaises(DuplicateError):
            self.repo.save_or_update(User(id='x', username='alice', email='a@x.com', password_hash='h'))

    def test_delete_from_both_collections(self):
        self.users.delete_one.return_value.deleted_count = 0
        self.common_users.delete_one.return_value.deleted_count = 1

        self.assertTrue(self.repo.delete('c-1'))
        self.users.delete_one.assert_called_once_with({'_id': 'c-1'})
        self.common_users.delete_one.assert_called_once_with({'_id': 'c-1'})

    def test_delete_nothing(self):
        self.users.delete_one.return_value.deleted_count = 0
        self.common_users.delete_one.return_value.deleted_count = 0

        self.assertFalse(self.repo.delete('missing'))


class TestEnsureIndexes(MongoUserRepositoryTestCase):

    def test_creates_unique_username_index(self):
        self.assertTrue(self.repo.ensure_indexes())

        self.users.create_index.assert_any_call([('username', 1)], name='idx_users_username', unique=True)
        self.common_users.create_index.assert_any_call([('username', 1)], name='idx_common_users_username')

    def test_failure_returns_false(self):
        self.users.create_index.side_effect = RuntimeError('boom')

        self.assertFalse(self.repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
