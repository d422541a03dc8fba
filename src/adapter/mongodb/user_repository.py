"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import asdict
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from adapter.mongodb.connection import COMMON_USERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError
from domain.model.user import CommonUser, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]
        self.common_collection = db[COMMON_USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('username', 1)], 'idx_users_username', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            create_index_safe(
                self.collection, [('activation_key', 1)], 'idx_users_activation_key', sparse=True,
            )
            create_index_safe(self.common_collection, [('username', 1)], 'idx_common_users_username')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            password_hash=doc.get('password_hash', ''),
            first_name=doc.get('first_name'),
            last_name=doc.get('last_name'),
            registered_at=doc.get('registered_at'),
            last_login=doc.get('last_login'),
            language=doc.get('language', 'en'),
            avatar=doc.get('avatar'),
            autosubscribe=doc.get('autosubscribe', False),
            enabled=doc.get('enabled', False),
            activation_key=doc.get('activation_key'),
        )

    def _to_document(self, user: User) -> dict:
        doc = asdict(user)
        doc['_id'] = doc.pop('id')
        return doc

    def _find_one(self, query: dict) -> User | None:
        doc = self.collection.find_one(query)
        if doc:
            return self._to_domain(doc)
        return None

    # ── write operations ─────────────────────────────────────

    def save_or_update(self, user: User) -> User:
        """Insert or replace the user document. Return the saved User.

        Raises:
            DuplicateError: another user already has this username
        """
        if user.id is None:
            user.id = uuid.uuid4().hex
        try:
            self.collection.replace_one({'_id': user.id}, self._to_document(user), upsert=True)
        except DuplicateKeyError as e:
            logger.warning("User save failed: username already exists", extra={"username": user.username})
            raise DuplicateError(f"Username already exists: {user.username}") from e
        logger.debug("User saved", extra={"userId": user.id, "username": user.username})
        return user

    def delete(self, user_id: str) -> bool:
        """Delete a user from the forum store and the shared store."""
        deleted = self.collection.delete_one({'_id': user_id}).deleted_count
        deleted += self.common_collection.delete_one({'_id': user_id}).deleted_count
        if deleted:
            logger.info("User deleted", extra={"userId": user_id})
        return deleted > 0

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        return self._find_one({'username': username})

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': email})

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id})

    def get_by_activation_key(self, activation_key: str) -> User | None:
        return self._find_one({'activation_key': activation_key})

    def get_common_user_by_username(self, username: str) -> CommonUser | None:
        doc = self.common_collection.find_one({'username': username})
        if not doc:
            return None
        return CommonUser(id=doc['_id'], username=doc['username'], email=doc.get('email'))
