"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from domain.model.user import CommonUser, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.common_users: dict[str, CommonUser] = {}
        self.saves: list[str] = []
        self.deletes: list[str] = []

    # ── write operations ─────────────────────────────────────

    def save_or_update(self, user: User) -> User:
        if user.id is None:
            user.id = uuid.uuid4().hex
        self.store[user.id] = user
        self.saves.append(user.username)
        return user

    def delete(self, user_id: str) -> bool:
        self.deletes.append(user_id)
        removed = self.store.pop(user_id, None) is not None
        removed = (self.common_users.pop(user_id, None) is not None) or removed
        return removed

    def add_common_user(self, username: str, email: str | None = None) -> CommonUser:
        common_user = CommonUser(id=uuid.uuid4().hex, username=username, email=email)
        self.common_users[common_user.id] = common_user
        return common_user

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return user
        return None

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def get_by_activation_key(self, activation_key: str) -> User | None:
        for user in self.store.values():
            if user.activation_key == activation_key:
                return user
        return None

    def get_common_user_by_username(self, username: str) -> CommonUser | None:
        for common_user in self.common_users.values():
            if common_user.username == username:
                return common_user
        return None

    def snapshot(self) -> dict[str, User]:
        """Copy of the stored users, for asserting that nothing changed."""
        return {user_id: replace(user) for user_id, user in self.store.items()}
