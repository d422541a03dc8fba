from typing import Protocol
from domain.model.user import CommonUser, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_activation_key(self, activation_key: str) -> User | None:
        """Find a user by the key sent in the activation mail."""
        ...

    def save_or_update(self, user: User) -> User:
        """Insert the user, or replace the stored record with the same ID.

        Assigns an ID to users that don't have one yet.
        """
        ...

    def get_common_user_by_username(self, username: str) -> CommonUser | None:
        """Find a user of the shared identity store by username."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user record by ID. Return True if something was deleted."""
        ...
