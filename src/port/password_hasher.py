"""Password hasher port: one-way hashing of plaintext passwords."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for hashing and checking passwords.

    The same hash is stored locally and handed to external authentication
    plugins, so every component of a deployment must share one hasher.
    """

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool: ...
