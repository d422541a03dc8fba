"""Password hasher adapters.

bcrypt is the default. Identity providers that compare password hashes need
the same hash for the same password every time, which bcrypt's random salt
does not give; deployments paired with such a provider use the sha256 scheme.
"""

import hashlib
import hmac

import bcrypt

# bcrypt configuration
# Using 12 rounds (2^12 = 4096 iterations) for secure password hashing
BCRYPT_ROUNDS = 12

SCHEME_BCRYPT = "bcrypt"
SCHEME_SHA256 = "sha256"


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash (e.g. a record written with another scheme).
            return False


class Sha256PasswordHasher:
    """Unsalted hex digest, stable across calls."""

    def hash(self, plaintext: str) -> str:
        return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        return hmac.compare_digest(self.hash(plaintext), hashed)


def build_password_hasher(scheme: str) -> BcryptPasswordHasher | Sha256PasswordHasher:
    if scheme == SCHEME_BCRYPT:
        return BcryptPasswordHasher()
    if scheme == SCHEME_SHA256:
        return Sha256PasswordHasher()
    raise ValueError(f"Unknown password hash scheme: {scheme}")
