"""Application settings read from the environment.

api/main.py loads .env before this module is imported.
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))
REMEMBER_ME_DAYS = int(os.getenv("REMEMBER_ME_DAYS", "14"))
REMEMBER_ME_COOKIE = "remember_me"
SESSION_COOKIE = "session"

# "bcrypt", or "sha256" when the identity provider compares password hashes
PASSWORD_HASH_SCHEME = os.getenv("PASSWORD_HASH_SCHEME", "bcrypt")

# External identity provider; no URL means local accounts only
AUTH_PLUGIN_URL = os.getenv("AUTH_PLUGIN_URL")
AUTH_PLUGIN_NAME = os.getenv("AUTH_PLUGIN_NAME", "identity-provider")
AUTH_PLUGIN_ENABLED = _env_bool("AUTH_PLUGIN_ENABLED", True)
AUTH_PLUGIN_TIMEOUT = float(os.getenv("AUTH_PLUGIN_TIMEOUT", "5.0"))

DEFAULT_AVATAR = os.getenv("DEFAULT_AVATAR", "/static/avatars/default.png")
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en")
