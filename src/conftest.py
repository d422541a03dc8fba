"""Environment for tests; must be set before api.config is imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-unit-tests")
os.environ.setdefault("PASSWORD_HASH_SCHEME", "sha256")
os.environ.pop("AUTH_PLUGIN_URL", None)
os.environ.pop("MONGO_URL", None)
