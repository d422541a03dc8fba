from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.avatar.static_avatar import StaticAvatarProvider
from adapter.catalog.bundled_catalog import BundledMessageCatalog
from adapter.external.http_auth_plugin import HttpAuthPlugin
from adapter.mail.log_mail_notifier import LogMailNotifier
from adapter.mongodb.connection import get_database
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.credential_verifier import RepositoryCredentialVerifier
from adapter.security.password_hasher import build_password_hasher
from api.config import (
    APP_BASE_URL,
    AUTH_PLUGIN_ENABLED,
    AUTH_PLUGIN_NAME,
    AUTH_PLUGIN_TIMEOUT,
    AUTH_PLUGIN_URL,
    DEFAULT_AVATAR,
    DEFAULT_LOCALE,
    PASSWORD_HASH_SCHEME,
)
from api.session import CookieRememberMeHandler, OnlineUserTracker, TokenSessionBinder, online_users
from domain.model.plugin import PluginState
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services.authenticator import Authenticator
from services.error_translator import ErrorCodeTranslator
from services.plugin_registry import PluginRegistry
from services.registration_validator import RegistrationValidator


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    db = get_database()
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


@lru_cache(maxsize=1)
def get_plugin_registry() -> PluginRegistry:
    registry = PluginRegistry()
    if AUTH_PLUGIN_URL:
        registry.register(HttpAuthPlugin(
            base_url=AUTH_PLUGIN_URL,
            name=AUTH_PLUGIN_NAME,
            state=PluginState.ENABLED if AUTH_PLUGIN_ENABLED else PluginState.DISABLED,
            timeout=AUTH_PLUGIN_TIMEOUT,
        ))
    return registry


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return build_password_hasher(PASSWORD_HASH_SCHEME)


@lru_cache(maxsize=1)
def get_error_translator() -> ErrorCodeTranslator:
    return ErrorCodeTranslator(BundledMessageCatalog(default_locale=DEFAULT_LOCALE))


def get_online_tracker() -> OnlineUserTracker:
    return online_users


def get_authenticator(repo: UserRepository = Depends(get_user_repo)) -> Authenticator:
    hasher = get_password_hasher()
    translator = get_error_translator()
    return Authenticator(
        repo=repo,
        plugins=get_plugin_registry(),
        hasher=hasher,
        verifier=RepositoryCredentialVerifier(repo, hasher),
        session=TokenSessionBinder(get_online_tracker()),
        remember_me=CookieRememberMeHandler(),
        mail=LogMailNotifier(APP_BASE_URL),
        avatars=StaticAvatarProvider(DEFAULT_AVATAR),
        translator=translator,
        validator=RegistrationValidator(repo, translator),
    )
