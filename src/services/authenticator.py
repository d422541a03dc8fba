"""Authenticator: login and registration with an optional external identity provider.

Authentication first checks the credentials against the local user store. If
the user is unknown locally, or the local check is denied, the enabled
authentication plugin is asked instead; a positive answer is merged into the
local store and the local check is repeated against the merged record.

Registration goes through the enabled plugin when there is one (its error
codes become localized field errors), otherwise through local validation.

Pure business logic with no HTTP dependencies. Plugin transport failures
(NoConnectionError, UnexpectedProviderError) are not caught here.
"""

import logging
from datetime import datetime, timezone

from domain.model.auth import (
    Authenticated,
    AuthOutcome,
    Denied,
    Found,
    LookupResult,
    NotFound,
    RequestContext,
)
from domain.model.language import by_locale
from domain.model.plugin import (
    EMAIL_KEY,
    FIRST_NAME_KEY,
    LAST_NAME_KEY,
    REQUIRED_AUTH_KEYS,
    USERNAME_KEY,
    PluginCapability,
    PluginState,
)
from domain.model.registration import RegistrationRequest, ValidationErrors
from domain.model.user import DEFAULT_AUTOSUBSCRIBE, User
from port.auth_plugin import AuthPluginError, ExternalAuthPlugin
from port.credential_verifier import CredentialVerifier
from port.notifications import AvatarProvider, MailNotifier
from port.password_hasher import PasswordHasher
from port.session import RememberMeHandler, SessionBinder
from port.user_repository import UserRepository
from services.error_translator import ErrorCodeTranslator
from services.plugin_registry import PluginRegistry
from services.registration_validator import RegistrationValidator

logger = logging.getLogger(__name__)


class Authenticator:
    """Authenticates and registers users, falling back to the enabled plugin."""

    def __init__(
        self,
        repo: UserRepository,
        plugins: PluginRegistry,
        hasher: PasswordHasher,
        verifier: CredentialVerifier,
        session: SessionBinder,
        remember_me: RememberMeHandler,
        mail: MailNotifier,
        avatars: AvatarProvider,
        translator: ErrorCodeTranslator,
        validator: RegistrationValidator,
    ):
        self.repo = repo
        self.plugins = plugins
        self.hasher = hasher
        self.verifier = verifier
        self.session = session
        self.remember_me = remember_me
        self.mail = mail
        self.avatars = avatars
        self.translator = translator
        self.validator = validator

    # ── authentication ───────────────────────────────────────

    def authenticate(
        self, username: str, password: str, remember_me: bool, context: RequestContext,
    ) -> bool:
        """Authenticate a user, locally first and then by the enabled plugin.

        Returns True if the user ended up authenticated. On success the
        session is bound, remember-me is applied when requested and the
        last login time is stored.

        Raises:
            NoConnectionError: the plugin could not be reached
            UnexpectedProviderError: the plugin failed unexpectedly
        """
        lookup = self._lookup(username)
        if isinstance(lookup, Found):
            outcome = self._authenticate_default(lookup.user, password, remember_me, context)
            if isinstance(outcome, Authenticated):
                return True
            new_user = False
        else:
            logger.info(
                "User was not found during login",
                extra={"username": username, "ip": context.client_ip},
            )
            new_user = True
        return self._authenticate_by_plugin(username, password, new_user, remember_me, context)

    def _call_plugin(self, plugin: ExternalAuthPlugin, call, *args):
        """Invoke a plugin operation, keeping the plugin state in step with the outcome."""
        try:
            result = call(*args)
        except AuthPluginError as e:
            logger.warning(
                "Auth plugin call failed",
                extra={"plugin": plugin.name, "error_type": type(e).__name__, "error": str(e)},
            )
            self.plugins.set_state(plugin.name, PluginState.IN_ERROR)
            raise
        if plugin.state == PluginState.IN_ERROR:
            self.plugins.set_state(plugin.name, PluginState.ENABLED)
        return result

    def _lookup(self, username: str) -> LookupResult:
        user = self.repo.get_by_username(username)
        if user is None:
            return NotFound(username=username)
        return Found(user=user)

    def _authenticate_default(
        self, user: User, password: str, remember_me: bool, context: RequestContext,
    ) -> AuthOutcome:
        """Check credentials locally and establish the session on success."""
        outcome = self.verifier.authenticate(user.username, password)
        if isinstance(outcome, Denied):
            logger.info(
                "Authentication denied",
                extra={"username": user.username, "ip": context.client_ip, "reason": outcome.reason},
            )
            return outcome

        principal = outcome.principal
        self.session.bind(principal)
        self.session.on_authentication_success(principal, context)
        if remember_me:
            self.remember_me.on_login_success(context, principal)
        user.update_last_login_time()
        self.repo.save_or_update(user)
        return outcome

    def _authenticate_by_plugin(
        self,
        username: str,
        password: str,
        new_user: bool,
        remember_me: bool,
        context: RequestContext,
    ) -> bool:
        plugin = self.plugins.find(PluginCapability.AUTHENTICATION)
        if plugin is None:
            logger.info("No authentication plugin enabled", extra={"username": username})
            return False

        password_hash = self.hasher.hash(password)
        auth_info = self._call_plugin(plugin, plugin.authenticate, username, password_hash)
        if not auth_info or any(key not in auth_info for key in REQUIRED_AUTH_KEYS):
            logger.info(
                "Could not authenticate user by plugin",
                extra={"username": username, "plugin": plugin.name},
            )
            return False

        user = self.reconcile(auth_info, password_hash, new_user)
        outcome = self._authenticate_default(user, password, remember_me, context)
        return isinstance(outcome, Authenticated)

    def reconcile(self, auth_info: dict[str, str], password_hash: str, is_new_user: bool) -> User:
        """Merge the attributes returned by a plugin into the local store.

        For a new user an already stored record with the same username wins
        and is returned as is. Otherwise the record is created (new user) or
        its password hash and email are overwritten (existing user). First and
        last name are only touched when the plugin returned them.
        """
        username = auth_info[USERNAME_KEY]
        user = self.repo.get_by_username(username)
        if is_new_user and user is not None:
            # Stored by the shared identity store under the same name.
            return user

        if user is None:
            user = User(
                username=username,
                email=auth_info[EMAIL_KEY],
                password_hash=password_hash,
                registered_at=datetime.now(timezone.utc),
                enabled=True,
            )
        else:
            user.password_hash = password_hash
            user.email = auth_info[EMAIL_KEY]

        if FIRST_NAME_KEY in auth_info:
            user.first_name = auth_info[FIRST_NAME_KEY]
        if LAST_NAME_KEY in auth_info:
            user.last_name = auth_info[LAST_NAME_KEY]
        self.repo.save_or_update(user)
        return user

    # ── registration ─────────────────────────────────────────

    def register(
        self, request: RegistrationRequest, locale: str | None, errors: ValidationErrors,
    ) -> User | None:
        """Register a new user.

        Returns the stored User, or None when validation failed; the reasons
        are collected in `errors`.

        Raises:
            NoConnectionError: the plugin could not be reached
            UnexpectedProviderError: the plugin failed unexpectedly
        """
        plugin = self.plugins.find(PluginCapability.REGISTRATION)
        if plugin is not None:
            password_hash = self.hasher.hash(request.password) if request.password else ""
            codes = self._call_plugin(
                plugin, plugin.register_user, request.username, password_hash, request.email,
            )
            self._attach_provider_errors(codes, errors, locale)
        else:
            self.validator.validate(request, errors, locale)

        if not errors.has_errors:
            return self.store_local_user(request, locale)
        return None

    def _attach_provider_errors(
        self, codes: list[str], errors: ValidationErrors, locale: str | None,
    ) -> None:
        for code in codes:
            if not code:
                continue
            error = self.translator.translate(code, locale)
            if error is not None:
                errors.add(error)
            else:
                logger.debug("Dropped provider error code", extra={"code": code})

    def store_local_user(self, request: RegistrationRequest, locale: str | None) -> User:
        """Persist a freshly registered user and send the activation mail.

        The caller is responsible for checking that the username is free.
        """
        user = request.create_user()
        user.language = by_locale(locale).code
        user.autosubscribe = DEFAULT_AUTOSUBSCRIBE
        user.avatar = self.avatars.get_default_image()
        user.activation_key = User.new_activation_key()

        # The identity provider may already have written the user to the shared store.
        common_user = self.repo.get_common_user_by_username(request.username)
        if common_user is not None:
            self.repo.delete(common_user.id)

        user.password_hash = self.hasher.hash(request.password or "")
        user.registered_at = datetime.now(timezone.utc)
        self.repo.save_or_update(user)
        self.mail.send_activation_mail(user)
        logger.info("User registered", extra={"username": user.username, "userId": user.id})
        return user
