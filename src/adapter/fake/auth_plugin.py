"""In-memory implementation of ExternalAuthPlugin for testing."""

from domain.model.plugin import PluginCapability, PluginState

ALL_CAPABILITIES = frozenset({PluginCapability.AUTHENTICATION, PluginCapability.REGISTRATION})


class FakeAuthPlugin:
    """Fake plugin that returns preconfigured responses and records its calls."""

    def __init__(
        self,
        name: str = "fake",
        auth_response: dict[str, str] | None = None,
        register_errors: list[str] | None = None,
        state: PluginState = PluginState.ENABLED,
        capabilities: frozenset[PluginCapability] = ALL_CAPABILITIES,
        error: Exception | None = None,
    ):
        self.name = name
        self.auth_response = auth_response or {}
        self.register_errors = register_errors or []
        self.state = state
        self.capabilities = capabilities
        self.error = error
        self.auth_calls: list[tuple[str, str]] = []
        self.register_calls: list[tuple[str, str, str]] = []

    def authenticate(self, username: str, password_hash: str) -> dict[str, str]:
        self.auth_calls.append((username, password_hash))
        if self.error:
            raise self.error
        return dict(self.auth_response)

    def register_user(self, username: str, password_hash: str, email: str) -> list[str]:
        self.register_calls.append((username, password_hash, email))
        if self.error:
            raise self.error
        return list(self.register_errors)
