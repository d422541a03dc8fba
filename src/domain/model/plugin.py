from dataclasses import dataclass
from enum import Enum


class PluginState(str, Enum):
    """Lifecycle state of an external authentication plugin."""
    ENABLED = 'enabled'
    DISABLED = 'disabled'
    IN_ERROR = 'in_error'


class PluginCapability(str, Enum):
    """What a plugin can be asked to do."""
    AUTHENTICATION = 'authentication'
    REGISTRATION = 'registration'


@dataclass(frozen=True)
class PluginDescriptor:
    """Identity and state of a registered plugin."""
    name: str
    state: PluginState
    capabilities: frozenset[PluginCapability] = frozenset()

    @property
    def is_enabled(self) -> bool:
        """True unless switched off; a plugin in error is still enabled."""
        return self.state != PluginState.DISABLED


# Keys of the attribute map returned by a plugin after a successful authentication.
USERNAME_KEY = 'username'
EMAIL_KEY = 'email'
FIRST_NAME_KEY = 'firstName'
LAST_NAME_KEY = 'lastName'

REQUIRED_AUTH_KEYS = (USERNAME_KEY, EMAIL_KEY)
