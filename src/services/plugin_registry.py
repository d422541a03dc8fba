"""Registry of external authentication plugins.

Plugins are kept in registration order. A lookup by capability returns the
first registered plugin that declares the capability and is not disabled, so
at most one plugin takes part in any single authentication or registration.

IN_ERROR marks an enabled plugin whose last call failed. It stays eligible,
so the next request retries it and a successful call clears the mark.
"""

import logging

from domain.model.plugin import PluginCapability, PluginDescriptor, PluginState
from port.auth_plugin import ExternalAuthPlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Ordered list of registered plugins with capability lookup."""

    def __init__(self, plugins: list[ExternalAuthPlugin] | None = None):
        self._plugins: list[ExternalAuthPlugin] = []
        for plugin in plugins or []:
            self.register(plugin)

    def register(self, plugin: ExternalAuthPlugin) -> None:
        if any(p.name == plugin.name for p in self._plugins):
            raise ValueError(f"Plugin already registered: {plugin.name}")
        self._plugins.append(plugin)
        logger.info(
            "Auth plugin registered",
            extra={"plugin": plugin.name, "state": plugin.state.value},
        )

    def find(self, capability: PluginCapability) -> ExternalAuthPlugin | None:
        """Return the first enabled plugin with the given capability, or None."""
        for plugin in self._plugins:
            if capability in plugin.capabilities and plugin.state != PluginState.DISABLED:
                return plugin
        return None

    def set_state(self, name: str, state: PluginState) -> None:
        for plugin in self._plugins:
            if plugin.name == name:
                plugin.state = state
                logger.info("Auth plugin state changed", extra={"plugin": name, "state": state.value})
                return
        raise KeyError(f"Plugin not registered: {name}")

    def descriptors(self) -> list[PluginDescriptor]:
        return [
            PluginDescriptor(name=p.name, state=p.state, capabilities=frozenset(p.capabilities))
            for p in self._plugins
        ]
