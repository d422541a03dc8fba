"""HTTP identity provider adapter.

Implements ExternalAuthPlugin against a provider exposing two JSON endpoints:

    POST {base_url}/authenticate  {"username", "passwordHash"}
        200 -> {"username": ..., "email": ..., "firstName": ..., "lastName": ...}
        401 / 403 / 404 -> credentials rejected

    POST {base_url}/register  {"username", "passwordHash", "email"}
        200 / 201 / 400 / 422 -> list of errors, or {"errors": [...]}
        204 -> no errors

Each error is either a code string or a single-entry {code: message} map.
Every call opens its own client, so a slow provider only holds up the
request that is waiting for it.
"""

import logging
from typing import Any

import httpx

from domain.model.plugin import PluginCapability, PluginState
from port.auth_plugin import NoConnectionError, UnexpectedProviderError

logger = logging.getLogger(__name__)

API_TIMEOUT_SECONDS = 5.0

REJECTED_STATUSES = {401, 403, 404}
REGISTER_STATUSES = {200, 201, 400, 422}


class HttpAuthPlugin:
    """Adapter that authenticates and registers users on a remote provider."""

    capabilities = frozenset({PluginCapability.AUTHENTICATION, PluginCapability.REGISTRATION})

    def __init__(
        self,
        base_url: str,
        name: str = "http",
        state: PluginState = PluginState.ENABLED,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.name = name
        self.state = state
        self.timeout = timeout
        self._transport = transport

    def authenticate(self, username: str, password_hash: str) -> dict[str, str]:
        """Ask the provider to authenticate the user.

        Returns:
            The user's attributes, or an empty dict if the provider rejected
            the credentials.

        Raises:
            NoConnectionError: the provider could not be reached
            UnexpectedProviderError: unexpected status or malformed body
        """
        response = self._post("/authenticate", {"username": username, "passwordHash": password_hash})

        if response.status_code in REJECTED_STATUSES:
            logger.debug(
                "Provider rejected credentials",
                extra={"plugin": self.name, "username": username, "status_code": response.status_code},
            )
            return {}
        self._raise_for_status(response)

        data = self._json(response)
        if not isinstance(data, dict):
            raise UnexpectedProviderError(
                f"Unexpected authentication response type: {type(data).__name__}"
            )
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def register_user(self, username: str, password_hash: str, email: str) -> list[str]:
        """Register the user on the provider and return its validation error codes.

        Raises:
            NoConnectionError: the provider could not be reached
            UnexpectedProviderError: unexpected status or malformed body
        """
        response = self._post(
            "/register",
            {"username": username, "passwordHash": password_hash, "email": email},
        )
        if response.status_code == 204:
            return []
        if response.status_code not in REGISTER_STATUSES:
            self._raise_for_status(response)
            raise UnexpectedProviderError(f"Unexpected registration status: {response.status_code}")

        data = self._json(response)
        if isinstance(data, dict):
            data = data.get("errors", [])
        if not isinstance(data, list):
            raise UnexpectedProviderError(
                f"Unexpected registration response type: {type(data).__name__}"
            )
        codes = [_error_code(item) for item in data]
        logger.debug(
            "Provider registration finished",
            extra={"plugin": self.name, "username": username, "error_count": len(codes)},
        )
        return codes

    # ── HTTP helpers ─────────────────────────────────────────

    def _post(self, path: str, payload: dict[str, str]) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                return client.post(url, json=payload)
        except httpx.RequestError as e:
            logger.warning(
                "Identity provider request error",
                extra={"plugin": self.name, "url": url, "error_type": type(e).__name__},
            )
            raise NoConnectionError(f"Could not reach identity provider at {url}") from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Identity provider HTTP error",
                extra={"plugin": self.name, "status_code": response.status_code},
            )
            raise UnexpectedProviderError(
                f"Identity provider answered {response.status_code}"
            ) from e

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedProviderError("Identity provider returned invalid JSON") from e


def _error_code(item: Any) -> str:
    """Error code of a registration error entry: the string itself or the first map key."""
    if isinstance(item, dict):
        return str(next(iter(item), ""))
    return str(item)
