"""Unit tests for HttpAuthPlugin: request shape and status/error mapping."""

import json
import unittest

import httpx

from adapter.external.http_auth_plugin import HttpAuthPlugin
from domain.model.plugin import PluginCapability, PluginState
from port.auth_plugin import NoConnectionError, UnexpectedProviderError


def _plugin(handler) -> HttpAuthPlugin:
    return HttpAuthPlugin(
        base_url="https://idp.example.com/api/",
        name="idp",
        transport=httpx.MockTransport(handler),
    )


def _respond(status_code: int, body=None, text: str | None = None):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    return handler, requests


class TestAuthenticate(unittest.TestCase):

    def test_success_returns_attributes(self):
        handler, requests = _respond(200, {
            "username": "bob", "email": "bob@x.com", "firstName": "Bob", "lastName": None,
        })

        result = _plugin(handler).authenticate("bob", "hash")

        self.assertEqual(result, {"username": "bob", "email": "bob@x.com", "firstName": "Bob"})
        self.assertEqual(str(requests[0].url), "https://idp.example.com/api/authenticate")
        self.assertEqual(requests[0].method, "POST")
        self.assertEqual(json.loads(requests[0].content), {"username": "bob", "passwordHash": "hash"})

    def test_rejected_credentials_return_empty(self):
        for status_code in (401, 403, 404):
            with self.subTest(status_code=status_code):
                handler, _ = _respond(status_code, {"error": "denied"})
                self.assertEqual(_plugin(handler).authenticate("bob", "hash"), {})

    def test_server_error_is_unexpected(self):
        handler, _ = _respond(500, {"error": "boom"})

        with self.assertRaises(UnexpectedProviderError):
            _plugin(handler).authenticate("bob", "hash")

    def test_invalid_json_is_unexpected(self):
        handler, _ = _respond(200, text="<html>oops</html>")

        with self.assertRaises(UnexpectedProviderError):
            _plugin(handler).authenticate("bob", "hash")

    def test_non_object_body_is_unexpected(self):
        handler, _ = _respond(200, ["bob"])

        with self.assertRaises(UnexpectedProviderError):
            _plugin(handler).authenticate("bob", "hash")

    def test_connection_error_is_no_connection(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(NoConnectionError):
            _plugin(handler).authenticate("bob", "hash")

    def test_timeout_is_no_connection(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with self.assertRaises(NoConnectionError):
            _plugin(handler).authenticate("bob", "hash")


class TestRegisterUser(unittest.TestCase):

    def test_no_errors(self):
        handler, requests = _respond(200, [])

        self.assertEqual(_plugin(handler).register_user("bob", "hash", "bob@x.com"), [])
        self.assertEqual(
            json.loads(requests[0].content),
            {"username": "bob", "passwordHash": "hash", "email": "bob@x.com"},
        )
        self.assertEqual(str(requests[0].url), "https://idp.example.com/api/register")

    def test_no_content(self):
        handler, _ = _respond(204)

        self.assertEqual(_plugin(handler).register_user("bob", "hash", "bob@x.com"), [])

    def test_error_maps_use_first_key(self):
        handler, _ = _respond(400, [
            {"user.username.length_constraint_violation": "too short"},
            "user.email.wrong_format",
        ])

        codes = _plugin(handler).register_user("b", "hash", "nope")

        self.assertEqual(codes, ["user.username.length_constraint_violation", "user.email.wrong_format"])

    def test_errors_wrapped_in_object(self):
        handler, _ = _respond(422, {"errors": ["user.password.length_constraint_violation"]})

        self.assertEqual(
            _plugin(handler).register_user("bob", "", "bob@x.com"),
            ["user.password.length_constraint_violation"],
        )

    def test_unexpected_status(self):
        for status_code in (202, 409, 503):
            with self.subTest(status_code=status_code):
                handler, _ = _respond(status_code, [])
                with self.assertRaises(UnexpectedProviderError):
                    _plugin(handler).register_user("bob", "hash", "bob@x.com")

    def test_unexpected_body(self):
        handler, _ = _respond(200, "just a string")

        with self.assertRaises(UnexpectedProviderError):
            _plugin(handler).register_user("bob", "hash", "bob@x.com")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(NoConnectionError):
            _plugin(handler).register_user("bob", "hash", "bob@x.com")


class TestDescriptor(unittest.TestCase):

    def test_defaults(self):
        plugin = HttpAuthPlugin(base_url="https://idp.example.com")

        self.assertEqual(plugin.state, PluginState.ENABLED)
        self.assertIn(PluginCapability.AUTHENTICATION, plugin.capabilities)
        self.assertIn(PluginCapability.REGISTRATION, plugin.capabilities)


if __name__ == '__main__':
    unittest.main()
