"""Tests for the transport gateway against a mocked HTTP transport: success payloads pass through untouched, and every failure comes back as a fallback payload instead of an exception."""

import json
import unittest

import httpx

from backend.gateway import JSON_HEADERS, TransportGateway, fallback_response
from backend.models import TurnRequest
from chat.constants import OFFLINE_END_SESSION_TEXT, UNREACHABLE_SERVICE_TEXT

ENDPOINT = "https://dialogue.example.test/dev"


def _turn(end_session: bool = False) -> TurnRequest:
    return TurnRequest(
        input_text="End Session" if end_session else "hello",
        session_id="session-1-abc",
        end_session=end_session,
        session_attributes={"be_limit": 5},
    )


def _raise(exc: Exception):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return handler


FAILURES = {
    "connect_error": _raise(httpx.ConnectError("connection refused")),
    "timeout": _raise(httpx.ReadTimeout("read timed out")),
    "server_error": lambda request: httpx.Response(500, json={"response": "should not be used"}),
    "not_found": lambda request: httpx.Response(404, text="missing"),
    "malformed_json": lambda request: httpx.Response(200, text="{not json"),
    "non_object_json": lambda request: httpx.Response(200, json=["a", "b"]),
}


class GatewayTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.clients = []

    async def asyncTearDown(self) -> None:
        for client in self.clients:
            await client.aclose()

    def _gateway(self, handler) -> TransportGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        self.clients.append(client)
        return TransportGateway(ENDPOINT, client=client)


class GatewaySuccessTests(GatewayTestCase):
    async def test_success_payload_is_returned_unchanged(self) -> None:
        captured = []
        payload = {"response": "<b>hi</b> there", "extra": {"nested": [1, 2]}}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=payload)

        result = await self._gateway(handler).send_turn(_turn())

        self.assertEqual(result, payload)
        request = captured[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), ENDPOINT)
        self.assertEqual(request.headers["content-type"], JSON_HEADERS["Content-Type"])
        self.assertEqual(request.headers["accept"], JSON_HEADERS["Accept"])
        self.assertEqual(
            json.loads(request.content),
            {
                "input_text": "hello",
                "session_id": "session-1-abc",
                "end_session": False,
                "session_attributes": {"be_limit": 5},
            },
        )

    async def test_one_attempt_per_turn(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        await self._gateway(handler).send_turn(_turn())

        self.assertEqual(len(calls), 1)


class GatewayFailureTests(GatewayTestCase):
    async def test_mid_session_failures_return_error_payload(self) -> None:
        for name, handler in FAILURES.items():
            with self.subTest(failure=name):
                with self.assertLogs("backend.gateway", level="ERROR"):
                    result = await self._gateway(handler).send_turn(_turn())

                self.assertTrue(result["error"])
                self.assertNotIn("session_ended", result)
                self.assertTrue(result["response"].startswith(UNREACHABLE_SERVICE_TEXT))
                self.assertIn("Error details:", result["response"])

    async def test_end_session_failures_return_offline_end(self) -> None:
        for name, handler in FAILURES.items():
            with self.subTest(failure=name):
                with self.assertLogs("backend.gateway", level="ERROR"):
                    result = await self._gateway(handler).send_turn(_turn(end_session=True))

                self.assertEqual(result, {"response": OFFLINE_END_SESSION_TEXT, "session_ended": True})

    async def test_status_failure_does_not_parse_body(self) -> None:
        gateway = self._gateway(FAILURES["server_error"])
        with self.assertLogs("backend.gateway", level="ERROR"):
            result = await gateway.send_turn(_turn())

        self.assertIn("API responded with status: 500", result["response"])
        self.assertNotIn("should not be used", result["response"])

    async def test_error_details_include_underlying_message(self) -> None:
        gateway = self._gateway(FAILURES["connect_error"])
        with self.assertLogs("backend.gateway", level="ERROR"):
            result = await gateway.send_turn(_turn())

        self.assertTrue(result["response"].endswith("Error details: connection refused"))


class FallbackResponseTests(unittest.TestCase):
    def test_empty_error_message_reports_unknown_error(self) -> None:
        result = fallback_response(False, RuntimeError())
        self.assertTrue(result["response"].endswith("Error details: Unknown error"))
        self.assertTrue(result["error"])

    def test_missing_error_reports_unknown_error(self) -> None:
        result = fallback_response(False)
        self.assertIn("Unknown error", result["response"])

    def test_end_session_fallback_ignores_error(self) -> None:
        result = fallback_response(True, ValueError("boom"))
        self.assertEqual(result, {"response": OFFLINE_END_SESSION_TEXT, "session_ended": True})


if __name__ == "__main__":
    unittest.main()
