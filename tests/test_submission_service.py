"""
Tests for the HTTP submission client against a fake document service.
No network access: every request goes through httpx.MockTransport.
"""
import asyncio
import json
import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from domain.errors import SubmissionError, SubmissionErrorKind  # noqa: E402
from services.submission_service import error_message_from_response, submit  # noqa: E402

ENDPOINT = "http://pi.test/api/generate-pdf"


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestErrorMessage(unittest.TestCase):

    def test_json_error_field(self):
        body = b'{"error": "pdf render failed", "message": "ignored"}'
        self.assertEqual(error_message_from_response(500, "application/json", body), "pdf render failed")

    def test_json_message_field(self):
        body = b'{"message": "template missing"}'
        self.assertEqual(
            error_message_from_response(404, "application/json; charset=utf-8", body),
            "template missing",
        )

    def test_json_without_fields(self):
        self.assertEqual(error_message_from_response(400, "application/json", b'{"ok": false}'), "Request failed (400)")
        self.assertEqual(error_message_from_response(400, "application/json", b'["x"]'), "Request failed (400)")

    def test_broken_json(self):
        self.assertEqual(error_message_from_response(502, "application/json", b"<html>"), "Request failed (502)")

    def test_plain_text(self):
        self.assertEqual(error_message_from_response(503, "text/plain", b"Service Unavailable"), "Service Unavailable")

    def test_invalid_utf8_replaced(self):
        self.assertEqual(
            error_message_from_response(500, "text/plain", b"bad \xff byte"),
            "bad \ufffd byte",
        )

    def test_empty_text(self):
        self.assertEqual(error_message_from_response(503, "", b""), "Request failed (503)")


class BrokenBody(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset")
        yield b""


class TestSubmit(unittest.IsolatedAsyncioTestCase):

    async def test_success_returns_document(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=b"%PDF-1.4 data", headers={"content-type": "application/pdf"})

        async with mock_client(handler) as client:
            result = await submit(ENDPOINT, {"poNumber": "PO1"}, 1000, client=client)

        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.content, b"%PDF-1.4 data")
        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["content_type"], "application/json")
        self.assertEqual(seen["body"], {"poNumber": "PO1"})

    async def test_success_without_content(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True})

        async with mock_client(handler) as client:
            result = await submit(ENDPOINT, {}, 1000, expect_content=False, client=client)

        self.assertEqual(result.status_code, 200)
        self.assertIsNone(result.content)

    async def test_service_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "pdf render failed"})

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError) as ctx:
                await submit(ENDPOINT, {}, 1000, client=client)

        self.assertEqual(ctx.exception.kind, SubmissionErrorKind.SERVICE)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, "pdf render failed")

    async def test_service_error_text_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad gateway")

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError) as ctx:
                await submit(ENDPOINT, {}, 1000, client=client)

        self.assertEqual(ctx.exception.message, "Bad gateway")

    async def test_service_error_unreadable_body(self):
        def handler(request):
            return httpx.Response(
                500,
                headers={"content-type": "application/json"},
                stream=BrokenBody(),
            )

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError) as ctx:
                await submit(ENDPOINT, {}, 1000, client=client)

        self.assertEqual(ctx.exception.kind, SubmissionErrorKind.SERVICE)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, "Request failed (500)")

    async def test_timeout(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, content=b"too late")

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError) as ctx:
                await submit(ENDPOINT, {}, 50, client=client)

        self.assertEqual(ctx.exception.kind, SubmissionErrorKind.TIMEOUT)
        self.assertTrue(ctx.exception.is_timeout)

    async def test_timeout_cancels_request(self):
        state = {"cancelled": False, "finished": False}

        async def handler(request):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise
            state["finished"] = True
            return httpx.Response(200)

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError):
                await submit(ENDPOINT, {}, 50, client=client)

        self.assertTrue(state["cancelled"])
        self.assertFalse(state["finished"])

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            with self.assertRaises(SubmissionError) as ctx:
                await submit(ENDPOINT, {}, 1000, client=client)

        self.assertEqual(ctx.exception.kind, SubmissionErrorKind.UNEXPECTED)
        self.assertEqual(ctx.exception.message, "connection refused")


if __name__ == "__main__":
    unittest.main()
