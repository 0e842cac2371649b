"""Tests for response normalization in StornoClient."""

import base64
from unittest.mock import patch

import aiohttp
import pytest

from storno_mcp.client import ApiFailure, ApiSuccess, BinaryPayload, PayloadKind

from helpers import make_response, responses


class TestResponseParsing:

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_json_success(self, mock_request, client):
        """JSON responses are parsed."""
        mock_request.side_effect = responses(make_response(200, {"data": [{"uuid": "i-1"}], "total": 1}))

        result = await client.request("/api/v1/invoices")

        assert result == ApiSuccess(status=200, data={"data": [{"uuid": "i-1"}], "total": 1})
        assert result.kind is PayloadKind.JSON

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_content_type_match_is_case_insensitive(self, mock_request, client):
        """Content-Type matching ignores case and parameters."""
        mock_request.side_effect = responses(
            make_response(200, {"ok": True}, content_type="Application/JSON; charset=utf-8")
        )

        result = await client.request("/api/v1/version")

        assert result.data == {"ok": True}

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_no_content(self, mock_request, client):
        """204 gives an empty success."""
        mock_request.side_effect = responses(make_response(204, content_type=None))

        result = await client.request("/api/v1/invoices/i-1", method="DELETE")

        assert result == ApiSuccess(status=204, data=None, kind=PayloadKind.EMPTY)

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_no_content_wins_over_binary(self, mock_request, client):
        """204 is empty even for binary requests."""
        mock_request.side_effect = responses(make_response(204, content_type="application/pdf"))

        result = await client.request("/api/v1/invoices/i-1/pdf", binary=True)

        assert result.kind is PayloadKind.EMPTY
        assert result.data is None

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_binary_success(self, mock_request, client):
        """Binary bodies come back base64-encoded with their content type."""
        pdf = b"%PDF-1.7\x00\xff"
        mock_request.side_effect = responses(
            make_response(200, content_type="application/pdf", raw=pdf)
        )

        result = await client.request("/api/v1/invoices/i-1/pdf", binary=True)

        assert result.kind is PayloadKind.BINARY
        assert result.data == BinaryPayload(
            base64=base64.b64encode(pdf).decode("ascii"),
            content_type="application/pdf",
        )
        assert result.data.to_dict()["contentType"] == "application/pdf"

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_binary_without_content_type(self, mock_request, client):
        """A missing content type is kept as None."""
        mock_request.side_effect = responses(make_response(200, content_type=None, raw=b"a,b"))

        result = await client.request("/api/v1/clients/export/csv", binary=True)

        assert result.data.content_type is None
        assert result.data.base64 == "YSxi"

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_binary_error_uses_body_text(self, mock_request, client):
        """Binary errors report the body text."""
        mock_request.side_effect = responses(
            make_response(404, '{"message": "Invoice not found"}')
        )

        result = await client.request("/api/v1/invoices/i-9/pdf", binary=True)

        assert result == ApiFailure(status=404, error='{"message": "Invoice not found"}')

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_binary_error_unreadable_body(self, mock_request, client):
        """An unreadable binary error body falls back to "Unknown error"."""
        mock_request.side_effect = responses(
            make_response(500, content_type=None, text_error=aiohttp.ClientPayloadError("cut"))
        )

        result = await client.request("/api/v1/invoices/i-9/pdf", binary=True)

        assert result == ApiFailure(status=500, error="Unknown error")

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_text_success(self, mock_request, client):
        """Non-JSON bodies come back as text."""
        xml = "<Invoice>...</Invoice>"
        mock_request.side_effect = responses(make_response(200, xml, content_type="application/xml"))

        result = await client.request("/api/v1/invoices/i-1/xml")

        assert result == ApiSuccess(status=200, data=xml, kind=PayloadKind.TEXT)

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_text_success_unreadable_body(self, mock_request, client):
        """An unreadable 2xx text body falls back to an empty string."""
        mock_request.side_effect = responses(
            make_response(200, content_type="text/plain", text_error=aiohttp.ClientPayloadError("cut"))
        )

        result = await client.request("/api/v1/clients/export/saga-xml")

        assert result == ApiSuccess(status=200, data="", kind=PayloadKind.TEXT)

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_text_error(self, mock_request, client):
        """Text errors report the body, or the status when empty."""
        mock_request.side_effect = responses(
            make_response(502, "Bad Gateway", content_type="text/html"),
            make_response(503, "", content_type="text/plain"),
        )

        first = await client.request("/api/v1/me")
        second = await client.request("/api/v1/me")

        assert first == ApiFailure(status=502, error="Bad Gateway")
        assert second == ApiFailure(status=503, error="HTTP 503")

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_json_error_message(self, mock_request, client):
        """JSON errors use the message field and keep the body as details."""
        body = {"message": "Validation failed", "errors": {"lines": "required"}}
        mock_request.side_effect = responses(make_response(422, body))

        result = await client.request("/api/v1/invoices", method="POST", body={})

        assert result == ApiFailure(status=422, error="Validation failed", details=body)

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_json_error_falls_back_to_error_key_then_status(self, mock_request, client):
        """Without a message, the error key or the status is used."""
        mock_request.side_effect = responses(
            make_response(403, {"error": "Forbidden"}),
            make_response(409, {"code": 409}),
            make_response(400, ["bad"]),
        )

        assert (await client.request("/a")).error == "Forbidden"
        assert (await client.request("/b")).error == "HTTP 409"
        third = await client.request("/c")
        assert third.error == "HTTP 400"
        assert third.details == ["bad"]

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_invalid_json(self, mock_request, client):
        """Malformed JSON is a failure even on 200."""
        mock_request.side_effect = responses(make_response(200, "{not json"))

        result = await client.request("/api/v1/me")

        assert result == ApiFailure(status=200, error="Failed to parse JSON response")
