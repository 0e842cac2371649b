"""Tests for the CLI connection check."""

from unittest.mock import patch

import aiohttp
import pytest

from storno_mcp import testing

from helpers import make_response, responses


class TestConnectionCheck:

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_reachable_without_token(self, mock_request, capsys):
        """Health check passes without a token."""
        mock_request.side_effect = responses(make_response(200, {"status": "ok"}))

        assert await testing._run_test(url="https://api.storno.test/", token=None) == 0
        assert mock_request.call_args.args == ("GET", "https://api.storno.test/api/v1/system/health")
        assert "skipping authentication check" in capsys.readouterr().out

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_token_accepted(self, mock_request, capsys):
        """A valid token is confirmed via the profile endpoint."""
        mock_request.side_effect = responses(
            make_response(200, {"status": "ok"}),
            make_response(200, {"email": "ana@example.ro"}),
        )

        assert await testing._run_test(url=None, token="af_key") == 0
        assert mock_request.call_args.kwargs["headers"]["Authorization"] == "af_key"
        assert "Authenticated as ana@example.ro" in capsys.readouterr().out

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_token_rejected(self, mock_request):
        """A rejected token exits with 2."""
        mock_request.side_effect = responses(
            make_response(200, {"status": "ok"}),
            make_response(401, {"message": "Invalid API key"}),
        )

        assert await testing._run_test(url=None, token="af_bad") == 2

    @pytest.mark.asyncio
    @patch("aiohttp.ClientSession.request")
    async def test_unreachable(self, mock_request, capsys):
        """An unreachable API exits with 1."""
        mock_request.side_effect = aiohttp.ClientConnectionError("refused")

        assert await testing._run_test(url=None, token=None) == 1
        assert "Health check failed" in capsys.readouterr().err
