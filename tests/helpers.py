"""Fake aiohttp responses for Storno MCP tests."""

import json
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

BASE_URL = "https://api.storno.test"


def make_response(
    status: int = 200,
    body: Any = None,
    content_type: Optional[str] = "application/json",
    raw: Optional[bytes] = None,
    text_error: Optional[Exception] = None,
) -> AsyncMock:
    """Build a fake aiohttp response.

    ``body`` is JSON-encoded unless it is already a string. ``raw`` sets the
    bytes returned by ``read()``.
    """
    response = AsyncMock()
    response.status = status
    response.headers = {"Content-Type": content_type} if content_type else {}

    if isinstance(body, str):
        text = body
    elif body is None:
        text = ""
    else:
        text = json.dumps(body)

    response.text.return_value = text
    if text_error is not None:
        response.text.side_effect = text_error
    response.read.return_value = raw if raw is not None else text.encode()
    return response


def as_context(response: AsyncMock) -> MagicMock:
    """Wrap a fake response in the async context manager ``request()`` returns."""
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def responses(*items: AsyncMock) -> list:
    """Side-effect list for consecutive ``request()`` calls."""
    return [as_context(item) for item in items]
