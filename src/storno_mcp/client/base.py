"""Authenticated Storno API client.

This module provides the StornoClient class through which every outbound
call to the Storno REST API passes. It owns:

- Authorization header injection (Bearer JWT or raw ``af_`` API key)
- X-Company tenant header injection
- Query string, JSON body and multipart upload construction
- A single transparent token refresh and retry on HTTP 401
- Normalization of every outcome into ApiSuccess / ApiFailure
"""

import asyncio
import base64
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import aiohttp
from aiohttp import ClientResponse, ClientSession, ClientTimeout

from .models import (
    ApiFailure,
    ApiResponse,
    ApiSuccess,
    BinaryPayload,
    PayloadKind,
    QueryValue,
    RequestOptions,
)
from .session import SessionStore

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "af_"
COMPANY_HEADER = "X-Company"
LOGIN_PATH = "/api/auth"
REFRESH_PATH = "/api/auth/token/refresh"

# Bodies used when an error response cannot be read
UNREADABLE_BINARY_ERROR = "Unknown error"
UNREADABLE_TEXT_BODY = ""
JSON_PARSE_ERROR = "Failed to parse JSON response"


def authorization_value(token: str) -> str:
    """Return the Authorization header value for ``token``.

    API keys must be sent bare: the API's key authenticator skips any
    Bearer-prefixed value.
    """
    if token.startswith(API_KEY_PREFIX):
        return token
    return f"Bearer {token}"


def encode_value(value: QueryValue) -> str:
    """Stringify a query or form value; booleans become ``true``/``false``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(query: Optional[Mapping[str, QueryValue]]) -> Dict[str, str]:
    """Stringify query values, dropping ``None`` and empty strings."""
    return {
        key: encode_value(value)
        for key, value in (query or {}).items()
        if value is not None and value != ""
    }


def _is_ok(status: int) -> bool:
    return 200 <= status < 300


class StornoClient:
    """Client for the Storno.ro REST API.

    All public request methods return an ``ApiResponse`` and never raise for
    HTTP errors, network failures or malformed payloads.

    Usage:
        async with StornoClient(SessionStore()) as client:
            result = await client.request("/api/v1/companies")
            if result.ok:
                print(result.data)
    """

    def __init__(self, store: SessionStore, timeout: Optional[float] = None):
        """Initialize the Storno client.

        Args:
            store: Session store providing base URL, tokens and company id
            timeout: Total request timeout in seconds (defaults to config)
        """
        self.store = store
        self.http_session: Optional[ClientSession] = None
        self.timeout = ClientTimeout(
            total=timeout if timeout is not None else store.config.request_timeout
        )

    async def __aenter__(self) -> "StornoClient":
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close_session()

    async def start_session(self) -> None:
        """Start the HTTP session."""
        if not self.http_session:
            self.http_session = aiohttp.ClientSession(timeout=self.timeout)

    async def close_session(self) -> None:
        """Close the HTTP session."""
        if self.http_session:
            await self.http_session.close()
            self.http_session = None

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _mask_token(self) -> str:
        """Return a masked representation of the current token for logging."""
        token = self.store.get().token
        if not token:
            return "<not-set>"
        if len(token) <= 6:
            return "*" * len(token)
        return f"{token[:3]}***{token[-2:]}"

    def _build_url(self, path: str) -> str:
        """Build full API URL."""
        base = self.store.get().base_url.rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def _build_headers(self, options: RequestOptions) -> Dict[str, str]:
        """Caller headers overlaid with Authorization and X-Company."""
        session = self.store.get()
        headers = dict(options.headers)

        if not options.no_auth and session.token:
            headers["Authorization"] = authorization_value(session.token)

        company_id = options.company_id or session.company_id
        if company_id:
            headers[COMPANY_HEADER] = company_id

        return headers

    @staticmethod
    def _build_body(
        options: RequestOptions,
        upload: Optional[bytes],
        headers: Dict[str, str],
    ) -> Any:
        """Build a fresh request body; a FormData can only be sent once."""
        if options.file_path:
            form = aiohttp.FormData()
            form.add_field(
                options.file_field_name,
                upload or b"",
                filename=os.path.basename(options.file_path),
            )
            for key, value in (options.form_fields or {}).items():
                if value is not None:
                    form.add_field(key, encode_value(value))
            # Content-Type (with boundary) is filled in by aiohttp
            return form

        if options.body is not None:
            headers["Content-Type"] = "application/json"
            return json.dumps(options.body, separators=(",", ":"))

        return None

    def _should_refresh(self, status: int, options: RequestOptions, retried: bool) -> bool:
        return (
            status == 401
            and not options.no_auth
            and not retried
            and bool(self.store.get().refresh_token)
        )

    # =========================================================================
    # HTTP REQUEST HANDLING
    # =========================================================================

    async def request(self, path: str, **options: Any) -> ApiResponse:
        """Issue a request described by keyword ``RequestOptions`` fields."""
        return await self.execute(path, RequestOptions(**options))

    async def execute(self, path: str, options: Optional[RequestOptions] = None) -> ApiResponse:
        """Issue one API request, refreshing the token once on HTTP 401.

        Args:
            path: API path relative to the base URL (e.g. "/api/v1/invoices")
            options: Request descriptor (defaults to a plain GET)

        Returns:
            ApiSuccess or ApiFailure; never raises for API or network errors
        """
        options = options or RequestOptions()
        if not self.http_session:
            await self.start_session()

        upload: Optional[bytes] = None
        if options.file_path:
            try:
                upload = await asyncio.to_thread(Path(options.file_path).read_bytes)
            except OSError as e:
                logger.warning("Cannot read upload file %s: %s", options.file_path, e)
                return ApiFailure(status=0, error=f"File error: {e}")

        url = self._build_url(path)
        params = build_query(options.query)
        return await self._send(url, params, options, upload, retried=False)

    async def _send(
        self,
        url: str,
        params: Dict[str, str],
        options: RequestOptions,
        upload: Optional[bytes],
        retried: bool,
    ) -> ApiResponse:
        """Send the request; recurse at most once after a successful refresh."""
        method = options.method.upper()
        headers = self._build_headers(options)
        data = self._build_body(options, upload, headers)

        logger.debug(
            "%s %s params=%s company=%s token=%s retried=%s",
            method, url, params, headers.get(COMPANY_HEADER), self._mask_token(), retried,
        )

        try:
            async with self.http_session.request(
                method, url, params=params or None, headers=headers, data=data
            ) as response:
                if not self._should_refresh(response.status, options, retried):
                    return await self._parse_response(response, options.binary)
                # Buffer the 401 body so it can still be reported if refresh fails
                await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            prefix = "Network error after token refresh" if retried else "Network error"
            logger.warning("%s for %s %s: %s", prefix, method, url, e)
            return ApiFailure(status=0, error=f"{prefix}: {e}")
        except ValueError as e:
            # aiohttp rejects header values carrying CR/LF before sending
            logger.warning("Invalid request %s %s: %s", method, url, e)
            return ApiFailure(status=0, error=f"Invalid request: {e}")

        if await self.refresh_access_token():
            return await self._send(url, params, options, upload, retried=True)

        return await self._parse_response(response, options.binary)

    async def _parse_response(self, response: ClientResponse, binary: bool) -> ApiResponse:
        """Normalize a received response into ApiSuccess / ApiFailure."""
        status = response.status
        content_type = response.headers.get("Content-Type")

        if status == 204:
            return ApiSuccess(status=204, data=None, kind=PayloadKind.EMPTY)

        if binary:
            if not _is_ok(status):
                text = await self._read_text(response, UNREADABLE_BINARY_ERROR)
                return ApiFailure(status=status, error=text)
            body = await response.read()
            payload = BinaryPayload(
                base64=base64.b64encode(body).decode("ascii"),
                content_type=content_type,
            )
            return ApiSuccess(status=status, data=payload, kind=PayloadKind.BINARY)

        if "application/json" not in (content_type or "").lower():
            text = await self._read_text(response, UNREADABLE_TEXT_BODY)
            if not _is_ok(status):
                return ApiFailure(status=status, error=text or f"HTTP {status}")
            return ApiSuccess(status=status, data=text, kind=PayloadKind.TEXT)

        try:
            data = json.loads(await response.text())
        except (aiohttp.ClientError, ValueError):
            return ApiFailure(status=status, error=JSON_PARSE_ERROR)

        if not _is_ok(status):
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            return ApiFailure(
                status=status,
                error=str(message) if message else f"HTTP {status}",
                details=data,
            )

        return ApiSuccess(status=status, data=data, kind=PayloadKind.JSON)

    @staticmethod
    async def _read_text(response: ClientResponse, default: str) -> str:
        try:
            return await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError):
            return default

    # =========================================================================
    # AUTHENTICATION
    # =========================================================================

    async def refresh_access_token(self) -> bool:
        """Exchange the stored refresh token for a new token pair.

        Returns True when both tokens were rotated into the session. Any
        failure is logged and reported as False.
        """
        session = self.store.get()
        if not session.refresh_token:
            return False
        if not self.http_session:
            await self.start_session()

        url = self._build_url(REFRESH_PATH)
        try:
            async with self.http_session.request(
                "POST",
                url,
                headers={"Content-Type": "application/json"},
                data=json.dumps({"refresh_token": session.refresh_token}),
            ) as response:
                if not _is_ok(response.status):
                    logger.warning("Token refresh rejected with HTTP %s", response.status)
                    return False
                payload = json.loads(await response.text())
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Token refresh failed: %s", e)
            return False

        if not isinstance(payload, dict) or not payload.get("token"):
            logger.warning("Token refresh response did not contain a token")
            return False

        self.store.update(
            token=payload["token"],
            refresh_token=payload.get("refresh_token") or session.refresh_token,
        )
        logger.info("Access token refreshed")
        return True

    async def login(self, email: str, password: str) -> ApiResponse:
        """Authenticate with email and password and store the issued tokens."""
        result = await self.request(
            LOGIN_PATH,
            method="POST",
            body={"email": email, "password": password},
            no_auth=True,
        )
        if result.ok and isinstance(result.data, dict) and result.data.get("token"):
            self.store.update(
                token=result.data["token"],
                refresh_token=result.data.get("refresh_token"),
            )
            logger.info("Logged in as %s", email)
        return result
