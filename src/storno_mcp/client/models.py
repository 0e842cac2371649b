"""Request descriptor and response envelope for the Storno API client.

Every call made through :class:`~storno_mcp.client.base.StornoClient`
returns exactly one of :class:`ApiSuccess` or :class:`ApiFailure`. Callers
branch on ``result.ok`` and never need to catch exceptions for HTTP,
transport or parse failures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

QueryValue = Union[str, int, float, bool, None]


class PayloadKind(Enum):
    """Shape of the ``data`` carried by a successful response."""

    JSON = "json"  # parsed JSON value
    TEXT = "text"  # decoded body text
    BINARY = "binary"  # BinaryPayload
    EMPTY = "empty"  # None (204 No Content)


@dataclass
class RequestOptions:
    """Everything needed to issue one request besides its path.

    When ``file_path`` is set the request is sent as multipart/form-data and
    ``body`` is ignored.
    """

    method: HttpMethod = "GET"
    query: Optional[Dict[str, QueryValue]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    company_id: Optional[str] = None
    no_auth: bool = False
    binary: bool = False
    file_path: Optional[str] = None
    file_field_name: str = "file"
    form_fields: Optional[Dict[str, QueryValue]] = None


@dataclass(frozen=True)
class BinaryPayload:
    """Binary response body, base64-encoded for text transport."""

    base64: str
    content_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"base64": self.base64, "contentType": self.content_type}


@dataclass(frozen=True)
class ApiSuccess:
    """2xx response. ``kind`` tells which shape ``data`` holds."""

    status: int
    data: Any
    kind: PayloadKind = PayloadKind.JSON

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ApiFailure:
    """Failed call.

    ``status`` is 0 when no HTTP response was received at all (connection
    error, DNS failure, unreadable upload file).
    """

    status: int
    error: str
    details: Any = None

    @property
    def ok(self) -> bool:
        return False


ApiResponse = Union[ApiSuccess, ApiFailure]
