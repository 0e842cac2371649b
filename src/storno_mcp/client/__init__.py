"""Storno API client package."""

from .base import StornoClient, authorization_value, build_query, encode_value
from .exceptions import StornoMCPError, ToolArgumentError, UnknownToolError
from .models import (
    ApiFailure,
    ApiResponse,
    ApiSuccess,
    BinaryPayload,
    PayloadKind,
    RequestOptions,
)
from .session import Session, SessionStore

__all__ = [
    "StornoClient",
    "authorization_value",
    "build_query",
    "encode_value",
    "StornoMCPError",
    "ToolArgumentError",
    "UnknownToolError",
    "ApiFailure",
    "ApiResponse",
    "ApiSuccess",
    "BinaryPayload",
    "PayloadKind",
    "RequestOptions",
    "Session",
    "SessionStore",
]
