"""Exceptions raised by the tool layer before any API call is made.

The HTTP client itself never raises for API, transport or parse failures;
those come back as :class:`~storno_mcp.client.models.ApiFailure` values.
These exceptions cover mistakes in the tool invocation itself.
"""

from typing import Any, Dict, List, Optional


class StornoMCPError(Exception):
    """Base exception for tool invocation errors.

    Attributes:
        message: Human-readable error description
        code: Error code (e.g., "UNKNOWN_TOOL", "INVALID_ARGUMENT")
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: str = "TOOL_EXECUTION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r})"


class UnknownToolError(StornoMCPError):
    """Raised when a tool name is not in the registry."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(
            message=f"Tool '{tool_name}' not found",
            code="UNKNOWN_TOOL",
            details={"tool_name": tool_name},
        )


class ToolArgumentError(StornoMCPError):
    """Raised when arguments needed to build the request are missing."""

    def __init__(self, tool_name: str, missing_fields: List[str]):
        self.tool_name = tool_name
        self.missing_fields = missing_fields
        super().__init__(
            message=f"Missing required argument(s) for {tool_name}: {', '.join(missing_fields)}",
            code="INVALID_ARGUMENT",
            details={"tool_name": tool_name, "missing_fields": missing_fields},
        )
