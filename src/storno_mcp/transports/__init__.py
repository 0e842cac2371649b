"""MCP transport implementations."""

from .stdio import SERVER_NAME, run_stdio_server

__all__ = ["SERVER_NAME", "run_stdio_server"]
