"""Storno MCP server module."""

from .handlers import dispatch_tool
from .main import main, server
from .responses import format_response
from .tools import TOOL_REGISTRY

__all__ = [
    "dispatch_tool",
    "format_response",
    "main",
    "server",
    "TOOL_REGISTRY",
]
