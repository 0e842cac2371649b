"""
Storno MCP Server Package

Model Context Protocol server exposing the Storno.ro e-invoicing API as tools.
"""

__version__ = "1.0.0"

from .client import SessionStore, StornoClient
from .config import Config

__all__ = [
    "Config",
    "SessionStore",
    "StornoClient",
]
