"""Storno MCP Server.

This is the main entry point for the Storno MCP server. It exposes the
declarative tool registry over MCP and routes every call through one
process-wide StornoClient, so tokens obtained by login or refresh are
shared by all later calls.
"""

import asyncio
import logging
import sys
from typing import List, Optional

from mcp.server import Server
from mcp.types import TextContent, Tool

from .. import __version__
from ..client import SessionStore, StornoClient, StornoMCPError
from ..config import Config
from ..transports.stdio import SERVER_NAME, run_stdio_server
from .handlers import dispatch_tool
from .responses import error_message
from .tools import TOOL_REGISTRY

logger = logging.getLogger(__name__)

# Server version
VERSION = __version__

# Create MCP server instance
server = Server(SERVER_NAME)

_client: Optional[StornoClient] = None


def get_client() -> StornoClient:
    """Return the process-wide client, creating it from the environment."""
    global _client
    if _client is None:
        _client = StornoClient(SessionStore())
    return _client


def set_client(client: Optional[StornoClient]) -> None:
    """Install the process-wide client (``None`` resets it)."""
    global _client
    _client = client


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

@server.list_tools()
async def handle_list_tools() -> List[Tool]:
    """List all available tools from the registry."""
    return [
        Tool(
            name=name,
            description=definition["description"],
            inputSchema=definition["schema"],
        )
        for name, definition in TOOL_REGISTRY.items()
    ]


# =============================================================================
# TOOL HANDLERS
# =============================================================================

@server.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> List[TextContent]:
    """Handle tool calls with dynamic dispatch.

    API failures and missing session state come back as ordinary text.
    Anything unexpected is logged and re-raised so the MCP layer flags the
    result as an error.
    """
    try:
        text = await dispatch_tool(get_client(), name, arguments or {})
    except StornoMCPError as e:
        logger.warning("Tool %s rejected: %s", name, e)
        text = error_message(e)
    except Exception as e:
        logger.exception("Tool %s failed", name)
        raise RuntimeError(f"Unexpected error: {e}") from e

    return [TextContent(type="text", text=text)]


# =============================================================================
# SERVER STARTUP
# =============================================================================

def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


async def auto_login(client: StornoClient) -> bool:
    """Log in once with configured credentials when no token is set.

    Returns:
        True if a token was obtained
    """
    config = client.store.config
    if client.store.get().token or not config.has_credentials:
        return False

    result = await client.login(config.email, config.password)
    if result.ok and client.store.get().token:
        print(f"✅ Logged in as {config.email}", file=sys.stderr)
        return True

    print(f"⚠️ Auto-login failed: {getattr(result, 'error', 'no token returned')}", file=sys.stderr)
    return False


async def main(config: Optional[Config] = None) -> None:
    """Run the Storno MCP server."""
    config = config or Config()
    configure_logging(config.log_level)

    client = StornoClient(SessionStore(config))
    set_client(client)

    try:
        await auto_login(client)

        if not client.store.get().token:
            print("⚠️ No token configured; call auth_login to authenticate", file=sys.stderr)

        print(f"🚀 Storno MCP server v{VERSION} ready ({config.base_url})", file=sys.stderr)
        print(f"📋 {len(TOOL_REGISTRY)} tools available", file=sys.stderr)

        await run_stdio_server(server, VERSION)
    finally:
        await client.close_session()
        set_client(None)


def run() -> None:
    """Entry point for the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Server stopped", file=sys.stderr)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
