"""STDIO transport for MCP server.

MCP clients launch the server as a subprocess and talk to it over
stdin/stdout, so nothing else may be written to stdout.
"""

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

SERVER_NAME = "storno-mcp"


async def run_stdio_server(server: Server, version: str) -> None:
    """Run MCP server over STDIO transport.

    Args:
        server: The MCP Server instance
        version: Server version string
    """
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=version,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
