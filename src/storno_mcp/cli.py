"""Command line interface for Storno MCP Server."""

import sys
from typing import Optional

import click

from . import __version__
from .server.main import run as run_server
from .testing import test_connection as run_test_connection


@click.group()
@click.version_option(version=__version__, prog_name="storno-mcp")
def cli():
    """Storno MCP Server - Storno.ro e-invoicing via Model Context Protocol."""
    pass


@cli.command()
@click.option("--url", help="Storno API base URL")
@click.option("--token", help="Storno access token or API key")
def test(url: Optional[str], token: Optional[str]):
    """Test the connection to the Storno API."""
    exit_code = run_test_connection(url=url, token=token)
    if exit_code != 0:
        sys.exit(exit_code)


@cli.command()
def serve():
    """Start the Storno MCP server on stdio."""
    # stdout belongs to the MCP protocol
    click.echo("🚀 Starting Storno MCP server on stdio", err=True)
    run_server()


@cli.command()
def version():
    """Show version information."""
    click.echo(f"Storno MCP Server v{__version__}")
    click.echo("Storno.ro e-invoicing via Model Context Protocol")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
