"""Response rendering for Storno MCP Server.

Turns executor results into the text payload returned to MCP clients,
and holds the guidance messages shown when a call cannot be made.
"""

import json
from typing import Any, Dict

from ..client.exceptions import StornoMCPError
from ..client.models import ApiResponse, BinaryPayload

NOT_AUTHENTICATED_MESSAGE = (
    "Error: Not authenticated.\n"
    "\n"
    "To authenticate, either:\n"
    "1. Set STORNO_TOKEN environment variable in MCP server config\n"
    "2. Call the auth_login tool with email and password\n"
    "3. Set STORNO_EMAIL and STORNO_PASSWORD env vars for auto-login"
)

NO_COMPANY_MESSAGE = (
    "Error: No company selected.\n"
    "\n"
    "To select a company, either:\n"
    "1. Set STORNO_COMPANY_ID environment variable in MCP server config\n"
    "2. Call the companies_list tool, then use the company UUID in subsequent calls\n"
    "3. Most tools accept an optional companyId parameter to override"
)


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_response(result: ApiResponse) -> str:
    """Render an executor result as tool output text.

    Args:
        result: ApiSuccess or ApiFailure from StornoClient

    Returns:
        ``Error <status>: <error>`` (plus pretty-printed details) for
        failures, pretty-printed JSON of the payload for successes

    Example:
        >>> format_response(ApiFailure(status=404, error="Not found"))
        'Error 404: Not found'
    """
    if not result.ok:
        text = f"Error {result.status}: {result.error}"
        if result.details is not None:
            text += f"\n\n{_dump(result.details)}"
        return text

    data = result.data
    if isinstance(data, BinaryPayload):
        data = data.to_dict()
    return _dump(data)


def success_message(**fields: Any) -> str:
    """Render a local (non-HTTP) success payload.

    Example:
        >>> success_message(message="Done")
        '{\\n  "success": true,\\n  "message": "Done"\\n}'
    """
    payload: Dict[str, Any] = {"success": True}
    payload.update(fields)
    return _dump(payload)


def error_message(error: StornoMCPError) -> str:
    """Render a dispatcher error (unknown tool, bad arguments)."""
    return f"Error: {error.message}"


def not_authenticated() -> str:
    return NOT_AUTHENTICATED_MESSAGE


def no_company_selected() -> str:
    return NO_COMPANY_MESSAGE
