"""Tool dispatch handlers for Storno MCP Server.

This module implements the dynamic dispatcher that turns a tool call into
one StornoClient request using the TOOL_REGISTRY, plus the few special
handlers for tools that change the session instead of (or besides)
calling an endpoint.
"""

import logging
import string
from typing import Any, Awaitable, Callable, Dict, List, Set, Tuple
from urllib.parse import quote

from ..client import StornoClient, ToolArgumentError, UnknownToolError
from ..client.base import REFRESH_PATH
from ..client.models import RequestOptions
from .responses import (
    format_response,
    no_company_selected,
    not_authenticated,
    success_message,
)
from .tools import TOOL_REGISTRY

logger = logging.getLogger(__name__)

COMPANY_ARG = "companyId"

NO_REFRESH_TOKEN_MESSAGE = (
    "Error: No refresh token available. Please login first using auth_login."
)

SpecialHandler = Callable[[StornoClient, Dict[str, Any]], Awaitable[str]]


def _token_preview(token: str) -> str:
    return f"{token[:20]}..."


def _fill_path(name: str, template: str, args: Dict[str, Any]) -> Tuple[str, Set[str]]:
    """Substitute ``{param}`` placeholders with URL-quoted argument values.

    Returns:
        The concrete path and the set of argument names it consumed

    Raises:
        ToolArgumentError: If a placeholder has no (non-empty) argument
    """
    names = [field for _, field, _, _ in string.Formatter().parse(template) if field]
    missing = [n for n in names if args.get(n) in (None, "")]
    if missing:
        raise ToolArgumentError(name, missing)

    values = {n: quote(str(args[n]), safe="") for n in names}
    return template.format(**values), set(names)


def _pick(args: Dict[str, Any], names: List[str]) -> Dict[str, Any]:
    return {n: args[n] for n in names if n in args}


# =============================================================================
# SPECIAL HANDLERS
# =============================================================================

async def _handle_login(client: StornoClient, args: Dict[str, Any]) -> str:
    missing = [n for n in ("email", "password") if not args.get(n)]
    if missing:
        raise ToolArgumentError("auth_login", missing)

    result = await client.login(args["email"], args["password"])
    if not result.ok:
        return format_response(result)

    token = result.data.get("token") if isinstance(result.data, dict) else None
    if not token:
        # 2xx without a token in the payload; show what the API sent
        return format_response(result)

    return success_message(
        message="Logged in successfully. Token stored in session.",
        tokenPreview=_token_preview(token),
    )


async def _handle_refresh(client: StornoClient, args: Dict[str, Any]) -> str:
    refresh_token = args.get("refreshToken") or client.store.get().refresh_token
    if not refresh_token:
        return NO_REFRESH_TOKEN_MESSAGE

    result = await client.request(
        REFRESH_PATH,
        method="POST",
        body={"refresh_token": refresh_token},
        no_auth=True,
    )
    if not result.ok:
        return format_response(result)

    data = result.data if isinstance(result.data, dict) else {}
    token = data.get("token")
    if not token:
        return format_response(result)

    client.store.update(
        token=token,
        refresh_token=data.get("refresh_token") or refresh_token,
    )
    logger.info("Access token refreshed on request")
    return success_message(
        message="Token refreshed successfully. New tokens stored in session.",
        tokenPreview=_token_preview(token),
    )


async def _handle_select_company(client: StornoClient, args: Dict[str, Any]) -> str:
    company_id = args.get(COMPANY_ARG)
    if not company_id:
        raise ToolArgumentError("companies_select", [COMPANY_ARG])

    client.store.update(company_id=company_id)
    return success_message(
        message=f"Active company set to: {company_id}",
        companyId=company_id,
    )


SPECIAL_HANDLERS: Dict[str, SpecialHandler] = {
    "login": _handle_login,
    "refresh": _handle_refresh,
    "select_company": _handle_select_company,
}


# =============================================================================
# DISPATCHER
# =============================================================================

def build_request(
    name: str,
    tool_def: Dict[str, Any],
    args: Dict[str, Any],
    company_id: Any = None,
) -> Tuple[str, RequestOptions]:
    """Translate a registry entry plus arguments into path and request options.

    Args:
        name: Tool name (used in error messages)
        tool_def: Tool definition from TOOL_REGISTRY
        args: Tool arguments, with ``companyId`` already removed for
            company-scoped tools
        company_id: Company override for the X-Company header

    Returns:
        Tuple of the concrete API path and its RequestOptions
    """
    path, consumed = _fill_path(name, tool_def["path"], args)

    query_names = tool_def.get("query", [])
    options = RequestOptions(
        method=tool_def.get("method", "GET"),
        company_id=company_id,
        no_auth=tool_def.get("public", False),
        binary=tool_def.get("binary", False),
    )
    if query_names:
        options.query = _pick(args, query_names)

    upload = tool_def.get("upload")
    if upload:
        file_path = args.get(upload["param"])
        if not file_path:
            raise ToolArgumentError(name, [upload["param"]])
        options.file_path = file_path
        options.file_field_name = upload.get("field", "file")
        options.form_fields = _pick(args, upload.get("form", []))
        return path, options

    body = tool_def.get("body")
    if body == "*":
        skip = consumed | set(query_names) | {COMPANY_ARG}
        options.body = {k: v for k, v in args.items() if k not in skip}
    elif body:
        options.body = _pick(args, body)

    return path, options


async def dispatch_tool(
    client: StornoClient,
    name: str,
    args: Dict[str, Any]
) -> str:
    """Dispatch a tool call and return its text output.

    Authentication and company checks happen before any HTTP call and
    return guidance text instead of raising.

    Args:
        client: StornoClient instance
        name: Tool name
        args: Tool arguments

    Returns:
        Rendered tool output

    Raises:
        UnknownToolError: If the tool is not registered
        ToolArgumentError: If a path parameter or upload file is missing
    """
    tool_def = TOOL_REGISTRY.get(name)
    if not tool_def:
        raise UnknownToolError(name)

    args = dict(args or {})

    handler = tool_def.get("handler")
    if handler:
        return await SPECIAL_HANDLERS[handler](client, args)

    session = client.store.get()
    if tool_def.get("auth", True) and not tool_def.get("public") and not session.token:
        return not_authenticated()

    company_id = None
    if tool_def.get("company"):
        company_id = args.pop(COMPANY_ARG, None) or session.company_id
        if not company_id:
            return no_company_selected()

    path, options = build_request(name, tool_def, args, company_id)
    result = await client.execute(path, options)
    return format_response(result)
