"""Base schema helpers for Storno MCP tools.

These helpers reduce code duplication when defining tool input schemas.
"""

from typing import Any, Dict, List, Optional

COMPANY_ID_PROPERTY: Dict[str, Any] = {
    "type": "string",
    "description": "Company UUID override (uses active company if not set)",
}


def object_schema(
    properties: Dict[str, Dict[str, Any]],
    required: Optional[List[str]] = None,
    company: bool = False,
) -> Dict[str, Any]:
    """Wrap property definitions into an object schema.

    Args:
        properties: JSON Schema properties keyed by parameter name
        required: Names of required parameters
        company: Add the optional ``companyId`` override parameter

    Returns:
        JSON Schema for the tool input
    """
    props = dict(properties)
    if company:
        props["companyId"] = dict(COMPANY_ID_PROPERTY)

    schema: Dict[str, Any] = {
        "type": "object",
        "properties": props,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = list(required)
    return schema


def empty_schema(company: bool = False) -> Dict[str, Any]:
    """Generate a schema for tools that take no parameters.

    Example:
        >>> empty_schema()
        {"type": "object", "properties": {}, "additionalProperties": False}
    """
    return object_schema({}, company=company)


def uuid_schema(
    name: str = "uuid",
    description: str = "Resource UUID",
    company: bool = False,
) -> Dict[str, Any]:
    """Generate a schema for single-resource operations.

    Example:
        >>> uuid_schema(description="Invoice UUID", company=True)
        {
            "type": "object",
            "properties": {
                "uuid": {"type": "string", "description": "Invoice UUID"},
                "companyId": {"type": "string", "description": "Company UUID override ..."}
            },
            "required": ["uuid"],
            "additionalProperties": False
        }
    """
    return object_schema(
        {name: {"type": "string", "description": description}},
        required=[name],
        company=company,
    )


def list_schema(
    max_limit: int = 100,
    default_limit: int = 20,
    extra: Optional[Dict[str, Dict[str, Any]]] = None,
    company: bool = True,
) -> Dict[str, Any]:
    """Generate a schema for paginated list operations.

    Args:
        max_limit: Maximum page size accepted by the API
        default_limit: Page size the API uses when none is given
        extra: Additional filter properties
        company: Add the optional ``companyId`` override parameter

    Returns:
        JSON Schema for list operation parameters
    """
    props: Dict[str, Any] = {
        "page": {"type": "integer", "description": "Page number (default: 1)"},
        "limit": {
            "type": "integer",
            "description": f"Items per page, max {max_limit} (default: {default_limit})",
        },
        "search": {"type": "string", "description": "Search term"},
    }
    if extra:
        props.update(extra)
    return object_schema(props, company=company)


def enum_property(values: List[str], description: str) -> Dict[str, Any]:
    """String property restricted to ``values``."""
    return {"type": "string", "enum": list(values), "description": description}


def file_property(description: str) -> Dict[str, Any]:
    """Absolute path of a local file to upload."""
    return {"type": "string", "description": description}
