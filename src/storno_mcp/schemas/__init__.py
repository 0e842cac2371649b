"""Schema definitions for Storno MCP tools."""

from .base import (
    empty_schema,
    enum_property,
    file_property,
    list_schema,
    object_schema,
    uuid_schema,
)
from .entities import (
    CLIENT_CREATE_SCHEMA,
    INVOICE_CREATE_SCHEMA,
    INVOICE_LINE_SCHEMA,
)

__all__ = [
    # Schema helpers
    "empty_schema",
    "enum_property",
    "file_property",
    "list_schema",
    "object_schema",
    "uuid_schema",
    # Entity schemas
    "CLIENT_CREATE_SCHEMA",
    "INVOICE_CREATE_SCHEMA",
    "INVOICE_LINE_SCHEMA",
]
