"""Tool registry and definitions for Storno MCP Server.

This module implements a declarative tool registry: each API operation is
described by data, and a single dispatcher turns the definition plus the
tool arguments into one StornoClient request.

Each tool definition includes:
- description: AI-oriented description of what the tool does
- schema: JSON Schema for input parameters
- path: API path template; ``{name}`` placeholders are filled from arguments
- method: HTTP method (default GET)
- auth: Require an access token before calling (default True)
- public: Send no Authorization header and skip the token check
- company: Company-scoped; sends X-Company and requires a company (default False)
- query: Argument names sent as query parameters
- body: Argument names sent as the JSON body, or "*" for every remaining argument
- binary: Return the response as base64 + content type
- upload: {"param": argument holding the file path, "field": multipart field
  name, "form": argument names sent as extra form fields}
- handler: Name of a special handler for tools that change the session
"""

from typing import Any, Dict

from ..schemas.base import (
    empty_schema,
    enum_property,
    file_property,
    list_schema,
    object_schema,
    uuid_schema,
)
from ..schemas.entities import CLIENT_CREATE_SCHEMA, INVOICE_CREATE_SCHEMA

INVOICE_STATUSES = ["draft", "issued", "sent_to_provider", "validated", "rejected", "cancelled"]

IMPORT_TYPES = ["clients", "products", "invoices_issued", "invoices_received", "recurring_invoices"]

IMPORT_SOURCES = [
    "smartbill", "saga", "oblio", "fgo", "facturis_online", "easybill", "ciel",
    "factureaza", "facturare_pro", "icefact", "bolt", "facturis", "emag", "generic",
]


# =============================================================================
# TOOL REGISTRY
# =============================================================================

TOOL_REGISTRY: Dict[str, Dict[str, Any]] = {
    # =========================================================================
    # AUTH TOOLS
    # =========================================================================
    "auth_login": {
        "handler": "login",
        "auth": False,
        "description": "Authenticate with the Storno.ro API using email and password. Stores the returned JWT access and refresh tokens in the session for all subsequent requests. Call this first if no token is configured.",
        "schema": object_schema(
            {
                "email": {"type": "string", "description": "User email address"},
                "password": {"type": "string", "description": "User password"},
            },
            required=["email", "password"],
        ),
    },
    "auth_register": {
        "path": "/api/auth/register",
        "method": "POST",
        "public": True,
        "body": ["email", "password", "firstName", "lastName"],
        "description": "Create a new Storno.ro user account. A default organization is created automatically. Returns JWT tokens on success.",
        "schema": object_schema(
            {
                "email": {"type": "string", "description": "Email address for the new account (must be unique)"},
                "password": {"type": "string", "minLength": 8, "description": "Password (minimum 8 characters)"},
                "firstName": {"type": "string", "description": "User's first name"},
                "lastName": {"type": "string", "description": "User's last name"},
            },
            required=["email", "password"],
        ),
    },
    "auth_refresh": {
        "handler": "refresh",
        "auth": False,
        "description": "Refresh an expired JWT access token using the refresh token. Both tokens are rotated and stored in the session.",
        "schema": object_schema(
            {
                "refreshToken": {
                    "type": "string",
                    "description": "Refresh token to use. If omitted, uses the token stored in the session (STORNO_REFRESH_TOKEN).",
                },
            },
        ),
    },
    "auth_me": {
        "path": "/api/v1/me",
        "description": "Get the current authenticated user profile including organization memberships and subscription plan.",
        "schema": empty_schema(),
    },
    "auth_update_profile": {
        "path": "/api/v1/me",
        "method": "PATCH",
        "body": ["firstName", "lastName", "phone", "timezone", "preferences", "password", "currentPassword"],
        "description": "Update the authenticated user's profile: name, phone, timezone, preferences, or password (changing the password requires currentPassword).",
        "schema": object_schema(
            {
                "firstName": {"type": "string", "description": "User's first name"},
                "lastName": {"type": "string", "description": "User's last name"},
                "phone": {"type": "string", "description": "Phone number (E.164 format recommended)"},
                "timezone": {"type": "string", "description": "IANA timezone (e.g., Europe/Bucharest)"},
                "preferences": {"type": "object", "description": "User preferences (language, theme, notifications, ...)"},
                "password": {"type": "string", "description": "New password (requires currentPassword)"},
                "currentPassword": {"type": "string", "description": "Current password"},
            },
        ),
    },
    "auth_forgot_password": {
        "path": "/api/auth/forgot-password",
        "method": "POST",
        "public": True,
        "body": ["email"],
        "description": "Request a password reset email. Always succeeds to prevent user enumeration; the link is valid for 1 hour.",
        "schema": object_schema(
            {"email": {"type": "string", "description": "Email address associated with the account"}},
            required=["email"],
        ),
    },
    "auth_reset_password": {
        "path": "/api/auth/reset-password",
        "method": "POST",
        "public": True,
        "body": ["token", "password"],
        "description": "Reset a password with the single-use token received by email from auth_forgot_password. All existing sessions are revoked.",
        "schema": object_schema(
            {
                "token": {"type": "string", "description": "Password reset token from the email link"},
                "password": {"type": "string", "minLength": 8, "description": "New password (minimum 8 characters)"},
            },
            required=["token", "password"],
        ),
    },

    # =========================================================================
    # COMPANY TOOLS
    # =========================================================================
    "companies_list": {
        "path": "/api/v1/companies",
        "description": "List all companies of the authenticated user's organization, with CIF, addresses, bank info and ANAF token status. Use it to find company UUIDs for companies_select.",
        "schema": empty_schema(),
    },
    "companies_get": {
        "path": "/api/v1/companies/{uuid}",
        "description": "Get detailed information for a company by UUID, including settings, bank info and ANAF token validity.",
        "schema": uuid_schema(description="Company UUID"),
    },
    "companies_create": {
        "path": "/api/v1/companies",
        "method": "POST",
        "body": ["cif"],
        "description": "Create a company from its CIF. The CIF is validated with ANAF and the official registration data is filled in automatically.",
        "schema": object_schema(
            {"cif": {"type": "string", "description": "Romanian CIF (e.g., \"12345678\" or \"RO12345678\")"}},
            required=["cif"],
        ),
    },
    "companies_delete": {
        "path": "/api/v1/companies/{uuid}",
        "method": "DELETE",
        "description": "Delete a company and all its data. This action is irreversible.",
        "schema": uuid_schema(description="Company UUID to delete"),
    },
    "companies_upload_logo": {
        "path": "/api/v1/companies/{uuid}/logo",
        "method": "POST",
        "upload": {"param": "filePath", "field": "logo"},
        "description": "Upload a logo image (PNG, JPG or SVG, up to 2MB) shown on PDF documents.",
        "schema": object_schema(
            {
                "uuid": {"type": "string", "description": "Company UUID"},
                "filePath": file_property("Absolute path to the logo image file (PNG, JPG, or SVG)"),
            },
            required=["uuid", "filePath"],
        ),
    },
    "companies_delete_logo": {
        "path": "/api/v1/companies/{uuid}/logo",
        "method": "DELETE",
        "description": "Remove the logo from a company.",
        "schema": uuid_schema(description="Company UUID"),
    },
    "companies_set_active": {
        "path": "/api/v1/companies/{companyId}/set-active",
        "method": "PUT",
        "description": "Set the organization-level active company on the server. Returns the updated company list. Requires COMPANY_EDIT permission.",
        "schema": object_schema(
            {"companyId": {"type": "string", "description": "Company UUID to mark as active for the organization"}},
            required=["companyId"],
        ),
    },
    "companies_select": {
        "handler": "select_company",
        "auth": False,
        "description": "Select the active company for this session. Sets the X-Company header used by all subsequent company-scoped requests. Call companies_list first to find company UUIDs.",
        "schema": object_schema(
            {"companyId": {"type": "string", "description": "Company UUID to use for subsequent calls"}},
            required=["companyId"],
        ),
    },

    # =========================================================================
    # INVOICE TOOLS
    # =========================================================================
    "invoices_list": {
        "path": "/api/v1/invoices",
        "company": True,
        "query": ["page", "limit", "search", "status", "direction", "from", "to", "clientId", "sort", "order"],
        "description": "List invoices for the active company with pagination, filtering (status, direction, date range, client, search) and sorting. Returns paginated results with totals.",
        "schema": list_schema(
            extra={
                "status": enum_property(INVOICE_STATUSES, "Filter by invoice status"),
                "direction": enum_property(["incoming", "outgoing"], "Filter by direction"),
                "from": {"type": "string", "description": "Start date (YYYY-MM-DD)"},
                "to": {"type": "string", "description": "End date (YYYY-MM-DD)"},
                "clientId": {"type": "string", "description": "Filter by client UUID"},
                "sort": enum_property(["issueDate", "number", "total", "dueDate"], "Sort field (default: issueDate)"),
                "order": enum_property(["asc", "desc"], "Sort order (default: desc)"),
            },
        ),
    },
    "invoices_get": {
        "path": "/api/v1/invoices/{uuid}",
        "company": True,
        "description": "Get complete details of an invoice by UUID: lines, payments, events, attachments, client and supplier info, and ANAF submission details.",
        "schema": uuid_schema(description="Invoice UUID", company=True),
    },
    "invoices_create": {
        "path": "/api/v1/invoices",
        "method": "POST",
        "company": True,
        "body": "*",
        "description": "Create a draft invoice with line items for a saved client or a one-off receiver. Use invoices_issue afterwards to finalize it.",
        "schema": INVOICE_CREATE_SCHEMA,
    },
    "invoices_delete": {
        "path": "/api/v1/invoices/{uuid}",
        "method": "DELETE",
        "company": True,
        "description": "Permanently delete a draft invoice. Only drafts can be deleted; use invoices_cancel for issued invoices.",
        "schema": uuid_schema(description="Invoice UUID to delete", company=True),
    },
    "invoices_issue": {
        "path": "/api/v1/invoices/{uuid}/issue",
        "method": "POST",
        "company": True,
        "description": "Issue a draft invoice: assigns a series number, generates UBL 2.1 XML and PDF, and changes status to \"issued\".",
        "schema": uuid_schema(description="Invoice UUID to issue", company=True),
    },
    "invoices_submit": {
        "path": "/api/v1/invoices/{uuid}/submit",
        "method": "POST",
        "company": True,
        "description": "Submit an issued invoice to ANAF e-Factura. Validation is asynchronous; poll invoices_get to check the result.",
        "schema": uuid_schema(description="Invoice UUID to submit to ANAF", company=True),
    },
    "invoices_cancel": {
        "path": "/api/v1/invoices/{uuid}/cancel",
        "method": "POST",
        "company": True,
        "body": ["reason"],
        "description": "Cancel an issued invoice with an optional reason.",
        "schema": object_schema(
            {
                "uuid": {"type": "string", "description": "Invoice UUID to cancel"},
                "reason": {"type": "string", "description": "Cancellation reason"},
            },
            required=["uuid"],
            company=True,
        ),
    },
    "invoices_pdf": {
        "path": "/api/v1/invoices/{uuid}/pdf",
        "company": True,
        "binary": True,
        "description": "Download the PDF of an invoice. Returns base64-encoded data with its content type.",
        "schema": uuid_schema(description="Invoice UUID", company=True),
    },
    "invoices_xml": {
        "path": "/api/v1/invoices/{uuid}/xml",
        "company": True,
        "description": "Download the UBL 2.1 XML of an issued invoice as text (CIUS-RO / EN 16931).",
        "schema": uuid_schema(description="Invoice UUID", company=True),
    },
    "invoices_email": {
        "path": "/api/v1/invoices/{uuid}/email",
        "method": "POST",
        "company": True,
        "body": ["to", "cc", "bcc", "subject", "body", "attachPdf", "attachXml"],
        "description": "Send an invoice by email with optional PDF and XML attachments. Emails are queued and sent asynchronously.",
        "schema": object_schema(
            {
                "uuid": {"type": "string", "description": "Invoice UUID to email"},
                "to": {"type": "string", "description": "Recipient email address"},
                "cc": {"type": "array", "items": {"type": "string"}, "description": "CC recipients"},
                "bcc": {"type": "array", "items": {"type": "string"}, "description": "BCC recipients"},
                "subject": {"type": "string", "description": "Email subject"},
                "body": {"type": "string", "description": "Email body"},
                "attachPdf": {"type": "boolean", "description": "Attach the PDF (default: true)"},
                "attachXml": {"type": "boolean", "description": "Attach the XML (default: false)"},
            },
            required=["uuid", "to"],
            company=True,
        ),
    },
    "invoices_bulk_delete": {
        "path": "/api/v1/invoices/bulk-delete",
        "method": "POST",
        "company": True,
        "body": ["ids"],
        "description": "Delete up to 100 draft invoices in one call. Returns the deleted count and per-item errors.",
        "schema": object_schema(
            {
                "ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "maxItems": 100,
                    "description": "Invoice UUIDs to delete (drafts only)",
                },
            },
            required=["ids"],
            company=True,
        ),
    },
    "invoices_export_csv": {
        "path": "/api/v1/invoices/export/csv",
        "company": True,
        "binary": True,
        "query": ["from", "to", "status", "direction"],
        "description": "Export invoices as CSV. Returns base64-encoded file contents.",
        "schema": object_schema(
            {
                "from": {"type": "string", "description": "Start date (YYYY-MM-DD)"},
                "to": {"type": "string", "description": "End date (YYYY-MM-DD)"},
                "status": enum_property(INVOICE_STATUSES, "Filter by invoice status"),
                "direction": enum_property(["incoming", "outgoing"], "Filter by direction"),
            },
            company=True,
        ),
    },

    # =========================================================================
    # CLIENT TOOLS
    # =========================================================================
    "clients_list": {
        "path": "/api/v1/clients",
        "company": True,
        "query": ["page", "limit", "search", "type"],
        "description": "List clients for the active company, filtered by type or searched by name, CUI/CNP or email.",
        "schema": list_schema(
            max_limit=200,
            default_limit=50,
            extra={"type": enum_property(["company", "individual"], "Filter by client type")},
        ),
    },
    "clients_get": {
        "path": "/api/v1/clients/{uuid}",
        "company": True,
        "description": "Get a client by UUID with invoice statistics and its 10 most recent invoices.",
        "schema": uuid_schema(description="Client UUID", company=True),
    },
    "clients_create": {
        "path": "/api/v1/clients",
        "method": "POST",
        "company": True,
        "body": "*",
        "description": "Create a client (company or individual) for the active company.",
        "schema": CLIENT_CREATE_SCHEMA,
    },
    "clients_delete": {
        "path": "/api/v1/clients/{uuid}",
        "method": "DELETE",
        "company": True,
        "description": "Delete a client. Clients with invoices cannot be deleted.",
        "schema": uuid_schema(description="Client UUID to delete", company=True),
    },
    "clients_export_csv": {
        "path": "/api/v1/clients/export/csv",
        "company": True,
        "binary": True,
        "description": "Export all clients of the active company as CSV. Returns base64-encoded file contents.",
        "schema": empty_schema(company=True),
    },
    "clients_export_saga_xml": {
        "path": "/api/v1/clients/export/saga-xml",
        "company": True,
        "description": "Export clients in Saga XML format. Returns the XML document as text.",
        "schema": empty_schema(company=True),
    },

    # =========================================================================
    # PRODUCT TOOLS
    # =========================================================================
    "products_list": {
        "path": "/api/v1/products",
        "company": True,
        "query": ["page", "limit", "search", "isActive"],
        "description": "List products and services of the active company's catalog.",
        "schema": list_schema(
            extra={"isActive": {"type": "boolean", "description": "Filter by active status"}},
        ),
    },
    "products_get": {
        "path": "/api/v1/products/{uuid}",
        "company": True,
        "description": "Get a product by UUID.",
        "schema": uuid_schema(description="Product UUID", company=True),
    },

    # =========================================================================
    # IMPORT TOOLS
    # =========================================================================
    "import_upload": {
        "path": "/api/v1/import/upload",
        "method": "POST",
        "company": True,
        "upload": {"param": "filePath", "field": "file", "form": ["importType", "source"]},
        "description": "Upload a CSV, XLSX or XML file to start an import job. Returns the created job with preview data.",
        "schema": object_schema(
            {
                "filePath": file_property("Absolute path to the file to upload (CSV, XLSX, or XML)"),
                "importType": enum_property(IMPORT_TYPES, "Type of data being imported"),
                "source": enum_property(IMPORT_SOURCES, "Application the file was exported from"),
            },
            required=["filePath", "importType", "source"],
            company=True,
        ),
    },
    "import_get": {
        "path": "/api/v1/import/{id}",
        "company": True,
        "description": "Get status and details of an import job, including progress, row counts and errors.",
        "schema": uuid_schema(name="id", description="Import job ID", company=True),
    },
    "import_history": {
        "path": "/api/v1/import/history",
        "company": True,
        "query": ["limit"],
        "description": "List past import jobs for the active company.",
        "schema": object_schema(
            {"limit": {"type": "integer", "description": "Number of results (max 200, default: 50)"}},
            company=True,
        ),
    },

    # =========================================================================
    # SYSTEM TOOLS
    # =========================================================================
    "system_health": {
        "path": "/api/v1/system/health",
        "auth": False,
        "description": "Check Storno API health. Returns database, queue, storage and service diagnostics when authenticated.",
        "schema": empty_schema(),
    },
    "system_version": {
        "path": "/api/v1/version",
        "auth": False,
        "description": "Get the Storno API version, release date and changelog URL.",
        "schema": empty_schema(),
    },
}
