"""Entity-specific schemas with full documentation.

These schemas provide detailed parameter descriptions and constraints
so AI agents understand how to build each request body.
"""

from typing import Any, Dict

from .base import COMPANY_ID_PROPERTY

# =============================================================================
# INVOICE SCHEMAS
# =============================================================================

INVOICE_LINE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "description": {
            "type": "string",
            "description": "Line item description (product or service name)"
        },
        "quantity": {"type": "number", "description": "Quantity of items"},
        "unitPrice": {
            "type": "number",
            "description": "Unit price per item (excluding VAT by default)"
        },
        "vatRateId": {
            "type": "string",
            "description": "VAT rate UUID. Uses company default if not provided."
        },
        "unitOfMeasure": {
            "type": "string",
            "description": "Unit of measure code (e.g., \"BUC\", \"ORE\", \"KG\")"
        },
        "productId": {
            "type": "string",
            "description": "Product UUID reference from products catalog (optional)"
        },
        "discount": {"type": "number", "description": "Fixed discount amount to subtract"},
        "discountPercent": {
            "type": "number",
            "description": "Discount as a percentage (e.g., 10 for 10%)"
        },
        "vatIncluded": {
            "type": "boolean",
            "description": "Whether unitPrice already includes VAT (default: false)"
        },
        "productCode": {"type": "string", "description": "Product code or SKU for reference"},
    },
    "required": ["description", "quantity", "unitPrice"],
    "additionalProperties": False
}

INVOICE_CREATE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "companyId": COMPANY_ID_PROPERTY,
        "clientId": {
            "type": "string",
            "description": "Client UUID (from clients_list). Required unless receiverName is set."
        },
        "receiverName": {
            "type": "string",
            "description": "Receiver name for one-off invoices without a saved client"
        },
        "receiverCif": {"type": "string", "description": "Receiver CIF for one-off invoices"},
        "issueDate": {"type": "string", "description": "Issue date (YYYY-MM-DD, default: today)"},
        "dueDate": {"type": "string", "description": "Due date (YYYY-MM-DD)"},
        "seriesId": {
            "type": "string",
            "description": "Document series UUID (uses company default if not set)"
        },
        "currency": {"type": "string", "description": "ISO 4217 currency code (default: RON)"},
        "exchangeRate": {
            "type": "number",
            "description": "Exchange rate to RON for foreign currency invoices"
        },
        "invoiceTypeCode": {
            "type": "string",
            "description": "UBL invoice type code (e.g., \"380\" standard, \"384\" corrected)"
        },
        "notes": {"type": "string", "description": "Notes printed on the invoice"},
        "paymentTerms": {"type": "string", "description": "Payment terms text"},
        "orderNumber": {"type": "string", "description": "Buyer order reference"},
        "contractNumber": {"type": "string", "description": "Contract reference"},
        "mentions": {"type": "string", "description": "Additional legal mentions"},
        "internalNote": {"type": "string", "description": "Internal note, not printed"},
        "lines": {
            "type": "array",
            "items": INVOICE_LINE_SCHEMA,
            "minItems": 1,
            "description": "Invoice line items (at least one)"
        },
    },
    "required": ["lines"],
    "additionalProperties": False
}

# =============================================================================
# CLIENT SCHEMAS
# =============================================================================

CLIENT_CREATE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "companyId": COMPANY_ID_PROPERTY,
        "name": {"type": "string", "description": "Client name (company or person)"},
        "type": {
            "type": "string",
            "enum": ["company", "individual"],
            "description": "Client type (default: company)"
        },
        "cui": {"type": "string", "description": "Tax identification number (CUI) for companies"},
        "cnp": {"type": "string", "description": "Personal numeric code (CNP) for individuals"},
        "vatCode": {"type": "string", "description": "VAT code (e.g., RO12345678)"},
        "isVatPayer": {"type": "boolean", "description": "Whether the client is a VAT payer"},
        "registrationNumber": {
            "type": "string",
            "description": "Trade registry number (e.g., J40/1234/2020)"
        },
        "address": {"type": "string", "description": "Street address"},
        "city": {"type": "string", "description": "City"},
        "county": {"type": "string", "description": "County"},
        "country": {"type": "string", "description": "ISO country code (default: RO)"},
        "postalCode": {"type": "string", "description": "Postal code"},
        "email": {"type": "string", "description": "Contact email"},
        "phone": {"type": "string", "description": "Contact phone"},
        "bankName": {"type": "string", "description": "Bank name"},
        "bankAccount": {"type": "string", "description": "IBAN"},
        "defaultPaymentTermDays": {
            "type": "integer",
            "description": "Default payment term in days"
        },
        "contactPerson": {"type": "string", "description": "Contact person name"},
        "notes": {"type": "string", "description": "Internal notes"},
    },
    "required": ["name"],
    "additionalProperties": False
}
