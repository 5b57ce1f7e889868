"""
Product Inventory API: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios the API knows about.
Why:   Each exception maps to one response status, so the router can turn a
       failure into the right envelope without inspecting library errors.
How:   Each exception carries a message and an optional context dict. The
       message is safe to return to the caller; the context is only logged.

Exception Hierarchy:
    InventoryError (base)
    ├── InvalidRequestError        → 400 Bad Request (client can fix)
    └── StoreError                 → 500 Internal Server Error
        └── ScanLimitExceededError → 500 (scan never stopped paginating)

Store backends raise StoreError; the store-call wrapper in
`inventory.store.base` converts it into a failure StoreResult, which the
router renders as a 500 envelope.
"""

from typing import Any, Dict, Optional


class InventoryError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Caller-facing error description
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidRequestError(InventoryError):
    """
    Raised when an inbound event cannot be turned into a request descriptor.

    When:    Body is not JSON, is not an object, or lacks / mistypes
             productId, updateKey or updateValue.
    HTTP:    400 Bad Request

    Example response body:
        {
            "error": "validation_error",
            "message": "productId: Field required",
            "details": {"field": "productId"},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class StoreError(InventoryError):
    """
    Raised when a call to the key-value store fails.

    What:    Wraps botocore / SQLAlchemy errors raised by a store backend.
    HTTP:    500 Internal Server Error

    The message returned to the caller is generic; the operation name and
    the original error type are kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "The product store could not complete the request.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation


class ScanLimitExceededError(StoreError):
    """
    Raised when a scan keeps returning a continuation cursor past the
    configured page ceiling (SCAN_MAX_PAGES).

    The items gathered so far are discarded: a partial product list is
    never returned as if it were complete.
    """

    def __init__(
        self,
        max_pages: int,
        items_collected: int = 0,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["max_pages"] = max_pages
        ctx["items_collected"] = items_collected
        super().__init__(
            message=f"Scan did not complete within {max_pages} pages",
            operation="scan",
            context=ctx,
        )
        self.max_pages = max_pages
        self.items_collected = items_collected
