"""
Storefront API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the listing endpoints.
How:   Each exception carries a public message and an optional context dict.
       Global handlers registered in main.py turn them into JSON responses
       of the form {"error": <message>, "request_id": <id>}.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    StorefrontError (base)          → 500 Internal Server Error
    ├── ValidationError             → 400 Bad Request (client can fix)
    │   └── InvalidCursorError      → 400 Bad Request (unknown lastVisibleId)
    └── StoreError                  → 500 Internal Server Error (backend failed)

The `message` of every exception is safe to return to the caller. The
`context` dict is only ever written to the server log.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  Client-facing error description
        context:  Debug details (logged, never returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when query input is malformed or cannot be resolved.

    HTTP: 400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidCursorError(ValidationError):
    """
    Raised when a pagination cursor does not identify a product.

    When:  The auxiliary lookup for `lastVisibleId` returned nothing, or the
           value is not a legal document id at all.
    HTTP:  400 Bad Request, distinct from the generic 500 for store failures.
    """

    def __init__(
        self,
        cursor: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if cursor is not None:
            ctx["cursor"] = cursor
        super().__init__(message="Invalid lastVisibleId", field="lastVisibleId", context=ctx)
        self.cursor = cursor


class StoreError(StorefrontError):
    """
    Raised when reading from the document store fails.

    What:    Store unreachable, query rejected (e.g. missing index), transport
             cancelled, or an unexpected error while shaping results.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is always one of the generic "Failed to fetch ..." strings.
        Store error text can reveal project ids, index definitions and
        collection paths, so it only goes into `context` for the log.
    """

    def __init__(
        self,
        message: str = "Failed to fetch data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
