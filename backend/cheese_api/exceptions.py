"""
Cheese Catalog Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the failures a request can hit.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn them into responses.
Who:   Raised by request validators, the image service and the repository.

Exception Hierarchy:
    CheeseApiError (base)        → 500 Internal Server Error, empty body
    ├── ValidationError          → 400 Bad Request, static text message
    ├── DatabaseError            → 500 Internal Server Error, empty body
    └── ImageReadError           → 500 Internal Server Error, empty body

A missing record is NOT an exception anywhere in this codebase: services
return None/False and handlers answer 204 No Content.
"""

from typing import Any, Dict, Optional


class CheeseApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable description. Only ValidationError messages
                  are ever sent to the client.
        context:  Additional debug info, logged but never returned.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CheeseApiError):
    """
    Raised when a request field fails a presence or range check.

    HTTP: 400 Bad Request, body is `message` as text/plain.

    The messages are fixed strings; clients match on them, so they must not
    be reworded.
    """

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


class DatabaseError(CheeseApiError):
    """
    Raised when a store operation fails unexpectedly.

    What:    Connection loss, constraint violation, deadlock, ...
    HTTP:    500 Internal Server Error with no body.

    The SQL error itself is logged by the repository; only its type name
    travels in `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ImageReadError(CheeseApiError):
    """
    Raised when the uploaded image bytes cannot be read from the request.

    HTTP: 500 Internal Server Error with no body.
    """

    def __init__(
        self,
        message: str = "Could not read the uploaded image",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
