"""
FakeStack Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions raised by route handlers.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the matching HTTP status code.
Who:   Raised by route handlers; caught by global handlers.

Exception Hierarchy:
    FakeStackError (base)
    ├── ValidationError  → 400 Bad Request, plain-text message
    └── DatabaseError    → 500 Internal Server Error

Stores vs. handlers:
    Stores (fakestack/services) never raise for expected failures; they return
    a StoreError (see fakestack/results.py). The handler inspects the result
    and raises DatabaseError, which both produces the 500 response and makes
    the session dependency roll back the request's transaction.
"""

from typing import Any, Dict, Optional


class FakeStackError(Exception):
    """
    Base exception for all FakeStack application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FakeStackError):
    """
    Raised when a request body or parameter fails validation.

    HTTP:    400 Bad Request
    Body:    The message as plain text, e.g. "Invalid question body".
             No store call has been made when this is raised.
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


class DatabaseError(FakeStackError):
    """
    Raised when a store reports a failure.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The store's error reason is kept in context and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
