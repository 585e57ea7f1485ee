"""
Forum Comments API: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few error scenarios the API has.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by CommentService and the store dependencies; caught by handlers.

Exception Hierarchy:
    ForumAPIError (base)
    ├── ValidationError   → 400 Bad Request   (strict mode only)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ForumAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for server errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ForumAPIError):
    """
    Raised when client input cannot be decoded.

    When:  Malformed JSON body or an id that is not a 24-character hex ObjectId,
           and only while `strict_validation` is enabled. In legacy mode the
           same input is masked as an empty value instead.
    HTTP:  400 Bad Request
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


class NotFoundError(ForumAPIError):
    """
    Raised when a requested comment does not exist.

    When:  PATCH /comments/{id} on a missing record (always), and
           GET /comments/{id} on a missing record in strict mode.
    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ForumAPIError):
    """
    Raised when a document store operation fails.

    When:  Server selection timeout, network error, write error, or the
           store client was never initialized.
    HTTP:  500 Internal Server Error

    The driver error is kept in `context` for the server log; clients only
    see a generic message. The failure is scoped to the current request.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
