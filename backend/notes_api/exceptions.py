"""
Notes API — Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages. They replace generic Python
       exceptions that would leak internal details to the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the persistence gateway; caught by global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── ServiceUnavailableError  → 503 Service Unavailable (pool exhausted)
    ├── DatabaseError            → 500 Internal Server Error
    └── UpstreamServiceError     → 500 Internal Server Error (proxy target unreachable)
"""

from typing import Any, Dict, List, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

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


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    Carries every field-level violation, not just the first one found.
    Each violation is a dict: {"field": ..., "message": ..., "location": ...}.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Validation failed",
            "details": {"errors": [
                {"field": "title", "message": "Title is required", "location": "body"}
            ]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors or []
        ctx = context or {}
        ctx["errors"] = self.errors
        super().__init__(message=message, context=ctx)


class NotFoundError(NotesAPIError):
    """
    Raised when a well-formed request references a nonexistent note.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        message: str = "Note not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceUnavailableError(NotesAPIError):
    """
    Raised when no pooled connection frees up within the acquisition timeout.

    HTTP: 503 Service Unavailable, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 5,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            "The service is busy. Please retry in approximately "
            f"{retry_after} seconds."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(NotesAPIError):
    """
    Raised when a store statement fails.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (driver error, statement) is logged
        server-side only and never exposed to the API consumer.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamServiceError(NotesAPIError):
    """
    Raised when the remote keyword function cannot be reached after retries.

    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Error calling the keyword service",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
