"""
Space Facts API - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions, each tagged with an explicit ErrorKind.
How:   Every exception carries a message (returned to the client), a kind
       (mapped to an HTTP status by the error handler) and an optional context
       dict (logged server-side, never returned).
Who:   Raised by routes, the validation layer and services; converted to JSON
       by the handlers registered in main.py.

Exception Hierarchy:
    SpaceFactsError (base)
    ├── NotFoundError            → NOT_FOUND          → 404
    ├── ValidationFailedError    → VALIDATION_FAILED  → 400 (with field details)
    ├── BadRequestError          → BAD_REQUEST        → 400
    ├── DatabaseError            → DATABASE           → 500
    └── FileStorageError         → FILE_STORAGE       → 500

The handler switches on `kind`, not on the class, so a new subclass only has
to pick one of the existing kinds to get the right status code.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Failure categories understood by the terminal error handler."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    BAD_REQUEST = "bad_request"
    DATABASE = "database"
    FILE_STORAGE = "file_storage"


# ── Status Mapping ────────────────────────────────────────────────────────
# Single source of truth for kind → HTTP status
HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.DATABASE: 500,
    ErrorKind.FILE_STORAGE: 500,
}


class SpaceFactsError(Exception):
    """
    Base exception for all Space Facts API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        kind:     ErrorKind used to pick the HTTP status
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


class NotFoundError(SpaceFactsError):
    """
    Raised by a route when the requested planet (or photo) does not exist.

    The message is route-specific and mirrors the request line,
    e.g. "Cannot GET /planets/42".
    """

    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_route(cls, method: str, path: str) -> "NotFoundError":
        return cls(message=f"Cannot {method} {path}", context={"method": method, "path": path})


class ValidationFailedError(SpaceFactsError):
    """
    Raised when a request body fails the input schema.

    What:    Wraps the field-level errors produced by the validation layer.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "Validation failed",
            "details": [{"field": "name", "message": "Field required"}]
        }
    """

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        errors: List[Dict[str, str]],
        message: str = "Validation failed",
    ):
        super().__init__(message=message, context={"errors": errors})
        self.errors = errors


class BadRequestError(SpaceFactsError):
    """Malformed request that is not a schema failure (bad JSON, missing or rejected upload)."""

    kind = ErrorKind.BAD_REQUEST


class DatabaseError(SpaceFactsError):
    """
    Raised when a database operation fails for any reason other than
    "record absent".

    The client always receives a generic message; the driver error is kept in
    `context` for the server log.
    """

    kind = ErrorKind.DATABASE

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(SpaceFactsError):
    """Could not write an uploaded photo to the upload directory (disk full, permissions)."""

    kind = ErrorKind.FILE_STORAGE

    def __init__(
        self,
        message: str = "Failed to save the uploaded photo. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
