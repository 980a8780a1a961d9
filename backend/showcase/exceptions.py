"""
Showcase Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    ShowcaseError (base)
    ├── ValidationError           → 400 Bad Request (client can fix)
    │   ├── ImageDecodeError      → 400 (upload is not a decodable image)
    │   └── DuplicateRecordError  → 400 (unique constraint, e.g. newsletter email)
    ├── NotFoundError             → 404 Not Found
    ├── FileStorageError          → 500 Internal Server Error
    └── DatabaseError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ShowcaseError(Exception):
    """
    Base exception for all Showcase application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as `details`
                  for client-fault errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShowcaseError):
    """
    Raised when client input fails validation.

    When:    Missing/blank fields, disallowed image type, oversized upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Only image files are allowed!",
            "details": {"field": "image", "extension": ".pdf"}
        }
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


class ImageDecodeError(ValidationError):
    """
    Raised when uploaded bytes cannot be decoded as an image.

    The upload passed the extension/MIME checks but Pillow could not read it
    (renamed file, truncated data). Nothing is written to the upload root.
    """

    def __init__(
        self,
        message: str = "Uploaded file could not be read as an image",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field="image", context=context)


class DuplicateRecordError(ValidationError):
    """
    Raised when an insert violates a unique constraint.

    When:    POST /api/newsletter with an email that is already subscribed.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Record already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field=field, context=context)


class NotFoundError(ShowcaseError):
    """
    Raised when a requested record does not exist.

    When:    DELETE /api/projects/{id} with an unknown (or malformed) id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the store converts that into
    this exception so routes never deal with None.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class FileStorageError(ShowcaseError):
    """
    Raised when writing a processed image to the upload root fails.

    When:    Disk full, permission denied, upload root not writable.
    HTTP:    500 Internal Server Error

    Deleting an image that is already gone is NOT an error and never raises
    this exception.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ShowcaseError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Connection lost mid-query, database unreachable.
    HTTP:    500 Internal Server Error

    The message names the failed operation ("Error fetching projects");
    driver-level details stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
