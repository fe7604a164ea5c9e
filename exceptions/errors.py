"""
Custom exception classes for the application.

Only text extraction can abort a parse. Everything the parser cannot
understand inside a document is reported as a ParseWarning on the
Shipment instead of an exception.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "TEXT_EXTRACTION_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# DOCUMENT ERRORS
# ===================

class DocumentNotFoundError(NotFoundError):
    """Shipment document missing on disk."""

    def __init__(self, path: str):
        super().__init__(
            resource="Document",
            identifier=path,
            code="DOCUMENT_NOT_FOUND"
        )


class InvalidDocumentError(ValidationError):
    """Uploaded file cannot be accepted as a shipment document."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="INVALID_DOCUMENT",
            message=message,
            details=details
        )


class TextExtractionError(ExternalServiceError):
    """
    The extraction tool produced no usable text.

    Fatal for the current document: the caller decides whether to abort
    ingesting it. A non-zero exit that still produced text is not an error.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            service="text_extraction",
            message=message,
            details=details
        )
