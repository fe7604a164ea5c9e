"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,

    # Documents
    DocumentNotFoundError,
    InvalidDocumentError,
    TextExtractionError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",

    # Documents
    "DocumentNotFoundError",
    "InvalidDocumentError",
    "TextExtractionError",
]
