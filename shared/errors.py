"""
Shared error handling for the Photo Sharing service.
"""

from enum import Enum
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field

from shared.logging import get_request_id


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PhotoSharingException(Exception):
    """Base exception for Photo Sharing services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None,
                 status_code: Optional[int] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=get_request_id(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class DataLayerError(str, Enum):
    """Cause of a repository failure."""

    UNKNOWN = "Unknown"
    DUPLICATE_KEY_INSERT = "DuplicateKeyInsert"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    USER_NOT_FOUND = "UserNotFound"
    PHOTO_NOT_FOUND = "PhotoNotFound"
    CATEGORY_NOT_FOUND = "CategoryNotFound"
    ANNOTATION_NOT_FOUND = "AnnotationNotFound"
    AUTHORIZATION_ERROR = "AuthorizationError"


class DataLayerException(Exception):
    """Exception raised by repository implementations."""

    def __init__(self, error: DataLayerError, message: str):
        self.error = error
        self.message = message
        super().__init__(message)


def data_layer_exception_to_service(exc: DataLayerException) -> PhotoSharingException:
    """Translate a repository failure into the error surfaced to API clients."""
    if exc.error == DataLayerError.UNKNOWN:
        # Storage internals stay hidden from clients
        return PhotoSharingException(
            "UNKNOWN_INTERNAL_FAILURE",
            "The service encountered an unknown internal failure.",
            status_code=500
        )

    return PhotoSharingException(
        "DATA_LAYER_ERROR",
        exc.message,
        details={"error": exc.error.value},
        status_code=400
    )
