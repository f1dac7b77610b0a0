"""
Custom exceptions for the ReadNLearn anchor service.

Unlocatable phrases are not errors and never raise; these exceptions cover
storage failures and invalid requests at the service edges.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Phrase errors
    PHRASE_NOT_FOUND = "PHRASE_NOT_FOUND"
    INVALID_PHRASE = "INVALID_PHRASE"

    # Storage errors
    STORAGE_FAILURE = "STORAGE_FAILURE"

    # System errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ReadNLearnException(Exception):
    """Base exception for the anchor service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class PhraseStoreError(ReadNLearnException):
    """Raised when the phrase database cannot be read or written."""

    def __init__(self, operation: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Phrase storage operation '{operation}' failed",
            error_code=ErrorCode.STORAGE_FAILURE,
            details=details or {"operation": operation},
            status_code=503
        )


class PhraseNotFoundError(ReadNLearnException):
    """Raised when a phrase id does not exist."""

    def __init__(self, phrase_id: str):
        super().__init__(
            message=f"Phrase '{phrase_id}' not found",
            error_code=ErrorCode.PHRASE_NOT_FOUND,
            details={"phrase_id": phrase_id},
            status_code=404
        )


class InvalidPhraseError(ReadNLearnException):
    """Raised when a phrase cannot be saved as given."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_PHRASE,
            details=details,
            status_code=422
        )


class ServiceUnavailableError(ReadNLearnException):
    """Raised when a backing service is temporarily unavailable."""

    def __init__(self, service_name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Service '{service_name}' is temporarily unavailable",
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            details=details or {"service_name": service_name},
            status_code=503
        )
