"""
Core infrastructure for the ReadNLearn anchor service.
Provides logging, error types, error handlers and database plumbing.
"""

from .exceptions import (
    ErrorCode,
    ReadNLearnException,
    PhraseStoreError,
    PhraseNotFoundError,
    InvalidPhraseError,
    ServiceUnavailableError,
)
from .logging import JsonFormatter, configure_logging

__all__ = [
    "ErrorCode",
    "ReadNLearnException",
    "PhraseStoreError",
    "PhraseNotFoundError",
    "InvalidPhraseError",
    "ServiceUnavailableError",
    "JsonFormatter",
    "configure_logging",
]
