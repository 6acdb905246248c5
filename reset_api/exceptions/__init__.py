"""
Application exceptions module.

This module provides a clean separation of concerns for error handling:
- Base exceptions define the hierarchy
- Validation exceptions describe why a reset token was rejected
- HTTP mapping is handled separately in reset_api/core/error_handlers.py
"""

from reset_api.exceptions.base import AppException
from reset_api.exceptions.validation import (
    TokenValidationError,
    MissingParameterError,
    TokenInvalidOrExpiredError,
    MalformedRequestError,
)

__all__ = [
    # Base
    "AppException",
    # Validation
    "TokenValidationError",
    "MissingParameterError",
    "TokenInvalidOrExpiredError",
    "MalformedRequestError",
]
