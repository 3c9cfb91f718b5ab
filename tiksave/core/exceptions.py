"""
Error taxonomy for TikSave.

Every failure of the validate/resolve pipeline is one of a closed set of
classified exceptions. Each carries a standardized error code, a user-facing
suggestion and the HTTP status the API layer answers with.
"""

import logging
from typing import Dict, Any, Optional
from enum import Enum


logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for consistent error handling."""

    # Input errors
    MISSING_INPUT = "missing_input"
    INVALID_URL_SHAPE = "invalid_url_shape"

    # Provider errors
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK_FAILURE = "network_failure"
    EMPTY_RESPONSE = "empty_response"
    NO_MEDIA_URL_FOUND = "no_media_url_found"

    # System errors
    INTERNAL_ERROR = "internal_error"


GENERIC_MESSAGE = "An unexpected error occurred. Please try again."


class TikSaveException(Exception):
    """
    Base exception class for all TikSave errors.

    Provides structured error information including error codes,
    user-friendly messages, and actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 400,
        suggestion: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retryable: bool = False
    ):
        """
        Initialize TikSave exception.

        Args:
            message: Human-readable error message
            error_code: Standardized error code
            status_code: HTTP status code returned by the API layer
            suggestion: Actionable suggestion for the user
            details: Additional error details
            retryable: Whether the user may usefully try again
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.suggestion = suggestion or self._get_default_suggestion()
        self.details = details or {}
        self.retryable = retryable

    def _get_default_suggestion(self) -> str:
        """Get default suggestion based on error code."""
        suggestions = {
            ErrorCode.MISSING_INPUT: "Please enter a TikTok URL",
            ErrorCode.INVALID_URL_SHAPE: "Please enter a valid TikTok URL. We support various formats including short links.",
            ErrorCode.TIMEOUT: "Request timeout. The server is taking too long to respond.",
            ErrorCode.NETWORK_FAILURE: "Network error. Please check your internet connection.",
            ErrorCode.NO_MEDIA_URL_FOUND: "Video might be private, removed, or unavailable for download.",
        }
        return suggestions.get(self.error_code, GENERIC_MESSAGE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "success": False,
            "error": self.error_code.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "retryable": self.retryable,
            "details": self.details
        }


# Input Errors
class MissingInputError(TikSaveException):
    """Raised when no URL was supplied."""

    def __init__(self, **kwargs):
        super().__init__(
            message="missing URL",
            error_code=ErrorCode.MISSING_INPUT,
            status_code=422,
            **kwargs
        )


class InvalidUrlShapeError(TikSaveException):
    """Raised when the input is not an admissible TikTok link."""

    def __init__(self, url: str, **kwargs):
        super().__init__(
            message=f"Invalid TikTok URL: {url}",
            error_code=ErrorCode.INVALID_URL_SHAPE,
            status_code=422,
            **kwargs
        )
        self.details["url"] = url


# Provider Errors
class ResolveTimeoutError(TikSaveException):
    """Raised when the provider does not answer within the timeout."""

    def __init__(self, timeout_seconds: float, **kwargs):
        super().__init__(
            message=f"Request timed out after {timeout_seconds:g} seconds",
            error_code=ErrorCode.TIMEOUT,
            status_code=504,
            retryable=True,
            **kwargs
        )
        self.details["timeout_seconds"] = timeout_seconds


class HttpStatusError(TikSaveException):
    """Raised when the provider answers with a non-success status code."""

    def __init__(self, status: int, **kwargs):
        super().__init__(
            message=f"HTTP error! status: {status}",
            error_code=ErrorCode.HTTP_STATUS,
            status_code=502,
            suggestion=suggestion_for_status(status),
            retryable=status >= 500,
            **kwargs
        )
        self.status = status
        self.details["status"] = status


class NetworkFailureError(TikSaveException):
    """Raised when the provider cannot be reached at the transport level."""

    def __init__(self, reason: Optional[str] = None, **kwargs):
        message = "Network error occurred"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code=ErrorCode.NETWORK_FAILURE,
            status_code=502,
            retryable=True,
            **kwargs
        )
        if reason:
            self.details["reason"] = reason


class EmptyResponseError(TikSaveException):
    """Raised when the provider body is absent, null or not JSON."""

    def __init__(self, reason: Optional[str] = None, **kwargs):
        super().__init__(
            message="Empty response from server",
            error_code=ErrorCode.EMPTY_RESPONSE,
            status_code=502,
            retryable=True,
            **kwargs
        )
        if reason:
            self.details["reason"] = reason


class NoMediaUrlFoundError(TikSaveException):
    """Raised when no media URL can be extracted from the provider response."""

    def __init__(self, **kwargs):
        super().__init__(
            message="No video URL found in response",
            error_code=ErrorCode.NO_MEDIA_URL_FOUND,
            status_code=404,
            **kwargs
        )


# System Errors
class InternalError(TikSaveException):
    """Raised for unexpected internal errors."""

    def __init__(self, reason: Optional[str] = None, **kwargs):
        message = "An internal error occurred"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code=ErrorCode.INTERNAL_ERROR,
            status_code=500,
            retryable=False,
            **kwargs
        )
        if reason:
            self.details["reason"] = reason


def suggestion_for_status(status: int) -> str:
    """
    Map a provider status code to a user-facing message.

    Args:
        status: HTTP status code returned by the provider

    Returns:
        Message for the status code range
    """
    if status == 404:
        return "Video not found. Please check the URL and try again."
    if 500 <= status < 600:
        return "Server error. Please try again in a few minutes."
    return GENERIC_MESSAGE


def describe_error(error: BaseException) -> str:
    """
    Get the user-facing message for any error raised while resolving.

    Unclassified exceptions get the generic message.
    """
    if isinstance(error, TikSaveException):
        return error.suggestion
    logger.debug(f"Unclassified error described generically: {error!r}")
    return GENERIC_MESSAGE
