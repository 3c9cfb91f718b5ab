"""
Unit tests for the error taxonomy and user-facing messages.
"""

import pytest

from tiksave.core.exceptions import (
    TikSaveException, ErrorCode, GENERIC_MESSAGE,
    MissingInputError, InvalidUrlShapeError, ResolveTimeoutError,
    HttpStatusError, NetworkFailureError, EmptyResponseError,
    NoMediaUrlFoundError, InternalError, describe_error, suggestion_for_status
)


class TestTikSaveExceptions:
    """Test custom TikSave exception classes."""

    def test_base_exception_creation(self):
        """Test TikSaveException base class."""
        exc = TikSaveException(
            message="Test error",
            error_code=ErrorCode.INTERNAL_ERROR,
            status_code=500,
            suggestion="Try again",
            details={"key": "value"},
            retryable=True
        )

        assert exc.message == "Test error"
        assert exc.error_code == ErrorCode.INTERNAL_ERROR
        assert exc.status_code == 500
        assert exc.suggestion == "Try again"
        assert exc.details == {"key": "value"}
        assert exc.retryable is True
        assert str(exc) == "Test error"

    def test_exception_to_dict(self):
        """Test exception serialization to dictionary."""
        result = NoMediaUrlFoundError().to_dict()

        assert result["success"] is False
        assert result["error"] == "no_media_url_found"
        assert result["message"] == "No video URL found in response"
        assert "private" in result["suggestion"]
        assert result["retryable"] is False
        assert result["details"] == {}

    @pytest.mark.parametrize("exc,code,status", [
        (MissingInputError(), ErrorCode.MISSING_INPUT, 422),
        (InvalidUrlShapeError(url="x"), ErrorCode.INVALID_URL_SHAPE, 422),
        (ResolveTimeoutError(timeout_seconds=30), ErrorCode.TIMEOUT, 504),
        (HttpStatusError(status=500), ErrorCode.HTTP_STATUS, 502),
        (NetworkFailureError(), ErrorCode.NETWORK_FAILURE, 502),
        (EmptyResponseError(), ErrorCode.EMPTY_RESPONSE, 502),
        (NoMediaUrlFoundError(), ErrorCode.NO_MEDIA_URL_FOUND, 404),
        (InternalError(), ErrorCode.INTERNAL_ERROR, 500),
    ])
    def test_codes_and_statuses(self, exc, code, status):
        """Each error kind has its own code and API status."""
        assert isinstance(exc, TikSaveException)
        assert exc.error_code == code
        assert exc.status_code == status

    def test_timeout_message(self):
        """Timeout errors mention the budget."""
        exc = ResolveTimeoutError(timeout_seconds=30.0)

        assert exc.message == "Request timed out after 30 seconds"
        assert "too long" in exc.suggestion
        assert exc.retryable is True

    def test_http_status_carries_code(self):
        """HttpStatusError exposes the numeric status."""
        exc = HttpStatusError(status=418)

        assert exc.status == 418
        assert exc.details == {"status": 418}
        assert "418" in exc.message

    def test_network_failure_reason(self):
        """Network failures keep their reason."""
        exc = NetworkFailureError(reason="DNS lookup failed")

        assert exc.message == "Network error occurred: DNS lookup failed"
        assert exc.details["reason"] == "DNS lookup failed"
        assert "connection" in exc.suggestion

    def test_empty_response_uses_generic_message(self):
        """Empty responses get the generic message."""
        assert EmptyResponseError().suggestion == GENERIC_MESSAGE


class TestUserFacingMessages:
    """Test the mapping from errors to user-facing messages."""

    @pytest.mark.parametrize("status,fragment", [
        (404, "not found"),
        (500, "server error"),
        (502, "server error"),
        (503, "server error"),
        (599, "server error"),
        (400, "unexpected"),
        (403, "unexpected"),
        (429, "unexpected"),
    ])
    def test_status_ranges(self, status, fragment):
        """Statuses map by range: 404, 5xx, everything else."""
        assert fragment in suggestion_for_status(status).lower()

    def test_describe_classified_errors(self):
        """describe_error returns each kind's suggestion."""
        assert describe_error(MissingInputError()) == "Please enter a TikTok URL"
        assert "valid TikTok URL" in describe_error(InvalidUrlShapeError(url="x"))
        assert "timeout" in describe_error(ResolveTimeoutError(timeout_seconds=30)).lower()
        assert "not found" in describe_error(HttpStatusError(status=404)).lower()
        assert "internet connection" in describe_error(NetworkFailureError())
        assert "private" in describe_error(NoMediaUrlFoundError())

    def test_describe_unknown_error(self):
        """Unclassified errors get the generic message."""
        assert describe_error(RuntimeError("boom")) == GENERIC_MESSAGE
