"""
Media resolution data models for TikSave.

This module contains Pydantic models for validation verdicts, extraction
results, and the request/response bodies of the API.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Union
import re

from tiksave.core.exceptions import ErrorCode


# Arbitrary JSON document as decoded from the provider
JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

ABSOLUTE_URL_PATTERN = re.compile(r'^https?://\S+$', re.IGNORECASE)


class ValidationVerdict(BaseModel):
    """Outcome of classifying a raw input string."""

    is_valid: bool = Field(..., description="Whether the input looks like a supported link")
    reason: Optional[str] = Field(None, description="Human-readable reason when invalid")
    error_code: Optional[ErrorCode] = Field(None, description="Error code when invalid")


class ExtractionResult(BaseModel):
    """A playable media URL together with the provider response it came from."""

    media_url: str = Field(..., description="Absolute URL of the media file")
    source: JSONValue = Field(None, description="Untouched provider response body")

    @field_validator('media_url')
    @classmethod
    def validate_media_url(cls, v):
        """Media URL must be a non-empty absolute http(s) URL."""
        if not v or not ABSOLUTE_URL_PATTERN.match(v):
            raise ValueError('Media URL must be an absolute http(s) URL')
        return v


class ResolveRequest(BaseModel):
    """Request model for the resolve endpoint."""

    url: str = Field(..., description="TikTok link to resolve", max_length=2048)


class ResolveResponse(BaseModel):
    """Response model for the resolve endpoint."""

    success: bool = Field(True, description="Whether the request was successful")
    media_url: str = Field(..., description="Direct media URL")
    filename: str = Field(..., description="Suggested download filename")
    source: JSONValue = Field(None, description="Provider response, for display only")
    response_time_ms: float = Field(..., description="Response time in milliseconds")


class ValidateResponse(BaseModel):
    """Response model for the live validation endpoint."""

    is_valid: bool = Field(..., description="Whether the input looks like a supported link")
    reason: Optional[str] = Field(None, description="Human-readable reason when invalid")
    error: Optional[str] = Field(None, description="Error code when invalid")
