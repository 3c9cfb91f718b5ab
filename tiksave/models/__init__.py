"""
Data models package for TikSave.

This package contains Pydantic models for URL validation and media resolution.
"""

from .media import (
    JSONValue,
    ValidationVerdict,
    ExtractionResult,
    ResolveRequest,
    ResolveResponse,
    ValidateResponse,
)

__all__ = [
    'JSONValue',
    'ValidationVerdict',
    'ExtractionResult',
    'ResolveRequest',
    'ResolveResponse',
    'ValidateResponse',
]
