"""
Services package for TikSave.

This package contains URL validation, provider resolution, media URL
extraction and the per-caller resolve session.
"""

from .url_validator import (
    UrlValidator,
    validate_url,
    is_admissible_url,
    admit_url,
)

from .extraction import (
    FIELD_EXTRACTORS,
    extract_media_url,
    find_media_url,
    scan_text,
    search_nested,
)

from .response_resolver import ResponseResolver
from .session import ResolveSession, RequestState
from .naming import suggest_download_filename

__all__ = [
    # URL validation
    'UrlValidator',
    'validate_url',
    'is_admissible_url',
    'admit_url',
    # Extraction
    'FIELD_EXTRACTORS',
    'extract_media_url',
    'find_media_url',
    'scan_text',
    'search_nested',
    # Resolution
    'ResponseResolver',
    'ResolveSession',
    'RequestState',
    'suggest_download_filename',
]
