"""
URL validation service for TikSave.

Two independent checks are provided: a pattern check over the accepted
TikTok link shapes, used for live feedback while typing, and a looser
admission gate applied right before a provider request is spent.
"""

import re
import logging
from typing import Optional
from urllib.parse import urlparse

from tiksave.core.config import settings
from tiksave.core.exceptions import ErrorCode, MissingInputError, InvalidUrlShapeError
from tiksave.models.media import ValidationVerdict


logger = logging.getLogger(__name__)


MISSING_URL_REASON = "missing URL"
INVALID_URL_REASON = (
    "Please enter a valid TikTok URL. Examples:\n"
    "• https://www.tiktok.com/@username/video/123456789\n"
    "• https://vm.tiktok.com/ZMA56TGY8/\n"
    "• https://www.tiktok.com/t/abc123def"
)


class UrlValidator:
    """Classifies raw input as a plausibly supported TikTok link."""

    # Any match accepts
    LINK_PATTERNS = [
        # Root domain with known subdomains, any accepted path shape
        r'https?://(?:www\.|vm\.|vt\.|m\.)?tiktok\.com/(?:.*/video/\d+|.*\?|t/\w+/|\w+/|\S+)',
        # Short links
        r'https?://(?:vm|vt)\.tiktok\.com/\w+',
        # tiktok.com/t/<token> links
        r'https?://www\.tiktok\.com/t/\w+',
    ]

    _compiled = [re.compile(pattern, re.IGNORECASE) for pattern in LINK_PATTERNS]

    @classmethod
    def validate(cls, url: Optional[str]) -> ValidationVerdict:
        """
        Check input against the accepted link shapes.

        Args:
            url: Raw user input

        Returns:
            ValidationVerdict with a reason when invalid
        """
        if not url or not isinstance(url, str) or not url.strip():
            return ValidationVerdict(
                is_valid=False,
                reason=MISSING_URL_REASON,
                error_code=ErrorCode.MISSING_INPUT
            )

        if cls.matches_link_pattern(url.strip()):
            return ValidationVerdict(is_valid=True)

        return ValidationVerdict(
            is_valid=False,
            reason=INVALID_URL_REASON,
            error_code=ErrorCode.INVALID_URL_SHAPE
        )

    @classmethod
    def matches_link_pattern(cls, url: str) -> bool:
        """Check whether any accepted link pattern occurs in the URL."""
        return any(pattern.search(url) for pattern in cls._compiled)

    @classmethod
    def is_admissible(cls, url: Optional[str]) -> bool:
        """
        Admission gate applied before issuing a provider request.

        The URL must parse as an absolute URL whose host contains one of the
        allowed domains. This is intentionally looser than the pattern check.
        """
        if not url or not isinstance(url, str):
            return False

        url = url.strip()
        if not url:
            return False

        try:
            parsed = urlparse(url)
            hostname = parsed.hostname
        except ValueError:
            return False

        if not parsed.scheme or not hostname:
            return False

        return any(domain in hostname for domain in settings.allowed_domains)

    @classmethod
    def admit(cls, url: Optional[str]) -> str:
        """
        Run the admission gate and return the cleaned URL.

        Raises:
            MissingInputError: If the input is empty or whitespace
            InvalidUrlShapeError: If the admission gate rejects the input
        """
        if not url or not isinstance(url, str) or not url.strip():
            raise MissingInputError()

        url = url.strip()
        if not cls.is_admissible(url):
            logger.info(f"Rejected URL at admission gate: {url}")
            raise InvalidUrlShapeError(url=url)

        return url


# Convenience functions
def validate_url(url: Optional[str]) -> ValidationVerdict:
    """Validate URL against the accepted link shapes."""
    return UrlValidator.validate(url)


def is_admissible_url(url: Optional[str]) -> bool:
    """Check URL against the admission gate."""
    return UrlValidator.is_admissible(url)


def admit_url(url: Optional[str]) -> str:
    """Admit URL for resolution or raise a classified error."""
    return UrlValidator.admit(url)
