"""
Resolve API endpoints for TikSave.

This module provides GET /api/v1/validate for live input feedback and
POST /api/v1/resolve, which admits a link and resolves it to a media URL.
"""

import time
import logging
from fastapi import APIRouter, Depends, Query

from tiksave.models.media import ResolveRequest, ResolveResponse, ValidateResponse
from tiksave.services.response_resolver import ResponseResolver
from tiksave.services.url_validator import UrlValidator
from tiksave.services.naming import suggest_download_filename


# Configure logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api/v1", tags=["resolve"])


async def get_resolver() -> ResponseResolver:
    """Dependency to get ResponseResolver instance."""
    return ResponseResolver()


@router.get(
    "/validate",
    response_model=ValidateResponse,
    summary="Check a link while typing",
    description="Advisory check of a TikTok link against the accepted link shapes. Never calls the provider."
)
async def validate(url: str = Query("")) -> ValidateResponse:
    """Classify the link without admitting it."""
    verdict = UrlValidator.validate(url)
    return ValidateResponse(
        is_valid=verdict.is_valid,
        reason=verdict.reason,
        error=verdict.error_code.value if verdict.error_code else None
    )


@router.post(
    "/resolve",
    response_model=ResolveResponse,
    summary="Resolve a TikTok link",
    description="Admit a TikTok link and resolve it to a direct media URL through the provider API."
)
async def resolve(
    request: ResolveRequest,
    resolver: ResponseResolver = Depends(get_resolver)
) -> ResolveResponse:
    """
    Resolve a TikTok link to a downloadable media URL.

    Classified errors propagate to ErrorHandlingMiddleware, which renders
    them with their user-facing suggestion.
    """
    start_time = time.time()

    url = UrlValidator.admit(request.url)
    logger.info(f"Resolve request for URL: {url}")

    result = await resolver.resolve(url)

    response_time = (time.time() - start_time) * 1000
    logger.info(f"Resolved {url} in {response_time:.2f}ms")

    return ResolveResponse(
        media_url=result.media_url,
        filename=suggest_download_filename(),
        source=result.source,
        response_time_ms=round(response_time, 2)
    )
