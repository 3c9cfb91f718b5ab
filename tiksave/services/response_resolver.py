"""
Provider response resolver for TikSave.

Issues the single GET request to the extraction provider, enforces the
timeout, classifies transport and HTTP failures, and hands the decoded body
to the extraction cascade.
"""

import asyncio
import json
import logging
from typing import Optional

import httpx

from tiksave.core.config import settings
from tiksave.core.exceptions import (
    ResolveTimeoutError, HttpStatusError, NetworkFailureError, EmptyResponseError
)
from tiksave.models.media import ExtractionResult, JSONValue
from tiksave.services.extraction import extract_media_url


# Configure logging
logger = logging.getLogger(__name__)


class ResponseResolver:
    """
    Resolves a TikTok link into a direct media URL through the provider API.

    The resolver keeps no per-request state, so one instance can serve any
    number of independent resolutions. Callers that need at most one
    resolution in flight use ResolveSession.
    """

    def __init__(
        self,
        endpoint: str = settings.provider_endpoint,
        timeout: float = settings.request_timeout_seconds,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the resolver.

        Args:
            endpoint: Provider endpoint receiving the link as a query parameter
            timeout: Overall request budget in seconds
            transport: Optional httpx transport, used to substitute the network
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport
        self.headers = {"Accept": "application/json"}

    async def resolve(self, url: str) -> ExtractionResult:
        """
        Fetch the provider response for a link and extract its media URL.

        Args:
            url: Admitted TikTok link

        Returns:
            ExtractionResult with the media URL and the untouched response

        Raises:
            ResolveTimeoutError: If the provider does not answer in time
            NetworkFailureError: If the provider cannot be reached
            HttpStatusError: If the provider answers with a non-2xx status
            EmptyResponseError: If the body is absent or null
            NoMediaUrlFoundError: If no media URL can be extracted
        """
        payload = await self.fetch_payload(url)
        return self.extract(payload)

    async def fetch_payload(self, url: str) -> JSONValue:
        """Request the provider and return the decoded JSON body."""
        try:
            return await asyncio.wait_for(self._request(url), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Provider request timed out after {self.timeout}s for {url}")
            raise ResolveTimeoutError(timeout_seconds=self.timeout) from e

    def extract(self, payload: JSONValue) -> ExtractionResult:
        """Extract the media URL from a decoded provider body."""
        media_url = extract_media_url(payload)
        logger.info(f"Extracted media URL: {media_url}")
        return ExtractionResult(media_url=media_url, source=payload)

    async def _request(self, url: str) -> JSONValue:
        """Perform the GET request; cancellation closes the client."""
        params = {settings.provider_query_param: url}
        logger.info(f"Fetching from provider: {self.endpoint} for {url}")

        async with httpx.AsyncClient(
            transport=self.transport,
            headers=self.headers,
            follow_redirects=True,
            timeout=self.timeout,
        ) as client:
            try:
                response = await client.get(self.endpoint, params=params)
            except httpx.TimeoutException as e:
                raise ResolveTimeoutError(timeout_seconds=self.timeout) from e
            except httpx.RequestError as e:
                logger.warning(f"Provider unreachable: {e!r}")
                raise NetworkFailureError(reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(f"Provider answered with status {response.status_code} for {url}")
            raise HttpStatusError(status=response.status_code)

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> JSONValue:
        """Decode the body, rejecting empty and null payloads."""
        if not response.content:
            raise EmptyResponseError(reason="empty body")

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise EmptyResponseError(reason="body is not valid JSON") from e

        logger.debug(f"Provider response: {payload!r}")

        # null, false, 0 and "" carry nothing to extract
        if payload is None or (not isinstance(payload, (dict, list)) and not payload):
            raise EmptyResponseError(reason="null body")

        return payload
