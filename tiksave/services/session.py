"""
Per-caller resolve session for TikSave.

A session admits at most one resolution at a time and tracks the state of
the current request. Overlapping resolutions from different sessions are
not ordered relative to each other.
"""

import logging
from enum import Enum
from typing import Optional

from tiksave.core.exceptions import (
    TikSaveException, MissingInputError, InvalidUrlShapeError, ResolveTimeoutError,
    HttpStatusError, NoMediaUrlFoundError
)
from tiksave.models.media import ExtractionResult
from tiksave.services.response_resolver import ResponseResolver
from tiksave.services.url_validator import UrlValidator


logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    """States a single request moves through."""

    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    REQUESTING = "requesting"
    TIMED_OUT = "timed_out"
    HTTP_ERROR = "http_error"
    FAILED = "failed"
    PARSING = "parsing"
    EXTRACTED = "extracted"
    NO_MATCH = "no_match"


class ResolveSession:
    """Single-slot in-flight guard around a ResponseResolver."""

    def __init__(self, resolver: Optional[ResponseResolver] = None):
        self.resolver = resolver or ResponseResolver()
        self.state = RequestState.IDLE
        self.last_state: Optional[RequestState] = None

    @property
    def busy(self) -> bool:
        """Whether a resolution is in flight."""
        return self.state != RequestState.IDLE

    async def submit(self, url: Optional[str]) -> Optional[ExtractionResult]:
        """
        Validate and resolve a link unless another resolution is in flight.

        Args:
            url: Raw user input

        Returns:
            ExtractionResult, or None when the submission was ignored because
            the session is busy

        Raises:
            TikSaveException: The classified error of the failed request
        """
        if self.busy:
            logger.debug(f"Ignoring submission while {self.state.value}: {url}")
            return None

        try:
            self.state = RequestState.VALIDATING
            admitted = UrlValidator.admit(url)

            self.state = RequestState.REQUESTING
            payload = await self.resolver.fetch_payload(admitted)

            self.state = RequestState.PARSING
            result = self.resolver.extract(payload)

            self._finish(RequestState.EXTRACTED)
            return result
        except TikSaveException as e:
            self._finish(self._failure_state(e))
            raise
        except BaseException:
            self._finish(RequestState.FAILED)
            raise

    def _finish(self, outcome: RequestState) -> None:
        self.last_state = outcome
        self.state = RequestState.IDLE

    @staticmethod
    def _failure_state(error: TikSaveException) -> RequestState:
        if isinstance(error, (MissingInputError, InvalidUrlShapeError)):
            return RequestState.REJECTED
        if isinstance(error, ResolveTimeoutError):
            return RequestState.TIMED_OUT
        if isinstance(error, HttpStatusError):
            return RequestState.HTTP_ERROR
        if isinstance(error, NoMediaUrlFoundError):
            return RequestState.NO_MATCH
        return RequestState.FAILED
