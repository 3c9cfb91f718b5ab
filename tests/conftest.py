"""
Pytest configuration and fixtures for TikSave test suite.

This module provides shared fixtures for all tests.
"""

import asyncio
import json

import httpx
import pytest

from tiksave.services.response_resolver import ResponseResolver


TEST_ENDPOINT = "https://provider.test/download/tiktok"
TIKTOK_URL = "https://www.tiktok.com/@username/video/7234567890123456789"


def make_transport(status_code: int = 200, payload=None, content: bytes = None, calls: list = None):
    """Build a mock transport answering every request with a fixed response."""
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return httpx.MockTransport(handler)


@pytest.fixture
def tiktok_url():
    """A well-formed TikTok video link."""
    return TIKTOK_URL


@pytest.fixture
def transport_factory():
    """Factory for fixed-response mock transports."""
    return make_transport


@pytest.fixture
def make_resolver():
    """Factory for resolvers backed by a mock transport."""
    def factory(transport: httpx.AsyncBaseTransport, timeout: float = 30.0) -> ResponseResolver:
        return ResponseResolver(endpoint=TEST_ENDPOINT, timeout=timeout, transport=transport)

    return factory


@pytest.fixture
def slow_transport():
    """Transport that never answers in time and records cancellation."""
    state = {"started": False, "cancelled": False}

    async def handler(request: httpx.Request) -> httpx.Response:
        state["started"] = True
        try:
            await asyncio.sleep(60)
        except asyncio.CancelledError:
            state["cancelled"] = True
            raise
        return httpx.Response(200, json={"video": "https://cdn.test/late.mp4"})

    return httpx.MockTransport(handler), state
