"""
Pytest configuration and fixtures for dingbot tests.
"""

from typing import Callable, List, Optional

import httpx
import pytest

from dingbot.client import WebHook


@pytest.fixture
def captured() -> List[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_transport(captured: List[httpx.Request]) -> Callable[..., httpx.MockTransport]:
    """Build a mock transport answering every request with a fixed response."""

    def _make(status_code: int = 200, body: object = None, text: Optional[str] = None) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=body if body is not None else {"errcode": 0})

        return httpx.MockTransport(handler)

    return _make


@pytest.fixture
def failing_transport(captured: List[httpx.Request]) -> httpx.MockTransport:
    """Transport that fails every request with a connection error."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def webhook(make_transport) -> WebHook:
    """Signed webhook client answering with errcode 0."""
    return WebHook("test-token", "SECtest", transport=make_transport())
