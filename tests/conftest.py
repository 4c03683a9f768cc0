"""Shared test fixtures."""

import httpx
import pytest

from curlargs import MappingOptionSource


@pytest.fixture
def make_options():
    """Create an option source from keyword-style flag values."""

    def factory(**values):
        return MappingOptionSource({key.replace("_", "-"): value for key, value in values.items()})

    return factory


@pytest.fixture
def echo_transport():
    """Mock transport answering 200 with the request body echoed back."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=request.content, headers={"X-Echo": "1"})

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport
