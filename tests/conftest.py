"""Root-level pytest fixtures for all tests.

Provides shared fixtures for carrier tests:
- Fake HTTP transport with UPS token and rate routes
- Canned request and response payloads
"""

import pytest

from tests.helpers import (
    RATE_PATH,
    TOKEN_PATH,
    FakeClock,
    FakeTransport,
    make_rate_request,
    make_rate_response,
    make_token_response,
)


@pytest.fixture
def rate_request() -> dict:
    return make_rate_request()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ups_transport() -> FakeTransport:
    """Transport answering the token and rate endpoints successfully."""
    return FakeTransport({
        TOKEN_PATH: (200, make_token_response()),
        RATE_PATH: (200, make_rate_response()),
    })
