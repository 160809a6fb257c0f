"""Test helpers for shiprates tests."""

from tests.helpers.fake_transport import FakeClock, FakeTransport
from tests.helpers.ups_payloads import (
    TOKEN_PATH,
    RATE_PATH,
    make_rate_request,
    make_rated_shipment,
    make_rate_response,
    make_token_response,
    make_ups_carrier,
)

__all__ = [
    "FakeClock",
    "FakeTransport",
    "RATE_PATH",
    "TOKEN_PATH",
    "make_rate_request",
    "make_rate_response",
    "make_rated_shipment",
    "make_token_response",
    "make_ups_carrier",
]
