"""UPS carrier integration: OAuth, wire mapping, validation and rating."""

from shiprates.carriers.ups.auth import CachedToken, UPSAuth
from shiprates.carriers.ups.carrier import UPSCarrier
from shiprates.carriers.ups.factory import create_ups_carrier

__all__ = [
    "CachedToken",
    "UPSAuth",
    "UPSCarrier",
    "create_ups_carrier",
]
