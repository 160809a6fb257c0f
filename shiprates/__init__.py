"""shiprates: normalized shipping rate quotes from carrier APIs."""

from shiprates.carriers import BaseCarrier, Carrier, CarrierAuth
from shiprates.carriers.ups import UPSAuth, UPSCarrier, create_ups_carrier
from shiprates.config import ShipRatesConfig, UPSConfig, load_config
from shiprates.domain import (
    Address,
    Package,
    PackageDimensions,
    PackageWeight,
    RateQuote,
    RateRequest,
    RateResponse,
    ServiceLevel,
)
from shiprates.errors import CarrierError, ErrorKind
from shiprates.services import CarrierService

__version__ = "0.1.0"

__all__ = [
    "Address",
    "BaseCarrier",
    "Carrier",
    "CarrierAuth",
    "CarrierError",
    "CarrierService",
    "ErrorKind",
    "Package",
    "PackageDimensions",
    "PackageWeight",
    "RateQuote",
    "RateRequest",
    "RateResponse",
    "ServiceLevel",
    "ShipRatesConfig",
    "UPSAuth",
    "UPSCarrier",
    "UPSConfig",
    "create_ups_carrier",
    "load_config",
]
