"""Carrier-agnostic domain model for rate shopping."""

from shiprates.domain.address import Address
from shiprates.domain.package import (
    DimensionUnit,
    Package,
    PackageDimensions,
    PackageWeight,
    WeightUnit,
)
from shiprates.domain.rate import (
    RateQuote,
    RateRequest,
    RateResponse,
    ServiceLevel,
    validate_rate_request,
)

__all__ = [
    "Address",
    "DimensionUnit",
    "Package",
    "PackageDimensions",
    "PackageWeight",
    "RateQuote",
    "RateRequest",
    "RateResponse",
    "ServiceLevel",
    "WeightUnit",
    "validate_rate_request",
]
