"""Rate request and rate quote models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from shiprates.domain.address import Address
from shiprates.domain.package import Package
from shiprates.errors import CarrierError
from shiprates.utils.issues import format_validation_issues


class ServiceLevel(str, Enum):
    """Carrier-agnostic shipping service levels."""

    GROUND = "GROUND"
    EXPRESS = "EXPRESS"
    EXPRESS_SAVER = "EXPRESS_SAVER"
    NEXT_DAY_AIR = "NEXT_DAY_AIR"
    NEXT_DAY_AIR_EARLY = "NEXT_DAY_AIR_EARLY"
    NEXT_DAY_AIR_SAVER = "NEXT_DAY_AIR_SAVER"
    SECOND_DAY_AIR = "2ND_DAY_AIR"
    THREE_DAY_SELECT = "3_DAY_SELECT"
    STANDARD = "STANDARD"


class RateRequest(BaseModel):
    """Request for shipping rates between two addresses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin: Address = Field(..., description="Ship-from address")
    destination: Address = Field(..., description="Ship-to address")
    packages: list[Package] = Field(
        ..., min_length=1, description="Packages in the shipment, in order"
    )
    service_level: ServiceLevel | None = Field(
        None, description="Requested service level; omit to get all available services"
    )
    pickup_date: datetime | None = Field(None, description="Pickup timestamp (ISO 8601)")


class RateQuote(BaseModel):
    """Normalized rate quote from a carrier."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    carrier: str = Field(..., description="Carrier name, e.g. 'UPS'")
    service_level: ServiceLevel = Field(..., description="Carrier-agnostic service level")
    service_name: str = Field(..., description="Human-readable service name")
    total_charge: float = Field(..., ge=0, description="Total charge")
    currency: str = Field(
        default="USD", min_length=3, max_length=3, description="ISO 4217 currency code"
    )
    estimated_delivery_date: str | None = Field(
        None, description="Estimated delivery date (YYYY-MM-DD)"
    )
    transit_days: int | None = Field(None, ge=0, description="Business days in transit")
    guaranteed_delivery: bool | None = Field(None, description="Delivery date is guaranteed")


class RateResponse(BaseModel):
    """Quotes returned for one rate request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quotes: list[RateQuote] = Field(default_factory=list, description="Rate quotes")
    request_id: str | None = Field(None, description="Carrier transaction reference")


def validate_rate_request(request: Any) -> RateRequest:
    """Validate a rate request before any carrier call is made.

    Accepts a raw dict (snake_case or camelCase keys) or a RateRequest.
    Model instances are re-validated so that constructed-but-invalid
    objects are caught too.

    Args:
        request: Candidate rate request.

    Returns:
        Validated RateRequest.

    Raises:
        CarrierError: Validation-kind, with one issue line per failing field.
    """
    if isinstance(request, BaseModel):
        request = request.model_dump()
    try:
        return RateRequest.model_validate(request)
    except ValidationError as e:
        issues = format_validation_issues(e)
        raise CarrierError.validation(
            f"Invalid rate request: {'; '.join(issues)}",
            details=issues,
        ) from e
