"""Structural validation of UPS responses.

Every UPS payload goes through one of these functions before the mapper
reads it. Schema violations become validation-kind CarrierErrors that
wrap the pydantic issues in ``details``.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from shiprates.carriers.ups.schemas import (
    UPSRateResponse,
    UPSRatedShipment,
    UPSTokenResponse,
)
from shiprates.carriers.ups.service_codes import code_to_service_level
from shiprates.domain import ServiceLevel
from shiprates.errors import CarrierError
from shiprates.utils.issues import format_validation_issues

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenGrant:
    """Validated access token and its lifetime in seconds."""

    access_token: str
    expires_in: float


def validate_token_response(data: Any) -> TokenGrant:
    """Validate and parse a UPS OAuth token response.

    Raises:
        CarrierError: Validation-kind when the body is not a usable grant.
    """
    try:
        validated = UPSTokenResponse.model_validate(data)
    except ValidationError as e:
        issues = format_validation_issues(e)
        logger.warning("Rejected UPS OAuth token response: %s", issues)
        raise CarrierError.validation(
            "Invalid UPS OAuth token response", details=issues
        ) from e
    return TokenGrant(access_token=validated.access_token, expires_in=validated.expires_in)


def validate_rate_response(data: Any) -> UPSRateResponse:
    """Validate and parse a UPS Rating API response.

    Raises:
        CarrierError: Validation-kind on any shape mismatch, including an
            empty RatedShipment list.
    """
    try:
        return UPSRateResponse.model_validate(data)
    except ValidationError as e:
        issues = format_validation_issues(e)
        logger.warning("Rejected UPS rate response: %s", issues)
        raise CarrierError.validation(
            "Invalid UPS Rate API response structure", details=issues
        ) from e


def validate_and_map_service_level(service_code: str) -> ServiceLevel:
    """Map a UPS service code to a service level.

    Raises:
        CarrierError: Validation-kind naming the code when it is unknown.
    """
    level = code_to_service_level(service_code)
    if level is None:
        raise CarrierError.validation(
            f"Unknown UPS service code: {service_code}",
            details={"service_code": service_code},
        )
    return level


def validate_rated_shipment_charges(shipment: UPSRatedShipment) -> None:
    """Ensure a rated shipment carries a negotiated or a published amount.

    Raises:
        CarrierError: Validation-kind when both are missing.
    """
    negotiated = shipment.negotiated_rate_charges
    has_negotiated = bool(
        negotiated is not None
        and negotiated.total_charge is not None
        and negotiated.total_charge.monetary_value
    )
    has_regular = bool(
        shipment.total_charges is not None and shipment.total_charges.monetary_value
    )
    if not has_negotiated and not has_regular:
        raise CarrierError.validation(
            "Rated shipment missing both negotiated and regular charges",
            details={"service_code": shipment.service.code},
        )
