"""Translation between the domain model and the UPS Rating API wire format.

Pure functions, no I/O:
- ``map_rate_request_to_ups`` builds the RateRequest payload
- ``map_rated_shipment_to_quote`` turns one validated RatedShipment into
  a RateQuote

Example:
    payload = map_rate_request_to_ups(request, account_number="A1B2C3")
    raw = await http.post("/rating/v1/Rate", json=payload)
    validated = validate_rate_response(raw.json())
    quotes = [
        map_rated_shipment_to_quote(s)
        for s in validated.rate_response.rated_shipment
    ]
"""

import logging
from typing import Any

from shiprates.carriers.ups.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_PACKAGING_CODE,
    DEFAULT_PACKAGING_DESCRIPTION,
    NEGOTIATED_RATES_INDICATOR,
    RATE_CUSTOMER_CONTEXT,
    RECIPIENT_NAME,
    RESIDENTIAL_ADDRESS_INDICATOR,
    SHIPPER_NAME,
    UPS_CARRIER_NAME,
    UPS_WEIGHT_UNITS,
)
from shiprates.carriers.ups.parser import (
    extract_currency,
    extract_monetary_value,
    try_parse_int,
    try_parse_ups_date,
)
from shiprates.carriers.ups.schemas import UPSRatedShipment
from shiprates.carriers.ups.service_codes import service_level_to_code
from shiprates.carriers.ups.validator import (
    validate_and_map_service_level,
    validate_rated_shipment_charges,
)
from shiprates.domain import Address, Package, RateQuote, RateRequest

logger = logging.getLogger(__name__)


def _format_number(value: float) -> str:
    """Render a measurement as UPS expects it: '5' not '5.0'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


# ── Domain -> wire ──────────────────────────────────────────────────


def map_address_to_ups(address: Address) -> dict[str, Any]:
    """Build a UPS Address block.

    The residential indicator is only present for residential addresses.
    """
    address_lines = [address.street1]
    if address.street2:
        address_lines.append(address.street2)

    ups_address: dict[str, Any] = {
        "AddressLine": address_lines,
        "City": address.city,
        "StateProvinceCode": address.state,
        "PostalCode": address.postal_code,
        "CountryCode": address.country,
    }
    if address.residential:
        ups_address["ResidentialAddressIndicator"] = RESIDENTIAL_ADDRESS_INDICATOR
    return ups_address


def map_package_to_ups(pkg: Package) -> dict[str, Any]:
    """Build a UPS Package block (customer-supplied packaging)."""
    ups_package: dict[str, Any] = {
        "PackagingType": {
            "Code": DEFAULT_PACKAGING_CODE,
            "Description": DEFAULT_PACKAGING_DESCRIPTION,
        },
        "Dimensions": {
            "UnitOfMeasurement": {"Code": pkg.dimensions.unit.value},
            "Length": _format_number(pkg.dimensions.length),
            "Width": _format_number(pkg.dimensions.width),
            "Height": _format_number(pkg.dimensions.height),
        },
        "PackageWeight": {
            "UnitOfMeasurement": {"Code": UPS_WEIGHT_UNITS[pkg.weight.unit.value]},
            "Weight": _format_number(pkg.weight.value),
        },
    }
    if pkg.declared_value is not None:
        ups_package["PackageServiceOptions"] = {
            "DeclaredValue": {
                "CurrencyCode": DEFAULT_CURRENCY_CODE,
                "MonetaryValue": _format_number(pkg.declared_value),
            },
        }
    return ups_package


def map_rate_request_to_ups(request: RateRequest, account_number: str) -> dict[str, Any]:
    """Build the full UPS RateRequest payload.

    Without a requested service level the Service block is omitted so UPS
    rates every available service ("Shop").

    Args:
        request: Validated rate request.
        account_number: UPS shipper account number.

    Returns:
        Dict ready to send as the JSON request body.
    """
    origin = map_address_to_ups(request.origin)
    shipment: dict[str, Any] = {
        "ShipmentRatingOptions": {
            "NegotiatedRatesIndicator": NEGOTIATED_RATES_INDICATOR,
        },
        "Shipper": {
            "Name": SHIPPER_NAME,
            "ShipperNumber": account_number,
            "Address": origin,
        },
        "ShipTo": {
            "Name": RECIPIENT_NAME,
            "Address": map_address_to_ups(request.destination),
        },
        "ShipFrom": {
            "Name": SHIPPER_NAME,
            "Address": dict(origin),
        },
    }

    service_code = service_level_to_code(request.service_level)
    if service_code is not None:
        shipment["Service"] = {
            "Code": service_code,
            "Description": request.service_level.value,
        }

    shipment["Package"] = [map_package_to_ups(pkg) for pkg in request.packages]

    return {
        "RateRequest": {
            "Request": {
                "TransactionReference": {
                    "CustomerContext": RATE_CUSTOMER_CONTEXT,
                },
            },
            "Shipment": shipment,
        },
    }


# ── Wire -> domain ──────────────────────────────────────────────────


def _estimated_delivery_date(rated: UPSRatedShipment) -> str | None:
    tit = rated.time_in_transit
    if tit is None or tit.service_summary.estimated_arrival is None:
        return None
    raw = tit.service_summary.estimated_arrival.arrival.date
    parsed = try_parse_ups_date(raw)
    if raw and parsed is None:
        logger.debug("Ignoring unparseable UPS arrival date %r", raw)
    return parsed


def _transit_days(rated: UPSRatedShipment) -> int | None:
    # Guaranteed business days win over the time-in-transit summary
    raw = None
    if rated.guaranteed_delivery and rated.guaranteed_delivery.business_days_in_transit:
        raw = rated.guaranteed_delivery.business_days_in_transit
    elif rated.time_in_transit and rated.time_in_transit.service_summary.business_days_in_transit:
        raw = rated.time_in_transit.service_summary.business_days_in_transit

    parsed = try_parse_int(raw)
    if raw and parsed is None:
        logger.debug("Ignoring unparseable UPS transit days %r", raw)
    return parsed


def map_rated_shipment_to_quote(rated: UPSRatedShipment) -> RateQuote:
    """Convert one validated RatedShipment into a RateQuote.

    Negotiated charges take precedence over published ones. Delivery date
    and transit days are optional and dropped when malformed.

    Raises:
        CarrierError: Validation-kind when charges are missing or invalid,
            or the service code is unknown.
    """
    validate_rated_shipment_charges(rated)

    total_charge = extract_monetary_value(
        rated.negotiated_rate_charges, rated.total_charges, "totalCharge"
    )
    currency = extract_currency(rated.negotiated_rate_charges, rated.total_charges)
    service_level = validate_and_map_service_level(rated.service.code)

    return RateQuote(
        carrier=UPS_CARRIER_NAME,
        service_level=service_level,
        service_name=rated.service.description or service_level.value,
        total_charge=total_charge,
        currency=currency,
        estimated_delivery_date=_estimated_delivery_date(rated),
        transit_days=_transit_days(rated),
        guaranteed_delivery=rated.guaranteed_delivery is not None,
    )
