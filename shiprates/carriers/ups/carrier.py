"""UPS Rating API client."""

import logging

import httpx

from shiprates.carriers.base import BaseCarrier, CarrierAuth
from shiprates.carriers.ups.constants import (
    UPS_CARRIER_NAME,
    UPS_RATE_PATH,
    UPS_REQUEST_TIMEOUT_SECONDS,
    UPS_SANDBOX_API_BASE_URL,
)
from shiprates.carriers.ups.mapper import map_rate_request_to_ups, map_rated_shipment_to_quote
from shiprates.carriers.ups.validator import validate_rate_response
from shiprates.domain import RateRequest, RateResponse, validate_rate_request

logger = logging.getLogger(__name__)


class UPSCarrier(BaseCarrier):
    """Rates shipments through UPS.

    Args:
        account_number: UPS shipper number sent as ShipperNumber.
        auth: Token provider, normally a UPSAuth.
        base_url: Rating API base URL.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests inject a mock here).

    Example:
        async with create_ups_carrier(config.ups) as ups:
            response = await ups.get_rates(request)
    """

    def __init__(
        self,
        account_number: str,
        auth: CarrierAuth,
        base_url: str = UPS_SANDBOX_API_BASE_URL,
        timeout: float = UPS_REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            UPS_CARRIER_NAME, auth, base_url, timeout=timeout, transport=transport
        )
        self._account_number = account_number

    async def get_rates(self, request: RateRequest | dict) -> RateResponse:
        """Quote a shipment with UPS.

        The request is validated before any network call. With no service
        level every available UPS service is quoted, in UPS order.

        Args:
            request: RateRequest or an equivalent dict.

        Returns:
            RateResponse with one quote per rated shipment and the UPS
            transaction reference as request_id.

        Raises:
            CarrierError: Validation-kind for bad input or a malformed UPS
                response; network, rate_limit, authentication or
                carrier_api kind for transport and HTTP failures.
        """
        validated = validate_rate_request(request)
        payload = map_rate_request_to_ups(validated, self._account_number)

        logger.info(
            "Requesting UPS rates %s -> %s (%d package(s), service=%s)",
            validated.origin.postal_code,
            validated.destination.postal_code,
            len(validated.packages),
            validated.service_level.value if validated.service_level else "all",
        )
        data = await self._post_json(UPS_RATE_PATH, payload)

        body = validate_rate_response(data).rate_response
        quotes = [map_rated_shipment_to_quote(rated) for rated in body.rated_shipment]

        reference = body.response.transaction_reference
        logger.info("UPS returned %d quote(s)", len(quotes))
        return RateResponse(
            quotes=quotes,
            request_id=reference.customer_context if reference else None,
        )
