"""Multi-carrier rate shopping.

CarrierService holds the registered carriers and fans rate requests out
to them. Callers depend on this service rather than on any one carrier.

Example:
    service = CarrierService([create_ups_carrier(config.ups)])
    cheapest_first = await service.get_all_rates(request)
"""

import asyncio
import logging
from typing import Iterable

from shiprates.carriers.base import Carrier
from shiprates.domain import RateQuote, RateRequest, RateResponse
from shiprates.errors import CarrierError

logger = logging.getLogger(__name__)


class CarrierService:
    """Registry of carriers keyed by upper-cased name."""

    def __init__(self, carriers: Iterable[Carrier] = ()) -> None:
        self._carriers: dict[str, Carrier] = {}
        for carrier in carriers:
            self.register_carrier(carrier)

    async def __aenter__(self) -> "CarrierService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def register_carrier(self, carrier: Carrier) -> None:
        """Add a carrier, replacing any carrier registered under the same name."""
        key = carrier.name.upper()
        if key in self._carriers:
            logger.warning("Replacing registered carrier %s", key)
        self._carriers[key] = carrier

    def get_carrier(self, name: str) -> Carrier:
        """Look up a carrier by name, case-insensitively.

        Raises:
            CarrierError: Configuration-kind naming the available carriers.
        """
        carrier = self._carriers.get(name.upper())
        if carrier is None:
            available = ", ".join(self.available_carriers) or "none"
            raise CarrierError.configuration(
                f"Carrier '{name}' not found. Available carriers: {available}",
                details={"carrier": name, "available": self.available_carriers},
            )
        return carrier

    @property
    def available_carriers(self) -> list[str]:
        return list(self._carriers)

    async def get_rates(self, carrier_name: str, request: RateRequest | dict) -> RateResponse:
        """Quote a shipment with one named carrier."""
        return await self.get_carrier(carrier_name).get_rates(request)

    async def get_all_rates(self, request: RateRequest | dict) -> RateResponse:
        """Quote a shipment with every carrier concurrently.

        Quotes are merged and sorted by total charge, cheapest first.
        A carrier that fails is logged and left out; the call only fails
        when every carrier fails.

        Raises:
            CarrierError: Configuration-kind if no carriers are registered;
                otherwise the first carrier's error when all of them fail.
        """
        if not self._carriers:
            raise CarrierError.configuration("No carriers registered")

        names = list(self._carriers)
        results = await asyncio.gather(
            *(self._carriers[name].get_rates(request) for name in names),
            return_exceptions=True,
        )

        quotes: list[RateQuote] = []
        errors: list[Exception] = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Rate request to %s failed: %s", name, result)
                errors.append(result)
                continue
            quotes.extend(result.quotes)

        if len(errors) == len(names):
            raise errors[0]

        quotes.sort(key=lambda quote: quote.total_charge)
        return RateResponse(quotes=quotes)

    async def health_check(self) -> dict[str, bool]:
        """Health of every registered carrier, by name."""
        names = list(self._carriers)
        results = await asyncio.gather(
            *(self._carriers[name].health_check() for name in names),
            return_exceptions=True,
        )
        return {name: result is True for name, result in zip(names, results)}

    async def aclose(self) -> None:
        """Close every registered carrier."""
        for carrier in self._carriers.values():
            await carrier.aclose()
