"""Carrier interfaces and the shared HTTP/error plumbing.

Each carrier implements Carrier (rates + health) and is given a
CarrierAuth (token lifecycle). BaseCarrier owns the httpx client, adds
bearer authentication to every call and converts every HTTP failure into
a CarrierError of the right kind:

- timeout / connection failure    -> network
- 429                             -> rate_limit (with Retry-After seconds)
- 401 / 403                       -> authentication, cached token invalidated
- any other non-2xx               -> carrier_api (status + carrier message)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from shiprates.domain import RateRequest, RateResponse
from shiprates.errors import CarrierError, extract_error_message, extract_ups_error
from shiprates.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)


class CarrierAuth(ABC):
    """Token provider for a carrier API.

    Implementations handle caching, refresh and expiry themselves.
    """

    @abstractmethod
    async def get_token(self) -> str:
        """Return a currently valid access token.

        Raises:
            CarrierError: Authentication-kind if no token can be obtained,
                validation-kind if the token endpoint answers nonsense.
        """
        ...

    @abstractmethod
    async def invalidate_token(self) -> None:
        """Drop any cached token so the next get_token() refetches."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the provider."""


class Carrier(ABC):
    """Interface every carrier integration implements."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique carrier identifier, e.g. 'UPS'."""
        ...

    @abstractmethod
    async def get_rates(self, request: RateRequest | dict) -> RateResponse:
        """Fetch normalized rate quotes for a shipment.

        Raises:
            CarrierError: On invalid input or any carrier failure.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the carrier API is usable. Never raises."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the carrier."""


def parse_retry_after(value: str | None) -> int | None:
    """Retry-After as whole seconds, or None unless a non-negative integer."""
    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


def decode_body(response: httpx.Response) -> Any:
    """JSON body when it parses, otherwise the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class BaseCarrier(Carrier):
    """Carrier with an authenticated JSON-over-HTTP client.

    Args:
        name: Carrier identifier.
        auth: Token provider; owned by this carrier.
        base_url: API base URL; request paths are relative to it.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests inject a mock here).
    """

    def __init__(
        self,
        name: str,
        auth: CarrierAuth,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._name = name
        self._auth = auth
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def auth(self) -> CarrierAuth:
        return self._auth

    async def __aenter__(self) -> "BaseCarrier":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the API client and the token provider."""
        await self._client.aclose()
        await self._auth.aclose()

    async def health_check(self) -> bool:
        """Healthy when a token can be obtained."""
        try:
            await self._auth.get_token()
        except Exception as exc:
            logger.warning("%s health check failed: %s", self._name, exc)
            return False
        return True

    async def _post_json(self, path: str, payload: dict[str, Any]) -> Any:
        """POST a JSON payload with bearer auth and return the decoded body.

        Raises:
            CarrierError: Network, rate-limit, authentication or carrier-API
                kind per the module docstring.
        """
        token = await self._auth.get_token()
        try:
            response = await self._client.post(
                path,
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TimeoutException as exc:
            raise CarrierError.network(
                "Request timeout", details={"original_error": str(exc)}
            ) from exc
        except httpx.RequestError as exc:
            raise CarrierError.network(
                "Network error - no response received",
                details={"original_error": str(exc)},
            ) from exc

        if response.is_error:
            raise await self._transform_error(response)
        return decode_body(response)

    async def _transform_error(self, response: httpx.Response) -> CarrierError:
        """Map a non-2xx response to a CarrierError, with side effects.

        A 401/403 invalidates the cached token so the next call refetches.
        """
        status = response.status_code
        data = decode_body(response)

        if status == 429:
            retry_after = parse_retry_after(response.headers.get("retry-after"))
            logger.warning("%s rate limited (retry_after=%s)", self._name, retry_after)
            return CarrierError.rate_limit("Rate limit exceeded", retry_after=retry_after)

        if status in (401, 403):
            try:
                await self._auth.invalidate_token()
            except Exception as exc:
                logger.debug("Token invalidation after %s failed: %s", status, exc)
            logger.warning(
                "%s rejected credentials (HTTP %s): %s",
                self._name, status, redact_for_logging(data),
            )
            return CarrierError.authentication(
                "Authentication failed", details=data, status_code=status
            )

        message = extract_error_message(data)
        carrier_code = None
        if isinstance(data, dict):
            carrier_code, _ = extract_ups_error(data)
        logger.warning(
            "%s API error (HTTP %s): %s", self._name, status, redact_for_logging(data)
        )
        return CarrierError.carrier_api(
            message, status_code=status, carrier_code=carrier_code, details=data
        )
