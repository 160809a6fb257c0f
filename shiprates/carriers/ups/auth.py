"""UPS OAuth2 client-credentials token manager.

Tokens are cached until five minutes before UPS says they expire.
Concurrent callers that find no valid token share a single fetch.
"""

import base64
import logging
import time
from dataclasses import dataclass
from typing import Callable

import httpx

from shiprates.carriers.base import CarrierAuth, decode_body
from shiprates.carriers.ups.constants import (
    TOKEN_EXPIRY_BUFFER_SECONDS,
    UPS_SANDBOX_OAUTH_URL,
    UPS_TOKEN_TIMEOUT_SECONDS,
)
from shiprates.carriers.ups.validator import validate_token_response
from shiprates.errors import CarrierError, extract_oauth_error
from shiprates.utils.redaction import redact_for_logging
from shiprates.utils.single_flight import SingleFlight

logger = logging.getLogger(__name__)

TOKEN_FAILURE_MESSAGE = "Failed to obtain OAuth token"


@dataclass(frozen=True)
class CachedToken:
    """An access token and the clock reading after which it is stale."""

    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class UPSAuth(CarrierAuth):
    """Obtains and caches UPS access tokens.

    Args:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        oauth_url: Token endpoint URL
        timeout: Token request timeout in seconds
        transport: Optional httpx transport (tests inject a mock here)
        clock: Monotonic clock in seconds; injectable for tests
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        oauth_url: str = UPS_SANDBOX_OAUTH_URL,
        timeout: float = UPS_TOKEN_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._oauth_url = oauth_url
        self._clock = clock
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._cached: CachedToken | None = None
        self._refresh: SingleFlight[str] = SingleFlight()

    @property
    def cached_token(self) -> CachedToken | None:
        return self._cached

    async def get_token(self) -> str:
        """Return the cached token, or fetch one (at most one fetch at a time)."""
        cached = self._cached
        if cached is not None and cached.is_valid(self._clock()):
            return cached.token
        return await self._refresh.run(self._fetch_new_token)

    async def invalidate_token(self) -> None:
        """Forget the cached token; an in-flight refresh is left running."""
        self._cached = None

    async def aclose(self) -> None:
        await self._http.aclose()

    def _basic_credentials(self) -> str:
        raw = f"{self._client_id}:{self._client_secret}".encode()
        return base64.b64encode(raw).decode("ascii")

    async def _fetch_new_token(self) -> str:
        """Run the client-credentials exchange and cache the result.

        Raises:
            CarrierError: Authentication-kind on transport failure or a
                non-2xx answer; validation-kind on a malformed grant.
        """
        logger.debug("Requesting UPS OAuth token from %s", self._oauth_url)
        try:
            response = await self._http.post(
                self._oauth_url,
                data={"grant_type": "client_credentials"},
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": f"Basic {self._basic_credentials()}",
                },
            )
        except httpx.HTTPError as exc:
            logger.warning("UPS OAuth request failed: %s", exc)
            raise CarrierError.authentication(
                TOKEN_FAILURE_MESSAGE, details={"original_error": str(exc)}
            ) from exc

        data = decode_body(response)
        if response.is_error:
            logger.warning(
                "UPS OAuth rejected (HTTP %s): %s",
                response.status_code, redact_for_logging(data),
            )
            raise CarrierError.authentication(
                extract_oauth_error(data) or TOKEN_FAILURE_MESSAGE,
                details=data,
                status_code=response.status_code,
            )

        grant = validate_token_response(data)
        now = self._clock()
        self._cached = CachedToken(
            token=grant.access_token,
            expires_at=now + grant.expires_in - TOKEN_EXPIRY_BUFFER_SECONDS,
        )
        logger.info("UPS OAuth token obtained, expires in %ss", int(grant.expires_in))
        return grant.access_token
