"""Builds a ready-to-use UPS carrier from configuration."""

from typing import TYPE_CHECKING

import httpx

from shiprates.carriers.ups.auth import UPSAuth
from shiprates.carriers.ups.carrier import UPSCarrier

if TYPE_CHECKING:
    from shiprates.config import UPSConfig


def create_ups_carrier(
    config: "UPSConfig",
    transport: httpx.AsyncBaseTransport | None = None,
) -> UPSCarrier:
    """Wire a UPSAuth and a UPSCarrier from a UPSConfig.

    Args:
        config: Validated UPS settings.
        transport: Optional httpx transport shared by both clients.

    Returns:
        UPSCarrier owning its token manager.
    """
    auth = UPSAuth(
        client_id=config.client_id,
        client_secret=config.client_secret,
        oauth_url=config.oauth_url,
        timeout=config.token_timeout,
        transport=transport,
    )
    return UPSCarrier(
        account_number=config.account_number,
        auth=auth,
        base_url=config.api_base_url,
        timeout=config.request_timeout,
        transport=transport,
    )
