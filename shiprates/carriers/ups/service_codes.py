"""Canonical UPS service code definitions.

Single source of truth for translating between UPS service codes and
the carrier-agnostic ServiceLevel enum, in both directions.
"""

from shiprates.domain import ServiceLevel

DEFAULT_SERVICE_CODE = "03"  # UPS Ground

# UPS service code -> service level (response mapping).
# Several codes may share one level.
UPS_SERVICE_CODES: dict[str, ServiceLevel] = {
    "03": ServiceLevel.GROUND,
    "12": ServiceLevel.NEXT_DAY_AIR,
    "01": ServiceLevel.NEXT_DAY_AIR,
    "14": ServiceLevel.NEXT_DAY_AIR_EARLY,
    "13": ServiceLevel.NEXT_DAY_AIR_SAVER,
    "02": ServiceLevel.SECOND_DAY_AIR,
    "59": ServiceLevel.SECOND_DAY_AIR,
    "11": ServiceLevel.STANDARD,
}

# Service level -> UPS service code (request mapping)
SERVICE_LEVEL_TO_UPS_CODE: dict[ServiceLevel, str] = {
    ServiceLevel.GROUND: "03",
    ServiceLevel.NEXT_DAY_AIR: "01",
    ServiceLevel.NEXT_DAY_AIR_EARLY: "14",
    ServiceLevel.NEXT_DAY_AIR_SAVER: "13",
    ServiceLevel.SECOND_DAY_AIR: "02",
    ServiceLevel.STANDARD: "11",
    ServiceLevel.EXPRESS: "01",
    ServiceLevel.EXPRESS_SAVER: "13",
    ServiceLevel.THREE_DAY_SELECT: "12",
}

def service_level_to_code(level: ServiceLevel | str | None) -> str | None:
    """Resolve a requested service level to the UPS code to send.

    Args:
        level: Requested service level, or None for "all services".

    Returns:
        None when no level was requested; otherwise the mapped UPS code,
        falling back to Ground for levels with no mapping.
    """
    if level is None:
        return None
    try:
        level = ServiceLevel(level)
    except ValueError:
        return DEFAULT_SERVICE_CODE
    return SERVICE_LEVEL_TO_UPS_CODE.get(level, DEFAULT_SERVICE_CODE)


def code_to_service_level(code: str) -> ServiceLevel | None:
    """Look up the service level for a UPS code, None if unknown."""
    return UPS_SERVICE_CODES.get(code)
