"""Parsing helpers for numeric and date fields in UPS responses.

UPS sends amounts, day counts and dates as text. The ``safe_*`` and
``parse_*`` helpers are strict: they raise a validation-kind CarrierError
naming the field on empty, non-numeric or negative input. The ``try_*``
helpers are their best-effort counterparts for optional fields and
return None instead of raising.
"""

import math
import re
from datetime import date

from shiprates.carriers.ups.schemas import UPSMonetaryValue, UPSNegotiatedRateCharges
from shiprates.errors import CarrierError

# ASCII digits only; str.isdigit also accepts superscripts and other scripts
_DATE_RE = re.compile(r"[0-9]{8}")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def safe_parse_float(value: str | None, field_name: str) -> float:
    """Parse a non-negative decimal string.

    Args:
        value: Text to parse.
        field_name: Field name used in error messages.

    Returns:
        Parsed value.

    Raises:
        CarrierError: If missing, not a finite number, or negative.
    """
    if value is None or not str(value).strip():
        raise CarrierError.validation(f"{field_name} is missing")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise CarrierError.validation(f"{field_name} is not a valid number: {value}")
    if not math.isfinite(parsed):
        raise CarrierError.validation(f"{field_name} is not a valid number: {value}")
    if parsed < 0:
        raise CarrierError.validation(f"{field_name} cannot be negative: {parsed}")
    return parsed


def safe_parse_int(value: str | None, field_name: str) -> int:
    """Parse a non-negative integer string.

    Raises:
        CarrierError: If missing, not an integer, or negative.
    """
    if value is None or not str(value).strip():
        raise CarrierError.validation(f"{field_name} is missing")
    try:
        parsed = int(str(value).strip(), 10)
    except ValueError:
        raise CarrierError.validation(f"{field_name} is not a valid integer: {value}")
    if parsed < 0:
        raise CarrierError.validation(f"{field_name} cannot be negative: {parsed}")
    return parsed


def parse_ups_date(value: str | None, field_name: str) -> str:
    """Convert a UPS ``YYYYMMDD`` date to ISO ``YYYY-MM-DD``.

    Raises:
        CarrierError: On missing value, wrong length, non-numeric parts,
            or a month/day that does not exist.
    """
    if not value:
        raise CarrierError.validation(f"{field_name} is missing")
    if len(value) != 8:
        raise CarrierError.validation(
            f"{field_name} must be 8 characters (YYYYMMDD): {value}"
        )

    year, month, day = value[0:4], value[4:6], value[6:8]
    if not _DATE_RE.fullmatch(value):
        raise CarrierError.validation(f"{field_name} contains non-numeric values: {value}")
    if not 1 <= int(month) <= 12:
        raise CarrierError.validation(f"{field_name} has invalid month: {month}")
    if not 1 <= int(day) <= 31:
        raise CarrierError.validation(f"{field_name} has invalid day: {day}")
    try:
        date(int(year), int(month), int(day))
    except ValueError:
        raise CarrierError.validation(f"{field_name} is not a calendar date: {value}")

    return f"{year}-{month}-{day}"


def try_parse_ups_date(value: str | None) -> str | None:
    """Best-effort ``YYYYMMDD`` -> ISO date; None when absent or malformed."""
    if not value or not _DATE_RE.fullmatch(value):
        return None
    year, month, day = int(value[0:4]), int(value[4:6]), int(value[6:8])
    try:
        date(year, month, day)
    except ValueError:
        return None
    return f"{value[0:4]}-{value[4:6]}-{value[6:8]}"


def try_parse_int(value: str | None) -> int | None:
    """Best-effort non-negative integer; None when absent, non-numeric or negative."""
    if value is None:
        return None
    text = str(value).strip()
    if not _INT_RE.fullmatch(text):
        return None
    parsed = int(text, 10)
    return parsed if parsed >= 0 else None


def extract_monetary_value(
    negotiated: UPSNegotiatedRateCharges | None,
    regular: UPSMonetaryValue | None,
    field_name: str,
) -> float:
    """Total charge, preferring the negotiated (account) rate.

    Args:
        negotiated: NegotiatedRateCharges block, if any.
        regular: Published TotalCharges block, if any.
        field_name: Field name used in error messages.

    Returns:
        Negotiated amount when present, otherwise the published amount.

    Raises:
        CarrierError: If neither block carries an amount, or the chosen
            amount is not a valid non-negative number.
    """
    if negotiated is not None and negotiated.total_charge is not None:
        if negotiated.total_charge.monetary_value:
            return safe_parse_float(
                negotiated.total_charge.monetary_value, f"{field_name} (negotiated)"
            )

    if regular is not None and regular.monetary_value:
        return safe_parse_float(regular.monetary_value, field_name)

    raise CarrierError.validation(
        f"{field_name} is missing in both negotiated and regular charges"
    )


def extract_currency(
    negotiated: UPSNegotiatedRateCharges | None,
    regular: UPSMonetaryValue | None,
) -> str:
    """Currency code, preferring the negotiated block.

    Raises:
        CarrierError: If no currency is present or it is not 3 characters.
    """
    currency = None
    if negotiated is not None and negotiated.total_charge is not None:
        currency = negotiated.total_charge.currency_code
    if not currency and regular is not None:
        currency = regular.currency_code

    if not currency:
        raise CarrierError.validation("Currency code is missing")
    if len(currency) != 3:
        raise CarrierError.validation(f"Currency code must be 3 characters: {currency}")
    return currency
