"""Address model for rate requests."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

POSTAL_CODE_PATTERN = r"^\d{5}(-\d{4})?$"


class Address(BaseModel):
    """Shipping address, origin or destination.

    State and country codes are normalized to uppercase.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    street1: str = Field(..., min_length=1, description="Street address line 1")
    street2: str | None = Field(None, description="Street address line 2")
    city: str = Field(..., min_length=1, description="City")
    state: str = Field(
        ..., min_length=2, max_length=2, description="2-letter state/province code"
    )
    postal_code: str = Field(
        ..., pattern=POSTAL_CODE_PATTERN, description="ZIP (12345) or ZIP+4 (12345-6789)"
    )
    country: str = Field(
        default="US", min_length=2, max_length=2, description="2-letter ISO country code"
    )
    residential: bool = Field(default=False, description="Residential delivery address")

    @field_validator("state", "country")
    @classmethod
    def _uppercase(cls, value: str) -> str:
        return value.upper()
