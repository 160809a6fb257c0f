"""Pydantic schemas for UPS OAuth and Rating API responses.

Responses from UPS are untrusted input: they are parsed through these
models before any field is read, so the mapper only ever sees shapes it
understands. Wire names (PascalCase) are kept as aliases.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONETARY_VALUE_PATTERN = r"^[0-9]+\.?[0-9]*$"


class _UPSModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UPSTokenResponse(_UPSModel):
    """UPS OAuth client-credentials token response."""

    access_token: str = Field(..., min_length=1, description="Bearer token")
    token_type: str | None = Field(None, description="Token type, normally 'Bearer'")
    expires_in: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Lifetime in seconds"
    )
    issued_at: str | None = Field(None, description="Issue time, epoch millis as text")


class UPSMonetaryValue(_UPSModel):
    """Amount + currency pair as UPS sends it (amount as text)."""

    currency_code: str = Field(..., alias="CurrencyCode", min_length=3, max_length=3)
    monetary_value: str = Field(..., alias="MonetaryValue", pattern=MONETARY_VALUE_PATTERN)


class UPSService(_UPSModel):
    code: str = Field(..., alias="Code", min_length=1)
    description: str | None = Field(None, alias="Description")


class UPSRatedShipmentAlert(_UPSModel):
    code: str = Field(..., alias="Code")
    description: str = Field(..., alias="Description")


class UPSUnitOfMeasurement(_UPSModel):
    code: str = Field(..., alias="Code")


class UPSBillingWeight(_UPSModel):
    unit_of_measurement: UPSUnitOfMeasurement = Field(..., alias="UnitOfMeasurement")
    weight: str = Field(..., alias="Weight")


class UPSNegotiatedRateCharges(_UPSModel):
    total_charge: UPSMonetaryValue | None = Field(None, alias="TotalCharge")


class UPSGuaranteedDelivery(_UPSModel):
    business_days_in_transit: str | None = Field(None, alias="BusinessDaysInTransit")


class UPSArrival(_UPSModel):
    date: str | None = Field(None, alias="Date")
    time: str | None = Field(None, alias="Time")


class UPSEstimatedArrival(_UPSModel):
    arrival: UPSArrival = Field(..., alias="Arrival")


class UPSServiceSummaryService(_UPSModel):
    description: str = Field(..., alias="Description")


class UPSServiceSummary(_UPSModel):
    service: UPSServiceSummaryService = Field(..., alias="Service")
    estimated_arrival: UPSEstimatedArrival | None = Field(None, alias="EstimatedArrival")
    business_days_in_transit: str | None = Field(None, alias="BusinessDaysInTransit")


class UPSTimeInTransit(_UPSModel):
    service_summary: UPSServiceSummary = Field(..., alias="ServiceSummary")


class UPSRatedShipment(_UPSModel):
    """One priced service option in a rate response."""

    service: UPSService = Field(..., alias="Service")
    rated_shipment_alert: list[UPSRatedShipmentAlert] | None = Field(
        None, alias="RatedShipmentAlert"
    )
    billing_weight: UPSBillingWeight | None = Field(None, alias="BillingWeight")
    transportation_charges: UPSMonetaryValue | None = Field(None, alias="TransportationCharges")
    service_options_charges: UPSMonetaryValue | None = Field(None, alias="ServiceOptionsCharges")
    total_charges: UPSMonetaryValue = Field(..., alias="TotalCharges")
    negotiated_rate_charges: UPSNegotiatedRateCharges | None = Field(
        None, alias="NegotiatedRateCharges"
    )
    guaranteed_delivery: UPSGuaranteedDelivery | None = Field(None, alias="GuaranteedDelivery")
    time_in_transit: UPSTimeInTransit | None = Field(None, alias="TimeInTransit")

    @field_validator("rated_shipment_alert", mode="before")
    @classmethod
    def _alert_as_list(cls, value):
        # UPS sends a bare object when there is exactly one alert
        if isinstance(value, dict):
            return [value]
        return value


class UPSResponseStatus(_UPSModel):
    code: str = Field(..., alias="Code")
    description: str = Field(..., alias="Description")


class UPSTransactionReference(_UPSModel):
    customer_context: str | None = Field(None, alias="CustomerContext")


class UPSResponseHeader(_UPSModel):
    response_status: UPSResponseStatus = Field(..., alias="ResponseStatus")
    transaction_reference: UPSTransactionReference | None = Field(
        None, alias="TransactionReference"
    )


class UPSRateResponseBody(_UPSModel):
    response: UPSResponseHeader = Field(..., alias="Response")
    rated_shipment: list[UPSRatedShipment] = Field(
        ...,
        alias="RatedShipment",
        min_length=1,
        description="At least one rated shipment required",
    )

    @field_validator("rated_shipment", mode="before")
    @classmethod
    def _rated_shipment_as_list(cls, value):
        # RatedShipment may be a dict (single service) or list (shop)
        if isinstance(value, dict):
            return [value]
        return value


class UPSRateResponse(_UPSModel):
    """Top-level UPS Rating API response."""

    rate_response: UPSRateResponseBody = Field(..., alias="RateResponse")
