"""Service layer for shiprates."""

from shiprates.services.carrier_service import CarrierService

__all__ = ["CarrierService"]
