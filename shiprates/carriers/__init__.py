"""Carrier integrations."""

from shiprates.carriers.base import BaseCarrier, Carrier, CarrierAuth

__all__ = ["BaseCarrier", "Carrier", "CarrierAuth"]
