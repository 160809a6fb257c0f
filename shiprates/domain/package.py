"""Package, weight and dimension models."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WeightUnit(str, Enum):
    """Supported weight units."""

    POUNDS = "LBS"
    KILOGRAMS = "KG"


class DimensionUnit(str, Enum):
    """Supported dimension units."""

    INCHES = "IN"
    CENTIMETERS = "CM"


class PackageDimensions(BaseModel):
    """Outer dimensions of a package."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    length: float = Field(..., gt=0, description="Length")
    width: float = Field(..., gt=0, description="Width")
    height: float = Field(..., gt=0, description="Height")
    unit: DimensionUnit = Field(default=DimensionUnit.INCHES, description="Dimension unit")


class PackageWeight(BaseModel):
    """Weight of a package."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    value: float = Field(..., gt=0, description="Weight")
    unit: WeightUnit = Field(default=WeightUnit.POUNDS, description="Weight unit")


class Package(BaseModel):
    """A single package in a shipment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    weight: PackageWeight = Field(..., description="Package weight")
    dimensions: PackageDimensions = Field(..., description="Package dimensions")
    description: str | None = Field(None, description="Contents description")
    declared_value: float | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("declared_value", "declaredValue", "value"),
        description="Declared value for insurance, in USD",
    )
