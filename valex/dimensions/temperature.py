"""Temperature dimension. A bare number becomes a unit-less temperature that
only resolves once a unit ("degrees", "celsius", ...) has been attached."""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as
from .measurement import MeasurementData, measurement_value

CELSIUS = "celsius"
FAHRENHEIT = "fahrenheit"
DEGREE = "degree"


@dataclass(frozen=True)
class TemperatureData(MeasurementData):
    dimension: ClassVar[DimensionKind] = DimensionKind.TEMPERATURE


def temperature_data(token_data: TokenData) -> Optional[TemperatureData]:
    return payload_as(token_data, TemperatureData)


def units_compatible(current: Optional[str], wanted: str) -> bool:
    """A temperature without a unit, or a plain "degree", may take a scale."""
    return current is None or current == DEGREE or current == wanted


def resolve(data: TemperatureData, context, options) -> Optional[Dict[str, Any]]:
    return measurement_value(data)
