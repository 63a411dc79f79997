from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as
from .measurement import MeasurementData, measurement_value

MILLILITRE = "millilitre"
LITRE = "litre"
HECTOLITRE = "hectolitre"
GALLON = "gallon"
CUP = "cup"
PINT = "pint"
QUART = "quart"
FLUID_OUNCE = "fluid ounce"
TABLESPOON = "tablespoon"
TEASPOON = "teaspoon"


@dataclass(frozen=True)
class VolumeData(MeasurementData):
    dimension: ClassVar[DimensionKind] = DimensionKind.VOLUME


def volume_data(token_data: TokenData) -> Optional[VolumeData]:
    return payload_as(token_data, VolumeData)


def resolve(data: VolumeData, context, options) -> Optional[Dict[str, Any]]:
    return measurement_value(data)
