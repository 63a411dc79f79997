"""Quantity dimension: amounts of some product, e.g. "2 cups of flour"."""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as
from .measurement import MeasurementData, measurement_value

CUP = "cup"
GRAM = "gram"
OUNCE = "ounce"
POUND = "pound"
TABLESPOON = "tablespoon"


@dataclass(frozen=True)
class QuantityData(MeasurementData):
    dimension: ClassVar[DimensionKind] = DimensionKind.QUANTITY

    product: Optional[str] = None

    def with_product(self, product: str) -> "QuantityData":
        return replace(self, product=product.lower())


def quantity_data(token_data: TokenData) -> Optional[QuantityData]:
    return payload_as(token_data, QuantityData)


def resolve(data: QuantityData, context, options) -> Optional[Dict[str, Any]]:
    value = measurement_value(data)
    if value is not None and data.product is not None:
        value["product"] = data.product
    return value
