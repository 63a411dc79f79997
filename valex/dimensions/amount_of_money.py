"""
Amount-of-money dimension.

A currency mentioned without an amount ("$", "euros") is latent: it is kept in
the forest so that amounts can compose with it, but it only surfaces as an
entity, with a unit and no value, when latent results are requested.
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as
from .measurement import MeasurementData, measurement_value

USD = "USD"
CENT = "cent"
EUR = "EUR"
GBP = "GBP"
JPY = "JPY"
KRW = "KRW"
INR = "INR"
AUD = "AUD"
CAD = "CAD"
HKD = "HKD"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class AmountOfMoneyData(MeasurementData):
    dimension: ClassVar[DimensionKind] = DimensionKind.AMOUNT_OF_MONEY

    precision: Optional[str] = None
    latent: bool = False

    @classmethod
    def currency(cls, unit: str) -> "AmountOfMoneyData":
        """A bare currency mention."""
        return cls(unit=unit, latent=True)

    def with_value(self, value: float) -> "AmountOfMoneyData":
        return replace(self, value=value, min_value=None, max_value=None, latent=False)

    def with_precision(self, precision: str) -> "AmountOfMoneyData":
        return replace(self, precision=precision)

    @property
    def is_currency_only(self) -> bool:
        return (
            self.unit is not None
            and self.value is None
            and self.min_value is None
            and self.max_value is None
        )


def money_data(token_data: TokenData) -> Optional[AmountOfMoneyData]:
    return payload_as(token_data, AmountOfMoneyData)


def resolve(data: AmountOfMoneyData, context, options) -> Optional[Dict[str, Any]]:
    if data.is_currency_only:
        if not options.with_latent:
            return None
        return {"type": "value", "unit": data.unit}
    value = measurement_value(data)
    if value is not None and data.precision is not None:
        value["precision"] = data.precision
    return value
