"""
Numeral dimension: plain numbers, written with digits or words.

grain records the power of ten of a multiplier word ("hundred" has grain 2) so
that "three hundred" composes by multiplication and "three hundred and five"
by addition, but never "five three hundred".
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as


@dataclass(frozen=True)
class NumeralData:
    dimension: ClassVar[DimensionKind] = DimensionKind.NUMERAL

    value: float
    grain: Optional[int] = None
    multipliable: bool = False
    quantifier: bool = False

    def with_grain(self, grain: int) -> "NumeralData":
        return replace(self, grain=grain)

    def with_multipliable(self) -> "NumeralData":
        return replace(self, multipliable=True)

    def with_quantifier(self) -> "NumeralData":
        return replace(self, quantifier=True)

    @property
    def is_integer(self) -> bool:
        return float(self.value).is_integer()


def numeral_data(token_data: TokenData) -> Optional[NumeralData]:
    return payload_as(token_data, NumeralData)


def numeral_value(token_data: TokenData) -> Optional[float]:
    data = numeral_data(token_data)
    return data.value if data is not None else None


# Predicates used by grammars


def is_positive(token_data: TokenData) -> bool:
    data = numeral_data(token_data)
    return data is not None and data.value >= 0


def is_natural(token_data: TokenData) -> bool:
    data = numeral_data(token_data)
    return data is not None and data.value > 0 and data.is_integer


def is_multipliable(token_data: TokenData) -> bool:
    data = numeral_data(token_data)
    return data is not None and data.multipliable


def has_grain(token_data: TokenData) -> bool:
    data = numeral_data(token_data)
    return data is not None and data.grain is not None and data.grain > 1


def number_between(low: float, high: float):
    """Predicate factory: an integer numeral in [low, high)."""

    def accepts(token_data: TokenData) -> bool:
        data = numeral_data(token_data)
        return data is not None and data.is_integer and low <= data.value < high

    accepts.__name__ = f"number_between_{low:g}_{high:g}"
    return accepts


def resolve(data: NumeralData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": float(data.value)}
