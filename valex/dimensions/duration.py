from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as
from .time_grain import Grain


@dataclass(frozen=True)
class DurationData:
    dimension: ClassVar[DimensionKind] = DimensionKind.DURATION

    value: int
    grain: Grain

    def with_grain(self, grain: Grain) -> "DurationData":
        """Re-express this duration in another grain, rounding to the nearest unit."""
        if grain is self.grain:
            return self
        unit = grain.in_seconds()
        return DurationData((self.in_seconds() + unit // 2) // unit, grain)

    def combine(self, other: "DurationData") -> "DurationData":
        """Sum two durations in the finer of their grains."""
        grain = min(self.grain, other.grain)
        return DurationData(
            self.with_grain(grain).value + other.with_grain(grain).value, grain
        )

    def in_seconds(self) -> int:
        return self.grain.in_seconds(self.value)


def duration_data(token_data: TokenData) -> Optional[DurationData]:
    return payload_as(token_data, DurationData)


def resolve(data: DurationData, context, options) -> Optional[Dict[str, Any]]:
    return {
        "type": "value",
        "value": data.value,
        "unit": data.grain.value,
        data.grain.value: data.value,
        "normalized": {"value": data.in_seconds(), "unit": "second"},
    }
