"""Time grains, ordered from finest (second) to coarsest (year)."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as


class Grain(Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def order(self) -> int:
        return _GRAIN_ORDER[self]

    def __lt__(self, other: "Grain") -> bool:
        return self.order < other.order

    def in_seconds(self, n: int = 1) -> int:
        """Seconds in n units; months are 30 days, quarters 90, years 365."""
        return n * _SECONDS[self]

    def lower(self) -> "Grain":
        """The next finer grain used when reporting a shifted time."""
        return _LOWER[self]


_GRAIN_ORDER = {g: i for i, g in enumerate(Grain)}
_SECONDS = {
    Grain.SECOND: 1,
    Grain.MINUTE: 60,
    Grain.HOUR: 3600,
    Grain.DAY: 86400,
    Grain.WEEK: 604800,
    Grain.MONTH: 2592000,
    Grain.QUARTER: 7776000,
    Grain.YEAR: 31536000,
}
_LOWER = {
    Grain.YEAR: Grain.MONTH,
    Grain.QUARTER: Grain.MONTH,
    Grain.MONTH: Grain.DAY,
    Grain.WEEK: Grain.DAY,
    Grain.DAY: Grain.HOUR,
    Grain.HOUR: Grain.MINUTE,
    Grain.MINUTE: Grain.SECOND,
    Grain.SECOND: Grain.SECOND,
}


@dataclass(frozen=True)
class TimeGrainData:
    dimension: ClassVar[DimensionKind] = DimensionKind.TIME_GRAIN

    grain: Grain


def grain_data(token_data: TokenData) -> Optional[TimeGrainData]:
    return payload_as(token_data, TimeGrainData)


def resolve(data: TimeGrainData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": data.grain.value}
