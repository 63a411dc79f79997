"""
Time dimension: a small relative-time model resolved against the reference time.

Supported forms are "now", a day relative to the reference day (today,
tomorrow, ...), a part of a day ("morning", "tomorrow evening") and a shift by
a duration ("in 3 days", "two hours ago"). A part of the day mentioned on its
own is latent.
"""

import calendar
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..vx_types import DimensionKind, TokenData, payload_as
from .duration import DurationData
from .time_grain import Grain

logger = logging.getLogger(__name__)

# start and end hour of each part of the day; 24 means midnight of the next day
PARTS_OF_DAY: Dict[str, Tuple[int, int]] = {
    "early morning": (0, 9),
    "morning": (4, 12),
    "lunch": (12, 14),
    "afternoon": (12, 19),
    "evening": (18, 24),
    "night": (18, 24),
}


@dataclass(frozen=True)
class TimeData:
    dimension: ClassVar[DimensionKind] = DimensionKind.TIME

    day_offset: Optional[int] = None
    part_of_day: Optional[str] = None
    shift: Optional[DurationData] = None
    direction: int = 1
    latent: bool = False

    @classmethod
    def now(cls) -> "TimeData":
        return cls()

    @classmethod
    def day(cls, offset: int) -> "TimeData":
        return cls(day_offset=offset)

    @classmethod
    def part(cls, name: str, latent: bool = True) -> "TimeData":
        if name not in PARTS_OF_DAY:
            raise ValueError(f"Unknown part of day: {name}")
        return cls(part_of_day=name, latent=latent)

    @classmethod
    def shifted(cls, duration: DurationData, direction: int = 1) -> "TimeData":
        return cls(shift=duration, direction=direction)

    def on_day(self, offset: int) -> "TimeData":
        return replace(self, day_offset=offset, latent=False)

    def not_latent(self) -> "TimeData":
        return replace(self, latent=False)

    @property
    def is_part_of_day(self) -> bool:
        return self.part_of_day is not None


def time_data(token_data: TokenData) -> Optional[TimeData]:
    return payload_as(token_data, TimeData)


def truncate(moment: datetime, grain: Grain) -> datetime:
    """Round a moment down to the start of its grain."""
    if grain is Grain.SECOND:
        return moment.replace(microsecond=0)
    if grain is Grain.MINUTE:
        return moment.replace(second=0, microsecond=0)
    if grain is Grain.HOUR:
        return moment.replace(minute=0, second=0, microsecond=0)
    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if grain is Grain.DAY:
        return day
    if grain is Grain.WEEK:
        return day - timedelta(days=day.weekday())
    if grain is Grain.MONTH:
        return day.replace(day=1)
    if grain is Grain.QUARTER:
        return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)
    return day.replace(month=1, day=1)


def add_months(moment: datetime, months: int) -> datetime:
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def shift_by(moment: datetime, duration: DurationData, direction: int) -> datetime:
    amount = duration.value * direction
    if duration.grain is Grain.MONTH:
        return add_months(moment, amount)
    if duration.grain is Grain.QUARTER:
        return add_months(moment, 3 * amount)
    if duration.grain is Grain.YEAR:
        return add_months(moment, 12 * amount)
    return moment + timedelta(seconds=duration.grain.in_seconds(amount))


def _point(moment: datetime, grain: Grain) -> Dict[str, Any]:
    return {"value": moment.isoformat(), "grain": grain.value}


def resolve(data: TimeData, context, options) -> Optional[Dict[str, Any]]:
    ref = context.reference_time

    if data.shift is not None:
        grain = data.shift.grain.lower()
        try:
            moment = truncate(shift_by(ref, data.shift, data.direction), grain)
        except (OverflowError, ValueError) as e:
            # shifted past the range datetime can represent
            logger.debug("Cannot shift %s by %s: %s", ref, data.shift, e)
            return None
        return {"type": "value", **_point(moment, grain)}

    if data.part_of_day is not None:
        day = truncate(ref, Grain.DAY) + timedelta(days=data.day_offset or 0)
        start_hour, end_hour = PARTS_OF_DAY[data.part_of_day]
        return {
            "type": "interval",
            "from": _point(day + timedelta(hours=start_hour), Grain.HOUR),
            "to": _point(day + timedelta(hours=end_hour), Grain.HOUR),
        }

    if data.day_offset is not None:
        day = truncate(ref, Grain.DAY) + timedelta(days=data.day_offset)
        return {"type": "value", **_point(day, Grain.DAY)}

    return {"type": "value", **_point(truncate(ref, Grain.SECOND), Grain.SECOND)}
