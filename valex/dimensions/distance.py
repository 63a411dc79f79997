"""
Distance dimension.

Units are plain strings. "m" on its own is ambiguous between metres and miles
and is only disambiguated when it is summed with an unambiguous unit, as in
"3 m and 20 cm".
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..vx_types import DimensionKind, TokenData, payload_as
from .measurement import MeasurementData, measurement_value

MILLIMETRE = "millimetre"
CENTIMETRE = "centimetre"
METRE = "metre"
KILOMETRE = "kilometre"
INCH = "inch"
FOOT = "foot"
YARD = "yard"
MILE = "mile"
AMBIGUOUS_M = "m"

METRIC_UNITS = (MILLIMETRE, CENTIMETRE, METRE, KILOMETRE)
IMPERIAL_UNITS = (INCH, FOOT, YARD, MILE)

_METRES_PER_INCH = 0.0254
METRES_PER_UNIT = {
    MILLIMETRE: 0.001,
    CENTIMETRE: 0.01,
    METRE: 1.0,
    KILOMETRE: 1000.0,
    INCH: _METRES_PER_INCH,
    FOOT: 12 * _METRES_PER_INCH,
    YARD: 36 * _METRES_PER_INCH,
    MILE: 63360 * _METRES_PER_INCH,
    AMBIGUOUS_M: 1.0,
}

# smaller physical unit first; metric before imperial
_UNIT_ORDER = {
    MILLIMETRE: 0,
    CENTIMETRE: 1,
    METRE: 2,
    AMBIGUOUS_M: 2,
    KILOMETRE: 3,
    INCH: 4,
    FOOT: 5,
    YARD: 6,
    MILE: 7,
}


@dataclass(frozen=True)
class DistanceData(MeasurementData):
    dimension: ClassVar[DimensionKind] = DimensionKind.DISTANCE


def distance_data(token_data: TokenData) -> Optional[DistanceData]:
    return payload_as(token_data, DistanceData)


def _disambiguate(unit: str, other: str) -> Optional[str]:
    if unit != AMBIGUOUS_M:
        return unit
    if other in METRIC_UNITS:
        return METRE
    if other in IMPERIAL_UNITS:
        return MILE
    return None


def distance_sum(
    value1: float, unit1: str, value2: float, unit2: str
) -> Optional[Tuple[float, str]]:
    """
    Add two distances, expressing the result in the finer of the two units.

    Returns None when both units are the ambiguous "m".
    """
    u1 = _disambiguate(unit1, unit2)
    u2 = _disambiguate(unit2, unit1)
    if u1 is None or u2 is None:
        return None
    target = u1 if _UNIT_ORDER[u1] <= _UNIT_ORDER[u2] else u2
    metres = value1 * METRES_PER_UNIT[u1] + value2 * METRES_PER_UNIT[u2]
    return metres / METRES_PER_UNIT[target], target


def resolve(data: DistanceData, context, options) -> Optional[Dict[str, Any]]:
    return measurement_value(data)
