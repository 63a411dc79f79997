"""
Shared shape of the measurement dimensions.

Temperature, distance, volume, quantity and amount of money all carry either a
single value or an open or closed interval, plus a unit. A payload without a
unit, or with neither a value nor a bound, does not resolve.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MeasurementData:
    value: Optional[float] = None
    unit: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def with_value(self, value: float):
        return replace(self, value=value, min_value=None, max_value=None)

    def with_unit(self, unit: str):
        return replace(self, unit=unit)

    def with_interval(self, low: float, high: float):
        return replace(self, value=None, min_value=low, max_value=high)

    def with_min(self, low: float):
        return replace(self, value=None, min_value=low, max_value=None)

    def with_max(self, high: float):
        return replace(self, value=None, min_value=None, max_value=high)

    @property
    def is_simple(self) -> bool:
        """A single value with a unit, no bounds."""
        return (
            self.value is not None
            and self.unit is not None
            and self.min_value is None
            and self.max_value is None
        )


def measurement_value(data: MeasurementData) -> Optional[Dict[str, Any]]:
    """Render a measurement as {"type": "value", ...} or {"type": "interval", ...}."""
    if data.unit is None:
        return None
    if data.value is not None:
        return {"type": "value", "value": data.value, "unit": data.unit}
    if data.min_value is None and data.max_value is None:
        return None
    out: Dict[str, Any] = {"type": "interval"}
    if data.min_value is not None:
        out["from"] = {"value": data.min_value, "unit": data.unit}
    if data.max_value is not None:
        out["to"] = {"value": data.max_value, "unit": data.unit}
    return out


def valid_interval(low: Optional[float], high: Optional[float]) -> bool:
    """A closed interval must be strictly increasing."""
    return low is not None and high is not None and low < high
