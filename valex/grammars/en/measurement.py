"""
Interval and bound rules shared by the English measurement grammars.

Every measurement dimension accepts the same shapes: "between 3 and 5 <unit>",
"from 3 <unit> to 5 <unit>", "3-5 <unit>", "under 5 <unit>", "over 3 <unit>".
Bounds keep everything else the upper (or only) operand carries, e.g. the
product of a quantity or the precision of an amount of money.
"""

from typing import Callable, List, Optional

from ...dimensions.measurement import MeasurementData, valid_interval
from ...dimensions.numeral import numeral_value
from ...vx_pattern import rule
from ...vx_types import Rule, TokenData

UNDER = r"under|below|at most|(less|lower|not? more) than"
OVER = r"over|above|exceeding|beyond|at least|(more|larger|bigger|heavier) than"


def simple_predicate(data_of: Callable[[TokenData], Optional[MeasurementData]]):
    def simple(token_data: TokenData) -> bool:
        data = data_of(token_data)
        return data is not None and data.is_simple

    return simple


def interval_rules(
    label: str,
    data_of: Callable[[TokenData], Optional[MeasurementData]],
    under: str = UNDER,
    over: str = OVER,
) -> List[Rule]:
    """Build the interval and open-bound rules for one measurement dimension."""
    predicates = {"simple": simple_predicate(data_of)}

    def numeral_to_measure(low_index: int, high_index: int, positive: bool = False):
        def production(nodes):
            low = numeral_value(nodes[low_index].token_data)
            high = data_of(nodes[high_index].token_data)
            if low is None or (positive and low <= 0):
                return None
            if not valid_interval(low, high.value):
                return None
            return high.with_interval(low, high.value)

        return production

    def measure_to_measure(low_index: int, high_index: int):
        def production(nodes):
            low = data_of(nodes[low_index].token_data)
            high = data_of(nodes[high_index].token_data)
            if low.unit != high.unit or not valid_interval(low.value, high.value):
                return None
            return high.with_interval(low.value, high.value)

        return production

    def at_most(nodes):
        data = data_of(nodes[1].token_data)
        return data.with_max(data.value)

    def at_least(nodes):
        data = data_of(nodes[1].token_data)
        return data.with_min(data.value)

    return [
        rule(
            f"between|from <numeral> and|to <{label}>",
            "/between|from/ @numeral /to|and/ %simple",
            numeral_to_measure(1, 3),
            predicates,
        ),
        rule(
            f"between|from <{label}> and|to <{label}>",
            "/between|from/ %simple /to|and/ %simple",
            measure_to_measure(1, 3),
            predicates,
        ),
        rule(
            f"<numeral> - <{label}>",
            r"@numeral /\-|to/ %simple",
            numeral_to_measure(0, 2, positive=True),
            predicates,
        ),
        rule(
            f"<{label}> - <{label}>",
            r"%simple /\-|to/ %simple",
            measure_to_measure(0, 2),
            predicates,
        ),
        rule(f"under <{label}>", f"/{under}/ %simple", at_most, predicates),
        rule(f"over <{label}>", f"/{over}/ %simple", at_least, predicates),
    ]
