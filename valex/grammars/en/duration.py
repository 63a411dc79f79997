from typing import List

from ...dimensions.duration import DurationData, duration_data
from ...dimensions.numeral import is_natural, numeral_data
from ...dimensions.time_grain import Grain, grain_data
from ...vx_pattern import rule
from ...vx_types import Rule

# "half a <grain>" as a whole number of a finer grain
HALVES = {
    Grain.HOUR: DurationData(30, Grain.MINUTE),
    Grain.DAY: DurationData(12, Grain.HOUR),
    Grain.YEAR: DurationData(6, Grain.MONTH),
}


def _integer_grain(nodes):
    value = numeral_data(nodes[0].token_data).value
    return DurationData(int(value), grain_data(nodes[1].token_data).grain)


def _combined(nodes):
    d1 = duration_data(nodes[0].token_data)
    d2 = duration_data(nodes[-1].token_data)
    if not d2.grain < d1.grain:
        return None
    return d1.combine(d2)


PREDICATES = {"natural": is_natural}


def rules() -> List[Rule]:
    return [
        rule("<integer> <unit-of-duration>", "%natural @time-grain", _integer_grain, PREDICATES),
        rule(
            "a <unit-of-duration>",
            "/an?/ @time-grain",
            lambda nodes: DurationData(1, grain_data(nodes[1].token_data).grain),
        ),
        rule(
            "half a <unit-of-duration>",
            r"/half\s+an?/ @time-grain",
            lambda nodes: HALVES.get(grain_data(nodes[1].token_data).grain),
        ),
        rule(
            "composite <duration> (with and)",
            "@duration /,|and/ @duration",
            _combined,
        ),
        rule(
            "about <duration>",
            r"/about|around|approximately|roughly|exactly/ @duration",
            lambda nodes: nodes[1].token_data,
        ),
    ]
