from typing import List

from ...dimensions.time_grain import Grain, TimeGrainData
from ...vx_pattern import rule
from ...vx_types import Rule

GRAINS = [
    (r"sec(ond)?s?", Grain.SECOND),
    (r"m(in(ute)?s?)?", Grain.MINUTE),
    (r"h(((ou)?rs?)|r)?", Grain.HOUR),
    (r"days?", Grain.DAY),
    (r"weeks?", Grain.WEEK),
    (r"months?", Grain.MONTH),
    (r"(quarter|qtr)s?", Grain.QUARTER),
    (r"y(ea)?rs?", Grain.YEAR),
]


def rules() -> List[Rule]:
    return [
        rule(
            f"{grain.value} (grain)",
            f"/{pattern}/",
            lambda nodes, grain=grain: TimeGrainData(grain),
        )
        for pattern, grain in GRAINS
    ]
