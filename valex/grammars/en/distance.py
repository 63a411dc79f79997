from typing import List

from ...dimensions.distance import (
    AMBIGUOUS_M,
    CENTIMETRE,
    FOOT,
    INCH,
    KILOMETRE,
    METRE,
    MILE,
    MILLIMETRE,
    YARD,
    DistanceData,
    distance_data,
    distance_sum,
)
from ...dimensions.numeral import numeral_data
from ...vx_pattern import rule
from ...vx_types import Rule
from .measurement import interval_rules, simple_predicate

UNITS = [
    ("miles", r"mi(le(s)?)?", MILE),
    ("yards", r"y(ar)?ds?", YARD),
    ("feet", r"'|f(oo|ee)?ts?", FOOT),
    ("inches", r"\"|''|in(ch(es)?)?", INCH),
    ("kilometres", r"k(ilo)?m?(et(er|re))?s?", KILOMETRE),
    ("metres", r"met(er|re)s?", METRE),
    ("centimetres", r"cm|centimet(er|re)s?", CENTIMETRE),
    ("millimetres", r"mm|millimet(er|re)s?", MILLIMETRE),
    ("m (miles or metres)", r"m", AMBIGUOUS_M),
]


def _unitless(token_data) -> bool:
    data = distance_data(token_data)
    return data is not None and data.value is not None and data.unit is None


def _composite(nodes):
    d1 = distance_data(nodes[0].token_data)
    d2 = distance_data(nodes[-1].token_data)
    if d1.unit == d2.unit or d1.value <= 0 or d2.value <= 0:
        return None
    summed = distance_sum(d1.value, d1.unit, d2.value, d2.unit)
    if summed is None:
        return None
    value, unit = summed
    return DistanceData(value=value, unit=unit)


PREDICATES = {"unitless": _unitless, "simple": simple_predicate(distance_data)}


def rules() -> List[Rule]:
    out = [
        rule(
            "number as distance",
            "@numeral",
            lambda nodes: DistanceData(value=numeral_data(nodes[0].token_data).value),
        ),
    ]
    for name, pattern, unit in UNITS:
        out.append(
            rule(
                name,
                f"%unitless /{pattern}/",
                lambda nodes, unit=unit: distance_data(nodes[0].token_data).with_unit(unit),
                PREDICATES,
            )
        )
    out += [
        rule(
            "composite <distance> (with ,/and)",
            "%simple /,|and/ %simple",
            _composite,
            PREDICATES,
        ),
        rule("composite <distance>", "%simple %simple", _composite, PREDICATES),
        rule(
            "about <distance>",
            r"/exactly|precisely|about|approx(\.?|imately)?|close to|near( to)?|around|almost/ @distance",
            lambda nodes: nodes[1].token_data,
        ),
    ]
    return out + interval_rules(
        "distance",
        distance_data,
        under=r"under|(less|lower|not? more) than",
        over=r"over|above|at least|more than",
    )
