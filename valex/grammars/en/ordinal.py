from typing import List

from ...dimensions.ordinal import OrdinalData
from ...vx_pattern import rule
from ...vx_types import Rule

FIRST_TO_NINETEENTH = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
    "eleventh": 11,
    "twelfth": 12,
    "thirteenth": 13,
    "fourteenth": 14,
    "fifteenth": 15,
    "sixteenth": 16,
    "seventeenth": 17,
    "eighteenth": 18,
    "nineteenth": 19,
}
TENTHS = {
    "twentieth": 20,
    "thirtieth": 30,
    "fortieth": 40,
    "fiftieth": 50,
    "sixtieth": 60,
    "seventieth": 70,
    "eightieth": 80,
    "ninetieth": 90,
}
TENS = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}


def _alternation(words) -> str:
    return "|".join(sorted(words, key=len, reverse=True))


def _lookup(table):
    return lambda nodes: OrdinalData(table[nodes[0].group(1).lower()])


def _composite(nodes):
    tens = TENS[nodes[0].group(1).lower()]
    units = FIRST_TO_NINETEENTH[nodes[0].group(2).lower()]
    return OrdinalData(tens + units)


def rules() -> List[Rule]:
    units = "|".join(w for w, v in FIRST_TO_NINETEENTH.items() if v < 10)
    return [
        rule(
            "ordinals (first..nineteenth)",
            f"/({_alternation(FIRST_TO_NINETEENTH)})/",
            _lookup(FIRST_TO_NINETEENTH),
        ),
        rule(
            "ordinals (twentieth..ninetieth)",
            f"/({_alternation(TENTHS)})/",
            _lookup(TENTHS),
        ),
        rule(
            "ordinals (composite, e.g. twenty-fifth)",
            f"/({_alternation(TENS)})[\\s\\-]?({units})/",
            _composite,
        ),
        rule(
            "ordinal (digits)",
            r"/0*(\d+) ?(st|nd|rd|th)/",
            lambda nodes: OrdinalData(int(nodes[0].group(1))),
        ),
    ]
