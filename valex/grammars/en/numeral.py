import math
from typing import List, Optional

from ...dimensions.numeral import (
    NumeralData,
    has_grain,
    is_multipliable,
    is_positive,
    number_between,
    numeral_data,
)
from ...vx_pattern import rule
from ...vx_types import Rule

ZERO_TO_NINE = {
    "zero": 0,
    "naught": 0,
    "nought": 0,
    "nil": 0,
    "none": 0,
    "zilch": 0,
    "one": 1,
    "single": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
}
TEN_TO_NINETEEN = {
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}
TENS = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fourty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}
POWERS_OF_TEN = {
    "hundred": 2,
    "thousand": 3,
    "lakh": 5,
    "lac": 5,
    "million": 6,
    "crore": 7,
    "billion": 9,
    "trillion": 12,
}
SUFFIXES = {"k": 1e3, "m": 1e6, "g": 1e9, "b": 1e9}


def _alternation(words) -> str:
    # longest first so that "nineteen" is not read as "nine"
    return "|".join(sorted(words, key=len, reverse=True))


def decimals_to_double(value: float) -> Optional[float]:
    """77 -> 0.77, 5 -> 0.5; None for a digit run too long to represent."""
    if math.isinf(value):
        return None
    if value <= 0:
        return 0.0
    return value / 10 ** (int(math.log10(value)) + 1)


def _word(table):
    def production(nodes):
        text = nodes[0].group(1).lower()
        value = table.get(text)
        if value is None:
            return None
        data = NumeralData(float(value))
        return data.with_quantifier() if text == "single" else data

    return production


def _parsed(group: int = 1, strip: str = ""):
    def production(nodes):
        text = nodes[0].group(group)
        for ch in strip:
            text = text.replace(ch, "")
        return NumeralData(float(text))

    return production


def _fraction(nodes):
    denominator = float(nodes[0].group(2))
    if denominator == 0:
        return None
    return NumeralData(float(nodes[0].group(1)) / denominator)


def _suffixed(nodes):
    return NumeralData(float(nodes[0].group(1)) * SUFFIXES[nodes[0].group(2).lower()])


def _power_of_ten(nodes):
    grain = POWERS_OF_TEN[nodes[0].group(1).lower()]
    return NumeralData(float(10**grain), grain=grain, multipliable=True)


def _multiply(nodes):
    n1 = numeral_data(nodes[0].token_data)
    n2 = numeral_data(nodes[1].token_data)
    if n2.grain is None:
        return NumeralData(n1.value * n2.value)
    if n2.value <= n1.value:
        return None
    return NumeralData(n1.value * n2.value, grain=n2.grain)


def _intersect(nodes):
    n1 = numeral_data(nodes[0].token_data)
    n2 = numeral_data(nodes[-1].token_data)
    if 10**n1.grain <= n2.value:
        return None
    return NumeralData(n1.value + n2.value)


def _sum(nodes):
    return NumeralData(
        numeral_data(nodes[0].token_data).value + numeral_data(nodes[-1].token_data).value
    )


def _with_decimals(nodes):
    whole = numeral_data(nodes[0].token_data).value
    decimals = decimals_to_double(numeral_data(nodes[2].token_data).value)
    if decimals is None:
        return None
    return NumeralData(whole + decimals)


def _point_decimals(nodes):
    decimals = decimals_to_double(numeral_data(nodes[1].token_data).value)
    return NumeralData(decimals) if decimals is not None else None


PREDICATES = {
    "positive": is_positive,
    "multipliable": is_multipliable,
    "tens": lambda td: (
        numeral_data(td) is not None
        and numeral_data(td).value in TENS.values()
        and numeral_data(td).grain is None
    ),
    "units": number_between(1, 10),
    "grained": lambda td: has_grain(td) and is_positive(td),
    "summand": lambda td: is_positive(td) and not is_multipliable(td),
    "no_grain": lambda td: numeral_data(td) is not None and numeral_data(td).grain is None,
}


def rules() -> List[Rule]:
    return [
        rule(
            "integer (0..9)",
            f"/({_alternation(ZERO_TO_NINE)})/",
            _word(ZERO_TO_NINE),
        ),
        rule(
            "integer (10..19)",
            f"/({_alternation(TEN_TO_NINETEEN)})/",
            _word(TEN_TO_NINETEEN),
        ),
        rule("integer (20..90)", f"/({_alternation(TENS)})/", _word(TENS)),
        rule(
            "integer (21..99)",
            "%tens %units",
            _sum,
            PREDICATES,
        ),
        rule(
            "integer (21..99) hyphenated",
            "%tens /-/ %units",
            _sum,
            PREDICATES,
        ),
        rule(
            "a few",
            r"/(a )?few/",
            lambda nodes: NumeralData(3.0, quantifier=True),
        ),
        rule("integer (numeric)", r"/(\d{1,18})/", _parsed()),
        rule("decimal number", r"/(\d*\.\d+)/", _parsed()),
        rule("fractional number", r"/(\d+)\/(\d+)/", _fraction),
        rule(
            "number with commas",
            r"/(\d{1,3}(?:,\d{3})+(?:\.\d+)?)/",
            _parsed(strip=","),
        ),
        rule("number suffixes (K, M, G)", r"/(\d*\.?\d+)([kmgb])/", _suffixed),
        rule(
            "negative number",
            "/-|minus|negative/ %positive",
            lambda nodes: NumeralData(-numeral_data(nodes[1].token_data).value),
            PREDICATES,
        ),
        rule(
            "powers of tens",
            f"/({_alternation(POWERS_OF_TEN)})s?/",
            _power_of_ten,
        ),
        rule(
            "a pair / a couple",
            r"/(a\s+)?(pair|couple)s?(\s+of)?/",
            lambda nodes: NumeralData(2.0, quantifier=True),
        ),
        rule(
            "a dozen of",
            r"/(a )?dozens?( of)?/",
            lambda nodes: NumeralData(12.0, multipliable=True, quantifier=True),
        ),
        rule(
            "one point 2",
            "@numeral /point|dot/ %no_grain",
            _with_decimals,
            PREDICATES,
        ),
        rule(
            "point 77",
            "/point|dot/ %no_grain",
            _point_decimals,
            PREDICATES,
        ),
        rule(
            "compose by multiplication",
            "%positive %multipliable",
            _multiply,
            PREDICATES,
        ),
        rule("intersect 2 numbers", "%grained %summand", _intersect, PREDICATES),
        rule(
            "intersect 2 numbers (with and)",
            "%grained /and/ %summand",
            _intersect,
            PREDICATES,
        ),
    ]
