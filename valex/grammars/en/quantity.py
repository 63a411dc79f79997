from typing import List

from ...dimensions.numeral import numeral_data
from ...dimensions.quantity import (
    CUP,
    GRAM,
    OUNCE,
    POUND,
    QuantityData,
    quantity_data,
)
from ...vx_pattern import rule
from ...vx_types import Rule
from .measurement import interval_rules

GRAMS = r"(((m(illi)?[.]?)|(k(ilo)?)[.]?)?g(ram)?s?[.]?)[.]?"

UNITS = [
    ("cups", r"(cups?)", CUP),
    ("grams", GRAMS, GRAM),
    ("lb", r"((lb|pound)s?)", POUND),
    ("oz", r"((ounces?)|oz)", OUNCE),
]


def gram_multiplier(text: str) -> float:
    """mg -> 0.001, kg -> 1000, g -> 1"""
    lowered = text.lower()
    if lowered.startswith("m"):
        return 0.001
    if lowered.startswith("k"):
        return 1000.0
    return 1.0


def _scale(unit: str, text: str) -> float:
    return gram_multiplier(text) if unit == GRAM else 1.0


def _numbered(unit: str):
    def production(nodes):
        value = numeral_data(nodes[0].token_data).value
        if value <= 0:
            return None
        return QuantityData(value=value * _scale(unit, nodes[1].group(1)), unit=unit)

    return production


def _single(unit: str):
    return lambda nodes: QuantityData(value=_scale(unit, nodes[0].group(1)), unit=unit)


def _product(nodes):
    return quantity_data(nodes[0].token_data).with_product(nodes[1].group(1))


def _precise(nodes):
    return nodes[1].token_data


def rules() -> List[Rule]:
    out = []
    for name, pattern, unit in UNITS:
        out.append(rule(f"<quantity> {name}", f"@numeral /{pattern}/", _numbered(unit)))
        out.append(rule(f"a <quantity> {name}", f"/an? {pattern}/", _single(unit)))
    out += [
        rule("<quantity> of product", r"@quantity /of (\w+)/", _product),
        rule(
            "about <quantity>",
            r"/~|exactly|precisely|about|approx(\.?|imately)?|close to|near( to)?|around|almost/ @quantity",
            _precise,
        ),
    ]
    return out + interval_rules("quantity", quantity_data)
