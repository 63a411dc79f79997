"""
English amount-of-money rules.

Currencies are recognised on their own first and stay latent until an amount
composes with them, on either side: "20 euros", "$20", "USD 20".
"""

from typing import List

from ...dimensions.amount_of_money import (
    AUD,
    CAD,
    CENT,
    EUR,
    GBP,
    HKD,
    INR,
    JPY,
    KRW,
    USD,
    AmountOfMoneyData,
    money_data,
)
from ...dimensions.numeral import numeral_data
from ...vx_pattern import rule
from ...vx_types import Rule
from .measurement import interval_rules, simple_predicate

CURRENCIES = [
    ("$", r"\$|dollars?|bucks?|usd|us\$", USD),
    ("cent", r"cents?|penn(y|ies)|pence|¢", CENT),
    ("€", r"€|([e€]uro?s?)|eur", EUR),
    ("£", r"£|pounds?\s*sterling|gbp", GBP),
    ("¥", r"¥|yens?|jpy", JPY),
    ("₩", r"₩|krw|(south[ ]korean[ ])?wons?", KRW),
    ("₹", r"₹|inr|rs\.?|rupees?", INR),
    ("AUD", r"aud|a\$|australian dollars?", AUD),
    ("CAD", r"cad|c\$|canadian dollars?", CAD),
    ("HKD", r"hkd|hk\$|hong kong dollars?", HKD),
]

APPROXIMATE = r"~|about|approx(\.?|imately)?|close to|near( to)?|around|almost|roughly"
EXACT = r"exactly|precisely"


def _currency_only(token_data) -> bool:
    data = money_data(token_data)
    return data is not None and data.is_currency_only


def _dollars(token_data) -> bool:
    data = money_data(token_data)
    return data is not None and data.is_simple and data.unit != CENT


def _cents(token_data) -> bool:
    data = money_data(token_data)
    return data is not None and data.is_simple and data.unit == CENT


def _amount(number_index: int, currency_index: int):
    def production(nodes):
        value = numeral_data(nodes[number_index].token_data).value
        return money_data(nodes[currency_index].token_data).with_value(value)

    return production


def _grand(nodes):
    value = numeral_data(nodes[0].token_data).value
    return AmountOfMoneyData(value=value * 1000, unit=USD)


def _and_cents(nodes):
    whole = money_data(nodes[0].token_data)
    cents = money_data(nodes[-1].token_data)
    if not 0 <= cents.value < 100:
        return None
    return whole.with_value(whole.value + cents.value / 100)


def _precision(precision: str):
    return lambda nodes: money_data(nodes[1].token_data).with_precision(precision)


PREDICATES = {
    "currency_only": _currency_only,
    "dollars": _dollars,
    "cents": _cents,
    "simple": simple_predicate(money_data),
}


def rules() -> List[Rule]:
    out = [
        rule(name, f"/{pattern}/", lambda nodes, unit=unit: AmountOfMoneyData.currency(unit))
        for name, pattern, unit in CURRENCIES
    ]
    out += [
        rule("<amount> <currency>", "@numeral %currency_only", _amount(0, 1), PREDICATES),
        rule("<currency> <amount>", "%currency_only @numeral", _amount(1, 0), PREDICATES),
        rule("<amount> grand", "@numeral /grand/", _grand),
        rule(
            "intersect (and X cents)",
            "%dollars /and/ %cents",
            _and_cents,
            PREDICATES,
        ),
        rule("intersect (X cents)", "%dollars %cents", _and_cents, PREDICATES),
        rule(
            "about <amount-of-money>",
            f"/{APPROXIMATE}/ %simple",
            _precision("approximate"),
            PREDICATES,
        ),
        rule(
            "exactly <amount-of-money>",
            f"/{EXACT}/ %simple",
            _precision("exact"),
            PREDICATES,
        ),
    ]
    return out + interval_rules("amount-of-money", money_data)
