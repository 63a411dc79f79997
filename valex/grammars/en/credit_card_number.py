from typing import List, Optional

from ...dimensions.credit_card_number import (
    CreditCardNumberData,
    detect_issuer,
    digits_of,
    luhn_check,
)
from ...vx_pattern import rule
from ...vx_types import Rule

ISSUERS = [
    ("visa", r"4[0-9]{15}|4[0-9]{3}-[0-9]{4}-[0-9]{4}-[0-9]{4}"),
    ("amex", r"3[47][0-9]{13}|3[47][0-9]{2}-[0-9]{6}-[0-9]{5}"),
    (
        "discover",
        r"6(?:011|[45][0-9]{2})[0-9]{12}|6(?:011|[45][0-9]{2})-[0-9]{4}-[0-9]{4}-[0-9]{4}",
    ),
    ("mastercard", r"5[1-5][0-9]{14}|5[1-5][0-9]{2}-[0-9]{4}-[0-9]{4}-[0-9]{4}"),
    (
        "dinerclub",
        r"3(?:0[0-5]|[68][0-9])[0-9]{11}|3(?:0[0-5]|[68][0-9])[0-9]-[0-9]{6}-[0-9]{4}",
    ),
]


def _card(issuer: Optional[str]):
    def production(nodes):
        digits = digits_of(nodes[0].group(1))
        if not luhn_check(digits):
            return None
        return CreditCardNumberData(digits, issuer or detect_issuer(digits))

    return production


def rules() -> List[Rule]:
    out = [
        rule(f"{issuer} credit card number", f"/({pattern})/", _card(issuer))
        for issuer, pattern in ISSUERS
    ]
    out.append(rule("credit card number", r"/(\d{8,19})/", _card(None)))
    return out
