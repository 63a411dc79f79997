"""Credit card numbers, validated with the Luhn checksum."""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind

MIN_DIGITS = 8
MAX_DIGITS = 19


@dataclass(frozen=True)
class CreditCardNumberData:
    dimension: ClassVar[DimensionKind] = DimensionKind.CREDIT_CARD_NUMBER

    value: str
    issuer: Optional[str] = None


def digits_of(text: str) -> str:
    return "".join(ch for ch in text if ch.isdigit())


def luhn_check(number: str) -> bool:
    digits = [int(ch) for ch in digits_of(number)]
    if len(digits) < MIN_DIGITS:
        return False
    total = 0
    for i, d in enumerate(reversed(digits)):
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0


def detect_issuer(number: str) -> str:
    digits = digits_of(number)
    if digits.startswith("4"):
        return "visa"
    if digits[:2] in ("34", "37"):
        return "amex"
    if digits[:2] in ("51", "52", "53", "54", "55"):
        return "mastercard"
    if digits.startswith("6011") or digits[:2] in ("64", "65"):
        return "discover"
    if digits[:3] in ("300", "301", "302", "303", "304", "305") or digits[:2] in ("36", "38"):
        return "dinerclub"
    return "other"


def resolve(data: CreditCardNumberData, context, options) -> Optional[Dict[str, Any]]:
    out: Dict[str, Any] = {"type": "value", "value": data.value}
    if data.issuer is not None:
        out["issuer"] = data.issuer
    return out
