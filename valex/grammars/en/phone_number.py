from typing import List

from ...dimensions.phone_number import PhoneNumberData
from ...vx_pattern import rule
from ...vx_types import Rule

MIN_BODY_DIGITS = 7
MAX_BODY_DIGITS = 15

# Arabic-Indic and extended Arabic-Indic digits
_DIGITS = str.maketrans("٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹", "01234567890123456789")


def canonical_digits(text: str) -> str:
    return "".join(ch for ch in text.translate(_DIGITS) if "0" <= ch <= "9")


def _phone_number(nodes):
    prefix, body, extension = (nodes[0].group(i) for i in (1, 2, 3))
    digits = canonical_digits(body)
    if not MIN_BODY_DIGITS <= len(digits) <= MAX_BODY_DIGITS:
        return None
    value = digits
    if prefix:
        value = f"(+{canonical_digits(prefix)}) {value}"
    if extension:
        value = f"{value} ext {canonical_digits(extension)}"
    return PhoneNumberData(value)


def rules() -> List[Rule]:
    return [
        rule(
            "phone number",
            r"/(?:\(?\+(\d{1,4})\)?[\s\-\.]*)?([\d(][\d()\s\-\.]{4,120}[\d)])"
            r"(?:\s*(?:e?xt?\.?|x|فرعي)\s*(\d{1,40}))?/",
            _phone_number,
        ),
    ]
