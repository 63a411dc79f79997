"""English grammar: one rules() function per dimension."""

from typing import Callable, Dict, List

from ...vx_types import DimensionKind, Rule
from . import (
    amount_of_money,
    credit_card_number,
    distance,
    duration,
    email,
    numeral,
    ordinal,
    phone_number,
    quantity,
    temperature,
    time,
    time_grain,
    url,
    volume,
)

RULES: Dict[DimensionKind, Callable[[], List[Rule]]] = {
    DimensionKind.NUMERAL: numeral.rules,
    DimensionKind.ORDINAL: ordinal.rules,
    DimensionKind.TEMPERATURE: temperature.rules,
    DimensionKind.DISTANCE: distance.rules,
    DimensionKind.VOLUME: volume.rules,
    DimensionKind.QUANTITY: quantity.rules,
    DimensionKind.AMOUNT_OF_MONEY: amount_of_money.rules,
    DimensionKind.EMAIL: email.rules,
    DimensionKind.PHONE_NUMBER: phone_number.rules,
    DimensionKind.URL: url.rules,
    DimensionKind.CREDIT_CARD_NUMBER: credit_card_number.rules,
    DimensionKind.TIME_GRAIN: time_grain.rules,
    DimensionKind.DURATION: duration.rules,
    DimensionKind.TIME: time.rules,
}
