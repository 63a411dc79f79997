"""
valex dimensions - one module per dimension.

Each module provides the payload dataclass for its dimension, builder helpers
for grammars and resolve(payload, context, options), which returns a
JSON-compatible value dict or None when the payload does not resolve.
"""

from typing import Any, Callable, Dict, List, Optional

from ..vx_types import DimensionKind
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
from .amount_of_money import AmountOfMoneyData
from .credit_card_number import CreditCardNumberData
from .distance import DistanceData
from .duration import DurationData
from .email import EmailData
from .numeral import NumeralData
from .ordinal import OrdinalData
from .phone_number import PhoneNumberData
from .quantity import QuantityData
from .temperature import TemperatureData
from .time import TimeData
from .time_grain import Grain, TimeGrainData
from .url import UrlData
from .volume import VolumeData

Resolver = Callable[[Any, Any, Any], Optional[Dict[str, Any]]]

RESOLVERS: Dict[DimensionKind, Resolver] = {
    DimensionKind.NUMERAL: numeral.resolve,
    DimensionKind.ORDINAL: ordinal.resolve,
    DimensionKind.TEMPERATURE: temperature.resolve,
    DimensionKind.DISTANCE: distance.resolve,
    DimensionKind.VOLUME: volume.resolve,
    DimensionKind.QUANTITY: quantity.resolve,
    DimensionKind.AMOUNT_OF_MONEY: amount_of_money.resolve,
    DimensionKind.EMAIL: email.resolve,
    DimensionKind.PHONE_NUMBER: phone_number.resolve,
    DimensionKind.URL: url.resolve,
    DimensionKind.CREDIT_CARD_NUMBER: credit_card_number.resolve,
    DimensionKind.TIME_GRAIN: time_grain.resolve,
    DimensionKind.DURATION: duration.resolve,
    DimensionKind.TIME: time.resolve,
}

_DEPENDENCIES: Dict[DimensionKind, List[DimensionKind]] = {
    DimensionKind.TEMPERATURE: [DimensionKind.NUMERAL],
    DimensionKind.DISTANCE: [DimensionKind.NUMERAL],
    DimensionKind.VOLUME: [DimensionKind.NUMERAL],
    DimensionKind.QUANTITY: [DimensionKind.NUMERAL],
    DimensionKind.AMOUNT_OF_MONEY: [DimensionKind.NUMERAL],
    DimensionKind.DURATION: [DimensionKind.NUMERAL, DimensionKind.TIME_GRAIN],
    DimensionKind.TIME: [
        DimensionKind.NUMERAL,
        DimensionKind.ORDINAL,
        DimensionKind.DURATION,
        DimensionKind.TIME_GRAIN,
    ],
}


def dependencies(kind: DimensionKind) -> List[DimensionKind]:
    """Dimensions whose rules a grammar needs in order to compose kind."""
    return list(_DEPENDENCIES.get(kind, []))


__all__ = [
    "RESOLVERS",
    "dependencies",
    "AmountOfMoneyData",
    "CreditCardNumberData",
    "DistanceData",
    "DurationData",
    "EmailData",
    "Grain",
    "NumeralData",
    "OrdinalData",
    "PhoneNumberData",
    "QuantityData",
    "TemperatureData",
    "TimeData",
    "TimeGrainData",
    "UrlData",
    "VolumeData",
]
