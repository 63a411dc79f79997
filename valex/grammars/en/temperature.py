from typing import List

from ...dimensions.numeral import numeral_data
from ...dimensions.temperature import (
    CELSIUS,
    DEGREE,
    FAHRENHEIT,
    TemperatureData,
    temperature_data,
    units_compatible,
)
from ...vx_pattern import rule
from ...vx_types import Rule
from .measurement import interval_rules


def _value_only(token_data) -> bool:
    data = temperature_data(token_data)
    return data is not None and data.value is not None and data.unit is None


def _scale_ready(token_data) -> bool:
    data = temperature_data(token_data)
    return data is not None and data.value is not None and data.unit in (None, DEGREE)


def _with_scale(unit: str):
    def production(nodes):
        data = temperature_data(nodes[0].token_data)
        if not units_compatible(data.unit, unit):
            return None
        return data.with_unit(unit)

    return production


def _degree_symbol_scale(nodes):
    data = temperature_data(nodes[0].token_data)
    unit = CELSIUS if nodes[1].group(1).lower() == "c" else FAHRENHEIT
    return data.with_unit(unit)


def _below_zero(nodes):
    data = temperature_data(nodes[0].token_data)
    if data.value == 0:
        return None
    return data.with_value(-abs(data.value)).with_unit(data.unit or DEGREE)


PREDICATES = {
    "value_only": _value_only,
    "scale_ready": _scale_ready,
    "with_unit": lambda td: getattr(temperature_data(td), "is_simple", False),
}


def rules() -> List[Rule]:
    return [
        rule(
            "number as temp",
            "@numeral",
            lambda nodes: TemperatureData(value=numeral_data(nodes[0].token_data).value),
        ),
        rule(
            "<latent temp> degrees",
            r"%value_only /(deg(ree?)?s?\.?)|°/",
            lambda nodes: temperature_data(nodes[0].token_data).with_unit(DEGREE),
            PREDICATES,
        ),
        rule(
            "<temp> Celsius",
            r"%scale_ready /c(el[cs]?(ius)?)?\.?|centigrade/",
            _with_scale(CELSIUS),
            PREDICATES,
        ),
        rule(
            "<temp> Fahrenheit",
            r"%scale_ready /f(ah?rh?eh?n(h?eit)?)?\.?/",
            _with_scale(FAHRENHEIT),
            PREDICATES,
        ),
        rule(
            "<temp> °C|°F",
            r"%value_only /°\s*(f|c)/",
            _degree_symbol_scale,
            PREDICATES,
        ),
        rule("<temp> below zero", "%with_unit /below zero/", _below_zero, PREDICATES),
    ] + interval_rules("temp", temperature_data, over=r"over|above|at least|more than")
