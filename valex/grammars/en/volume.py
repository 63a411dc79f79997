from typing import List

from ...dimensions.numeral import is_positive, numeral_data
from ...dimensions.volume import (
    CUP,
    FLUID_OUNCE,
    GALLON,
    HECTOLITRE,
    LITRE,
    MILLILITRE,
    PINT,
    QUART,
    TABLESPOON,
    TEASPOON,
    VolumeData,
    volume_data,
)
from ...vx_pattern import rule
from ...vx_types import Rule
from .measurement import interval_rules

UNITS = [
    ("<latent vol> ml", r"m(l(s?)|illilit(er|re)s?)", MILLILITRE),
    ("<vol> hectoliters", r"hectolit(er|re)s?", HECTOLITRE),
    ("<vol> liters", r"l(it(er|re)s?)?", LITRE),
    ("<latent vol> gallon", r"gal((l?ons?)|s)?", GALLON),
    ("<latent vol> cup", r"cups?", CUP),
    ("<latent vol> pint", r"pints?", PINT),
    ("<latent vol> quart", r"quarts?", QUART),
    ("<latent vol> fluid ounce", r"fl(uid)?\.? ?(oz|ounces?)", FLUID_OUNCE),
    ("<latent vol> tablespoon", r"tbsps?|tablespoons?", TABLESPOON),
    ("<latent vol> teaspoon", r"tsps?|teaspoons?", TEASPOON),
]

FRACTIONS = [
    ("half", 0.5),
    ("third", 1 / 3),
    ("quarter|fourth", 0.25),
    ("fifth", 0.2),
    ("tenth", 0.1),
]


def _unit_only(token_data) -> bool:
    data = volume_data(token_data)
    return (
        data is not None
        and data.unit is not None
        and data.value is None
        and data.min_value is None
        and data.max_value is None
    )


def _amount(nodes):
    value = numeral_data(nodes[0].token_data).value
    if value <= 0:
        return None
    return volume_data(nodes[1].token_data).with_value(value)


PREDICATES = {"unit_only": _unit_only, "positive": is_positive}


def rules() -> List[Rule]:
    out = [
        rule(name, f"/{pattern}/", lambda nodes, unit=unit: VolumeData(unit=unit))
        for name, pattern, unit in UNITS
    ]
    out.append(rule("<number> <volume>", "@numeral %unit_only", _amount, PREDICATES))
    out.append(
        rule(
            "a <volume>",
            "/an?/ %unit_only",
            lambda nodes: volume_data(nodes[1].token_data).with_value(1.0),
            PREDICATES,
        )
    )
    for words, fraction in FRACTIONS:
        out.append(
            rule(
                f"{words.split('|')[0]} <volume>",
                f"/({words})(-|(( of)?( an?)?))/ %unit_only",
                lambda nodes, fraction=fraction: volume_data(
                    nodes[1].token_data
                ).with_value(fraction),
                PREDICATES,
            )
        )
    return out + interval_rules("volume", volume_data)
