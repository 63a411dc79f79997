"""
English relative-time rules.

A part of the day on its own ("morning") is latent; anchoring it to a day
("this morning", "tomorrow evening") or to "in the" makes it a real time.
"""

from typing import List

from ...dimensions.duration import duration_data
from ...dimensions.time import TimeData, time_data
from ...vx_pattern import rule
from ...vx_types import Rule

DAYS = [
    ("today", r"today", 0),
    ("tomorrow", r"tomorrows?", 1),
    ("yesterday", r"yesterday", -1),
    ("day after tomorrow", r"(the )?day after tomorrow", 2),
    ("day before yesterday", r"(the )?day before yesterday", -2),
]

PARTS = [
    ("early morning", r"early ((in|hours of) the )?morning"),
    ("morning", r"morning"),
    ("afternoon", r"afternoon(ish)?"),
    ("evening", r"evening"),
    ("night", r"night"),
    ("lunch", r"lunch"),
]


def _part_of_day(token_data) -> bool:
    data = time_data(token_data)
    return data is not None and data.is_part_of_day and data.day_offset is None


def _anchored(offset: int):
    return lambda nodes: time_data(nodes[1].token_data).on_day(offset)


def _shifted(duration_index: int, direction: int):
    def production(nodes):
        return TimeData.shifted(duration_data(nodes[duration_index].token_data), direction)

    return production


PREDICATES = {"part_of_day": _part_of_day}


def rules() -> List[Rule]:
    out = [
        rule(
            "now",
            r"/(right |just )?now|at the moment|atm|at this time/",
            lambda nodes: TimeData.now(),
        ),
    ]
    out += [
        rule(name, f"/{pattern}/", lambda nodes, offset=offset: TimeData.day(offset))
        for name, pattern, offset in DAYS
    ]
    out += [
        rule(f"{name} (latent)", f"/{pattern}/", lambda nodes, name=name: TimeData.part(name))
        for name, pattern in PARTS
    ]
    out += [
        rule(
            "tonight",
            r"/tonight|tonite/",
            lambda nodes: TimeData.part("evening", latent=False).on_day(0),
        ),
        rule("this <part-of-day>", "/this|today/ %part_of_day", _anchored(0), PREDICATES),
        rule(
            "in the <part-of-day>",
            "/in the/ %part_of_day",
            lambda nodes: time_data(nodes[1].token_data).not_latent(),
            PREDICATES,
        ),
        rule("last <part-of-day>", "/last|yesterday/ %part_of_day", _anchored(-1), PREDICATES),
        rule("tomorrow <part-of-day>", "/tomorrow/ %part_of_day", _anchored(1), PREDICATES),
        rule("in <duration>", "/in|within|after/ @duration", _shifted(1, 1)),
        rule("<duration> ago", "@duration /ago/", _shifted(0, -1)),
        rule(
            "<duration> from now",
            "@duration /from now|hence|later/",
            _shifted(0, 1),
        ),
    ]
    return out
