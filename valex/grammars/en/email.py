import re
from typing import List

from ...dimensions.email import EmailData
from ...vx_pattern import rule
from ...vx_types import Rule

SPOKEN_DOT = re.compile(r"\s+dot\s+", re.IGNORECASE)


def _spelled_out(nodes):
    local = SPOKEN_DOT.sub(".", nodes[0].group(1))
    domain = SPOKEN_DOT.sub(".", nodes[0].group(2))
    return EmailData(f"{local}@{domain}")


def rules() -> List[Rule]:
    return [
        rule(
            "email",
            r"/([\w._+-]+@[\w_-]+(\.[\w_-]+)+)/",
            lambda nodes: EmailData(nodes[0].group(1)),
        ),
        rule(
            "email spelled out",
            r"/([\w_+-]+(?:(?:\s+dot\s+|\.)+[\w_+-]+){0,10})(?:\s+at\s+|@)"
            r"((?:[a-zA-Z][\w_-]*)(?:(?:\.|\s+dot\s+)[\w_-]+){1,10})/",
            _spelled_out,
        ),
    ]
