from functools import lru_cache
from pathlib import Path
from typing import Callable, Mapping, Optional, Tuple

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput, VisitError

from .vx_transformer import PatternTransformer
from .vx_types import PatternItem

GRAMMAR_PATH = Path(__file__).parent / "vx_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    PATTERN_GRAMMAR = f.read()

pattern_parser = Lark(PATTERN_GRAMMAR, start="start", parser="lalr")


class PatternSyntaxError(ValueError):
    """Raised when a pattern string is not valid notation."""


@lru_cache(maxsize=None)
def _parse_tree(source: str) -> Tree:
    try:
        return pattern_parser.parse(source)
    except UnexpectedInput as e:
        raise PatternSyntaxError(f"Invalid pattern {source!r}: {e}") from e


def parse_pattern(
    source: str,
    predicates: Optional[Mapping[str, Callable]] = None,
) -> Tuple[PatternItem, ...]:
    """Parse a pattern string such as "@numeral /miles?/" into pattern items."""
    if not source or not source.strip():
        raise ValueError("Pattern must not be empty")
    tree = _parse_tree(source)
    try:
        return PatternTransformer(predicates).transform(tree)
    except VisitError as ve:
        raise ve.orig_exc from ve
