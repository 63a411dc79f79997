"""
Rule-construction helpers.

Grammars build their rules with these rather than instantiating the pattern item
classes directly:

    rule("<number> miles", "@numeral /miles?/", lambda nodes: ...)
    rule("<number> miles", [dim(DimensionKind.NUMERAL), regex(r"miles?")], ...)
"""

from typing import Callable, Mapping, Optional, Sequence, Union

from .vx_parser import parse_pattern
from .vx_types import (
    Dimension,
    DimensionKind,
    Lexical,
    PatternItem,
    Predicate,
    Production,
    Rule,
    TokenData,
)


def regex(pattern: str) -> Lexical:
    return Lexical.compile(pattern)


def dim(kind: Union[DimensionKind, str]) -> Dimension:
    if not isinstance(kind, DimensionKind):
        kind = DimensionKind.from_name(kind)
    return Dimension(kind)


def predicate(func: Callable[[TokenData], bool], name: Optional[str] = None) -> Predicate:
    return Predicate(func=func, name=name or getattr(func, "__name__", "<predicate>"))


def rule(
    name: str,
    pattern: Union[str, Sequence[PatternItem]],
    production: Production,
    predicates: Optional[Mapping[str, Callable[[TokenData], bool]]] = None,
) -> Rule:
    """Build a validated Rule from a pattern string or a sequence of items."""
    if isinstance(pattern, str):
        items = parse_pattern(pattern, predicates)
    else:
        items = tuple(pattern)
    return Rule(name=name, pattern=items, production=production)
