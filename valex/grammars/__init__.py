"""
Grammar registry.

rules_for() assembles the RuleSet for a locale and a set of requested
dimensions. The requested dimensions are closed over their dependencies, so
asking for "distance" also loads the numeral rules it composes from. RuleSets
are immutable and cached per (language, dimensions).
"""

import logging
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from ..dimensions import dependencies
from ..locale import Locale
from ..vx_types import DimensionKind, Rule, RuleSet, dimension_set
from . import en

logger = logging.getLogger(__name__)

GRAMMARS: Dict[str, Dict] = {
    "en": en.RULES,
}


def supported_languages() -> List[str]:
    return sorted(GRAMMARS)


def dependency_closure(dims: Iterable[DimensionKind]) -> FrozenSet[DimensionKind]:
    """All dimensions needed to compose dims, dims included."""
    pending = list(dims)
    closed = set()
    while pending:
        kind = pending.pop()
        if kind in closed:
            continue
        closed.add(kind)
        pending.extend(dependencies(kind))
    return frozenset(closed)


@lru_cache(maxsize=None)
def _build(lang: str, dims: FrozenSet[DimensionKind]) -> RuleSet:
    grammar = GRAMMARS[lang]
    rules: List[Rule] = []
    for kind in DimensionKind:
        if kind in dims and kind in grammar:
            rules.extend(grammar[kind]())
    logger.info("Built %s rules for %s (%s dimensions)", len(rules), lang, len(dims))
    return RuleSet(tuple(rules), name=lang)


def rules_for(
    locale: Union[Locale, str, None] = None,
    dims: Optional[Iterable[Union[DimensionKind, str]]] = None,
) -> RuleSet:
    """
    Return the RuleSet for a locale restricted to dims and their dependencies.

    Args:
        locale: A Locale, a tag such as "en_US", or None for English
        dims: Requested dimensions; None or empty means all

    Raises:
        ValueError: If the locale's language has no grammar, or a dimension
            name is unknown
    """
    if locale is None:
        locale = Locale()
    elif isinstance(locale, str):
        locale = Locale.parse(locale)
    if locale.lang not in GRAMMARS:
        raise ValueError(
            f"No grammar for language {locale.lang!r}; "
            f"supported: {', '.join(supported_languages())}"
        )
    wanted = dimension_set(dims) or frozenset(DimensionKind)
    return _build(locale.lang, dependency_closure(wanted))
