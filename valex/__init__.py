"""
valex - rule-based value extraction.

A parse call wraps the text in a Document, grows the parse forest with
RuleEvaluator and hands it to EntityResolver:

    from valex import parse_en
    parse_en("$10 and 3 miles", dimensions=["amount-of-money", "distance"])
"""

from typing import Callable, Iterable, List, Optional, Union

from .document import Document
from .grammars import rules_for
from .locale import Locale
from .resolver import Context, EntityResolver, Options
from .stash import Stash
from .vx_engine import DEFAULT_MAX_PASSES, RuleEvaluator
from .vx_parser import PatternSyntaxError
from .vx_pattern import dim, predicate, regex, rule
from .vx_types import (
    DimensionKind,
    Entity,
    Node,
    Range,
    RegexMatch,
    Rule,
    RuleSet,
    dimension_set,
)

__version__ = "0.1.0"

Dimensions = Optional[Iterable[Union[DimensionKind, str]]]


def build_forest(
    text: Union[str, bytes, Document],
    rules: RuleSet,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> Stash:
    """Run the matching engine only and return the unresolved forest."""
    document = text if isinstance(text, Document) else Document(text)
    return RuleEvaluator(rules, document, max_passes=max_passes).evaluate()


def parse(
    text: Union[str, bytes],
    rules: RuleSet,
    context: Optional[Context] = None,
    options: Optional[Options] = None,
    dimensions: Dimensions = None,
    max_passes: int = DEFAULT_MAX_PASSES,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[Entity]:
    """
    Extract non-overlapping entities from text.

    Args:
        text: UTF-8 bytes or str; all offsets in the result are UTF-8 byte offsets
        rules: The rule table to apply
        context: Reference time and locale; defaults to now, English
        options: Resolution options; defaults to no latent entities
        dimensions: Dimensions to surface; None or empty means all
        max_passes: Cap on composition sweeps
        progress_callback: Optional callback function(stage_name, current, total)

    Returns:
        List of Entity objects in document order

    Raises:
        UnicodeDecodeError: If text is bytes that are not valid UTF-8
    """
    document = Document(text)
    dims = dimension_set(dimensions)
    stash = build_forest(document, rules, max_passes=max_passes)
    resolver = EntityResolver(document)
    return resolver.resolve(
        stash,
        dims,
        context or Context(),
        options or Options(),
        progress_callback=progress_callback,
    )


def parse_en(
    text: Union[str, bytes],
    dimensions: Dimensions = None,
    context: Optional[Context] = None,
    options: Optional[Options] = None,
) -> List[Entity]:
    """parse() with the English grammar restricted to dimensions and their dependencies."""
    dims = dimension_set(dimensions)
    return parse(
        text,
        rules_for(Locale("en"), dims),
        context=context or Context(locale=Locale("en")),
        options=options,
        dimensions=dims,
    )


__all__ = [
    "Context",
    "DEFAULT_MAX_PASSES",
    "DimensionKind",
    "Document",
    "EntityResolver",
    "Entity",
    "Locale",
    "Node",
    "Options",
    "PatternSyntaxError",
    "Range",
    "RegexMatch",
    "Rule",
    "RuleEvaluator",
    "RuleSet",
    "Stash",
    "build_forest",
    "dim",
    "dimension_set",
    "parse",
    "parse_en",
    "predicate",
    "regex",
    "rule",
    "rules_for",
]
