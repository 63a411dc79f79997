"""
Pattern transformer: Lark parse tree -> tuple of PatternItem.

Named predicates are resolved against the mapping the caller passes to rule();
dimension names are resolved with DimensionKind.from_name.
"""

from typing import Callable, Mapping, Optional

from lark import Transformer, v_args

from .vx_types import Dimension, DimensionKind, Lexical, Predicate


@v_args(inline=True)
class PatternTransformer(Transformer):
    def __init__(self, predicates: Optional[Mapping[str, Callable]] = None):
        super().__init__()
        self.predicates = dict(predicates or {})

    def start(self, *items):
        """Transform the whole pattern into a tuple of items."""
        return tuple(items)

    def lexical(self, token):
        """Strip the slash delimiters; an escaped slash is already valid regex."""
        return Lexical.compile(str(token)[1:-1])

    def dimension(self, name):
        return Dimension(DimensionKind.from_name(str(name)))

    def predicate(self, name):
        key = str(name)
        func = self.predicates.get(key)
        if func is None:
            raise ValueError(f"Unknown predicate: %{key}")
        return Predicate(func=func, name=key)
