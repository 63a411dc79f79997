"""
Core data model for the valex extraction engine.

Ranges over the input text, dimension tags, the raw lexical payload, forest
nodes, pattern items, rules and the output Entity record. Dimension payloads
themselves live in valex.dimensions; the engine only asks a payload for its
dimension tag and whether it is latent.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    Optional,
    Sequence,
    Tuple,
    Union,
)

# === Dimensions ===


class DimensionKind(Enum):
    """The closed set of extractable dimensions. Values are the wire names."""

    NUMERAL = "number"
    ORDINAL = "ordinal"
    TEMPERATURE = "temperature"
    DISTANCE = "distance"
    VOLUME = "volume"
    QUANTITY = "quantity"
    AMOUNT_OF_MONEY = "amount-of-money"
    EMAIL = "email"
    PHONE_NUMBER = "phone-number"
    URL = "url"
    CREDIT_CARD_NUMBER = "credit-card-number"
    TIME_GRAIN = "time-grain"
    DURATION = "duration"
    TIME = "time"

    @property
    def order(self) -> int:
        """Declaration order, used as a late tie-breaker during overlap resolution."""
        return _DIMENSION_ORDER[self]

    @classmethod
    def from_name(cls, name: str) -> "DimensionKind":
        """
        Look up a dimension by wire name ("amount-of-money") or member name
        ("AMOUNT_OF_MONEY", "amount_of_money", "numeral"), case-insensitively.
        """
        key = name.strip().lower().replace("_", "-")
        for kind in cls:
            if key in (kind.value, kind.name.lower().replace("_", "-")):
                return kind
        raise ValueError(f"Unknown dimension: {name!r}")


_DIMENSION_ORDER = {kind: i for i, kind in enumerate(DimensionKind)}


def dimension_set(
    dims: Optional[Iterable[Union[DimensionKind, str]]],
) -> FrozenSet[DimensionKind]:
    """Normalize a caller-supplied dimension list. Empty means all dimensions."""
    if not dims:
        return frozenset()
    return frozenset(
        d if isinstance(d, DimensionKind) else DimensionKind.from_name(d) for d in dims
    )


# === Ranges ===


@dataclass(frozen=True, order=True)
class Range:
    """Half-open [start, end) range of UTF-8 byte offsets into the input text."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Range") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Range") -> bool:
        return self.start <= other.start and other.end <= self.end

    def union(self, other: "Range") -> "Range":
        return Range(min(self.start, other.start), max(self.end, other.end))


# === Payloads ===


@dataclass(frozen=True)
class RegexMatch:
    """
    Raw lexical payload: the text captured by a lexical pattern item.

    groups[0] is the whole match, followed by the positional capture groups.
    Captured text is taken from the original input, so case is preserved.
    """

    dimension: ClassVar[Optional[DimensionKind]] = None

    groups: Tuple[Optional[str], ...]
    named: Tuple[Tuple[str, Optional[str]], ...] = ()

    @property
    def text(self) -> str:
        return self.groups[0] or ""

    def group(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.groups):
            return self.groups[index]
        return None


# One of the payload classes in valex.dimensions, or RegexMatch.
TokenData = Any


def dimension_of(token_data: TokenData) -> Optional[DimensionKind]:
    """Dimension tag of a payload; None for raw lexical matches."""
    return getattr(type(token_data), "dimension", None)


def is_latent(token_data: TokenData) -> bool:
    return bool(getattr(token_data, "latent", False))


def payload_as(token_data: TokenData, cls: type) -> Optional[Any]:
    """Return the payload when it is an instance of cls, otherwise None."""
    return token_data if isinstance(token_data, cls) else None


# === Forest nodes ===


@dataclass(frozen=True)
class Node:
    """
    A candidate interpretation of a span of text.

    children holds arena indices into the Stash that owns this node; rule_index
    is the registration index of the producing rule within its RuleSet.
    """

    range: Range
    token_data: TokenData
    children: Tuple[int, ...] = ()
    rule_name: Optional[str] = None
    rule_index: Optional[int] = None

    @property
    def dimension(self) -> Optional[DimensionKind]:
        return dimension_of(self.token_data)

    @property
    def latent(self) -> bool:
        return is_latent(self.token_data)

    def group(self, index: int) -> Optional[str]:
        """Capture group of a raw lexical node; None for any other payload."""
        if isinstance(self.token_data, RegexMatch):
            return self.token_data.group(index)
        return None


# === Pattern items ===


class PatternItem:
    """Base class for the three kinds of pattern item."""

    def accepts(self, node: Node) -> bool:
        """Whether this item accepts an existing forest node."""
        raise NotImplementedError


@dataclass(frozen=True)
class Lexical(PatternItem):
    """Case-insensitive regular expression matched directly against the text."""

    regex: "re.Pattern"

    @classmethod
    def compile(cls, pattern: str) -> "Lexical":
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{pattern}': {e}") from e
        return cls(regex=compiled)

    def accepts(self, node: Node) -> bool:
        return False

    def __repr__(self):
        return f"Lexical({self.regex.pattern!r})"


@dataclass(frozen=True)
class Dimension(PatternItem):
    """Accepts any node whose payload belongs to the given dimension."""

    kind: DimensionKind

    def accepts(self, node: Node) -> bool:
        return node.dimension is self.kind


@dataclass(frozen=True)
class Predicate(PatternItem):
    """Accepts any node whose payload satisfies an arbitrary predicate."""

    func: Callable[[TokenData], bool] = field(compare=False)
    name: str = "<predicate>"

    def accepts(self, node: Node) -> bool:
        return bool(self.func(node.token_data))

    def __repr__(self):
        return f"Predicate({self.name})"


# === Rules ===

Production = Callable[[Sequence[Node]], Optional[TokenData]]


@dataclass(frozen=True)
class Rule:
    """A named pattern plus the production that turns a full match into a payload."""

    name: str
    pattern: Tuple[PatternItem, ...]
    production: Production = field(compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", tuple(self.pattern))
        if not self.name:
            raise ValueError("Rule name must not be empty")
        if not self.pattern:
            raise ValueError(f"Rule '{self.name}' has an empty pattern")
        for item in self.pattern:
            if not isinstance(item, PatternItem):
                raise ValueError(
                    f"Rule '{self.name}' has an invalid pattern item: {item!r}"
                )
        if not callable(self.production):
            raise ValueError(f"Rule '{self.name}' has no callable production")

    @property
    def is_single_lexical(self) -> bool:
        return len(self.pattern) == 1 and isinstance(self.pattern[0], Lexical)


@dataclass(frozen=True)
class RuleSet:
    """An immutable, ordered rule table shared read-only by every parse call."""

    rules: Tuple[Rule, ...]
    name: str = "custom"

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))
        for r in self.rules:
            if not isinstance(r, Rule):
                raise ValueError(f"RuleSet '{self.name}' contains a non-rule: {r!r}")

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def __add__(self, other: Iterable[Rule]) -> "RuleSet":
        return RuleSet(self.rules + tuple(other), name=self.name)


# === Output ===


@dataclass(frozen=True)
class Entity:
    """A resolved, caller-visible extraction result. Offsets are UTF-8 bytes."""

    dim: DimensionKind
    body: str
    start: int
    end: int
    value: Dict[str, Any]
    latent: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dim": self.dim.value,
            "body": self.body,
            "start": self.start,
            "end": self.end,
            "value": self.value,
            "latent": self.latent,
        }
