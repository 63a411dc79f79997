"""
Core data structures for the valex resolver.

Contains the per-call context and options and the Candidate record that flows
through the resolution pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..locale import Locale
from ..vx_types import DimensionKind, Range


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Context:
    """Caller-supplied context for a parse call."""

    reference_time: datetime = field(default_factory=_utc_now)
    locale: Locale = field(default_factory=Locale)

    def __post_init__(self):
        # naive reference times are taken to be UTC
        if self.reference_time.tzinfo is None:
            object.__setattr__(
                self, "reference_time", self.reference_time.replace(tzinfo=timezone.utc)
            )


@dataclass(frozen=True)
class Options:
    """Caller-supplied options for a parse call."""

    with_latent: bool = False


@dataclass
class Candidate:
    """A forest node that resolved to a value, awaiting overlap resolution."""

    range: Range
    dim: DimensionKind
    value: Dict[str, Any]
    latent: bool
    rule_index: int
    node_index: int
    rule_name: Optional[str] = None

    @property
    def length(self) -> int:
        return self.range.length
