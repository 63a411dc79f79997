"""
valex resolver package - turns a parse forest into entities.

- core: Context, Options and the Candidate record
- candidate_builder: dimension resolution, latency filtering, de-duplication
- overlap_resolver: the overlap and tie-break policy
- entity_resolver: main resolver orchestrating the pipeline
"""

from .candidate_builder import CandidateBuilder
from .core import Candidate, Context, Options
from .entity_resolver import EntityResolver
from .overlap_resolver import OverlapResolver

__all__ = [
    "Candidate",
    "Context",
    "Options",
    "CandidateBuilder",
    "OverlapResolver",
    "EntityResolver",
]
