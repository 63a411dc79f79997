"""
Main entity resolver for valex.

Orchestrates the resolution pipeline over a finished parse forest:

1. Candidate building (dimension filter, latency filter, per-dimension resolution)
2. Overlap resolution
3. Materialization into Entity records
"""

import logging
from typing import Callable, FrozenSet, List, Optional

from ..document import Document
from ..stash import Stash
from ..vx_types import DimensionKind, Entity
from .candidate_builder import CandidateBuilder
from .core import Candidate, Context, Options
from .overlap_resolver import OverlapResolver

logger = logging.getLogger(__name__)


class EntityResolver:
    """Turns a parse forest into the final list of entities."""

    def __init__(self, document: Document):
        """
        Initialize the resolver with the document the forest was built over.

        Args:
            document: The parsed input text
        """
        self.document = document
        self.candidate_builder = CandidateBuilder()
        self.overlap_resolver = OverlapResolver()

    def resolve(
        self,
        stash: Stash,
        dims: FrozenSet[DimensionKind],
        context: Context,
        options: Options,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> List[Entity]:
        """
        Resolve a forest into non-overlapping entities.

        Args:
            stash: The parse forest
            dims: Requested dimensions; empty means all
            context: Reference time and locale
            options: Resolution options
            progress_callback: Optional callback function(stage_name, current, total)

        Returns:
            List of Entity objects in document order
        """
        if progress_callback:
            progress_callback("building_candidates", 0, len(stash))

        logger.info("Resolving %s forest nodes", len(stash))
        candidates = self.candidate_builder.build(stash, dims, context, options)

        if progress_callback:
            progress_callback("building_candidates", len(candidates), len(stash))
            progress_callback("resolving_overlaps", 0, len(candidates))

        accepted = self.overlap_resolver.resolve_overlaps(candidates)

        if progress_callback:
            progress_callback("resolving_overlaps", len(accepted), len(candidates))

        entities = [self.materialize(c) for c in accepted]
        logger.info("Resolved %s entities", len(entities))

        if progress_callback:
            progress_callback("complete", len(entities), len(entities))
        return entities

    def materialize(self, candidate: Candidate) -> Entity:
        return Entity(
            dim=candidate.dim,
            body=self.document.body(candidate.range),
            start=candidate.range.start,
            end=candidate.range.end,
            value=candidate.value,
            latent=candidate.latent,
        )
