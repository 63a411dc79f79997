"""
Candidate building for the valex resolver.

Turns forest nodes into resolved candidates: nodes of unrequested dimensions are
skipped, latent nodes are dropped unless the caller asked for them, and each
remaining node is handed to its dimension's resolver.
"""

import json
import logging
from typing import Callable, Dict, FrozenSet, List, Optional

from ..dimensions import RESOLVERS
from ..stash import Stash
from ..vx_types import DimensionKind, dimension_of, is_latent
from .core import Candidate, Context, Options
from .overlap_resolver import OverlapResolver

logger = logging.getLogger(__name__)


class CandidateBuilder:
    """Resolves forest nodes into Candidate records."""

    def __init__(self, resolvers: Optional[Dict[DimensionKind, Callable]] = None):
        self.resolvers = resolvers if resolvers is not None else RESOLVERS

    def build(
        self,
        stash: Stash,
        dims: FrozenSet[DimensionKind],
        context: Context,
        options: Options,
    ) -> List[Candidate]:
        """
        Resolve every forest node of a requested dimension.

        Args:
            stash: The parse forest
            dims: Requested dimensions; empty means all
            context: Reference time and locale
            options: Resolution options

        Returns:
            De-duplicated list of Candidate objects
        """
        candidates = []
        skipped_latent = 0
        unresolved = 0
        for index, node in stash.items():
            kind = dimension_of(node.token_data)
            if kind is None or (dims and kind not in dims):
                continue
            latent = is_latent(node.token_data)
            if latent and not options.with_latent:
                skipped_latent += 1
                continue
            value = self.resolvers[kind](node.token_data, context, options)
            if value is None:
                unresolved += 1
                continue
            candidates.append(
                Candidate(
                    range=node.range,
                    dim=kind,
                    value=value,
                    latent=latent,
                    rule_index=node.rule_index if node.rule_index is not None else -1,
                    node_index=index,
                    rule_name=node.rule_name,
                )
            )

        logger.info(
            "Built %s candidates (%s latent skipped, %s unresolvable)",
            len(candidates),
            skipped_latent,
            unresolved,
        )
        return self.deduplicate(candidates)

    @staticmethod
    def deduplicate(candidates: List[Candidate]) -> List[Candidate]:
        """Keep the highest-priority candidate per (start, end, dim, value)."""
        best: Dict[tuple, Candidate] = {}
        for candidate in candidates:
            key = (
                candidate.range.start,
                candidate.range.end,
                candidate.dim,
                json.dumps(candidate.value, sort_keys=True, default=str),
            )
            current = best.get(key)
            best[key] = (
                candidate
                if current is None
                else OverlapResolver.resolve_tie(current, candidate)
            )
        if len(best) != len(candidates):
            logger.debug(
                "De-duplicated %s candidates to %s", len(candidates), len(best)
            )
        return list(best.values())
