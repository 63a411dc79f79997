"""
Overlap resolution for the valex resolver.

Chooses a non-overlapping subset of resolved candidates using a fixed,
deterministic priority order.
"""

import bisect
import logging
from typing import List, Tuple

from .core import Candidate

logger = logging.getLogger(__name__)


class OverlapResolver:
    """
    Handles overlap resolution for candidates.

    Candidates are accepted greedily in priority order; a candidate is dropped
    when it overlaps one that was already accepted. The result is returned in
    document order.
    """

    @staticmethod
    def priority_key(candidate: Candidate) -> Tuple[int, int, int, int, int]:
        """
        Sort key, highest priority first:

        1. Span length (longer wins)
        2. Start offset (earlier wins)
        3. Rule registration index (lower wins)
        4. Dimension declaration order (lower wins)
        5. Arena index of the node (earlier wins)
        """
        return (
            -candidate.range.length,
            candidate.range.start,
            candidate.rule_index,
            candidate.dim.order,
            candidate.node_index,
        )

    @staticmethod
    def resolve_overlaps(candidates: List[Candidate]) -> List[Candidate]:
        """
        Resolve overlapping candidates using the priority rules.

        Args:
            candidates: List of Candidate objects

        Returns:
            List of non-overlapping Candidate objects in document order
        """
        if not candidates:
            return []

        # accepted is kept sorted by start; being non-overlapping, it is sorted by end too
        accepted: List[Candidate] = []
        starts: List[int] = []
        for candidate in sorted(candidates, key=OverlapResolver.priority_key):
            rng = candidate.range
            i = bisect.bisect_left(starts, rng.start)
            if i > 0 and accepted[i - 1].range.overlaps(rng):
                continue
            if i < len(accepted) and accepted[i].range.overlaps(rng):
                continue
            accepted.insert(i, candidate)
            starts.insert(i, rng.start)

        logger.info(
            "Overlap resolution: %s -> %s candidates", len(candidates), len(accepted)
        )
        return accepted

    @staticmethod
    def resolve_tie(candidate1: Candidate, candidate2: Candidate) -> Candidate:
        """
        Apply the priority rules to determine which of two candidates wins.

        Args:
            candidate1: First candidate
            candidate2: Second candidate

        Returns:
            The winning candidate
        """
        key1 = OverlapResolver.priority_key(candidate1)
        key2 = OverlapResolver.priority_key(candidate2)
        return candidate1 if key1 <= key2 else candidate2
