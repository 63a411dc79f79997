"""
valex Evaluator: the matching engine.

RuleEvaluator grows a parse forest over one document in two phases:

1. Lexical pass: every rule whose pattern is a single regex is applied to the
   whole text once.
2. Composition: all remaining rules are swept over the forest repeatedly. Nodes
   produced during a sweep are committed after it, and sweeping stops once a
   sweep adds nothing new or the pass cap is reached.

A forest node is identified by (start, end, rule_name); a rule never produces
two nodes for the same span.
"""

import logging
import re
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .document import Document
from .stash import Stash
from .vx_types import Lexical, Node, PatternItem, Range, RegexMatch, Rule, RuleSet

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10

# A run is the sequence of nodes matched so far; each element pairs the node's
# arena index (None for a transient lexical node) with the node itself.
Run = Tuple[Tuple[Optional[int], Node], ...]
Lexeme = Tuple[Range, RegexMatch]


class RuleEvaluator:
    """
    Applies a RuleSet to a Document and returns the resulting Stash.

    An evaluator is single-use and owns all of its per-parse state, so any
    number of them may run concurrently against the same RuleSet.
    """

    def __init__(
        self,
        rule_set: RuleSet,
        document: Document,
        max_passes: int = DEFAULT_MAX_PASSES,
    ):
        if max_passes < 0:
            raise ValueError(f"max_passes must be non-negative, got {max_passes}")
        self.rule_set = rule_set
        self.document = document
        self.max_passes = max_passes
        self.stash = Stash()
        self.passes = 0
        self.converged = False
        self._seen: Set[Tuple[int, int, str]] = set()
        # Performance caches
        self._lexical_cache: Dict["re.Pattern", List[Lexeme]] = {}
        self._continuation_cache: Dict[Tuple["re.Pattern", int], List[Lexeme]] = {}

    def evaluate(self) -> Stash:
        """Run the lexical pass and composition sweeps; return the forest."""
        lexical_nodes = self._commit(self._lexical_pass())
        logger.debug("Lexical pass produced %s nodes", lexical_nodes)

        while self.passes < self.max_passes:
            added = self._commit(self._sweep())
            self.passes += 1
            logger.debug("Pass %s added %s nodes", self.passes, added)
            if not added:
                self.converged = True
                break
        else:
            logger.warning(
                "Rule application stopped after %s passes without converging",
                self.max_passes,
            )

        logger.info(
            "Applied %s rules in %s passes: %s forest nodes",
            len(self.rule_set),
            self.passes,
            len(self.stash),
        )
        return self.stash

    # === Lexical matching ===

    def _lexeme(self, m: "re.Match") -> Lexeme:
        rng = self.document.char_range(m.start(), m.end())
        payload = RegexMatch(
            groups=(m.group(0),) + m.groups(),
            named=tuple(sorted(m.groupdict().items())),
        )
        return rng, payload

    def _lexical_matches(self, item: Lexical) -> List[Lexeme]:
        """All word-aligned matches of a regex anywhere in the text, cached per parse."""
        cached = self._lexical_cache.get(item.regex)
        if cached is None:
            doc = self.document
            cached = [
                self._lexeme(m)
                for m in item.regex.finditer(doc.text)
                if doc.is_word_aligned(m.start(), m.end())
            ]
            self._lexical_cache[item.regex] = cached
        return cached

    def _continuations(self, item: Lexical, after: int) -> List[Lexeme]:
        """Word-aligned matches of a regex starting adjacent to byte offset after."""
        key = (item.regex, after)
        cached = self._continuation_cache.get(key)
        if cached is None:
            doc = self.document
            first = doc.char_offset(after)
            last = doc.char_offset(doc.next_non_space(after))
            cached = []
            for pos in range(first, last + 1):
                m = item.regex.match(doc.text, pos)
                if m is not None and doc.is_word_aligned(m.start(), m.end()):
                    cached.append(self._lexeme(m))
            self._continuation_cache[key] = cached
        return cached

    # === Passes ===

    def _lexical_pass(self) -> List[Tuple[int, Range, object, Run]]:
        produced = []
        for index, r in enumerate(self.rule_set):
            if not r.is_single_lexical:
                continue
            for rng, payload in self._lexical_matches(r.pattern[0]):
                candidate = self._produce(index, r, ((None, Node(rng, payload)),))
                if candidate is not None:
                    produced.append(candidate)
        return produced

    def _sweep(self) -> List[Tuple[int, Range, object, Run]]:
        produced = []
        for index, r in enumerate(self.rule_set):
            if r.is_single_lexical:
                continue
            for run in self._match(r.pattern):
                candidate = self._produce(index, r, run)
                if candidate is not None:
                    produced.append(candidate)
        return produced

    def _produce(self, index: int, r: Rule, run: Run):
        """Call the production for a complete run; None on local failure or duplicate."""
        rng = Range(run[0][1].range.start, run[-1][1].range.end)
        if (rng.start, rng.end, r.name) in self._seen:
            return None
        payload = r.production([node for _, node in run])
        if payload is None:
            return None
        return index, rng, payload, run

    def _commit(self, produced) -> int:
        added = 0
        for index, rng, payload, run in produced:
            r = self.rule_set[index]
            key = (rng.start, rng.end, r.name)
            if key in self._seen:
                continue
            self._seen.add(key)
            children = tuple(
                arena_index
                if arena_index is not None
                else self.stash.add(node, indexed=False)
                for arena_index, node in run
            )
            self.stash.add(Node(rng, payload, children, r.name, index))
            added += 1
        return added

    # === Pattern matching ===

    def _match(self, pattern: Sequence[PatternItem]) -> Iterator[Run]:
        for seed in self._seeds(pattern[0]):
            yield from self._extend(pattern, 1, (seed,))

    def _seeds(self, item: PatternItem) -> Iterator[Tuple[Optional[int], Node]]:
        if isinstance(item, Lexical):
            for rng, payload in self._lexical_matches(item):
                yield None, Node(rng, payload)
        else:
            for index, node in self.stash.items():
                if item.accepts(node):
                    yield index, node

    def _extend(
        self, pattern: Sequence[PatternItem], position: int, run: Run
    ) -> Iterator[Run]:
        if position == len(pattern):
            yield run
            return
        item = pattern[position]
        after = run[-1][1].range.end
        if isinstance(item, Lexical):
            for rng, payload in self._continuations(item, after):
                yield from self._extend(
                    pattern, position + 1, run + ((None, Node(rng, payload)),)
                )
        else:
            hi = self.document.next_non_space(after)
            for index in self.stash.indices_starting_between(after, hi):
                node = self.stash[index]
                if item.accepts(node):
                    yield from self._extend(pattern, position + 1, run + ((index, node),))
