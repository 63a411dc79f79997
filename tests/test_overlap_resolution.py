"""
Tests for resolution: overlap policy, de-duplication, latency gating and the
EntityResolver pipeline.
"""

import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from valex import parse_en
from valex.document import Document
from valex.resolver import (
    Candidate,
    CandidateBuilder,
    Context,
    EntityResolver,
    Options,
    OverlapResolver,
)
from valex.vx_types import DimensionKind, Range


def candidate(start, end, dim=DimensionKind.NUMERAL, rule_index=0, node_index=0, value=None):
    return Candidate(
        range=Range(start, end),
        dim=dim,
        value=value or {"type": "value", "value": float(start)},
        latent=False,
        rule_index=rule_index,
        node_index=node_index,
    )


class TestOverlapResolver:
    def test_longest_match_wins(self):
        short = candidate(0, 3)
        long = candidate(0, 7)
        assert OverlapResolver.resolve_overlaps([short, long]) == [long]

    def test_earlier_start_wins_on_equal_length(self):
        first = candidate(0, 4, node_index=5)
        second = candidate(2, 6, node_index=1)
        assert OverlapResolver.resolve_overlaps([second, first]) == [first]

    def test_lower_rule_index_wins_on_same_span(self):
        a = candidate(0, 4, rule_index=3, node_index=0)
        b = candidate(0, 4, rule_index=1, node_index=1)
        assert OverlapResolver.resolve_overlaps([a, b]) == [b]

    def test_dimension_order_breaks_rule_ties(self):
        money = candidate(0, 4, dim=DimensionKind.AMOUNT_OF_MONEY)
        number = candidate(0, 4, dim=DimensionKind.NUMERAL)
        assert OverlapResolver.resolve_overlaps([money, number]) == [number]

    def test_node_index_is_the_last_resort(self):
        a = candidate(0, 4, node_index=9)
        b = candidate(0, 4, node_index=2)
        assert OverlapResolver.resolve_tie(a, b) is b
        assert OverlapResolver.resolve_tie(b, a) is b

    def test_output_is_in_document_order_and_disjoint(self):
        candidates = [
            candidate(10, 12),
            candidate(0, 5),
            candidate(4, 11),
            candidate(5, 7),
            candidate(20, 25),
        ]
        accepted = OverlapResolver.resolve_overlaps(candidates)
        assert [c.range for c in accepted] == [Range(4, 11), Range(20, 25)]
        for a, b in zip(accepted, accepted[1:]):
            assert not a.range.overlaps(b.range)

    def test_touching_ranges_do_not_overlap(self):
        accepted = OverlapResolver.resolve_overlaps([candidate(3, 6), candidate(0, 3)])
        assert [c.range for c in accepted] == [Range(0, 3), Range(3, 6)]

    def test_empty(self):
        assert OverlapResolver.resolve_overlaps([]) == []


class TestDeduplication:
    def test_identical_values_are_merged(self):
        value = {"type": "value", "value": 3.0, "unit": "mile"}
        a = candidate(0, 7, dim=DimensionKind.DISTANCE, rule_index=4, value=dict(value))
        b = candidate(0, 7, dim=DimensionKind.DISTANCE, rule_index=2, value=dict(value))
        assert CandidateBuilder.deduplicate([a, b]) == [b]

    def test_different_values_are_kept(self):
        a = candidate(0, 7, value={"type": "value", "value": 1.0})
        b = candidate(0, 7, value={"type": "value", "value": 2.0})
        assert len(CandidateBuilder.deduplicate([a, b])) == 2


class TestLatency:
    def test_bare_currency_is_hidden_by_default(self):
        assert parse_en("$", ["amount-of-money"]) == []

    def test_bare_currency_with_latent(self):
        (entity,) = parse_en("$", ["amount-of-money"], options=Options(with_latent=True))
        assert entity.latent is True
        assert entity.value == {"type": "value", "unit": "USD"}

    def test_part_of_day_is_latent(self):
        context = Context(reference_time=datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc))
        assert parse_en("morning", ["time"], context=context) == []
        (entity,) = parse_en(
            "morning", ["time"], context=context, options=Options(with_latent=True)
        )
        assert entity.latent
        assert entity.value["type"] == "interval"

    def test_amount_makes_currency_concrete(self):
        (entity,) = parse_en("$10", ["amount-of-money"], options=Options(with_latent=True))
        assert entity.latent is False
        assert entity.body == "$10"


class TestEntityResolver:
    def test_progress_callback_stages(self):
        from valex import build_forest, rules_for

        document = Document("3 miles")
        stash = build_forest(document, rules_for("en", ["distance"]))
        stages = []
        entities = EntityResolver(document).resolve(
            stash,
            frozenset({DimensionKind.DISTANCE}),
            Context(),
            Options(),
            progress_callback=lambda stage, current, total: stages.append(stage),
        )
        assert len(entities) == 1
        assert stages == [
            "building_candidates",
            "building_candidates",
            "resolving_overlaps",
            "resolving_overlaps",
            "complete",
        ]

    def test_unrequested_dimensions_are_not_surfaced(self):
        entities = parse_en("3 miles", ["distance"])
        assert {e.dim for e in entities} == {DimensionKind.DISTANCE}

    def test_empty_dimension_set_means_all(self):
        entities = parse_en("call me at bob@example.com", [])
        assert DimensionKind.EMAIL in {e.dim for e in entities}

    def test_context_defaults_to_utc(self):
        context = Context(reference_time=datetime(2024, 1, 1, 12, 0))
        assert context.reference_time.tzinfo is timezone.utc
