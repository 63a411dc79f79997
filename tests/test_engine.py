import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from valex import parse_en, rules_for
from valex.dimensions.numeral import NumeralData, numeral_data
from valex.document import Document
from valex.vx_engine import DEFAULT_MAX_PASSES, RuleEvaluator
from valex.vx_pattern import rule
from valex.vx_types import Range, RegexMatch, RuleSet


def _digits(nodes):
    return NumeralData(float(nodes[0].group(1)))


def _span(nodes):
    low = numeral_data(nodes[0].token_data).value
    high = numeral_data(nodes[-1].token_data).value
    if low >= high:
        return None
    return NumeralData(high - low)


def _sum(nodes):
    return NumeralData(sum(numeral_data(n.token_data).value for n in nodes))


DIGITS = rule("digits", r"/(\d+)/", _digits)
SPAN = rule("span", "@numeral /to/ @numeral", _span)
SUM = rule("sum", "@numeral @numeral", _sum)


def evaluate(text, *rules, **kwargs):
    evaluator = RuleEvaluator(RuleSet(rules), Document(text), **kwargs)
    return evaluator, evaluator.evaluate()


def forest(stash, rule_name):
    return [node for _, node in stash.items() if node.rule_name == rule_name]


class TestLexicalPass:
    def test_single_lexical_rules_produce_nodes(self):
        _, stash = evaluate("12 and 345", DIGITS)
        assert [n.range for n in forest(stash, "digits")] == [Range(0, 2), Range(7, 10)]

    def test_matches_inside_words_are_rejected(self):
        one = rule("one", "/one/", lambda nodes: NumeralData(1.0))
        _, stash = evaluate("someone owes one", one)
        assert [n.range for n in forest(stash, "one")] == [Range(13, 16)]

    def test_matching_is_case_insensitive(self):
        one = rule("one", "/one/", lambda nodes: NumeralData(1.0))
        _, stash = evaluate("ONE", one)
        assert len(stash) == 1

    def test_offsets_are_bytes(self):
        _, stash = evaluate("€ 20", DIGITS)
        (node,) = forest(stash, "digits")
        assert node.range == Range(4, 6)


class TestComposition:
    def test_span_coverage(self):
        rules = rules_for("en", ["distance", "amount-of-money"])
        evaluator = RuleEvaluator(rules, Document("between 3 and 5 km, or $10 to $20"))
        stash = evaluator.evaluate()
        composed = 0
        for _, node in stash.items():
            if not node.children:
                continue
            composed += 1
            children = stash.children(node)
            assert node.range == Range(children[0].range.start, children[-1].range.end)
            for before, after in zip(children, children[1:]):
                assert evaluator.document.is_adjacent(before.range.end, after.range.start)
        assert composed > 0

    def test_mid_pattern_lexical_children_are_kept(self):
        _, stash = evaluate("3 to 7", DIGITS, SPAN)
        (node,) = forest(stash, "span")
        children = stash.children(node)
        assert len(children) == 3
        assert isinstance(children[1].token_data, RegexMatch)
        assert children[1].token_data.text == "to"
        # the raw "to" lives in the arena but is not part of the forest
        assert stash.arena_size > len(stash)

    def test_local_failure_does_not_block_other_matches(self):
        _, stash = evaluate("5000 to 10 and 3 to 7", DIGITS, SPAN)
        spans = forest(stash, "span")
        assert [n.range for n in spans] == [Range(15, 21)]
        assert spans[0].token_data.value == 4.0

    def test_gap_with_text_is_not_composed(self):
        _, stash = evaluate("3 xx to 7", DIGITS, SPAN)
        assert forest(stash, "span") == []

    def test_one_node_per_span_and_rule(self):
        _, stash = evaluate("1 1 1", DIGITS, SUM)
        whole = [n for n in forest(stash, "sum") if n.range == Range(0, 5)]
        assert len(whole) == 1
        assert whole[0].token_data.value == 3.0

    def test_rule_index_is_recorded(self):
        _, stash = evaluate("1 2", DIGITS, SUM)
        assert {n.rule_index for n in forest(stash, "digits")} == {0}
        assert {n.rule_index for n in forest(stash, "sum")} == {1}

    def test_walk_visits_the_whole_tree(self):
        _, stash = evaluate("3 to 7", DIGITS, SPAN)
        root = next(i for i, n in stash.items() if n.rule_name == "span")
        names = [node.rule_name for _, node in stash.walk(root)]
        assert names == ["span", "digits", None, "digits"]


class TestFixedPoint:
    def test_converges(self):
        evaluator, stash = evaluate(" ".join(["1"] * 12), DIGITS, SUM)
        assert evaluator.converged
        assert evaluator.passes <= DEFAULT_MAX_PASSES
        assert any(n.range == Range(0, 23) for n in forest(stash, "sum"))

    def test_pass_cap_stops_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="valex.vx_engine"):
            evaluator, stash = evaluate(" ".join(["1"] * 12), DIGITS, SUM, max_passes=2)
        assert not evaluator.converged
        assert evaluator.passes == 2
        assert "without converging" in caplog.text
        # the forest built so far is still returned
        assert forest(stash, "sum")

    def test_zero_passes_runs_only_the_lexical_pass(self):
        evaluator, stash = evaluate("1 1 1", DIGITS, SUM, max_passes=0)
        assert evaluator.passes == 0
        assert len(stash) == 3

    def test_negative_cap_is_rejected(self):
        with pytest.raises(ValueError):
            RuleEvaluator(RuleSet((DIGITS,)), Document("1"), max_passes=-1)


class TestDeterminism:
    TEXT = "Pay $10 and 20 euros for 3 miles, call 650-123-4567 tomorrow at noon"

    def test_same_input_same_output(self):
        first = [e.to_dict() for e in parse_en(self.TEXT)]
        second = [e.to_dict() for e in parse_en(self.TEXT)]
        assert first == second

    def test_rule_sets_are_shareable_across_threads(self):
        expected = [e.to_dict() for e in parse_en(self.TEXT)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: [e.to_dict() for e in parse_en(self.TEXT)], range(8)))
        assert all(r == expected for r in results)
