"""
Backend-agnostic pipeline tests.

Nodes are plain tuples so the combination structure and the order of
bound values can be asserted directly.
"""

from __future__ import annotations

from typing import Any

import pytest

from sqla_like import (
    PatternFilterError,
    PatternFilterPipeline,
    PatternMode,
    ResolvedPredicate,
    combine_nodes,
    normalize_filter_spec,
)
from sqla_like.ports import (
    ClauseMerger,
    EqualityResolver,
    PatternAdapter,
    PatternNodeFactory,
)


class RecordingAdapter:
    """Adapter over a list-of-conditions clause that records every call."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[str, Any, tuple[Any, ...]]] = []

    def resolve_equality(self, field, term, *rest):
        self.calls.append((field, term, rest))
        if field == self.fail_on:
            raise LookupError(f"unknown field {field}")
        if isinstance(term, list):
            binds = [("bind", v) for v in term]
            return ResolvedPredicate(field, f"col:{field}", binds)
        return ResolvedPredicate(field, f"col:{field}", ("bind", term))

    def pattern(self, operand, value, *, negated, settings):
        return ("not_like" if negated else "like", operand, value[1])

    def combine(self, nodes, conjunction):
        return (conjunction, *nodes)

    def group(self, node):
        return ("group", node)

    def merge(self, clause, predicates):
        # Mutates in place: atomicity must come from the pipeline itself.
        clause.extend(predicates)
        return clause


def _bound_values(node: Any) -> list[str]:
    """Bound values of a node tree, left to right."""
    if node[0] in ("like", "not_like"):
        return [node[2]]
    children = node[1:] if node[0] != "group" else [node[1]]
    return [v for child in children for v in _bound_values(child)]


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def pipeline(adapter):
    return PatternFilterPipeline(adapter)


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


def test_recording_adapter_satisfies_ports(adapter):
    assert isinstance(adapter, EqualityResolver)
    assert isinstance(adapter, PatternNodeFactory)
    assert isinstance(adapter, ClauseMerger)
    assert isinstance(adapter, PatternAdapter)


def test_resolved_predicate_values():
    single = ResolvedPredicate("f", "col", 1)
    multi = ResolvedPredicate("f", "col", [1, 2])
    assert not single.is_multi
    assert single.values == [1]
    assert multi.is_multi
    assert multi.values == [1, 2]


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def test_single_term_is_identical_for_both_inclusion_modes(pipeline):
    any_nodes = pipeline.predicates({"title": "Engineer"}, "match_any")
    all_nodes = pipeline.predicates({"title": "Engineer"}, "match_all")
    assert any_nodes == all_nodes == [("like", "col:title", "%Engineer%")]


def test_match_any_groups_terms_with_or(pipeline):
    nodes = pipeline.predicates({"title": ["Engineer", "Remote"]}, "match_any")
    assert nodes == [
        (
            "group",
            (
                "or",
                ("like", "col:title", "%Engineer%"),
                ("like", "col:title", "%Remote%"),
            ),
        )
    ]


def test_match_all_groups_terms_with_and(pipeline):
    nodes = pipeline.predicates({"title": ["Engineer", "Remote"]}, "match_all")
    assert nodes[0][1][0] == "and"


def test_exclude_all_negates_and_groups_with_and(pipeline):
    nodes = pipeline.predicates({"title": ["Engineer", "Remote"]}, "exclude_all")
    assert nodes == [
        (
            "group",
            (
                "and",
                ("not_like", "col:title", "%Engineer%"),
                ("not_like", "col:title", "%Remote%"),
            ),
        )
    ]


def test_single_node_is_never_grouped(pipeline):
    nodes = pipeline.predicates({"title": ["Intern"]}, "exclude_all")
    assert nodes == [("not_like", "col:title", "%Intern%")]


def test_empty_term_matches_everything_when_including(pipeline):
    nodes = pipeline.predicates({"title": []}, "match_any")
    assert nodes == [("like", "col:title", "%%")]


def test_empty_term_emits_nothing_when_excluding(pipeline, adapter):
    nodes = pipeline.predicates({"title": [], "status": "closed"}, "exclude_all")
    assert nodes == [("not_like", "col:status", "%closed%")]
    assert [call[0] for call in adapter.calls] == ["status"]


def test_combine_nodes_handles_empty_input(adapter):
    assert combine_nodes([], PatternMode.MATCH_ANY, adapter) is None


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


def test_fields_are_merged_in_mapping_order_after_existing_conditions(pipeline):
    clause = [("existing",)]
    result = pipeline.match_any(clause, {"title": "a", "status": ["b", "c"]})
    assert result[0] == ("existing",)
    assert result[1] == ("like", "col:title", "%a%")
    assert result[2][0] == "group"


def test_bound_values_follow_predicate_order(pipeline):
    spec = {
        "title": ["Engineer", "Remote"],
        "status": "open",
        "city": ["x", "y", "z"],
    }
    predicates = pipeline.predicates(spec, "match_all")
    values = [v for node in predicates for v in _bound_values(node)]
    assert values == ["%Engineer%", "%Remote%", "%open%", "%x%", "%y%", "%z%"]
    assert len(values) == normalize_filter_spec(spec, "match_all").term_count


def test_chained_calls_accumulate(pipeline):
    clause: list[Any] = []
    pipeline.match_any(clause, {"title": "A"})
    pipeline.match_all(clause, {"status": "open"})
    assert clause == [
        ("like", "col:title", "%A%"),
        ("like", "col:status", "%open%"),
    ]


def test_nothing_to_merge_returns_clause_untouched(pipeline):
    clause = [("existing",)]
    assert pipeline.exclude_all(clause, {"title": []}) == [("existing",)]


def test_failure_leaves_clause_untouched():
    pipeline = PatternFilterPipeline(RecordingAdapter(fail_on="bogus"))
    clause = [("existing",)]
    with pytest.raises(LookupError):
        pipeline.match_any(clause, {"title": "a", "bogus": "b", "status": "c"})
    assert clause == [("existing",)]


def test_malformed_term_fails_before_resolution(adapter, pipeline):
    with pytest.raises(TypeError):
        pipeline.match_any([], {"title": "a", "status": None})
    assert adapter.calls == []


# ---------------------------------------------------------------------------
# Delegate contract
# ---------------------------------------------------------------------------


def test_extra_arguments_reach_the_delegate_unchanged(adapter, pipeline):
    marker = object()
    pipeline.exclude_all([], {"title": "a", "status": "b"}, marker, "raw")
    assert [call[2] for call in adapter.calls] == [(marker, "raw"), (marker, "raw")]


def test_list_terms_reach_the_delegate_as_lists(adapter, pipeline):
    pipeline.match_any([], {"title": ("a", "b")})
    assert adapter.calls[0][1] == ["%a%", "%b%"]


def test_value_count_mismatch_is_an_error():
    class DroppingAdapter(RecordingAdapter):
        def resolve_equality(self, field, term, *rest):
            return ResolvedPredicate(field, field, [("bind", term[0])])

    pipeline = PatternFilterPipeline(DroppingAdapter())
    with pytest.raises(PatternFilterError, match="2 term"):
        pipeline.predicates({"title": ["a", "b"]}, "match_any")


def test_pipeline_accepts_normalized_spec(adapter, pipeline):
    spec = normalize_filter_spec({"title": "Engineer"}, "match_any")
    pipeline.predicates(spec, "match_any")
    assert adapter.calls[0][1] == "%Engineer%"
