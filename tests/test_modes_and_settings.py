"""Tests for pattern modes, settings and the exception hierarchy."""

from __future__ import annotations

import pytest

from sqla_like import (
    DEFAULT_SETTINGS,
    FieldNotFoundError,
    InvalidTermError,
    ModeNotFoundError,
    PatternFilterError,
    PatternFilterSettings,
    PatternMode,
    PatternOperator,
    RelationshipTraversalError,
    UnsupportedPredicateError,
)

# ---------------------------------------------------------------------------
# PatternMode
# ---------------------------------------------------------------------------


def test_modes_from_strings():
    assert PatternMode("match_any") is PatternMode.MATCH_ANY
    assert PatternMode("match_all") is PatternMode.MATCH_ALL
    assert PatternMode("exclude_all") is PatternMode.EXCLUDE_ALL


@pytest.mark.parametrize(
    ("mode", "negated", "conjunction", "drops_empty"),
    [
        (PatternMode.MATCH_ANY, False, "or", False),
        (PatternMode.MATCH_ALL, False, "and", False),
        (PatternMode.EXCLUDE_ALL, True, "and", True),
    ],
)
def test_mode_policies(mode, negated, conjunction, drops_empty):
    assert mode.negated is negated
    assert mode.conjunction == conjunction
    assert mode.drops_empty is drops_empty


def test_unknown_mode_suggests_close_match():
    with pytest.raises(ModeNotFoundError) as exc_info:
        PatternMode("match-any")
    err = exc_info.value
    assert "match_any" in err.suggestions
    assert isinstance(err, ValueError)
    assert err.to_dict()["error"] == "MODE_NOT_FOUND"


@pytest.mark.parametrize(
    ("negated", "case_sensitive", "expected"),
    [
        (False, False, PatternOperator.ILIKE),
        (True, False, PatternOperator.NOT_ILIKE),
        (False, True, PatternOperator.LIKE),
        (True, True, PatternOperator.NOT_LIKE),
    ],
)
def test_pattern_operator_selection(negated, case_sensitive, expected):
    assert (
        PatternOperator.for_pattern(negated=negated, case_sensitive=case_sensitive)
        is expected
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_default_settings():
    assert DEFAULT_SETTINGS.case_sensitive is False
    assert DEFAULT_SETTINGS.escape_wildcards is False
    assert DEFAULT_SETTINGS.escape is None


def test_with_escaping_returns_copy():
    settings = DEFAULT_SETTINGS.with_escaping("!")
    assert settings.escape == "!"
    assert DEFAULT_SETTINGS.escape is None


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_SETTINGS.case_sensitive = True  # type: ignore[misc]


@pytest.mark.parametrize("escape_char", ["", "ab", "%", "_"])
def test_invalid_escape_char(escape_char):
    with pytest.raises(ValueError):
        PatternFilterSettings(escape_char=escape_char)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


def test_field_not_found_suggestions():
    err = FieldNotFoundError("tilte", "Job", ["id", "title", "status"])
    assert err.suggestions == ["title"]
    assert "Did you mean" in str(err)
    assert isinstance(err, PatternFilterError)
    assert isinstance(err, AttributeError)
    payload = err.to_dict()
    assert payload["error"] == "FIELD_NOT_FOUND"
    assert payload["available_fields"] == ["id", "status", "title"]


def test_field_not_found_truncates_long_field_lists():
    fields = [f"field_{i:02d}" for i in range(20)]
    err = FieldNotFoundError("nope", "Wide", fields)
    assert "..." in str(err)


def test_relationship_traversal_error_payload():
    err = RelationshipTraversalError("title", "Job", "title.length")
    assert err.to_dict() == {
        "error": "RELATIONSHIP_TRAVERSAL_ERROR",
        "field": "title",
        "model": "Job",
        "full_path": "title.length",
    }


def test_invalid_term_error_payload():
    err = InvalidTermError(42, "title")
    payload = err.to_dict()
    assert payload["error"] == "INVALID_TERM"
    assert payload["path"] == "title"
    assert payload["term_type"] == "int"


def test_unsupported_predicate_error_payload():
    err = UnsupportedPredicateError("title", object())
    assert err.to_dict()["predicate_type"] == "object"


def test_base_error_payload():
    err = PatternFilterError("boom")
    assert err.to_dict() == {"error": "PatternFilterError", "message": "boom"}
