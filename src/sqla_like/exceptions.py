"""
Pattern filter exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``PatternFilterError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PatternFilterError(Exception):
    """Base exception for all pattern filter errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(PatternFilterError):
    """Filter structure validation failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class InvalidTermError(ValidationError, TypeError):
    """A search term is neither a string, a sequence nor a mapping of terms."""

    def __init__(self, term: Any, path: str) -> None:
        self.term = term
        message = (
            f"Invalid search term at '{path}': expected str, list of str or "
            f"mapping, got {type(term).__name__} ({term!r})"
        )
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_TERM",
            "message": self.message,
            "path": self.path,
            "term_type": type(self.term).__name__,
        }


class ModeNotFoundError(PatternFilterError, ValueError):
    """
    Unknown pattern mode specified.

    Provides fuzzy-matched suggestions for likely intended modes.
    """

    def __init__(self, mode: str, valid_modes: list[str]) -> None:
        self.mode = mode
        self.valid_modes = valid_modes
        self.suggestions = get_close_matches(mode, valid_modes, n=3, cutoff=0.6)

        message = f"Unknown pattern mode: '{mode}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid modes: {', '.join(sorted(valid_modes))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MODE_NOT_FOUND",
            "mode": self.mode,
            "suggestions": self.suggestions,
            "valid_modes": sorted(self.valid_modes),
        }


class OperatorNotRegisteredError(PatternFilterError, ValueError):
    """The operator registry has no strategy for the requested operator."""

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unsupported operator for SQLAlchemy: {operator}")


class UnsupportedPredicateError(PatternFilterError):
    """
    The equality delegate produced a predicate that cannot be turned into
    a pattern match (i.e. not a binary comparison against a bound value).
    """

    def __init__(self, field: str, predicate: Any) -> None:
        self.field = field
        self.predicate_type = type(predicate).__name__
        super().__init__(
            f"Cannot build a pattern predicate for '{field}': equality "
            f"resolved to {self.predicate_type}, expected a binary comparison "
            f"against a bound value"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_PREDICATE",
            "field": self.field,
            "predicate_type": self.predicate_type,
        }


class FieldNotFoundError(PatternFilterError, AttributeError):
    """
    Invalid field path with helpful suggestions.

    Uses fuzzy matching to suggest similar valid field names.

    Example error message::

        Invalid field 'tilte' on 'Job'.
        Did you mean one of these?
          • title

        Available fields: id, status, title, ...
    """

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.full_path = full_path or invalid_field

        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )

        message = self._build_message()
        super().__init__(message)

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "model": self.model_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class RelationshipTraversalError(ValidationError):
    """
    Raised when a dotted path walks through something that is not a
    relationship, e.g. ``title.length`` where ``title`` is a plain column.
    """

    def __init__(
        self,
        field: str,
        model_name: str,
        full_path: str | None = None,
    ) -> None:
        self.field = field
        self.model_name = model_name
        self.full_path = full_path or field

        message = (
            f"Cannot traverse '{field}' on '{model_name}': "
            f"it is not a relationship. Full path: '{self.full_path}'"
        )
        super().__init__(message, path=full_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RELATIONSHIP_TRAVERSAL_ERROR",
            "field": self.field,
            "model": self.model_name,
            "full_path": self.full_path,
        }
