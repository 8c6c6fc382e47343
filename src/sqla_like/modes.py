from __future__ import annotations

from enum import Enum

from .exceptions import ModeNotFoundError


class PatternMode(str, Enum):
    """How the terms of a filter mapping are combined."""

    # Any term of a field may match (OR within a field)
    MATCH_ANY = "match_any"
    # Every term of a field must match (AND within a field)
    MATCH_ALL = "match_all"
    # No term of a field may match (NOT LIKE, AND within a field)
    EXCLUDE_ALL = "exclude_all"

    @classmethod
    def _missing_(cls, value: object) -> PatternMode:
        raise ModeNotFoundError(str(value), [m.value for m in cls])

    @property
    def negated(self) -> bool:
        return self is PatternMode.EXCLUDE_ALL

    @property
    def conjunction(self) -> str:
        """Boolean operator joining several terms of the same field."""
        return "or" if self is PatternMode.MATCH_ANY else "and"

    @property
    def drops_empty(self) -> bool:
        """Empty terms are a no-op when excluding, a match-all when including."""
        return self is PatternMode.EXCLUDE_ALL
