from enum import Enum


class PatternOperator(str, Enum):
    """Operators a backend registry must provide for pattern filtering."""

    # Equality, used to let the backend resolve and coerce a term
    EQ = "="

    # Pattern matching
    LIKE = "like"
    NOT_LIKE = "not_like"
    ILIKE = "ilike"
    NOT_ILIKE = "not_ilike"

    @classmethod
    def for_pattern(cls, *, negated: bool, case_sensitive: bool) -> "PatternOperator":
        """Pick the pattern operator for a polarity / case combination."""
        if case_sensitive:
            return cls.NOT_LIKE if negated else cls.LIKE
        return cls.NOT_ILIKE if negated else cls.ILIKE
