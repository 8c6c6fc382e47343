"""
Settings for pattern filter translation.

``PatternFilterSettings`` is an immutable container; pass a customised
instance to the pipeline or to the SQLAlchemy helpers to change how
patterns are rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PatternFilterSettings:
    """
    Immutable pattern rendering options.

    Attributes:
        case_sensitive: Use ``LIKE`` / ``NOT LIKE`` instead of
            ``ILIKE`` / ``NOT ILIKE``.
        escape_wildcards: Escape ``%`` and ``_`` inside user-supplied
            terms so they match literally. Off by default: enabling it
            changes which rows existing searches return.
        escape_char: Escape character used when ``escape_wildcards`` is on.
    """

    case_sensitive: bool = False
    escape_wildcards: bool = False
    escape_char: str = "\\"

    def __post_init__(self) -> None:
        if len(self.escape_char) != 1:
            raise ValueError(
                f"escape_char must be a single character, got {self.escape_char!r}"
            )
        if self.escape_char in ("%", "_"):
            raise ValueError("escape_char cannot be a LIKE wildcard")

    @property
    def escape(self) -> str | None:
        """The ``ESCAPE`` character to render, or ``None`` when disabled."""
        return self.escape_char if self.escape_wildcards else None

    def with_escaping(self, escape_char: str | None = None) -> PatternFilterSettings:
        """Return a copy with wildcard escaping turned on."""
        return replace(
            self,
            escape_wildcards=True,
            escape_char=escape_char if escape_char is not None else self.escape_char,
        )


DEFAULT_SETTINGS = PatternFilterSettings()
