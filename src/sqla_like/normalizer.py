"""
Filter mapping normalisation.

Turns a raw ``field -> term(s)`` mapping into a :class:`NormalizedFilterSpec`:

- empty lists collapse to the empty-string sentinel;
- every string is wrapped in ``%`` wildcards (``"Rails"`` -> ``"%Rails%"``),
  element-wise through lists and nested mappings;
- enum members stand for their string value (``Status.OPEN`` -> ``"%open%"``);
- when excluding, empty terms are a no-op and are dropped instead of being
  turned into ``"%%"`` (which would exclude every row);
- nested mappings (``{"company": {"name": "Acme"}}``) are flattened into
  dotted field paths (``"company.name"``).

The caller's mapping is never mutated. Normalising an already normalised
spec returns it unchanged, so terms are never wrapped twice.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from typing import Any, Union

from .exceptions import InvalidTermError, ValidationError
from .modes import PatternMode
from .settings import DEFAULT_SETTINGS, PatternFilterSettings

Term = Union[str, Sequence["Term"], Mapping[str, "Term"]]
NormalizedTerm = Union[str, tuple[str, ...]]

WILDCARD = "%"
EMPTY_TERM = ""


class NormalizedFilterSpec(Mapping[str, NormalizedTerm]):
    """
    Read-only mapping of dotted field path to wrapped term(s).

    Values are either a single pattern string or a tuple of patterns, in
    the order the caller supplied them. The spec remembers the mode and
    the escape character its terms were prepared for, so it is only
    reused where both still apply.
    """

    __slots__ = ("_escape", "_mode", "_terms")

    def __init__(
        self,
        terms: Mapping[str, NormalizedTerm],
        mode: PatternMode,
        escape: str | None = None,
    ) -> None:
        self._terms = dict(terms)
        self._mode = PatternMode(mode)
        self._escape = escape

    @property
    def mode(self) -> PatternMode:
        """The mode the terms were normalised for."""
        return self._mode

    @property
    def escape(self) -> str | None:
        """Escape character the terms were escaped with, if any."""
        return self._escape

    @property
    def term_count(self) -> int:
        """Total number of patterns across all fields."""
        return sum(
            len(term) if isinstance(term, tuple) else 1 for term in self._terms.values()
        )

    def __getitem__(self, key: str) -> NormalizedTerm:
        return self._terms[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __repr__(self) -> str:
        return (
            f"NormalizedFilterSpec({self._terms!r}, mode={self._mode.value!r}, "
            f"escape={self._escape!r})"
        )


def escape_like(value: str, escape_char: str = "\\") -> str:
    r"""
    Escape LIKE metacharacters so *value* matches literally.

    The escape character itself is escaped first; render the predicate
    with a matching ``ESCAPE`` clause.

    >>> escape_like("100%_done")
    '100\\%\\_done'
    """
    pattern = re.compile(f"([{re.escape(escape_char)}%_])")
    return pattern.sub(lambda m: escape_char + m.group(1), value)


def normalize_filter_spec(
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    mode: PatternMode | str,
    *,
    settings: PatternFilterSettings | None = None,
) -> NormalizedFilterSpec:
    """
    Normalise a raw filter mapping for *mode*.

    Raises:
        InvalidTermError: A term is not a string, sequence or mapping.
        ValidationError: A field name is not a non-empty string, a field
            is given twice, or a normalised spec is reused across
            inclusion and exclusion modes or under different escaping.
    """
    mode = PatternMode(mode)
    settings = settings or DEFAULT_SETTINGS
    if isinstance(spec, NormalizedFilterSpec):
        if spec.mode.drops_empty != mode.drops_empty:
            raise ValidationError(
                f"Filter was normalised for '{spec.mode.value}' and cannot be "
                f"reused for '{mode.value}'",
                path="<root>",
            )
        if spec.escape != settings.escape:
            raise ValidationError(
                f"Filter was normalised with escape character {spec.escape!r} "
                f"and cannot be reused with {settings.escape!r}",
                path="<root>",
            )
        return spec
    if not isinstance(spec, Mapping):
        raise InvalidTermError(spec, "<root>")

    terms: dict[str, NormalizedTerm] = {}
    for path, term in _flatten_fields(spec, prefix=""):
        if path in terms:
            raise ValidationError(f"Field '{path}' is given more than once", path=path)
        normalized = _normalize_term(term, path, mode, settings)
        if normalized is not None:
            terms[path] = normalized
    return NormalizedFilterSpec(terms, mode, settings.escape)


def _flatten_fields(spec: Mapping[Any, Any], prefix: str) -> Iterator[tuple[str, Any]]:
    for key, term in spec.items():
        if not isinstance(key, str) or not key:
            raise ValidationError(
                f"Field names must be non-empty strings, got {key!r}",
                path=prefix or "<root>",
            )
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(term, Mapping):
            yield from _flatten_fields(term, path)
        else:
            yield path, term


def _normalize_term(
    term: Any,
    path: str,
    mode: PatternMode,
    settings: PatternFilterSettings,
) -> NormalizedTerm | None:
    text = _as_text(term)
    if text is not None:
        return _wrap(text, mode, settings)
    if not _is_term_sequence(term):
        raise InvalidTermError(term, path)

    values = list(_flatten_terms(term, path))
    if not values:
        return _wrap(EMPTY_TERM, mode, settings)

    wrapped = tuple(
        w for w in (_wrap(v, mode, settings) for v in values) if w is not None
    )
    return wrapped or None


def _flatten_terms(term: Sequence[Any], path: str) -> Iterator[str]:
    for index, item in enumerate(term):
        text = _as_text(item)
        if text is not None:
            yield text
        elif _is_term_sequence(item):
            yield from _flatten_terms(item, f"{path}[{index}]")
        else:
            raise InvalidTermError(item, f"{path}[{index}]")


def _as_text(term: Any) -> str | None:
    # Enum members format as "Cls.NAME"; match on their value
    if isinstance(term, Enum):
        term = term.value
    return str.__str__(term) if isinstance(term, str) else None


def _is_term_sequence(term: Any) -> bool:
    return isinstance(term, Sequence) and not isinstance(term, (str, bytes, bytearray))


def _wrap(value: str, mode: PatternMode, settings: PatternFilterSettings) -> str | None:
    if value == EMPTY_TERM and mode.drops_empty:
        return None
    if settings.escape_wildcards:
        value = escape_like(value, settings.escape_char)
    return f"{WILDCARD}{value}{WILDCARD}"
