"""
Pattern filter translation pipeline.

Data flow for one call::

    raw mapping
      -> normalize_filter_spec        wildcards, empty-term handling
      -> adapter.resolve_equality     column + coerced bound value(s)
      -> build_pattern_nodes          one [NOT] LIKE node per bound value
      -> combine_nodes                AND / OR + explicit grouping
      -> adapter.merge                AND-ed into the running clause

Every field is translated before anything is merged, so a failure on any
field (unknown column, malformed term) leaves the running clause exactly
as it was.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import PatternFilterError
from .modes import PatternMode
from .normalizer import normalize_filter_spec
from .settings import DEFAULT_SETTINGS

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .normalizer import NormalizedFilterSpec, Term
    from .ports import PatternAdapter, PatternNodeFactory, ResolvedPredicate
    from .settings import PatternFilterSettings

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT")
ClauseT = TypeVar("ClauseT")


def build_pattern_nodes(
    resolved: ResolvedPredicate,
    mode: PatternMode,
    factory: PatternNodeFactory[NodeT],
    *,
    settings: PatternFilterSettings = DEFAULT_SETTINGS,
) -> list[NodeT]:
    """One pattern node per bound value, all sharing the resolved operand."""
    return [
        factory.pattern(
            resolved.operand, value, negated=mode.negated, settings=settings
        )
        for value in resolved.values
    ]


def combine_nodes(
    nodes: Sequence[NodeT],
    mode: PatternMode,
    factory: PatternNodeFactory[NodeT],
) -> NodeT | None:
    """
    Join the nodes of one field according to *mode*.

    A single node is returned as-is; several nodes are combined and
    wrapped in an explicit group so sibling conditions cannot rebind them.
    """
    if not nodes:
        return None
    if len(nodes) == 1:
        return nodes[0]
    return factory.group(factory.combine(nodes, mode.conjunction))


class PatternFilterPipeline(Generic[ClauseT, NodeT]):
    """
    Translate ``field -> term(s)`` mappings into pattern predicates and
    merge them into a running clause through a :class:`PatternAdapter`.

    The pipeline holds no per-call state and may be reused; a running
    clause must not be filtered from several threads at once.
    """

    def __init__(
        self,
        adapter: PatternAdapter[ClauseT, NodeT],
        *,
        settings: PatternFilterSettings | None = None,
    ) -> None:
        self._adapter = adapter
        self._settings = settings or DEFAULT_SETTINGS

    @property
    def settings(self) -> PatternFilterSettings:
        return self._settings

    def predicates(
        self,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        mode: PatternMode | str,
        *rest: Any,
    ) -> list[NodeT]:
        """
        Build one predicate per field, in mapping order.

        ``rest`` is forwarded unchanged to ``adapter.resolve_equality``.
        Fields whose terms were all dropped (empty exclusions) produce
        no predicate.
        """
        mode = PatternMode(mode)
        normalized = normalize_filter_spec(spec, mode, settings=self._settings)

        predicates: list[NodeT] = []
        for field, term in normalized.items():
            predicate = self._field_predicate(field, term, mode, rest)
            if predicate is not None:
                predicates.append(predicate)

        logger.debug(
            "Pattern filter %s: %d predicate(s) from %d term(s) on %s",
            mode.value,
            len(predicates),
            normalized.term_count,
            list(normalized),
        )
        return predicates

    def apply(
        self,
        clause: ClauseT,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        mode: PatternMode | str,
        *rest: Any,
    ) -> ClauseT:
        """Translate *spec* and merge the result into *clause*."""
        predicates = self.predicates(spec, mode, *rest)
        if not predicates:
            return clause
        return self._adapter.merge(clause, predicates)

    def match_any(
        self,
        clause: ClauseT,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *rest: Any,
    ) -> ClauseT:
        return self.apply(clause, spec, PatternMode.MATCH_ANY, *rest)

    def match_all(
        self,
        clause: ClauseT,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *rest: Any,
    ) -> ClauseT:
        return self.apply(clause, spec, PatternMode.MATCH_ALL, *rest)

    def exclude_all(
        self,
        clause: ClauseT,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *rest: Any,
    ) -> ClauseT:
        return self.apply(clause, spec, PatternMode.EXCLUDE_ALL, *rest)

    # -- internals -----------------------------------------------------------

    def _field_predicate(
        self,
        field: str,
        term: str | tuple[str, ...],
        mode: PatternMode,
        rest: tuple[Any, ...],
    ) -> NodeT | None:
        expected = len(term) if isinstance(term, tuple) else 1
        resolved = self._adapter.resolve_equality(
            field, list(term) if isinstance(term, tuple) else term, *rest
        )
        nodes = build_pattern_nodes(
            resolved, mode, self._adapter, settings=self._settings
        )
        if len(nodes) != expected:
            raise PatternFilterError(
                f"Equality for '{field}' resolved {len(nodes)} bound value(s) "
                f"for {expected} term(s)"
            )
        return combine_nodes(nodes, mode, self._adapter)
