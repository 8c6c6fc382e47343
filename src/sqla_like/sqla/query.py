"""
Fluent wrapper for chaining pattern filters.

Example::

    stmt = (
        PatternQuery(select(Job))
        .match_any({"title": "Rails"})
        .match_all({"title": ["Senior", "Remote"]})
        .exclude_all({"status": "closed"})
        .statement
    )
    # → WHERE jobs.title ILIKE '%Rails%'
    #     AND (jobs.title ILIKE '%Senior%' AND jobs.title ILIKE '%Remote%')
    #     AND jobs.status NOT ILIKE '%closed%'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqla_like.modes import PatternMode

from .compiler import apply_pattern_filter
from .utils import primary_entity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import ColumnElement, Select

    from sqla_like.hooks import ResolutionHook
    from sqla_like.normalizer import NormalizedFilterSpec, Term
    from sqla_like.settings import PatternFilterSettings

    from .strategy import SQLAlchemyOperatorRegistry


class PatternQuery:
    """
    Immutable chain of pattern filters over a ``Select``.

    Every method returns a new ``PatternQuery``; the statement held by
    the receiver is never changed.
    """

    def __init__(
        self,
        stmt: Select[Any],
        *,
        model: Any = None,
        settings: PatternFilterSettings | None = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self._stmt = stmt
        self._model = model if model is not None else primary_entity(stmt)
        self._settings = settings
        self._registry = registry

    @property
    def statement(self) -> Select[Any]:
        """The filtered statement."""
        return self._stmt

    @property
    def model(self) -> Any:
        return self._model

    def match_any(
        self,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *hooks: ResolutionHook,
    ) -> PatternQuery:
        return self._filter(spec, PatternMode.MATCH_ANY, hooks)

    def match_all(
        self,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *hooks: ResolutionHook,
    ) -> PatternQuery:
        return self._filter(spec, PatternMode.MATCH_ALL, hooks)

    def exclude_all(
        self,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        *hooks: ResolutionHook,
    ) -> PatternQuery:
        return self._filter(spec, PatternMode.EXCLUDE_ALL, hooks)

    def where(self, *criteria: ColumnElement[bool]) -> PatternQuery:
        """Add ordinary criteria to the chain."""
        return self._replace(self._stmt.where(*criteria))

    # -- internals -----------------------------------------------------------

    def _filter(
        self,
        spec: Mapping[str, Term] | NormalizedFilterSpec,
        mode: PatternMode,
        hooks: tuple[ResolutionHook, ...],
    ) -> PatternQuery:
        stmt = apply_pattern_filter(
            self._stmt,
            spec,
            mode,
            *hooks,
            model=self._model,
            settings=self._settings,
            registry=self._registry,
        )
        return self._replace(stmt)

    def _replace(self, stmt: Select[Any]) -> PatternQuery:
        return PatternQuery(
            stmt,
            model=self._model,
            settings=self._settings,
            registry=self._registry,
        )
