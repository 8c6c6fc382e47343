"""
SQLAlchemy implementation of the pattern filter ports.

``SQLAlchemyPatternAdapter`` bundles the equality delegate, the pattern
node factory and the clause merger for one filter target. The running
clause is a ``Select``; merging returns a new statement and never mutates
the one passed in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import Grouping

from sqla_like.operators import PatternOperator

from .operators import DEFAULT_SQLA_REGISTRY
from .resolver import SQLAlchemyEqualityResolver

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement, Select

    from sqla_like.ports import Conjunction, ResolvedPredicate
    from sqla_like.settings import PatternFilterSettings

    from .strategy import SQLAlchemyOperatorRegistry


class SQLAlchemyPatternAdapter:
    """Pattern filter adapter over SQLAlchemy ``Select`` statements."""

    def __init__(
        self,
        model: Any,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self._registry = registry if registry is not None else DEFAULT_SQLA_REGISTRY
        self._resolver = SQLAlchemyEqualityResolver(model, registry=self._registry)

    @property
    def model(self) -> Any:
        return self._resolver.model

    @property
    def registry(self) -> SQLAlchemyOperatorRegistry:
        return self._registry

    # -- EqualityResolver ----------------------------------------------------

    def resolve_equality(
        self,
        field: str,
        term: str | list[str],
        *rest: Any,
    ) -> ResolvedPredicate:
        return self._resolver.resolve_equality(field, term, *rest)

    # -- PatternNodeFactory --------------------------------------------------

    def pattern(
        self,
        operand: Any,
        value: Any,
        *,
        negated: bool,
        settings: PatternFilterSettings,
    ) -> ColumnElement[bool]:
        op = PatternOperator.for_pattern(
            negated=negated, case_sensitive=settings.case_sensitive
        )
        return self._registry.apply(op, operand, value, escape=settings.escape)

    def combine(
        self,
        nodes: Sequence[ColumnElement[bool]],
        conjunction: Conjunction,
    ) -> ColumnElement[bool]:
        if conjunction == "or":
            return or_(*nodes)
        return and_(*nodes)

    def group(self, node: ColumnElement[bool]) -> ColumnElement[bool]:
        return Grouping(node)

    # -- ClauseMerger --------------------------------------------------------

    def merge(
        self,
        clause: Select[Any],
        predicates: Sequence[ColumnElement[bool]],
    ) -> Select[Any]:
        return clause.where(*predicates)
