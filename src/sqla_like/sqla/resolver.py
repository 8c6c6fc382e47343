"""
Equality delegate for SQLAlchemy.

Pattern predicates reuse SQLAlchemy's own equality construction: the
resolver builds ``column == term`` exactly as an ordinary filter would,
then dissects the resulting ``BinaryExpression`` into its left operand
and its ``BindParameter``. The bind parameter keeps the type SQLAlchemy
coerced for the column, so nothing here re-implements type handling.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import RelationshipProperty
from sqlalchemy.sql.elements import (
    BinaryExpression,
    BindParameter,
    ColumnElement,
    Grouping,
)
from sqlalchemy.sql.expression import FromClause

from sqla_like.exceptions import (
    FieldNotFoundError,
    RelationshipTraversalError,
    UnsupportedPredicateError,
)
from sqla_like.operators import PatternOperator
from sqla_like.ports import ResolvedPredicate

from .hooks import SQLAlchemyResolutionContext
from .operators import DEFAULT_SQLA_REGISTRY
from .utils import available_fields, model_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqla_like.hooks import ResolutionHook

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)


class SQLAlchemyEqualityResolver:
    """
    Resolve ``field = term`` against a mapped class (or table).

    Supported field paths:

    - plain attributes (``"title"``), including hybrid properties;
    - dotted relationship paths (``"company.name"``), resolved to the
      target model's column. The statement must join the relationship
      for the predicate to be meaningful;
    - anything a :class:`ResolutionHook` handles. Hooks arrive as the
      extra positional arguments of :meth:`resolve_equality`.
    """

    def __init__(
        self,
        model: Any,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self._model = model
        self._registry = registry if registry is not None else DEFAULT_SQLA_REGISTRY

    @property
    def model(self) -> Any:
        return self._model

    def resolve_equality(
        self,
        field: str,
        term: str | list[str],
        *rest: Any,
    ) -> ResolvedPredicate:
        hooks = _as_hooks(rest)
        column = self.resolve_column(field, term, hooks)

        if isinstance(term, list):
            pairs = [self._equality(field, column, value) for value in term]
            operand = pairs[0][0]
            bound: Any = [bind for _, bind in pairs]
        else:
            operand, bound = self._equality(field, column, term)

        logger.debug(
            "Resolved %s on %s to %r", field, model_name(self._model), operand
        )
        return ResolvedPredicate(field=field, operand=operand, value=bound)

    def resolve_column(
        self,
        field: str,
        value: Any,
        hooks: Sequence[ResolutionHook] = (),
    ) -> Any:
        """
        Resolve *field* to a column or expression.

        Raises:
            FieldNotFoundError: No such attribute on the model.
            RelationshipTraversalError: A dotted path walks through
                something that is not a relationship.
        """
        if hooks:
            ctx = SQLAlchemyResolutionContext.create(
                field_path=field, value=value, model=self._model
            )
            for hook in hooks:
                result = hook(ctx)
                if result.handled:
                    return result.value

        model = self._model
        parts = field.split(".")
        for part in parts[:-1]:
            attr = _attribute(model, part, field)
            prop = getattr(attr, "property", None)
            if not isinstance(prop, RelationshipProperty):
                raise RelationshipTraversalError(part, model_name(model), field)
            model = prop.mapper.class_
        return _attribute(model, parts[-1], field)

    # -- internals -----------------------------------------------------------

    def _equality(
        self, field: str, column: Any, value: str
    ) -> tuple[Any, BindParameter[Any]]:
        expr = self._registry.apply(PatternOperator.EQ, column, value)
        if not isinstance(expr, BinaryExpression):
            raise UnsupportedPredicateError(field, expr)

        right = expr.right
        while isinstance(right, Grouping):
            right = right.element
        if not isinstance(right, BindParameter):
            raise UnsupportedPredicateError(field, right)
        return expr.left, right


def _as_hooks(rest: tuple[Any, ...]) -> list[ResolutionHook]:
    for extra in rest:
        if not callable(extra):
            raise TypeError(
                f"Extra filter arguments must be resolution hooks, got {extra!r}"
            )
    return list(rest)


def _attribute(model: Any, name: str, full_path: str) -> Any:
    if isinstance(model, FromClause):
        column = model.c.get(name)
    else:
        column = getattr(model, name, None)
        if column is not None and not _is_queryable(column):
            column = None

    if column is None:
        raise FieldNotFoundError(
            name, model_name(model), available_fields(model), full_path=full_path
        )
    return column


def _is_queryable(attr: Any) -> bool:
    return isinstance(attr, ColumnElement) or hasattr(attr, "__clause_element__")
