"""
SQLAlchemy operator implementations and default registry.

Usage::

    from sqla_like.sqla.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(PatternOperator.ILIKE, column, "%x%")
"""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from sqla_like.operators import PatternOperator

from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class EqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> PatternOperator:
        return PatternOperator.EQ

    def apply(
        self, column: Any, value: Any, *, escape: str | None = None
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.eq(column, value))


class LikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> PatternOperator:
        return PatternOperator.LIKE

    def apply(
        self, column: Any, value: Any, *, escape: str | None = None
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.like(value, escape=escape))


class NotLikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> PatternOperator:
        return PatternOperator.NOT_LIKE

    def apply(
        self, column: Any, value: Any, *, escape: str | None = None
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_like(value, escape=escape))


class ILikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> PatternOperator:
        return PatternOperator.ILIKE

    def apply(
        self, column: Any, value: Any, *, escape: str | None = None
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.ilike(value, escape=escape))


class NotILikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> PatternOperator:
        return PatternOperator.NOT_ILIKE

    def apply(
        self, column: Any, value: Any, *, escape: str | None = None
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_ilike(value, escape=escape))


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        EqualOperator(),
        LikeOperator(),
        NotLikeOperator(),
        ILikeOperator(),
        NotILikeOperator(),
    )
    return registry


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "EqualOperator",
    "ILikeOperator",
    "LikeOperator",
    "NotILikeOperator",
    "NotLikeOperator",
]
