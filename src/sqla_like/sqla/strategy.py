"""
SQLAlchemy operator compilation strategy.

Provides the ``SQLAlchemyOperator`` protocol and a registry keyed by
:class:`PatternOperator`. Swap or extend strategies to change how
equality and pattern predicates are built (e.g. a dialect-specific
``ILIKE`` rendering).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from sqla_like.exceptions import OperatorNotRegisteredError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from sqla_like.operators import PatternOperator


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a pattern filter operator
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> PatternOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(
        self,
        column: Any,
        value: Any,
        *,
        escape: str | None = None,
    ) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A SQLAlchemy column, instrumented attribute or
                resolved operand.
            value: A plain value or an existing ``BindParameter``.
            escape: Optional ``ESCAPE`` character for pattern operators.

        Returns:
            A SQLAlchemy boolean expression.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """
    Registry of ``SQLAlchemyOperator`` instances keyed by
    :class:`PatternOperator`.
    """

    def __init__(self) -> None:
        self._operators: dict[PatternOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: PatternOperator) -> SQLAlchemyOperator | None:
        return self._operators.get(name)

    def apply(
        self,
        name: PatternOperator,
        column: Any,
        value: Any,
        *,
        escape: str | None = None,
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            OperatorNotRegisteredError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise OperatorNotRegisteredError(str(getattr(name, "value", name)))
        return op.apply(column, value, escape=escape)
