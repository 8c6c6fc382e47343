"""
Collaborator interfaces consumed by the pattern filter pipeline.

The pipeline never talks to a query builder directly. A backend provides
one object (an *adapter*) implementing three narrow capabilities:

- :class:`EqualityResolver`: build the equality predicate the builder
  would produce for ``field = term`` and hand back its resolved operand
  and coerced bound value(s).
- :class:`PatternNodeFactory`: create pattern nodes, boolean
  combinations and explicit groupings in the builder's node types.
- :class:`ClauseMerger`: fold finished predicates into a running clause.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Literal,
    Protocol,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .settings import PatternFilterSettings

NodeT = TypeVar("NodeT")
ClauseT = TypeVar("ClauseT")

Conjunction = Literal["and", "or"]


@dataclass(frozen=True)
class ResolvedPredicate:
    """
    Operand and bound value(s) captured from an equality predicate.

    Attributes:
        field: The field path that was resolved.
        operand: Column / expression reference understood by the builder.
        value: One bound value, or a list of bound values when the term
            was a list. Type coercion has already been applied.
    """

    field: str
    operand: Any
    value: Any

    @property
    def is_multi(self) -> bool:
        return isinstance(self.value, list)

    @property
    def values(self) -> list[Any]:
        """Bound values as a list, in term order."""
        return list(self.value) if self.is_multi else [self.value]


@runtime_checkable
class EqualityResolver(Protocol):
    def resolve_equality(
        self,
        field: str,
        term: str | list[str],
        *rest: Any,
    ) -> ResolvedPredicate:
        """
        Resolve ``field = term`` with the builder's own equality logic.

        Resolution errors must propagate unchanged.
        """
        ...


@runtime_checkable
class PatternNodeFactory(Protocol[NodeT]):
    def pattern(
        self,
        operand: Any,
        value: Any,
        *,
        negated: bool,
        settings: PatternFilterSettings,
    ) -> NodeT:
        """Build ``operand [NOT] [I]LIKE value`` reusing the bound value as-is."""
        ...

    def combine(self, nodes: Sequence[NodeT], conjunction: Conjunction) -> NodeT:
        """Join nodes with AND / OR."""
        ...

    def group(self, node: NodeT) -> NodeT:
        """Wrap a node in explicit parentheses."""
        ...


@runtime_checkable
class ClauseMerger(Protocol[ClauseT, NodeT]):
    def merge(self, clause: ClauseT, predicates: Sequence[NodeT]) -> ClauseT:
        """
        AND ``predicates`` into ``clause``.

        Each predicate carries its own bound values, so merging a node
        merges its values in the same left-to-right order.
        """
        ...


@runtime_checkable
class PatternAdapter(
    EqualityResolver,
    PatternNodeFactory[NodeT],
    ClauseMerger[ClauseT, NodeT],
    Protocol[ClauseT, NodeT],
):
    """Everything the pipeline needs from a query builder backend."""
