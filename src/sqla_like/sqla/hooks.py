"""
SQLAlchemy-specific resolution context for field resolution hooks.

Extends the pure-Python :class:`ResolutionContext` with the model the
filter is being resolved against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqla_like.hooks import ResolutionContext


@dataclass
class SQLAlchemyResolutionContext(ResolutionContext):
    """
    SQLAlchemy-specific resolution context.

    Hooks can ``isinstance`` check to see if they are running in a
    SQLAlchemy backend.

    Attributes:
        model: Root mapped class (or table) the filter targets.
        current_model: Model currently being traversed (follows rels).
    """

    model: Any = None
    current_model: Any = None

    def get_column(self, name: str) -> Any:
        """
        Get a column from the current model.

        Raises:
            ValueError: If ``current_model`` is not set.
            AttributeError: If column doesn't exist.
        """
        if self.current_model is None:
            raise ValueError("current_model is not set")
        return getattr(self.current_model, name)

    @classmethod
    def create(
        cls,
        field_path: str,
        value: Any,
        model: Any,
    ) -> SQLAlchemyResolutionContext:
        return cls(
            field_path=field_path,
            value=value,
            model=model,
            current_model=model,
        )
