"""
SQLAlchemy-specific utilities for resolving filter targets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.sql.expression import FromClause

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


def primary_entity(stmt: Select[Any]) -> Any:
    """
    Return the mapped class (or table) a statement selects from.

    The first ORM entity among the selected columns wins; a statement
    over a single plain table falls back to that table.

    Raises:
        ValueError: If no single target can be determined.
    """
    for description in stmt.column_descriptions:
        entity = description.get("entity")
        if entity is not None:
            return entity

    froms = stmt.get_final_froms()
    if len(froms) == 1 and isinstance(froms[0], FromClause):
        return froms[0]
    raise ValueError(
        "Cannot infer the filter target from the statement; pass model= explicitly"
    )


def model_name(model: Any) -> str:
    """Human-readable name of a mapped class, alias or table."""
    if isinstance(model, FromClause):
        return str(getattr(model, "name", None) or model.description)
    return str(getattr(model, "__name__", None) or model)


def available_fields(model: Any) -> list[str]:
    """Queryable attribute names of a mapped class, alias or table."""
    if isinstance(model, FromClause):
        return list(model.c.keys())
    insp = sa_inspect(model, raiseerr=False)
    mapper = getattr(insp, "mapper", None)
    if mapper is None:
        return [name for name in dir(model) if not name.startswith("_")]
    return [
        key for key in mapper.all_orm_descriptors.keys() if not key.startswith("_")
    ]
