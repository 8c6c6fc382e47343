"""
Apply pattern filters to SQLAlchemy statements.

Public API::

    stmt = match_any(select(Job), {"title": ["Engineer", "Remote"]})
    # WHERE (jobs.title ILIKE '%Engineer%' OR jobs.title ILIKE '%Remote%')

    stmt = match_all(select(Job), {"title": ["Engineer", "Remote"]})
    # WHERE (jobs.title ILIKE '%Engineer%' AND jobs.title ILIKE '%Remote%')

    stmt = exclude_all(select(Job), {"title": "Intern"})
    # WHERE jobs.title NOT ILIKE '%Intern%'

Search terms are always bound parameters. Extra positional arguments are
:class:`ResolutionHook` callables forwarded to the equality delegate.

Each helper returns a new ``Select``; the statement passed in is left
untouched, also when translation fails part-way through a mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_

from sqla_like.modes import PatternMode
from sqla_like.pipeline import PatternFilterPipeline

from .adapter import SQLAlchemyPatternAdapter
from .utils import primary_entity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import ColumnElement, Select

    from sqla_like.hooks import ResolutionHook
    from sqla_like.normalizer import NormalizedFilterSpec, Term
    from sqla_like.settings import PatternFilterSettings

    from .strategy import SQLAlchemyOperatorRegistry


def build_pattern_filter(
    model: Any,
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    mode: PatternMode | str,
    *hooks: ResolutionHook,
    settings: PatternFilterSettings | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool] | None:
    """
    Build the pattern filter for *spec* as a standalone expression.

    Returns the AND of the per-field predicates, the single predicate when
    only one field survives, or ``None`` when nothing is left to filter
    (e.g. excluding only empty terms).
    """
    pipeline = _pipeline(model, settings, registry)
    predicates = pipeline.predicates(spec, mode, *hooks)
    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return and_(*predicates)


def apply_pattern_filter(
    stmt: Select[Any],
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    mode: PatternMode | str,
    *hooks: ResolutionHook,
    model: Any = None,
    settings: PatternFilterSettings | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    AND the pattern filter for *spec* into *stmt*.

    Args:
        stmt: The statement to filter.
        spec: ``field -> term | [terms]`` mapping. Nested mappings address
            related models (``{"company": {"name": "Acme"}}``).
        mode: A :class:`PatternMode` or its string value.
        hooks: Resolution hooks forwarded to the equality delegate.
        model: Filter target; inferred from *stmt* when omitted.
        settings: Pattern rendering options.
        registry: Custom operator registry.
    """
    target = model if model is not None else primary_entity(stmt)
    return _pipeline(target, settings, registry).apply(stmt, spec, mode, *hooks)


def match_any(
    stmt: Select[Any],
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    *hooks: ResolutionHook,
    model: Any = None,
    settings: PatternFilterSettings | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Rows where each field contains *any* of its terms."""
    return apply_pattern_filter(
        stmt,
        spec,
        PatternMode.MATCH_ANY,
        *hooks,
        model=model,
        settings=settings,
        registry=registry,
    )


def match_all(
    stmt: Select[Any],
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    *hooks: ResolutionHook,
    model: Any = None,
    settings: PatternFilterSettings | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Rows where each field contains *all* of its terms."""
    return apply_pattern_filter(
        stmt,
        spec,
        PatternMode.MATCH_ALL,
        *hooks,
        model=model,
        settings=settings,
        registry=registry,
    )


def exclude_all(
    stmt: Select[Any],
    spec: Mapping[str, Term] | NormalizedFilterSpec,
    *hooks: ResolutionHook,
    model: Any = None,
    settings: PatternFilterSettings | None = None,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Rows where no field contains any of its terms."""
    return apply_pattern_filter(
        stmt,
        spec,
        PatternMode.EXCLUDE_ALL,
        *hooks,
        model=model,
        settings=settings,
        registry=registry,
    )


def _pipeline(
    model: Any,
    settings: PatternFilterSettings | None,
    registry: SQLAlchemyOperatorRegistry | None,
) -> PatternFilterPipeline[Select[Any], ColumnElement[bool]]:
    adapter = SQLAlchemyPatternAdapter(model, registry=registry)
    return PatternFilterPipeline(adapter, settings=settings)
