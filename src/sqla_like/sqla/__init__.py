"""
Pattern filters for SQLAlchemy statements.

Public API:
    - ``match_any`` / ``match_all`` / ``exclude_all``: filter a ``Select``
    - ``apply_pattern_filter``: same, with the mode as an argument
    - ``build_pattern_filter``: compile a filter mapping to a
      ``ColumnElement[bool]``
    - ``PatternQuery``: fluent chaining wrapper
    - ``DEFAULT_SQLA_REGISTRY``: the default operator registry
    - ``SQLAlchemyOperator`` / ``SQLAlchemyOperatorRegistry``: extension
      points for custom operators
    - ``SQLAlchemyPatternAdapter`` / ``SQLAlchemyEqualityResolver``: the
      backend behind the helpers, for use with ``PatternFilterPipeline``
    - ``SQLAlchemyResolutionContext``: context handed to resolution hooks
"""

from .adapter import SQLAlchemyPatternAdapter
from .compiler import (
    apply_pattern_filter,
    build_pattern_filter,
    exclude_all,
    match_all,
    match_any,
)
from .hooks import SQLAlchemyResolutionContext
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .query import PatternQuery
from .resolver import SQLAlchemyEqualityResolver
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry
from .utils import primary_entity

__all__ = [
    "match_any",
    "match_all",
    "exclude_all",
    "apply_pattern_filter",
    "build_pattern_filter",
    "PatternQuery",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyPatternAdapter",
    "SQLAlchemyEqualityResolver",
    "SQLAlchemyResolutionContext",
    "primary_entity",
]
