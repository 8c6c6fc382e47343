"""
Case-insensitive "contains" filtering from ``field -> term(s)`` mappings.

The core here is backend-agnostic; the SQLAlchemy backend lives in
:mod:`sqla_like.sqla`.
"""

from .exceptions import (
    FieldNotFoundError,
    InvalidTermError,
    ModeNotFoundError,
    OperatorNotRegisteredError,
    PatternFilterError,
    RelationshipTraversalError,
    UnsupportedPredicateError,
    ValidationError,
)
from .hooks import HookResult, ResolutionContext, ResolutionHook
from .modes import PatternMode
from .normalizer import NormalizedFilterSpec, escape_like, normalize_filter_spec
from .operators import PatternOperator
from .pipeline import PatternFilterPipeline, build_pattern_nodes, combine_nodes
from .ports import (
    ClauseMerger,
    EqualityResolver,
    PatternAdapter,
    PatternNodeFactory,
    ResolvedPredicate,
)
from .settings import DEFAULT_SETTINGS, PatternFilterSettings

__all__ = [
    # Modes / settings
    "PatternMode",
    "PatternOperator",
    "PatternFilterSettings",
    "DEFAULT_SETTINGS",
    # Normalisation
    "NormalizedFilterSpec",
    "normalize_filter_spec",
    "escape_like",
    # Pipeline
    "PatternFilterPipeline",
    "build_pattern_nodes",
    "combine_nodes",
    # Ports
    "EqualityResolver",
    "PatternNodeFactory",
    "ClauseMerger",
    "PatternAdapter",
    "ResolvedPredicate",
    # Hooks
    "HookResult",
    "ResolutionContext",
    "ResolutionHook",
    # Exceptions
    "PatternFilterError",
    "ValidationError",
    "InvalidTermError",
    "ModeNotFoundError",
    "OperatorNotRegisteredError",
    "UnsupportedPredicateError",
    "FieldNotFoundError",
    "RelationshipTraversalError",
]
