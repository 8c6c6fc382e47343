"""
Resolution hooks for field-path resolution.

Hooks are passed to the filter helpers as extra positional arguments and
forwarded untouched to the equality delegate, which consults them before
its default column lookup. This lets callers expose virtual field names
(``"author"`` -> ``User.display_name``) or JSON lookups without teaching
the pipeline anything about them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, cast

T = TypeVar("T")


@dataclass
class HookResult(Generic[T]):
    """
    Answer from a resolution hook.

    ``value`` is the column or expression to match the patterns against.
    With ``handled=False`` the delegate ignores ``value`` and resolves the
    field itself.
    """

    value: T
    handled: bool = True

    @classmethod
    def skip(cls) -> HookResult[None]:
        result = cls(value=None, handled=False)  # type: ignore[arg-type]
        return cast("HookResult[None]", result)


@dataclass
class ResolutionContext:
    """
    What a hook sees for one field of a filter mapping.

    Attributes:
        field_path: Dotted path as it appears in the (flattened) mapping.
        value: The wrapped pattern, or list of patterns, for the field.
        parts: ``field_path`` split on dots; filled in when omitted.
        current_index: Position in ``parts`` the resolver has reached.
    """

    field_path: str
    value: Any = None
    parts: list[str] = field(default_factory=list)
    current_index: int = 0

    def __post_init__(self) -> None:
        if not self.parts:
            self.parts = self.field_path.split(".")

    @property
    def current_part(self) -> str:
        return self.parts[self.current_index]

    @property
    def remaining_parts(self) -> list[str]:
        return self.parts[self.current_index + 1 :]

    @property
    def is_last_part(self) -> bool:
        return self.current_index == len(self.parts) - 1

    @property
    def patterns(self) -> list[str]:
        """The field's patterns as a list, whether one or several."""
        return list(self.value) if isinstance(self.value, list) else [self.value]


class ResolutionHook(Protocol):
    def __call__(self, ctx: ResolutionContext) -> HookResult[Any]: ...
