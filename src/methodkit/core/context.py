"""Data context model: dotted-path lookup, truthiness and text conversion.

The context is a JSON-shaped tree (mappings, sequences, strings, numbers,
booleans and ``None``). An absent key is represented by :data:`MISSING` so that
lookups and truthiness checks can tell "not there" apart from an explicit
``None`` while still treating both as falsy.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
import re
from typing import Final, Literal, TypeAlias

from methodkit.core.errors import TemplateValueError

ContextValue: TypeAlias = (
    "str | int | float | bool | None | Mapping[str, ContextValue] | Sequence[ContextValue]"
)
DataContext: TypeAlias = Mapping[str, ContextValue]

PATH_PATTERN: Final = re.compile(r"[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*")


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing.MISSING
"""Sentinel returned by :func:`lookup` when a path does not exist."""

Missing: TypeAlias = Literal[_Missing.MISSING]


def is_valid_path(path: str) -> bool:
    """Whether ``path`` is a well-formed dotted path such as ``commands.test``."""
    return PATH_PATTERN.fullmatch(path) is not None


def lookup(context: DataContext, path: str) -> ContextValue | Missing:
    """
    Resolve a dotted path against the context.

    Each segment selects a key from a mapping. A purely numeric segment may also
    index into a sequence. The result is :data:`MISSING` as soon as a segment
    cannot be resolved at its level.

    Args:
        context: The root mapping.
        path: Dotted path, e.g. ``project.name`` or ``services.0.name``.

    Returns:
        The value found, or :data:`MISSING`.
    """
    current: ContextValue = context
    for segment in path.split("."):
        match current:
            case Mapping():
                if segment not in current:
                    return MISSING
                current = current[segment]
            case str():
                return MISSING
            case Sequence() if segment.isdigit():
                index = int(segment)
                if index >= len(current):
                    return MISSING
                current = current[index]
            case _:
                return MISSING
    return current


def is_truthy(value: ContextValue | Missing) -> bool:
    """
    Evaluate a looked-up value for ``{{#if}}`` / ``{{#unless}}``.

    Falsy values form a closed list: :data:`MISSING`, ``None``, ``""``, an empty
    sequence and ``False``. Everything else is truthy, including ``0``, ``"0"``,
    ``"false"`` and an empty mapping.
    """
    match value:
        case _Missing() | None:
            return False
        case bool():
            return value
        case str():
            return value != ""
        case Mapping():
            return True
        case Sequence():
            return len(value) > 0
        case _:
            return True


def to_text(value: ContextValue, path: str) -> str:
    """Render a scalar for substitution. Sequences and mappings are rejected."""
    match value:
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case int() | float():
            return repr(value)
        case Mapping():
            raise TemplateValueError(path, "mapping")
        case Sequence():
            raise TemplateValueError(path, "sequence")
        case _:
            return str(value)
