"""Exception types raised by methodkit."""

from __future__ import annotations


class MethodkitError(Exception):
    """Base class for all methodkit errors."""


class TemplateSyntaxError(MethodkitError, ValueError):
    """Raised when a template has unbalanced, mismatched or unknown block tags.

    Args:
        message: Human-readable description of the problem.
        tag: The offending tag as written in the template, e.g. ``{{/unless}}``.
        line: 1-based line of the tag.
        column: 1-based column of the tag.
    """

    def __init__(self, message: str, *, tag: str, line: int, column: int) -> None:
        super().__init__(f"{message} at line {line}, column {column}: {tag}")
        self.tag = tag
        self.line = line
        self.column = column


class TemplateValueError(MethodkitError, TypeError):
    """Raised when a placeholder resolves to a sequence or mapping."""

    def __init__(self, path: str, kind: str) -> None:
        super().__init__(f"Placeholder '{path}' resolved to a {kind}, expected a scalar value.")
        self.path = path


class MarkerError(MethodkitError, ValueError):
    """Raised when preserved-region markers are unbalanced or duplicated."""
