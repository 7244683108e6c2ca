"""Template resolution core."""

from methodkit.core.config import BootstrapConfig, RenderOptions
from methodkit.core.context import (
    MISSING,
    ContextValue,
    DataContext,
    is_truthy,
    is_valid_path,
    lookup,
    to_text,
)
from methodkit.core.errors import (
    MarkerError,
    MethodkitError,
    TemplateSyntaxError,
    TemplateValueError,
)
from methodkit.core.parser import Block, Node, Text, Variable, parse, referenced_paths
from methodkit.core.resolver import RenderResult, RenderWarning, render, validate

__all__ = [
    "MISSING",
    "Block",
    "BootstrapConfig",
    "ContextValue",
    "DataContext",
    "MarkerError",
    "MethodkitError",
    "Node",
    "RenderOptions",
    "RenderResult",
    "RenderWarning",
    "TemplateSyntaxError",
    "TemplateValueError",
    "Text",
    "Variable",
    "is_truthy",
    "is_valid_path",
    "lookup",
    "parse",
    "referenced_paths",
    "render",
    "to_text",
    "validate",
]
