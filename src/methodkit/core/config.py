"""Configuration dataclasses for rendering and bootstrapping."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from methodkit.core.context import is_valid_path

if TYPE_CHECKING:
    from methodkit.cli._types import Template


@dataclass(kw_only=True)
class RenderOptions:
    """
    Call-site policy for a single render.

    Attributes:
        fallback: Text for unresolved placeholders. A single string applies to
            every placeholder; a mapping applies per dotted path.
        strict: Treat unresolved-placeholder warnings as failures.
    """

    fallback: str | Mapping[str, str] | None = None
    strict: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.fallback, Mapping):
            for path in self.fallback:
                if not is_valid_path(path):
                    raise ValueError(f"fallback keys must be dotted paths, got {path!r}.")


@dataclass(kw_only=True)
class BootstrapConfig:
    """
    Configuration for bootstrapping methodology files into a project.

    Attributes:
        target: Project directory that receives the generated files.
        templates: Bundled templates to render, in order.
        context_path: JSON analysis file. ``None`` renders with an empty context.
        backup: Copy existing files aside before overwriting them.
        strict: Treat unresolved-placeholder warnings as failures.
        fallback: Text for unresolved placeholders.
    """

    target: Path
    templates: list[Template]
    context_path: Path | None = None
    backup: bool = True
    strict: bool = False
    fallback: str | None = None
    render: RenderOptions = field(init=False)

    def __post_init__(self) -> None:
        if not self.templates:
            raise ValueError("templates must not be empty.")
        if len(set(self.templates)) != len(self.templates):
            raise ValueError(f"templates must be unique, got {[t.value for t in self.templates]}.")
        if self.target.exists() and not self.target.is_dir():
            raise ValueError(f"target must be a directory, got {self.target}.")
        self.render = RenderOptions(fallback=self.fallback, strict=self.strict)
