"""Orchestrates template rendering to files on disk."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
import importlib.resources as ilr
import json
import logging
from pathlib import Path
from typing import Any

from methodkit.cli._manifest import BootstrapManifest
from methodkit.cli._types import Template
from methodkit.cli._writer import write_output
from methodkit.core.config import BootstrapConfig
from methodkit.core.context import is_truthy
from methodkit.core.errors import MethodkitError
from methodkit.core.resolver import render

logger = logging.getLogger(__name__)

_SCAFFOLD_PKG = "methodkit.cli.scaffold"


def read_bundled(template: Template) -> str:
    return ilr.files(_SCAFFOLD_PKG).joinpath(template.resource).read_text(encoding="utf-8")


def load_template(source: str) -> str:
    """
    Read a bundled template by name (e.g. ``agents-md``) or a template file by path.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8.
    """
    try:
        return read_bundled(Template(source))
    except ValueError:
        return Path(source).read_text(encoding="utf-8")


def load_context(path: Path) -> dict[str, Any]:
    """
    Read a JSON analysis record.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or its top level is not an object.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(
            f"Analysis file {path} must contain a JSON object, got {type(data).__name__}."
        )
    return data


def _has_value(value: Any) -> bool:
    if isinstance(value, Mapping):
        return any(_has_value(v) for v in value.values())
    return is_truthy(value)


def derived_flags(context: Mapping[str, Any]) -> dict[str, bool]:
    """
    Flags the bundled templates branch on.

    ``has_commands`` and ``has_layout`` are true only when ``commands`` or
    ``paths`` holds at least one truthy leaf, so an empty mapping counts as
    nothing detected.
    """
    return {
        "has_commands": _has_value(context.get("commands")),
        "has_layout": _has_value(context.get("paths")),
    }


def _bootstrap_context(config: BootstrapConfig) -> dict[str, Any]:
    context: dict[str, Any] = {}
    if config.context_path is not None:
        try:
            context = load_context(config.context_path)
        except (OSError, ValueError) as exc:
            logger.warning(
                "Cannot use analysis file %s (%s); continuing without it", config.context_path, exc
            )

    defaults: dict[str, Any] = {
        "date": date.today().isoformat(),
        "agents_md": Template.AGENTS_MD in config.templates
        or (config.target / Template.AGENTS_MD.output).exists(),
        **derived_flags(context),
    }
    return {**defaults, **context}


def bootstrap(
    config: BootstrapConfig, manifest: BootstrapManifest | None = None
) -> BootstrapManifest:
    """
    Render each configured template into the target project.

    A template that fails to render or write is logged, recorded as failed and
    skipped; the remaining templates are still generated. The manifest is saved
    to ``.methodkit/manifest.json`` in the target.
    """
    manifest = manifest or BootstrapManifest(target=config.target)
    context = _bootstrap_context(config)
    config.target.mkdir(parents=True, exist_ok=True)

    for template in config.templates:
        output = config.target / template.output
        logger.debug("Rendering %s to %s", template.value, output)
        try:
            result = render(read_bundled(template), context, fallback=config.render.fallback)
            outcome = write_output(output, result.text, backup=config.backup)
        except (MethodkitError, OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to generate %s: %s", template.output, exc)
            manifest.record_failure(template, exc)
            continue
        manifest.record(template, result, outcome)

    try:
        manifest.save()
    except OSError as exc:
        logger.error("Failed to write manifest %s: %s", manifest.path, exc)

    return manifest
