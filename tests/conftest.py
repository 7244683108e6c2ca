"""Shared fixtures for the methodkit test suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def reset_methodkit_logger():
    """The CLI installs its own handler; undo it so tests stay independent."""
    yield
    logger = logging.getLogger("methodkit")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def analysis() -> dict[str, Any]:
    return {
        "project": {
            "name": "Acme Widgets",
            "description": "Widget inventory service.",
            "language": "Python",
        },
        "paths": {"source": "src", "tests": "tests", "docs": "docs"},
        "commands": {
            "install": "uv sync",
            "build": "uv build",
            "test": "uv run pytest",
            "lint": "uv run ruff check .",
            "format": "uv run ruff format .",
        },
        "adr": {"directory": "docs/adr"},
        "conventions": {"style_guide": "PEP 8"},
    }


@pytest.fixture
def analysis_file(tmp_path: Path, analysis: dict[str, Any]) -> Path:
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps(analysis), encoding="utf-8")
    return path
