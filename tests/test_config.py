"""Tests for methodkit.core.config — configuration dataclasses."""

from __future__ import annotations

from pathlib import Path

import pytest

from methodkit.cli._types import Template
from methodkit.core.config import BootstrapConfig, RenderOptions


class TestRenderOptions:
    def test_defaults(self) -> None:
        c = RenderOptions()
        assert c.fallback is None
        assert c.strict is False

    def test_mapping_fallback(self) -> None:
        c = RenderOptions(fallback={"commands.test": "n/a"})
        assert c.fallback == {"commands.test": "n/a"}

    def test_invalid_mapping_key(self) -> None:
        with pytest.raises(ValueError, match="dotted paths"):
            RenderOptions(fallback={"not a path": "x"})


class TestBootstrapConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        c = BootstrapConfig(target=tmp_path, templates=[Template.AGENTS_MD])
        assert c.context_path is None
        assert c.backup is True
        assert c.render == RenderOptions()

    def test_render_options_follow_fields(self, tmp_path: Path) -> None:
        c = BootstrapConfig(
            target=tmp_path, templates=[Template.ADR], strict=True, fallback="TBD"
        )
        assert c.render == RenderOptions(fallback="TBD", strict=True)

    def test_empty_templates(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            BootstrapConfig(target=tmp_path, templates=[])

    def test_duplicate_templates(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="unique"):
            BootstrapConfig(target=tmp_path, templates=[Template.ADR, Template.ADR])

    def test_target_is_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(ValueError, match="must be a directory"):
            BootstrapConfig(target=target, templates=[Template.ADR])

    def test_missing_target_allowed(self, tmp_path: Path) -> None:
        c = BootstrapConfig(target=tmp_path / "new", templates=[Template.ADR])
        assert c.target == tmp_path / "new"
