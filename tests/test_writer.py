"""Tests for writing rendered output to disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from methodkit.cli._writer import backup_path, write_output
from methodkit.core.errors import MarkerError


class TestWriteOutput:
    def test_creates_new_file_and_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "docs" / "adr" / "0000.md"
        outcome = write_output(target, "hello\n")

        assert target.read_text() == "hello\n"
        assert outcome.backup is None
        assert outcome.changed is True

    def test_overwrite_makes_backup(self, tmp_path: Path) -> None:
        target = tmp_path / "AGENTS.md"
        target.write_text("old\n")

        outcome = write_output(target, "new\n")

        assert target.read_text() == "new\n"
        assert outcome.backup == tmp_path / "AGENTS.md.bak"
        assert outcome.backup.read_text() == "old\n"

    def test_no_backup(self, tmp_path: Path) -> None:
        target = tmp_path / "AGENTS.md"
        target.write_text("old\n")

        outcome = write_output(target, "new\n", backup=False)

        assert outcome.backup is None
        assert not (tmp_path / "AGENTS.md.bak").exists()

    def test_unchanged_file_untouched(self, tmp_path: Path) -> None:
        target = tmp_path / "AGENTS.md"
        target.write_text("same\n")

        outcome = write_output(target, "same\n")

        assert outcome.changed is False
        assert outcome.backup is None
        assert not (tmp_path / "AGENTS.md.bak").exists()

    def test_preserves_user_regions(self, tmp_path: Path) -> None:
        target = tmp_path / "AGENTS.md"
        target.write_text("v1\n<!-- NOTES_START -->\nmine\n<!-- NOTES_END -->\n")

        outcome = write_output(target, "v2\n<!-- NOTES_START -->\n<!-- NOTES_END -->\n")

        assert target.read_text() == "v2\n<!-- NOTES_START -->\nmine\n<!-- NOTES_END -->\n"
        assert outcome.preserved == ["NOTES"]

    def test_malformed_existing_markers_raise(self, tmp_path: Path) -> None:
        target = tmp_path / "AGENTS.md"
        target.write_text("<!-- NOTES_START -->\nunclosed\n")

        with pytest.raises(MarkerError):
            write_output(target, "new\n")
        assert target.read_text() == "<!-- NOTES_START -->\nunclosed\n"


class TestBackupPath:
    def test_plain_bak(self, tmp_path: Path) -> None:
        assert backup_path(tmp_path / "CLAUDE.md") == tmp_path / "CLAUDE.md.bak"

    def test_timestamped_when_bak_exists(self, tmp_path: Path) -> None:
        (tmp_path / "CLAUDE.md.bak").write_text("older")
        candidate = backup_path(tmp_path / "CLAUDE.md")
        assert candidate.name.startswith("CLAUDE.md.")
        assert candidate.name.endswith(".bak")
        assert candidate.name != "CLAUDE.md.bak"
