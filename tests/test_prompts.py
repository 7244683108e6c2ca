"""Unit tests for interactive prompt functions."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from methodkit.cli._prompts import prompt_backup, prompt_templates
from methodkit.cli._types import Template


class TestPromptTemplates:
    @patch("methodkit.cli._prompts.TerminalMenu")
    def test_returns_selected_templates(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = (2, 0)

        result = prompt_templates()
        assert result == [Template.AGENTS_MD, Template.ADR]

    @patch("methodkit.cli._prompts.TerminalMenu")
    def test_all_preselected(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = (0, 1, 2)

        prompt_templates()
        kwargs = mock_menu_cls.call_args.kwargs
        assert kwargs["multi_select"] is True
        assert kwargs["preselected_entries"] == [0, 1, 2]

    @patch("methodkit.cli._prompts.TerminalMenu")
    def test_exit_on_none(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = None

        with pytest.raises(SystemExit):
            prompt_templates()

    @patch("methodkit.cli._prompts.TerminalMenu")
    def test_exit_on_empty_selection(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = ()

        with pytest.raises(SystemExit):
            prompt_templates()


class TestPromptBackup:
    @patch("builtins.input", return_value="")
    def test_default_yes(self, mock_input: MagicMock) -> None:
        result = prompt_backup(["AGENTS.md"])
        assert result is True
        mock_input.assert_called_once()

    @patch("builtins.input", return_value="n")
    def test_explicit_no(self, mock_input: MagicMock) -> None:
        result = prompt_backup(["AGENTS.md"])
        assert result is False
        mock_input.assert_called_once()

    @patch("builtins.input", return_value="yes")
    def test_explicit_yes(self, mock_input: MagicMock) -> None:
        result = prompt_backup(["AGENTS.md"])
        assert result is True
        mock_input.assert_called_once()

    @patch("methodkit.cli._prompts._clear_lines")
    @patch("builtins.input", return_value="")
    def test_lists_existing_files(
        self, mock_input: MagicMock, mock_clear: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        prompt_backup(["AGENTS.md", "CLAUDE.md"])

        out = capsys.readouterr().out
        assert "2 file(s) already exist" in out
        assert "AGENTS.md" in out
        assert "CLAUDE.md" in out
        assert "Keep a .bak copy of each" in out
        mock_clear.assert_called_once_with(4)
