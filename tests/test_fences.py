"""Tests for methodkit.lib.fences."""

from __future__ import annotations

from methodkit.lib.fences import fenced_lines


class TestFencedLines:
    def test_no_fences(self) -> None:
        assert fenced_lines("a\nb\nc") == set()

    def test_backtick_fence(self) -> None:
        text = "intro\n```bash\nmake test\n```\noutro"
        assert fenced_lines(text) == {1, 2, 3}

    def test_tilde_fence(self) -> None:
        text = "~~~\nx\n~~~\ny"
        assert fenced_lines(text) == {0, 1, 2}

    def test_unclosed_runs_to_end(self) -> None:
        text = "a\n```\nb\nc"
        assert fenced_lines(text) == {1, 2, 3}

    def test_closing_fence_must_be_long_enough(self) -> None:
        text = "````\n```\nstill inside\n````\nout"
        assert fenced_lines(text) == {0, 1, 2, 3}

    def test_closing_fence_must_match_character(self) -> None:
        text = "```\n~~~\ninside\n```\nout"
        assert fenced_lines(text) == {0, 1, 2, 3}

    def test_closing_fence_takes_no_info_string(self) -> None:
        text = "```\n```python\ninside\n```"
        assert fenced_lines(text) == {0, 1, 2, 3}

    def test_indented_up_to_three_spaces(self) -> None:
        text = "   ```\nx\n   ```\ny"
        assert fenced_lines(text) == {0, 1, 2}

    def test_four_spaces_is_not_a_fence(self) -> None:
        assert fenced_lines("    ```\nx") == set()

    def test_backtick_info_string_with_backtick_is_not_a_fence(self) -> None:
        assert fenced_lines("``` a`b\nx") == set()

    def test_crlf_line_endings(self) -> None:
        text = "```\r\nx\r\n```\r\ny"
        assert fenced_lines(text) == {0, 1, 2}
