"""Fenced code block detection for Markdown text."""

from __future__ import annotations

import re
from typing import Final

_FENCE_PATTERN: Final = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def fenced_lines(text: str) -> set[int]:
    """
    Return the 0-based indices of lines that belong to fenced code blocks.

    Follows CommonMark: a fence is three or more backticks or tildes indented by
    at most three spaces. A block closes on a fence of the same character that
    is at least as long as the opening one and carries no info string. An
    unclosed fence runs to the end of the text. Fence lines themselves are
    included in the result.
    """
    inside: set[int] = set()
    opener: str | None = None

    for index, line in enumerate(text.split("\n")):
        match = _FENCE_PATTERN.match(line.rstrip("\r"))
        if opener is None:
            if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
                opener = match.group(1)
                inside.add(index)
            continue

        inside.add(index)
        if (
            match
            and match.group(1)[0] == opener[0]
            and len(match.group(1)) >= len(opener)
            and not match.group(2).strip()
        ):
            opener = None

    return inside
