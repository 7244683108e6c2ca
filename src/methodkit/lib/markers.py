"""User-owned regions delimited by ``<!-- NAME_START -->`` / ``<!-- NAME_END -->``.

Generated files may contain regions that users edit by hand. When a file is
regenerated, the content of every region found in the existing file replaces
the content of the region with the same name in the new text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Final

from methodkit.core.errors import MarkerError

_MARKER_PATTERN: Final = re.compile(r"<!--\s*([A-Za-z0-9_]+?)_(START|END)\s*-->")


@dataclass(frozen=True)
class Region:
    """
    A preserved region.

    Attributes:
        name: Region name, the marker text without the ``_START``/``_END`` suffix.
        start: Offset of the opening marker.
        end: Offset just past the closing marker.
        content_start: Offset just past the opening marker.
        content_end: Offset of the closing marker.
    """

    name: str
    start: int
    end: int
    content_start: int
    content_end: int

    def content(self, text: str) -> str:
        return text[self.content_start : self.content_end]

    def whole(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True)
class MergeResult:
    text: str
    preserved: list[str] = field(default_factory=list)
    appended: list[str] = field(default_factory=list)


def find_regions(text: str) -> list[Region]:
    """
    Locate all preserved regions in ``text``, in document order.

    Raises:
        MarkerError: If a region is unclosed, nested, closed without being
            opened, or its name appears twice.
    """
    regions: list[Region] = []
    seen: set[str] = set()
    opened: re.Match[str] | None = None

    for match in _MARKER_PATTERN.finditer(text):
        name, edge = match.group(1), match.group(2)
        if edge == "START":
            if opened is not None:
                raise MarkerError(
                    f"Region '{name}' starts inside region '{opened.group(1)}' "
                    f"at offset {match.start()}."
                )
            if name in seen:
                raise MarkerError(f"Region '{name}' appears more than once.")
            opened = match
            continue

        if opened is None or opened.group(1) != name:
            raise MarkerError(
                f"Region end '{name}' at offset {match.start()} has no matching start."
            )
        regions.append(Region(name, opened.start(), match.end(), opened.end(), match.start()))
        seen.add(name)
        opened = None

    if opened is not None:
        raise MarkerError(f"Region '{opened.group(1)}' is never closed.")
    return regions


def merge_regions(new_text: str, existing_text: str) -> MergeResult:
    """
    Carry user-owned regions of ``existing_text`` over into ``new_text``.

    Regions present in both keep the existing content. Regions only present in
    the existing text are appended, markers included, at the end of the new
    text.
    """
    existing = {region.name: region for region in find_regions(existing_text)}
    incoming = find_regions(new_text)

    merged = new_text
    preserved: list[str] = []
    for region in reversed(incoming):
        old = existing.get(region.name)
        if old is None:
            continue
        merged = (
            merged[: region.content_start]
            + old.content(existing_text)
            + merged[region.content_end :]
        )
        preserved.append(region.name)
    preserved.reverse()

    names = {region.name for region in incoming}
    appended = [name for name in existing if name not in names]
    for name in appended:
        if merged and not merged.endswith("\n"):
            merged += "\n"
        merged += "\n" + existing[name].whole(existing_text) + "\n"

    return MergeResult(merged, preserved, appended)
