"""Writes rendered text to disk, keeping backups and user-owned regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from pathlib import Path
import shutil

from methodkit.lib.markers import merge_regions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteOutcome:
    """
    Result of :func:`write_output`.

    Attributes:
        path: The file written.
        backup: Copy of the previous file, if one was made.
        changed: Whether the content on disk changed.
        preserved: Regions whose existing content was kept.
        appended: Regions appended because the new text lacks them.
    """

    path: Path
    backup: Path | None = None
    changed: bool = True
    preserved: list[str] = field(default_factory=list)
    appended: list[str] = field(default_factory=list)


def backup_path(path: Path) -> Path:
    """``<name>.bak``, or a timestamped name when that already exists."""
    candidate = path.with_name(f"{path.name}.bak")
    if not candidate.exists():
        return candidate
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return path.with_name(f"{path.name}.{stamp}.bak")


def write_output(path: Path, text: str, *, backup: bool = True) -> WriteOutcome:
    """
    Write ``text`` to ``path``.

    When ``path`` already exists, its ``<!-- NAME_START -->`` / ``<!-- NAME_END -->``
    regions are carried into ``text`` and, if ``backup`` is set, the old file is
    copied aside first. An unchanged file is left untouched.

    Raises:
        MarkerError: If the existing file has malformed region markers.
        OSError: If the file cannot be read or written.
        UnicodeDecodeError: If the existing file is not UTF-8.
    """
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug("Created %s", path)
        return WriteOutcome(path)

    existing = path.read_text(encoding="utf-8")
    merged = merge_regions(text, existing)
    for name in merged.appended:
        logger.warning("Region %s of %s is not in the template; appended at the end", name, path)

    if merged.text == existing:
        logger.debug("Unchanged %s", path)
        return WriteOutcome(path, None, False, merged.preserved, merged.appended)

    saved: Path | None = None
    if backup:
        saved = backup_path(path)
        shutil.copy2(path, saved)
        logger.debug("Backed up %s to %s", path, saved)

    path.write_text(merged.text, encoding="utf-8")
    logger.debug("Updated %s", path)
    return WriteOutcome(path, saved, True, merged.preserved, merged.appended)
