"""Caller-owned record of what a bootstrap run generated."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
import json
import logging
from pathlib import Path

from methodkit.cli._types import EntryStatus, Template
from methodkit.cli._writer import WriteOutcome
from methodkit.core.resolver import RenderResult

logger = logging.getLogger(__name__)

MANIFEST_PATH = Path(".methodkit") / "manifest.json"


@dataclass(kw_only=True)
class ManifestEntry:
    """
    One generated (or failed) file.

    Attributes:
        template: Template value, e.g. ``agents-md``.
        output: Output path relative to the target.
        status: Whether the file was written.
        backup: Backup path relative to the target, if one was made.
        changed: Whether the file content differs from what was on disk.
        warnings: Unresolved placeholders, formatted as ``line:column: message token``.
        defaulted: Dotted paths replaced by fallback text.
        preserved: User-owned regions carried over from the previous file.
        appended: User-owned regions appended because the template lacks them.
        error: Failure description for failed entries.
    """

    template: str
    output: str
    status: EntryStatus
    backup: str | None = None
    changed: bool = False
    warnings: list[str] = field(default_factory=list)
    defaulted: list[str] = field(default_factory=list)
    preserved: list[str] = field(default_factory=list)
    appended: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass(kw_only=True)
class BootstrapManifest:
    """State of a bootstrap run, passed explicitly through each step."""

    target: Path
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entries: list[ManifestEntry] = field(default_factory=list)

    @property
    def path(self) -> Path:
        return self.target / MANIFEST_PATH

    @property
    def failed(self) -> list[ManifestEntry]:
        return [e for e in self.entries if e.status is EntryStatus.FAILED]

    @property
    def warning_count(self) -> int:
        return sum(len(e.warnings) for e in self.entries)

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.target).as_posix()
        except ValueError:
            return str(path)

    def record(self, template: Template, result: RenderResult, outcome: WriteOutcome) -> None:
        self.entries.append(
            ManifestEntry(
                template=template.value,
                output=template.output,
                status=EntryStatus.WRITTEN,
                backup=self._relative(outcome.backup) if outcome.backup else None,
                changed=outcome.changed,
                warnings=[str(w) for w in result.warnings],
                defaulted=list(result.defaulted),
                preserved=list(outcome.preserved),
                appended=list(outcome.appended),
            )
        )

    def record_failure(self, template: Template, error: Exception) -> None:
        self.entries.append(
            ManifestEntry(
                template=template.value,
                output=template.output,
                status=EntryStatus.FAILED,
                error=str(error),
            )
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "target": str(self.target),
            "created_at": self.created_at.isoformat(),
            "entries": [{**asdict(e), "status": e.status.value} for e in self.entries],
        }

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.debug("Wrote manifest to %s", self.path)
        return self.path
