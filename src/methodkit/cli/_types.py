"""Enums for CLI options."""

from enum import Enum


class Template(str, Enum):
    """Bundled methodology templates."""

    AGENTS_MD = "agents-md"
    CLAUDE_MD = "claude-md"
    ADR = "adr"

    @property
    def label(self) -> str:
        labels: dict[Template, str] = {
            Template.AGENTS_MD: "AGENTS.md",
            Template.CLAUDE_MD: "CLAUDE.md",
            Template.ADR: "ADR scaffold",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[Template, str] = {
            Template.AGENTS_MD: "Shared guidance for coding agents: layout, commands, working agreement.",  # noqa: E501
            Template.CLAUDE_MD: "Assistant-specific notes that point back to AGENTS.md.",
            Template.ADR: "First architecture decision record, adopting ADRs themselves.",
        }
        return descriptions[self]

    @property
    def resource(self) -> str:
        """File name of the template inside ``methodkit.cli.scaffold``."""
        resources: dict[Template, str] = {
            Template.AGENTS_MD: "agents_md.md",
            Template.CLAUDE_MD: "claude_md.md",
            Template.ADR: "adr.md",
        }
        return resources[self]

    @property
    def output(self) -> str:
        """Output path relative to the target project."""
        outputs: dict[Template, str] = {
            Template.AGENTS_MD: "AGENTS.md",
            Template.CLAUDE_MD: "CLAUDE.md",
            Template.ADR: "docs/adr/0000-record-architecture-decisions.md",
        }
        return outputs[self]


class EntryStatus(str, Enum):
    """Outcome of one generated file in a bootstrap run."""

    WRITTEN = "written"
    FAILED = "failed"
