"""Typer CLI application for methodkit."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from typer import Argument, Exit, Option, Typer, echo

import methodkit
from methodkit.cli._logging import LOG_LEVELS, configure_logging, default_log_level
from methodkit.cli._prompts import prompt_backup, prompt_templates
from methodkit.cli._renderer import bootstrap, derived_flags, load_context, load_template
from methodkit.cli._types import EntryStatus, Template
from methodkit.cli._writer import write_output
from methodkit.core.config import BootstrapConfig, RenderOptions
from methodkit.core.context import MISSING, lookup
from methodkit.core.errors import MethodkitError, TemplateSyntaxError
from methodkit.core.parser import referenced_paths
from methodkit.core.resolver import render

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()
_err_console = Console(stderr=True)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_WARNINGS = 3


@app.callback()
def main(
    log_level: Annotated[
        str,
        Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to $METHODKIT_LOG_LEVEL.",
            show_default=False,
        ),
    ] = "",
) -> None:
    """methodkit — bootstrap methodology files (AGENTS.md, CLAUDE.md, ADRs) from templates."""
    level = (log_level or default_log_level()).upper()
    if level not in LOG_LEVELS:
        expected = ", ".join(LOG_LEVELS)
        raise _fail(f"Invalid log level {level!r}; expected one of {expected}.", EXIT_USAGE)
    configure_logging(level, _err_console)


def _print_templates() -> None:
    _console.print()
    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for t in Template:
        _console.print(
            f"[dim]│[/]  [bold cyan]{t.value:<12}[/] [bold]{t.label}[/] [dim]→ {t.output}[/]"
        )
        _console.print(f"[dim]│[/]  {' ' * 12} [dim]{t.description}[/]")
        _console.print("[dim]│[/]")
    _console.print()


def _list_templates_callback(value: bool) -> None:
    if value:
        _print_templates()
        raise Exit()


def _fail(message: str, code: int = EXIT_FAILURE) -> Exit:
    _err_console.print(f"[bold red]Error:[/] {escape(message)}")
    return Exit(code=code)


def _read_context(path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        data = load_context(path)
    except (OSError, ValueError) as exc:
        raise _fail(f"Cannot read analysis file {path}: {exc}") from None
    return {**derived_flags(data), **data}


@app.command("templates")
def list_templates() -> None:
    """List the bundled templates."""
    _print_templates()


@app.command("render")
def render_command(
    template: Annotated[
        str, Argument(help="Template file, or the name of a bundled template (see `templates`).")
    ],
    context_path: Annotated[
        Path | None, Option("--context", "-c", help="JSON analysis file with the template data.")
    ] = None,
    output: Annotated[
        Path | None, Option("--output", "-o", help="Write to this file instead of stdout.")
    ] = None,
    fallback: Annotated[
        str | None, Option("--fallback", help="Text used for placeholders with no value.")
    ] = None,
    strict: Annotated[
        bool, Option("--strict", help="Exit with code 3 when placeholders stay unresolved.")
    ] = False,
    backup: Annotated[
        bool, Option("--backup/--no-backup", help="Back up the output file before overwriting.")
    ] = True,
) -> None:
    """Render a single template."""
    options = RenderOptions(fallback=fallback, strict=strict)

    try:
        source = load_template(template)
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail(f"Cannot read template {template}: {exc}") from None
    context = _read_context(context_path)

    try:
        result = render(source, context, fallback=options.fallback)
    except MethodkitError as exc:
        raise _fail(str(exc)) from None

    if output is None:
        echo(result.text, nl=False)
    else:
        try:
            outcome = write_output(output, result.text, backup=backup)
        except (MethodkitError, OSError, UnicodeDecodeError) as exc:
            raise _fail(f"Cannot write {output}: {exc}") from None
        backup_str = f" [dim](backup {escape(str(outcome.backup))})[/]" if outcome.backup else ""
        _err_console.print(f"[bold green]◇[/]  Wrote {escape(str(output))}{backup_str}")

    for warning in result.warnings:
        _err_console.print(f"[bold yellow]Warning:[/] {escape(str(warning))}")

    if options.strict and result.warnings:
        raise Exit(code=EXIT_WARNINGS)


@app.command("check")
def check_command(
    template: Annotated[
        str, Argument(help="Template file, or the name of a bundled template (see `templates`).")
    ],
    context_path: Annotated[
        Path | None,
        Option("--context", "-c", help="Also report which paths this analysis file lacks."),
    ] = None,
) -> None:
    """Check a template's block structure and list the data paths it uses."""
    try:
        source = load_template(template)
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail(f"Cannot read template {template}: {exc}") from None

    try:
        paths = referenced_paths(source)
    except TemplateSyntaxError as exc:
        raise _fail(str(exc)) from None

    context = _read_context(context_path)

    _console.print(f"[bold green]◇[/]  {escape(template)} is well-formed")
    _console.print("[dim]│[/]")
    for path in paths:
        missing = context_path is not None and lookup(context, path) is MISSING
        marker = "[bold yellow]✗[/]" if missing else "[dim]•[/]"
        suffix = " [dim](missing)[/]" if missing else ""
        _console.print(f"[dim]│[/]  {marker} {escape(path)}{suffix}")
    _console.print("[dim]│[/]")
    _console.print(f"[bold cyan]●[/]  {len(paths)} data paths referenced")


@app.command("bootstrap")
def bootstrap_command(
    target: Annotated[Path, Argument(help="Project directory that receives the files.")],
    context_path: Annotated[
        Path | None, Option("--context", "-c", help="JSON analysis file with the template data.")
    ] = None,
    templates: Annotated[
        list[Template] | None,
        Option(
            "--template",
            "-t",
            help="Template to generate; repeat for several. Prompts when omitted.",
            show_default=False,
        ),
    ] = None,
    fallback: Annotated[
        str | None, Option("--fallback", help="Text used for placeholders with no value.")
    ] = None,
    strict: Annotated[
        bool, Option("--strict", help="Exit with code 3 when placeholders stay unresolved.")
    ] = False,
    backup: Annotated[
        bool | None,
        Option("--backup/--no-backup", help="Back up existing files before overwriting."),
    ] = None,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List all available templates and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Generate methodology files into a project."""
    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  methodkit v{methodkit.__version__}")
    _console.print("[dim]│[/]")

    # Interactive prompts for missing options
    if not templates:
        templates = prompt_templates()
    else:
        _console.print("[bold green]◇[/]  Choose the files to generate")
        _console.print(f"[dim]│[/]  {', '.join(t.label for t in templates)}")
        _console.print("[dim]│[/]")

    if backup is None:
        existing = [t.output for t in templates if (target / t.output).exists()]
        backup = prompt_backup(existing) if existing else True

    try:
        config = BootstrapConfig(
            target=target,
            templates=templates,
            context_path=context_path,
            backup=backup,
            strict=strict,
            fallback=fallback,
        )
    except ValueError as exc:
        raise _fail(str(exc), EXIT_USAGE) from None

    _console.print(f"[bold green]◇[/]  Writing to {escape(str(target))}/...")

    manifest = bootstrap(config)

    for entry in manifest.entries:
        if entry.status is EntryStatus.FAILED:
            error = escape(entry.error or "")
            _console.print(f"[dim]│[/]  [bold red]✗[/] {entry.output} [dim]— {error}[/]")
            continue
        notes: list[str] = []
        if not entry.changed:
            notes.append("unchanged")
        if entry.backup:
            notes.append(f"backup {entry.backup}")
        if entry.warnings:
            notes.append(f"{len(entry.warnings)} unresolved")
        notes_str = f" [dim]— {escape(', '.join(notes))}[/]" if notes else ""
        _console.print(f"[dim]│[/]  {entry.output}{notes_str}")

    _console.print("[dim]│[/]")

    if manifest.failed:
        _console.print(f"[bold red]●[/]  {len(manifest.failed)} file(s) failed")
        _console.print()
        raise Exit(code=EXIT_FAILURE)

    if config.strict and manifest.warning_count:
        _console.print(f"[bold yellow]●[/]  {manifest.warning_count} unresolved placeholder(s)")
        _console.print()
        raise Exit(code=EXIT_WARNINGS)

    _console.print(f"[bold cyan]●[/]  Done! Manifest saved to {escape(str(manifest.path))}")
    _console.print()
