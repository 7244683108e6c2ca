"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from methodkit.cli._types import Template

_console = Console()


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _multi_select(question: str, labels: list[str]) -> list[int]:
    """Display a clack-style multi-selection prompt and return the chosen indices."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        multi_select=True,
        show_multi_select_hint=True,
        multi_select_select_on_accept=False,
        preselected_entries=list(range(len(labels))),
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_indices = menu.show()

    if raw_indices is None:
        raise SystemExit(1)

    indices = sorted(int(i) for i in raw_indices)

    # Overwrite the ◆ question + │ bar that stayed on screen
    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i in indices:
            _console.print(f"[dim]│[/]  [bold green]●[/] {lbl}")
        else:
            _console.print(f"[dim]│[/]    [dim s]{lbl}[/]")
    _print_bar()

    return indices


def _confirm(question: str, details: list[str], answers: tuple[str, str]) -> bool:
    """
    Display a clack-style yes/no prompt with ``details`` listed under the question.

    Defaults to yes. ``answers`` is the summary shown for yes and no.
    """
    _console.print(f"[bold cyan]◆[/]  {question}")
    for detail in details:
        _console.print(f"[dim]│  • {escape(detail)}[/]")

    _console.print("[dim]│[/]  ", end="")
    answer = input("[Y/n] ").strip().lower()
    result = answer not in ("n", "no")

    # Overwrite the question, the detail lines and the input line
    _clear_lines(len(details) + 2)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {answers[0] if result else answers[1]}")
    _print_bar()

    return result


def prompt_templates() -> list[Template]:
    """Prompt user to choose which templates to generate."""
    templates = list(Template)
    labels = [t.label for t in templates]
    indices = _multi_select("Choose the files to generate", labels)
    if not indices:
        raise SystemExit(1)
    return [templates[i] for i in indices]


def prompt_backup(existing: list[str]) -> bool:
    """Ask whether to keep a `.bak` copy of each file in ``existing`` before it is overwritten."""
    return _confirm(
        f"{len(existing)} file(s) already exist. Back them up before overwriting?",
        existing,
        ("Keep a .bak copy of each", "Overwrite without backup"),
    )
