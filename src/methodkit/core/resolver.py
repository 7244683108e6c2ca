"""Template resolution: conditional blocks, placeholder substitution, cleanup, validation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import logging
from typing import Final, TypeAlias

from methodkit.core.context import MISSING, DataContext, is_truthy, lookup, to_text
from methodkit.core.parser import TAG_PATTERN, Block, Node, Text, Variable, parse, position
from methodkit.lib.fences import fenced_lines

logger = logging.getLogger(__name__)

Fallback: TypeAlias = str | Mapping[str, str] | None


class _BlockMark:
    """Marks where a block construct stood in the output, for blank-line cleanup."""

    def __repr__(self) -> str:
        return "<block>"


_MARK: Final = _BlockMark()


class _Value(str):
    """Text taken from the data context or a fallback, exempt from validation."""


_Piece: TypeAlias = Text | Variable | _BlockMark
_Segment: TypeAlias = str | _BlockMark
_Span: TypeAlias = tuple[int, int]


@dataclass(frozen=True)
class RenderWarning:
    """
    An unresolved placeholder left in the rendered output.

    Attributes:
        token: The placeholder text, e.g. ``{{project.name}}``.
        line: 1-based line in the rendered output.
        column: 1-based column in the rendered output.
        message: Human-readable description.
    """

    token: str
    line: int
    column: int
    message: str = "Unresolved placeholder"

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message} {self.token}"


@dataclass(frozen=True)
class RenderResult:
    """
    Output of :func:`render`.

    Attributes:
        text: Fully resolved text. Contains no block markers.
        warnings: Unresolved placeholders found outside fenced code blocks.
        defaulted: Dotted paths that were replaced by caller fallback text.
    """

    text: str
    warnings: list[RenderWarning] = field(default_factory=list)
    defaulted: list[str] = field(default_factory=list)


def _resolve_blocks(nodes: list[Node], context: DataContext, out: list[_Piece]) -> None:
    for node in nodes:
        match node:
            case Block(kind="if", condition=condition, body=body, alternative=alternative):
                out.append(_MARK)
                kept = body if is_truthy(lookup(context, condition)) else alternative
                _resolve_blocks(kept, context, out)
                out.append(_MARK)
            case Block(kind="unless", condition=condition, body=body):
                out.append(_MARK)
                if not is_truthy(lookup(context, condition)):
                    _resolve_blocks(body, context, out)
                out.append(_MARK)
            case _:
                out.append(node)


def _fallback_for(fallback: Fallback, path: str) -> str | None:
    if fallback is None or isinstance(fallback, str):
        return fallback
    return fallback.get(path)


def _substitute(
    pieces: list[_Piece], context: DataContext, fallback: Fallback, defaulted: list[str]
) -> list[_Segment]:
    segments: list[_Segment] = []
    for piece in pieces:
        match piece:
            case Text(value=value):
                segments.append(value)
            case Variable(path=path, raw=raw):
                value = lookup(context, path)
                if value is MISSING or value is None:
                    default = _fallback_for(fallback, path)
                    if default is None:
                        segments.append(raw)
                    else:
                        segments.append(_Value(default))
                        defaulted.append(path)
                else:
                    segments.append(_Value(to_text(value, path)))
            case _:
                segments.append(piece)
    return segments


def _cleanup(segments: list[_Segment]) -> tuple[str, list[_Span]]:
    """
    Join segments, dropping lines left blank only by block constructs.

    Also returns the ``(start, end)`` offsets in the joined text of every
    substituted value.
    """
    lines: list[str] = []
    spans: list[_Span] = []
    length = 0
    current: list[str] = []
    current_spans: list[_Span] = []
    width = 0
    marked = False

    def flush(ending: str) -> None:
        nonlocal length
        line = "".join(current)
        if marked and not line.strip():
            return
        spans.extend((length + start, length + end) for start, end in current_spans)
        lines.append(line + ending)
        length += len(line) + len(ending)

    for segment in segments:
        if isinstance(segment, _BlockMark):
            marked = True
            continue
        is_value = isinstance(segment, _Value)
        *complete, rest = segment.split("\n")
        for part in complete:
            if is_value and part:
                current_spans.append((width, width + len(part)))
            current.append(part)
            flush("\n")
            current = []
            current_spans = []
            width = 0
            marked = False
        if is_value and rest:
            current_spans.append((width, width + len(rest)))
        current.append(rest)
        width += len(rest)
    flush("")

    return "".join(lines), spans


def validate(text: str, *, exclude: Sequence[_Span] = ()) -> list[RenderWarning]:
    """
    Report ``{{...}}`` pairs left in ``text`` outside fenced code blocks.

    Matches overlapping an ``exclude`` span (substituted data) are not reported.
    """
    skipped = fenced_lines(text)
    warnings: list[RenderWarning] = []
    for match in TAG_PATTERN.finditer(text):
        if any(start < match.end() and match.start() < end for start, end in exclude):
            continue
        line, column = position(text, match.start())
        if line - 1 in skipped:
            continue
        warning = RenderWarning(match.group(0), line, column)
        logger.info("%s", warning)
        warnings.append(warning)
    return warnings


def render(template: str, context: DataContext, *, fallback: Fallback = None) -> RenderResult:
    """
    Render a template against a data context.

    Conditional blocks are resolved first, innermost first. Remaining
    placeholders are then substituted, lines emptied by block removal are
    dropped, and the output is scanned for placeholders the template left
    unresolved. Substituted values are never reported, even when they contain
    ``{{...}}``.

    Args:
        template: Template text with ``{{path}}`` placeholders and
            ``{{#if}}``/``{{else}}``/``{{/if}}``/``{{#unless}}``/``{{/unless}}`` blocks.
        context: JSON-shaped mapping the placeholders are resolved against.
        fallback: Text used for placeholders whose path is absent or ``None``,
            either one string for all or a mapping of dotted path to text.
            Without a fallback such placeholders stay in the output verbatim.

    Returns:
        A :class:`RenderResult` with the text, warnings and defaulted paths.

    Raises:
        TemplateSyntaxError: If block tags are malformed.
        TemplateValueError: If a placeholder resolves to a sequence or mapping.
    """
    nodes = parse(template)

    pieces: list[_Piece] = []
    _resolve_blocks(nodes, context, pieces)

    defaulted: list[str] = []
    segments = _substitute(pieces, context, fallback, defaulted)

    text, values = _cleanup(segments)
    warnings = validate(text, exclude=values)

    logger.debug(
        "Rendered template (%d chars, %d warnings, %d defaulted)",
        len(text),
        len(warnings),
        len(defaulted),
    )
    return RenderResult(text, warnings, defaulted)
