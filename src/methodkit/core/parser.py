"""Tokenizer and recursive-descent parser for ``{{...}}`` templates."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Final, Literal, TypeAlias

from methodkit.core.context import is_valid_path
from methodkit.core.errors import TemplateSyntaxError

TAG_PATTERN: Final = re.compile(r"\{\{([^{}]*)\}\}")
_OPEN_PATTERN: Final = re.compile(r"#(\S*)\s*(.*)", re.DOTALL)

BLOCK_KINDS: Final = ("if", "unless")

BlockKind: TypeAlias = Literal["if", "unless"]


class TokenKind(str, Enum):
    TEXT = "text"
    VARIABLE = "variable"
    OPEN = "open"
    ELSE = "else"
    CLOSE = "close"


@dataclass(frozen=True)
class Token:
    """
    A lexical unit of a template.

    Attributes:
        kind: Token category.
        raw: The exact source text, tags included.
        offset: Character offset of ``raw`` in the template.
        name: Block kind for OPEN/CLOSE tokens, dotted path for VARIABLE tokens.
        argument: Condition path for OPEN tokens.
    """

    kind: TokenKind
    raw: str
    offset: int
    name: str = ""
    argument: str = ""


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Variable:
    path: str
    raw: str
    offset: int


@dataclass(frozen=True)
class Block:
    """An ``{{#if}}`` or ``{{#unless}}`` construct with its branches."""

    kind: BlockKind
    condition: str
    raw: str
    offset: int
    body: list[Node] = field(default_factory=list)
    alternative: list[Node] = field(default_factory=list)


Node: TypeAlias = Text | Variable | Block


def position(template: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``offset`` in ``template``."""
    line = template.count("\n", 0, offset) + 1
    column = offset - (template.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _syntax_error(template: str, message: str, token: Token) -> TemplateSyntaxError:
    line, column = position(template, token.offset)
    return TemplateSyntaxError(message, tag=token.raw, line=line, column=column)


def _classify(template: str, match: re.Match[str]) -> Token:
    raw = match.group(0)
    content = match.group(1).strip()
    offset = match.start()

    if content.startswith("#"):
        m = _OPEN_PATTERN.fullmatch(content)
        name, argument = (m.group(1), m.group(2).strip()) if m else ("", "")
        token = Token(TokenKind.OPEN, raw, offset, name, argument)
        if name not in BLOCK_KINDS:
            raise _syntax_error(template, "Unknown block tag", token)
        if not is_valid_path(argument):
            raise _syntax_error(template, f"Malformed condition in {{{{#{name}}}}}", token)
        return token

    if content.startswith("/"):
        token = Token(TokenKind.CLOSE, raw, offset, content[1:].strip())
        if token.name not in BLOCK_KINDS:
            raise _syntax_error(template, "Unknown closing tag", token)
        return token

    if content == "else":
        return Token(TokenKind.ELSE, raw, offset)

    if is_valid_path(content):
        return Token(TokenKind.VARIABLE, raw, offset, content)

    # Anything else is literal text; the validation pass will flag it.
    return Token(TokenKind.TEXT, raw, offset)


def tokenize(template: str) -> Iterator[Token]:
    """Split a template into text, variable and block tokens."""
    cursor = 0
    for match in TAG_PATTERN.finditer(template):
        if match.start() > cursor:
            yield Token(TokenKind.TEXT, template[cursor : match.start()], cursor)
        yield _classify(template, match)
        cursor = match.end()
    if cursor < len(template):
        yield Token(TokenKind.TEXT, template[cursor:], cursor)


class _Parser:
    def __init__(self, template: str) -> None:
        self.template = template
        self.tokens = list(tokenize(template))
        self.index = 0

    def parse(self) -> list[Node]:
        nodes = self._parse_until()
        if self.index < len(self.tokens):
            token = self.tokens[self.index]
            if token.kind is TokenKind.ELSE:
                raise _syntax_error(self.template, "Unexpected {{else}} outside a block", token)
            raise _syntax_error(self.template, "Unexpected closing tag", token)
        return nodes

    def _parse_until(self) -> list[Node]:
        """Collect nodes until an ELSE or CLOSE token, or the end of input."""
        nodes: list[Node] = []
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            match token.kind:
                case TokenKind.ELSE | TokenKind.CLOSE:
                    return nodes
                case TokenKind.TEXT:
                    self.index += 1
                    if nodes and isinstance(nodes[-1], Text):
                        nodes[-1] = Text(nodes[-1].value + token.raw)
                    else:
                        nodes.append(Text(token.raw))
                case TokenKind.VARIABLE:
                    self.index += 1
                    nodes.append(Variable(token.name, token.raw, token.offset))
                case TokenKind.OPEN:
                    self.index += 1
                    nodes.append(self._parse_block(token))
        return nodes

    def _parse_block(self, opener: Token) -> Block:
        body = self._parse_until()
        alternative: list[Node] = []

        token = self._next_or_unclosed(opener)
        if token.kind is TokenKind.ELSE:
            if opener.name != "if":
                raise _syntax_error(
                    self.template, f"{{{{else}}}} is not allowed inside {opener.raw}", token
                )
            self.index += 1
            alternative = self._parse_until()
            token = self._next_or_unclosed(opener)
            if token.kind is TokenKind.ELSE:
                raise _syntax_error(self.template, f"Duplicate {{{{else}}}} in {opener.raw}", token)

        if token.name != opener.name:
            line, column = position(self.template, opener.offset)
            raise _syntax_error(
                self.template,
                f"Mismatched closing tag for {opener.raw} opened at line {line}, column {column}",
                token,
            )
        self.index += 1

        kind: BlockKind = "if" if opener.name == "if" else "unless"
        return Block(kind, opener.argument, opener.raw, opener.offset, body, alternative)

    def _next_or_unclosed(self, opener: Token) -> Token:
        if self.index >= len(self.tokens):
            raise _syntax_error(self.template, "Unclosed block tag", opener)
        return self.tokens[self.index]


def parse(template: str) -> list[Node]:
    """
    Parse a template into a node tree.

    Raises:
        TemplateSyntaxError: On unbalanced, mismatched or unknown block tags,
            a stray or duplicate ``{{else}}``, or a malformed condition.
    """
    return _Parser(template).parse()


def referenced_paths(template: str) -> list[str]:
    """Dotted paths used by placeholders and conditions, in first-seen order."""
    seen: dict[str, None] = {}

    def walk(nodes: list[Node]) -> None:
        for node in nodes:
            match node:
                case Variable(path=path):
                    seen.setdefault(path)
                case Block(condition=condition, body=body, alternative=alternative):
                    seen.setdefault(condition)
                    walk(body)
                    walk(alternative)

    walk(parse(template))
    return list(seen)
