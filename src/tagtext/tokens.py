"""Token types, source spans, and the canonical token renderer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    # Token-tree units
    IDENT = auto()  # foo, _bar, x1
    PUNCT = auto()  # any single symbol character: < > / = , . ! etc.
    LITERAL = auto()  # "string", 42, 1.5
    GROUP = auto()  # balanced ( ... ), [ ... ] or { ... }

    # Flat lexer only; the cursor folds these into GROUP
    OPEN = auto()
    CLOSE = auto()

    EOF = auto()


class Delimiter(Enum):
    PAREN = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


_OPENERS = {d.open: d for d in Delimiter}
_CLOSERS = {d.close: d for d in Delimiter}


class SpanMode(Enum):
    """How much of the source mapping the host environment preserves."""

    FULL = "full"  # join and source_text both available
    NO_JOIN = "no-join"  # source_text available, join unsupported
    SYNTHETIC = "synthetic"  # neither; spans carry no source


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True, eq=False)
class SourceFile:
    """Original input text. Spans refer to it by identity."""

    text: str
    filename: str = "input.tag"
    joinable: bool = True


_NOWHERE = Position(0, 0, 0)


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position.

    A span without a ``source`` is synthetic: it cannot be joined and has no
    recoverable text.
    """

    start: Position
    end: Position
    source: SourceFile | None = field(default=None, repr=False)

    @classmethod
    def synthetic(cls) -> Span:
        return cls(_NOWHERE, _NOWHERE, None)

    def join(self, other: Span) -> Span | None:
        """Return a span covering both, or None when they cannot be joined."""
        if self.source is None or other.source is not self.source:
            return None
        if not self.source.joinable:
            return None
        start = self.start if self.start.offset <= other.start.offset else other.start
        end = self.end if self.end.offset >= other.end.offset else other.end
        return Span(start, end, self.source)

    def source_text(self) -> str | None:
        """Return the exact source text under this span, if still mapped."""
        if self.source is None:
            return None
        return self.source.text[self.start.offset : self.end.offset]


@dataclass(frozen=True, slots=True)
class Token:
    """A single token or token tree with its source span."""

    kind: TokenKind
    value: str
    span: Span
    joint: bool = False  # PUNCT immediately followed by another PUNCT
    delimiter: Delimiter | None = None
    children: tuple[Token, ...] = ()

    def is_punct(self, ch: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.value == ch

    def is_string(self) -> bool:
        return self.kind is TokenKind.LITERAL and self.value.startswith('"')


def opener(ch: str) -> Delimiter | None:
    return _OPENERS.get(ch)


def closer(ch: str) -> Delimiter | None:
    return _CLOSERS.get(ch)


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch.isalpha() or ch == "_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return ch.isalnum() or ch == "_"


def is_punct_char(ch: str) -> bool:
    """Return True if ch lexes as a single punctuation token."""
    if not ch or ch.isspace() or is_ident_char(ch) or ch == '"':
        return False
    return ch not in _OPENERS and ch not in _CLOSERS


_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


def string_value(token: Token) -> str:
    """Resolve the escapes of a string literal token and drop its quotes."""
    raw = token.value[1:-1]
    out: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw):
            nxt = raw[i + 1]
            out.append(_STRING_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# ----------------------------------------------------------------------
# Canonical rendering
# ----------------------------------------------------------------------


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens with default spacing.

    One space separates neighbours except after joint punctuation. Original
    whitespace and comments are not reproduced.
    """
    tokens = list(tokens)
    parts: list[str] = []
    for i, tok in enumerate(tokens):
        parts.append(render_token(tok))
        if i + 1 < len(tokens) and not (tok.kind is TokenKind.PUNCT and tok.joint):
            parts.append(" ")
    return "".join(parts)


def render_token(token: Token) -> str:
    if token.kind is not TokenKind.GROUP:
        return token.value
    assert token.delimiter is not None
    inner = render_tokens(token.children)
    if token.delimiter is Delimiter.BRACE:
        return f"{{ {inner} }}" if inner else "{}"
    return f"{token.delimiter.open}{inner}{token.delimiter.close}"
