"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from tagtext.cursor import TokenCursor
from tagtext.lexer import tokenize
from tagtext.nodes import Document, iter_raw_text
from tagtext.parser import parse
from tagtext.raw_text import RawText
from tagtext.tokens import SpanMode, Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str, mode: SpanMode = SpanMode.FULL) -> list[Token]:
        tokens = tokenize(source, "test.tag", mode)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind is not TokenKind.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Document."""

    def _parse(source: str, mode: SpanMode = SpanMode.FULL) -> Document:
        return parse(source, "test.tag", mode)

    return _parse


def cursor_for(source: str, mode: SpanMode = SpanMode.FULL) -> TokenCursor:
    """Build a cursor over freshly tokenized source."""
    return TokenCursor(tokenize(source, "test.tag", mode), source)


def raw_texts(doc: Document) -> list[RawText]:
    return list(iter_raw_text(doc.children))


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
