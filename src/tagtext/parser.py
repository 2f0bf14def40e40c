"""Tree builder: turns a token stream into sibling lists of nodes."""

from __future__ import annotations

from typing import Protocol

from tagtext.cursor import TokenCursor
from tagtext.lexer import tokenize
from tagtext.nodes import Attribute, Block, CustomNode, Document, Element, Node, Text
from tagtext.raw_text import RawText, assign_context
from tagtext.tokens import Delimiter, Position, Span, SpanMode, TokenKind, string_value


class CustomParser(Protocol):
    """Hook for extension nodes, consulted before the built-in node kinds."""

    def peek(self, cursor: TokenCursor) -> bool: ...

    def parse(self, cursor: TokenCursor) -> CustomNode: ...


class Parser:
    """Recursive descent parser for tag documents."""

    def __init__(self, cursor: TokenCursor, custom: CustomParser | None = None) -> None:
        self._cursor = cursor
        self._custom = custom

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> Document:
        source = self._cursor.peek().span.source
        origin = Position(1, 1, 0)
        children: list[Node] = []

        while not self._cursor.is_empty():
            if self._at_close_tag():
                raise self._cursor.error("unexpected closing tag")
            children.append(self.parse_node())

        # Top level has no closing delimiter, so the last child gets no context
        assign_context(Span(origin, origin, source), None, children)
        end = self._cursor.peek().span.end
        return Document(tuple(children), Span(origin, end, source))

    def parse_node(self) -> Node:
        cursor = self._cursor
        if self._custom is not None and self._custom.peek(cursor):
            return self._custom.parse(cursor)
        if cursor.at_punct("<"):
            return self._parse_element()
        if cursor.at_open(Delimiter.BRACE):
            tok = cursor.parse_token_tree()
            return Block(tok, tok.span)
        if cursor.at_string():
            tok = cursor.advance()
            return Text(string_value(tok), tok, tok.span)
        return RawText.parse(cursor)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _parse_element(self) -> Element:
        cursor = self._cursor
        lt = cursor.advance()  # consume '<'
        source = lt.span.source
        name = self._parse_tag_name()

        attributes: list[Attribute] = []
        self_closing = False
        while True:
            if cursor.at_punct(">"):
                break
            if cursor.at_punct("/") and cursor.at_punct(">", 1):
                cursor.advance()
                self_closing = True
                break
            if cursor.is_empty():
                raise cursor.error(f"unterminated tag '<{name}'", lt.span)
            attributes.append(self._parse_attribute())
        gt = cursor.advance()  # consume '>'
        open_tag = Span(lt.span.start, gt.span.end, source)

        if self_closing:
            return Element(name, tuple(attributes), (), open_tag, None, open_tag)

        children: list[Node] = []
        while not self._at_close_tag():
            if cursor.is_empty():
                raise cursor.error(f"unclosed element '<{name}>'", open_tag)
            children.append(self.parse_node())

        close_lt = cursor.advance()  # consume '<'
        cursor.advance()  # consume '/'
        close_name = self._parse_tag_name()
        if close_name != name:
            raise cursor.error(
                f"closing tag '</{close_name}>' does not match '<{name}>'",
                Span(close_lt.span.start, cursor.prev_end().end, source),
            )
        close_gt = cursor.expect_punct(">", "expected '>' to end closing tag")

        assign_context(gt.span, close_lt.span, children)
        return Element(
            name,
            tuple(attributes),
            tuple(children),
            open_tag,
            Span(close_lt.span.start, close_gt.span.end, source),
            Span(lt.span.start, close_gt.span.end, source),
        )

    def _parse_tag_name(self) -> str:
        """Read ``name`` or ``dashed-name``; empty for fragments."""
        cursor = self._cursor
        if not cursor.at_kind(TokenKind.IDENT):
            return ""
        parts = [cursor.advance().value]
        while cursor.at_punct("-") and cursor.peek(1).kind is TokenKind.IDENT:
            cursor.advance()
            parts.append(cursor.advance().value)
        return "-".join(parts)

    def _parse_attribute(self) -> Attribute:
        cursor = self._cursor
        if not cursor.at_kind(TokenKind.IDENT):
            raise cursor.error("expected attribute name or '>'")
        name_tok = cursor.advance()
        value = None
        end = name_tok.span.end

        if cursor.at_punct("="):
            cursor.advance()
            if cursor.at_open(Delimiter.BRACE):
                value = cursor.parse_token_tree()
            elif cursor.at_kind(TokenKind.LITERAL, TokenKind.IDENT):
                value = cursor.advance()
            else:
                raise cursor.error("expected attribute value")
            end = value.span.end

        return Attribute(name_tok.value, value, Span(name_tok.span.start, end, name_tok.span.source))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_close_tag(self) -> bool:
        return self._cursor.at_punct("<") and self._cursor.at_punct("/", 1)


def parse(
    source: str,
    filename: str = "input.tag",
    mode: SpanMode = SpanMode.FULL,
    custom: CustomParser | None = None,
) -> Document:
    """Convenience function: parse source text and return a Document."""
    tokens = tokenize(source, filename, mode)
    return Parser(TokenCursor(tokens, source), custom).parse()
