"""Test assignment of neighbouring spans to raw text siblings."""

from __future__ import annotations

import pytest

from tagtext.nodes import Block, Element
from tagtext.raw_text import RawText, assign_context
from tagtext.tokens import Position, Span, Token, TokenKind

from .conftest import raw_texts


def _span(n: int) -> Span:
    return Span(Position(1, n + 1, n), Position(1, n + 2, n + 1))


def _raw(n: int) -> RawText:
    return RawText.from_tokens([Token(TokenKind.IDENT, f"t{n}", _span(n))])


def _block(n: int) -> Block:
    return Block(Token(TokenKind.GROUP, "", _span(n)), _span(n))


class TestWindowing:
    def test_three_siblings_with_close(self):
        open_end, close_start = _span(0), _span(9)
        children = [_raw(1), _block(2), _raw(3)]
        assign_context(open_end, close_start, children)
        assert children[0].context == (open_end, _span(2))
        assert children[2].context == (_span(2), close_start)

    def test_without_close_last_keeps_none(self):
        children = [_raw(1), _block(2), _raw(3)]
        assign_context(_span(0), None, children)
        assert children[0].context == (_span(0), _span(2))
        assert children[2].context is None

    def test_single_child(self):
        children = [_raw(1)]
        assign_context(_span(0), _span(9), children)
        assert children[0].context == (_span(0), _span(9))

    def test_middle_child(self):
        children = [_block(1), _raw(2), _block(3), _raw(4), _block(5)]
        assign_context(_span(0), _span(9), children)
        assert children[1].context == (_span(1), _span(3))
        assert children[3].context == (_span(3), _span(5))

    def test_non_raw_children_untouched(self):
        block = _block(1)
        children = [block]
        assign_context(_span(0), _span(9), children)
        assert children[0] is block

    def test_returns_same_list(self):
        children = [_raw(1)]
        assert assign_context(_span(0), None, children) is children

    def test_no_children(self):
        assert assign_context(_span(0), _span(1), []) == []


class TestAdjacentRawText:
    def test_rejected(self):
        children = [_raw(1), _raw(2)]
        with pytest.raises(ValueError, match="adjacent raw text siblings at positions 0 and 1"):
            assign_context(_span(0), _span(9), children)

    def test_nothing_assigned_on_rejection(self):
        children = [_block(1), _raw(2), _raw(3)]
        with pytest.raises(ValueError):
            assign_context(_span(0), _span(9), children)
        assert children[1].context is None
        assert children[2].context is None


class TestFromParser:
    def test_element_children(self, parse_source):
        doc = parse_source("<a>x<b/>y</a>")
        element = doc.children[0]
        assert isinstance(element, Element)
        x, b, y = element.children
        assert x.context[0].source_text() == ">"
        assert x.context[1] == b.span
        assert y.context[0] == b.span
        assert y.context[1].source_text() == "<"

    def test_top_level_first_child(self, parse_source):
        doc = parse_source("intro <b/> outro")
        intro, outro = raw_texts(doc)
        assert intro.context[0].source_text() == ""
        assert intro.context[1].source_text() == "<b/>"
        assert outro.context is None

    def test_siblings_never_adjacent_raw_text(self, parse_source):
        doc = parse_source('a {b} c "d" e <f/> g')
        kinds = [type(n).__name__ for n in doc.children]
        assert kinds == ["RawText", "Block", "RawText", "Text", "RawText", "Element", "RawText"]
