"""Test the tree builder: elements, attributes, blocks, strings, custom nodes."""

from __future__ import annotations

from dataclasses import dataclass

from tagtext.cursor import TokenCursor
from tagtext.nodes import Block, Element, Text
from tagtext.parser import parse
from tagtext.raw_text import RawText
from tagtext.tokens import Span, TokenKind

from .conftest import raw_texts


def assert_element(node, name: str, num_children: int = 0, self_closing: bool = False) -> None:
    """Assert basic properties of an Element node."""
    assert isinstance(node, Element), f"Expected Element, got {type(node).__name__}"
    assert node.name == name, f"Expected name '{name}', got '{node.name}'"
    assert len(node.children) == num_children
    assert (node.close_tag is None) == self_closing


class TestElements:
    def test_simple(self, parse_source):
        doc = parse_source("<a>text</a>")
        assert_element(doc.children[0], "a", 1)
        assert doc.children[0].span.source_text() == "<a>text</a>"

    def test_open_and_close_tag_spans(self, parse_source):
        el = parse_source("<a> x </a>").children[0]
        assert el.open_tag.source_text() == "<a>"
        assert el.close_tag.source_text() == "</a>"

    def test_self_closing(self, parse_source):
        el = parse_source("<br/>").children[0]
        assert_element(el, "br", self_closing=True)
        assert el.span.source_text() == "<br/>"

    def test_fragment(self, parse_source):
        assert_element(parse_source("<>hi</>").children[0], "", 1)

    def test_dashed_name(self, parse_source):
        assert_element(parse_source("<my-tag>x</my-tag>").children[0], "my-tag", 1)

    def test_nested(self, parse_source):
        ul = parse_source("<ul><li>one</li><li>two</li></ul>").children[0]
        assert_element(ul, "ul", 2)
        assert_element(ul.children[0], "li", 1)
        assert [t.to_string_best() for t in raw_texts(parse_source("<ul><li>one</li></ul>"))] == [
            "one"
        ]

    def test_empty_element_has_no_children(self, parse_source):
        assert_element(parse_source("<a></a>").children[0], "a", 0)


class TestAttributes:
    def test_kinds(self, parse_source):
        el = parse_source('<input type="text" checked value={x} size=3 id=main/>').children[0]
        assert_element(el, "input", self_closing=True)
        names = [a.name for a in el.attributes]
        assert names == ["type", "checked", "value", "size", "id"]
        type_, checked, value, size, ident = el.attributes
        assert type_.value.is_string()
        assert checked.value is None
        assert value.value.kind is TokenKind.GROUP
        assert size.value.value == "3"
        assert ident.value.kind is TokenKind.IDENT

    def test_attribute_span(self, parse_source):
        el = parse_source('<a href="x">y</a>').children[0]
        assert el.attributes[0].span.source_text() == 'href="x"'


class TestLeafNodes:
    def test_block(self, parse_source):
        block = parse_source("<p>{a + b}</p>").children[0].children[0]
        assert isinstance(block, Block)
        assert block.span.source_text() == "{a + b}"

    def test_string(self, parse_source):
        text = parse_source(r'<p>"quoted \"x\""</p>').children[0].children[0]
        assert isinstance(text, Text)
        assert text.value == 'quoted "x"'

    def test_raw_text(self, parse_source):
        raw = parse_source("<p>just words</p>").children[0].children[0]
        assert isinstance(raw, RawText)
        assert [t.value for t in raw.tokens] == ["just", "words"]

    def test_empty_document(self, parse_source):
        doc = parse_source("  // nothing\n")
        assert doc.children == ()


@dataclass(frozen=True)
class Comment:
    span: Span


class CommentParser:
    """Parses ``<!-- ... -->`` as a custom node."""

    def peek(self, cursor: TokenCursor) -> bool:
        return cursor.at_punct("<") and cursor.at_punct("!", 1)

    def parse(self, cursor: TokenCursor) -> Comment:
        start = cursor.advance().span
        cursor.advance()
        while not (cursor.at_punct("-") and cursor.at_punct("-", 1) and cursor.at_punct(">", 2)):
            if cursor.is_empty():
                raise cursor.error("unterminated comment", start)
            cursor.parse_token_tree()
        cursor.advance()
        cursor.advance()
        end = cursor.advance().span
        return Comment(Span(start.start, end.end, start.source))


class TestCustomNodes:
    def test_comment_between_text(self):
        doc = parse("<p>a <!-- note --> b</p>", custom=CommentParser())
        a, comment, b = doc.children[0].children
        assert isinstance(comment, Comment)
        assert comment.span.source_text() == "<!-- note -->"
        assert a.to_source_text(True) == "a "
        assert b.to_source_text(True) == " b"

    def test_custom_at_top_level(self):
        doc = parse("<!-- x -->", custom=CommentParser())
        assert isinstance(doc.children[0], Comment)
