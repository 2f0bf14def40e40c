"""--debug node tree dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from tagtext.nodes import Attribute, Block, Document, Element, Node, Text
from tagtext.raw_text import RawText
from tagtext.tokens import render_token


def dump_tree(doc: Document, *, file: TextIO | None = None) -> None:
    """Print a human-readable node tree to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    file.write("Document\n")
    for child in doc.children:
        _dump_node(child, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Node, depth: int, f: TextIO) -> None:
    if isinstance(node, Element):
        _dump_element(node, depth, f)
    elif isinstance(node, Block):
        f.write(f"{_indent(depth)}Block({render_token(node.token)!r})\n")
    elif isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({node.value!r})\n")
    elif isinstance(node, RawText):
        _dump_raw_text(node, depth, f)
    else:
        f.write(f"{_indent(depth)}{type(node).__name__}\n")


def _dump_element(node: Element, depth: int, f: TextIO) -> None:
    tag = f"<{node.name}/>" if node.close_tag is None else f"<{node.name}>"
    f.write(f"{_indent(depth)}Element {tag}\n")
    for attr in node.attributes:
        _dump_attribute(attr, depth + 1, f)
    for child in node.children:
        _dump_node(child, depth + 1, f)


def _dump_attribute(attr: Attribute, depth: int, f: TextIO) -> None:
    if attr.value is None:
        f.write(f"{_indent(depth)}Attr {attr.name}\n")
    else:
        f.write(f"{_indent(depth)}Attr {attr.name}={render_token(attr.value)}\n")


def _dump_raw_text(node: RawText, depth: int, f: TextIO) -> None:
    ctx = "ctx" if node.context is not None else "no-ctx"
    f.write(f"{_indent(depth)}RawText[{ctx}]({node.to_string_best()!r})\n")
