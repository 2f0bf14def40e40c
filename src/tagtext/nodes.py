"""Node types for parsed tag documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, Union

from tagtext.raw_text import RawText
from tagtext.tokens import Span, Token


class CustomNode(Protocol):
    """Extension node produced by a CustomParser."""

    @property
    def span(self) -> Span: ...


@dataclass(frozen=True, slots=True)
class Attribute:
    """Tag attribute: ``name`` or ``name=value``."""

    name: str
    value: Token | None
    span: Span


@dataclass(frozen=True, slots=True)
class Element:
    """``<name ...>children</name>`` or self-closing ``<name .../>``."""

    name: str
    attributes: tuple[Attribute, ...]
    children: tuple[Node, ...]
    open_tag: Span
    close_tag: Span | None
    span: Span


@dataclass(frozen=True, slots=True)
class Block:
    """Braced expression ``{ ... }``, kept as its token tree."""

    token: Token
    span: Span


@dataclass(frozen=True, slots=True)
class Text:
    """Quoted string literal with escapes resolved."""

    value: str
    token: Token
    span: Span


Node = Union[Element, Block, Text, RawText, CustomNode]


@dataclass(frozen=True, slots=True)
class Document:
    """Root sibling list."""

    children: tuple[Node, ...]
    span: Span


def iter_raw_text(nodes: Iterable[Node]) -> Iterator[RawText]:
    """Yield every RawText in document order, descending into elements."""
    for node in nodes:
        if isinstance(node, RawText):
            yield node
        elif isinstance(node, Element):
            yield from iter_raw_text(node.children)
