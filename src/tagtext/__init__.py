"""Raw text segmentation and source recovery for tag documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagtext.raw_text import Strategy
    from tagtext.tokens import SpanMode

__version__ = "0.1.0"


def extract_text(
    source: str,
    filename: str = "input.tag",
    strategy: Strategy | None = None,
    span_mode: SpanMode | None = None,
) -> list[str | None]:
    """Parse source and recover the text of every raw text node in order."""
    from tagtext.nodes import iter_raw_text
    from tagtext.parser import parse
    from tagtext.raw_text import Strategy
    from tagtext.tokens import SpanMode

    doc = parse(source, filename, span_mode or SpanMode.FULL)
    return [node.recover(strategy or Strategy.BEST) for node in iter_raw_text(doc.children)]
