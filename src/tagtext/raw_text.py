"""Raw unquoted text between recognized nodes.

A RawText holds the tokens that did not start any other node. Whitespace
was erased by the tokenizer, so the original text has to be recovered from
spans. Three strategies are available, from exact to lossy:

1. ``to_source_text(with_whitespace=True)``: cut the text between the two
   neighbouring nodes out of the source. Needs the context assigned by the
   enclosing container plus span join and source text support.
2. ``to_source_text(with_whitespace=False)``: join the spans of the tokens
   themselves. Leading and trailing whitespace is lost.
3. ``to_token_stream_string()``: render the tokens with default spacing.
   Always works.

``to_string_best()`` tries them in that order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from tagtext.tokens import Delimiter, Span, Token, render_tokens

if TYPE_CHECKING:
    from tagtext.cursor import TokenCursor
    from tagtext.nodes import Node

logger = logging.getLogger(__name__)


class Strategy(Enum):
    BEST = "best"
    CONTEXT = "context"
    TOKENS = "tokens"
    RENDER = "render"


def _at_node_start(cursor: TokenCursor) -> bool:
    return cursor.at_punct("<") or cursor.at_open(Delimiter.BRACE) or cursor.at_string()


@dataclass(slots=True)
class RawText:
    """Unquoted text run with an optional pair of neighbouring spans."""

    tokens: tuple[Token, ...] = ()
    # Spans of the nodes immediately before and after; set once by the container
    context: tuple[Span, Span] | None = field(default=None, init=False)

    @classmethod
    def parse(cls, cursor: TokenCursor) -> RawText:
        """Consume token trees until a node start or the end of input.

        Stopping is never an error. A ParseError from the cursor (unbalanced
        delimiter) propagates unchanged.
        """
        tokens: list[Token] = []
        while not cursor.is_empty() and not _at_node_start(cursor):
            tokens.append(cursor.parse_token_tree())
        return cls(tuple(tokens))

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> RawText:
        return cls(tuple(tokens))

    def _set_context(self, before: Span, after: Span) -> None:
        self.context = (before, after)

    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def span(self) -> Span:
        """Joined span of all tokens, else the first token's, else synthetic."""
        joined = self.join_spans()
        if joined is not None:
            return joined
        if self.tokens:
            return self.tokens[0].span
        return Span.synthetic()

    def join_spans(self) -> Span | None:
        """Return one span covering every token, or None.

        None means the sequence is empty or the environment cannot join
        spans, which also tells callers whether exact recovery is possible.
        """
        span: Span | None = None
        for tok in self.tokens:
            if span is None:
                span = tok.span
                continue
            span = span.join(tok.span)
            if span is None:
                return None
        return span

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------

    def to_source_text(self, with_whitespace: bool) -> str | None:
        """Try to get the source text, optionally with surrounding whitespace.

        Whitespace can only be recovered once the context is assigned, and
        the result then includes comments that sat between the neighbours.
        """
        if not with_whitespace:
            joined = self.join_spans()
            return joined.source_text() if joined is not None else None

        if self.context is None:
            return None
        before, after = self.context
        full = before.join(after)
        if full is None:
            return None
        full_text = full.source_text()
        before_text = before.source_text()
        after_text = after.source_text()
        if full_text is None or before_text is None or after_text is None:
            return None

        assert full_text.startswith(before_text)
        assert full_text.endswith(after_text)
        return full_text[len(before_text) : len(full_text) - len(after_text)]

    def to_token_stream_string(self) -> str:
        """Render the tokens with default spacing."""
        return render_tokens(self.tokens)

    def to_string_best(self) -> str:
        """Return the most faithful text available."""
        for name, strategy in _EXACT_STRATEGIES:
            text = strategy(self)
            if text is not None:
                return text
            logger.debug("%s recovery unavailable for raw text at %s", name, _where(self))
        return self.to_token_stream_string()

    def recover(self, strategy: Strategy) -> str | None:
        """Run a single named strategy; None when it is unavailable."""
        if strategy is Strategy.BEST:
            return self.to_string_best()
        if strategy is Strategy.CONTEXT:
            return self.to_source_text(with_whitespace=True)
        if strategy is Strategy.TOKENS:
            return self.to_source_text(with_whitespace=False)
        return self.to_token_stream_string()


_EXACT_STRATEGIES: tuple[tuple[str, Callable[[RawText], str | None]], ...] = (
    ("context-exact", lambda t: t.to_source_text(with_whitespace=True)),
    ("own-tokens-exact", lambda t: t.to_source_text(with_whitespace=False)),
)


def _where(text: RawText) -> str:
    if not text.tokens:
        return "<empty>"
    pos = text.tokens[0].span.start
    return f"{pos.line}:{pos.column}"


def assign_context(
    open_end: Span, close_start: Span | None, children: Sequence[Node]
) -> Sequence[Node]:
    """Tell every RawText child which spans surround it.

    The boundary list is ``[open_end, *child spans, close_start]``; child
    ``i`` gets entries ``i`` and ``i + 2``. Without ``close_start`` the last
    child has no right neighbour and keeps no context. Call once per sibling
    list, after all siblings are parsed.
    """
    for i in range(1, len(children)):
        if isinstance(children[i - 1], RawText) and isinstance(children[i], RawText):
            raise ValueError(f"adjacent raw text siblings at positions {i - 1} and {i}")

    spans = [open_end, *(child.span for child in children)]
    if close_start is not None:
        spans.append(close_start)

    for i, child in enumerate(children):
        if i + 2 >= len(spans):
            break
        if isinstance(child, RawText):
            child._set_context(spans[i], spans[i + 2])
    return children
