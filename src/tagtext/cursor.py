"""Token cursor that hands out one token tree at a time."""

from __future__ import annotations

from tagtext.errors import ParseError
from tagtext.tokens import Delimiter, Span, Token, TokenKind


class TokenCursor:
    """Forward-only cursor over a flat token list.

    Single tokens are handed out as they are. An OPEN token is folded with
    everything up to its matching CLOSE into one GROUP token.
    """

    def __init__(self, tokens: list[Token], source: str = "") -> None:
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            end = tokens[-1].span if tokens else Span.synthetic()
            eof_span = Span(end.end, end.end, end.source)
            tokens = [*tokens, Token(TokenKind.EOF, "", eof_span)]
        self._tokens = tokens
        self._source = source
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return self._tokens[-1]  # EOF

    def is_empty(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def at_punct(self, ch: str, offset: int = 0) -> bool:
        return self.peek(offset).is_punct(ch)

    def at_open(self, delimiter: Delimiter) -> bool:
        tok = self.peek()
        return tok.kind is TokenKind.OPEN and tok.delimiter is delimiter

    def at_string(self) -> bool:
        return self.peek().is_string()

    def at_kind(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds

    def advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.kind is not TokenKind.EOF:
            self._pos += 1
        return tok

    def expect_punct(self, ch: str, message: str) -> Token:
        if not self.at_punct(ch):
            raise self.error(message)
        return self.advance()

    def prev_end(self) -> Span:
        """Zero-width span at the end of the previously consumed token."""
        if self._pos > 0:
            prev = self._tokens[self._pos - 1].span
            return Span(prev.end, prev.end, prev.source)
        first = self._tokens[0].span
        return Span(first.start, first.start, first.source)

    def error(self, message: str, span: Span | None = None) -> ParseError:
        if span is None:
            span = self.peek().span
        return ParseError(message, span, self._source)

    # ------------------------------------------------------------------
    # Token trees
    # ------------------------------------------------------------------

    def parse_token_tree(self) -> Token:
        """Consume one token tree.

        Raises ParseError at end of input, on a stray closing delimiter, or
        when a group is left unclosed or closed by the wrong delimiter.
        """
        tok = self.peek()

        if tok.kind is TokenKind.EOF:
            raise self.error("unexpected end of input")

        if tok.kind is TokenKind.CLOSE:
            raise self.error(f"unexpected closing delimiter '{tok.value}'")

        if tok.kind is not TokenKind.OPEN:
            return self.advance()

        open_tok = self.advance()
        assert open_tok.delimiter is not None
        children: list[Token] = []
        while True:
            nxt = self.peek()
            if nxt.kind is TokenKind.EOF:
                raise self.error(f"unclosed delimiter '{open_tok.value}'", open_tok.span)
            if nxt.kind is TokenKind.CLOSE:
                if nxt.delimiter is not open_tok.delimiter:
                    raise self.error(
                        f"mismatched closing delimiter '{nxt.value}'"
                        f" (expected '{open_tok.delimiter.close}')"
                    )
                close_tok = self.advance()
                break
            children.append(self.parse_token_tree())

        span = Span(open_tok.span.start, close_tok.span.end, open_tok.span.source)
        return Token(
            TokenKind.GROUP,
            "",
            span,
            delimiter=open_tok.delimiter,
            children=tuple(children),
        )
