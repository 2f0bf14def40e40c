"""Host tokenizer: erases whitespace and comments, keeps spans."""

from __future__ import annotations

from tagtext.errors import LexError
from tagtext.tokens import (
    Delimiter,
    Position,
    SourceFile,
    Span,
    SpanMode,
    Token,
    TokenKind,
    closer,
    is_ident_char,
    is_ident_start,
    is_punct_char,
    opener,
)


class Lexer:
    """Tokenize source text into a flat stream of Token objects.

    Delimiters come out as separate OPEN/CLOSE tokens; balancing them is the
    cursor's job.
    """

    def __init__(
        self, source: str, filename: str = "input.tag", mode: SpanMode = SpanMode.FULL
    ) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []
        if mode is SpanMode.SYNTHETIC:
            self._file: SourceFile | None = None
        else:
            self._file = SourceFile(source, filename, joinable=mode is SpanMode.FULL)

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while True:
            self._skip_trivia()
            if self._pos >= len(self._source):
                break
            self._lex_token()

        start = self._current_pos()
        self._emit(TokenKind.EOF, "", start)
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(
        self,
        kind: TokenKind,
        value: str,
        start: Position,
        joint: bool = False,
        delimiter: Delimiter | None = None,
    ) -> Token:
        span = Span(start, self._current_pos(), self._file)
        tok = Token(kind, value, span, joint, delimiter)
        self._tokens.append(tok)
        return tok

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    # ------------------------------------------------------------------
    # Whitespace and comments
    # ------------------------------------------------------------------

    def _skip_trivia(self) -> None:
        while self._pos < len(self._source):
            ch = self._peek()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                while self._pos < len(self._source) and self._peek() != "\n":
                    self._advance()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start = self._current_pos()
        self._advance()
        self._advance()
        while self._pos < len(self._source):
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        raise self._error("unterminated block comment", start)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _lex_token(self) -> None:
        ch = self._peek()
        start = self._current_pos()

        if ch == "\0":
            raise self._error("NUL character in source")

        if ch == '"':
            self._lex_string()
            return

        if is_ident_start(ch):
            while self._pos < len(self._source) and is_ident_char(self._peek()):
                self._advance()
            self._emit(TokenKind.IDENT, self._source[start.offset : self._pos], start)
            return

        if ch.isdigit():
            self._lex_number()
            return

        delim = opener(ch)
        if delim is not None:
            self._advance()
            self._emit(TokenKind.OPEN, ch, start, delimiter=delim)
            return

        delim = closer(ch)
        if delim is not None:
            self._advance()
            self._emit(TokenKind.CLOSE, ch, start, delimiter=delim)
            return

        self._advance()
        self._emit(TokenKind.PUNCT, ch, start, joint=self._punct_follows())

    def _punct_follows(self) -> bool:
        nxt = self._peek()
        if nxt == "/" and self._peek(1) in ("/", "*"):
            return False
        return is_punct_char(nxt)

    def _lex_number(self) -> None:
        start = self._current_pos()
        while self._pos < len(self._source):
            ch = self._peek()
            if is_ident_char(ch) or (ch == "." and self._peek(1).isdigit()):
                self._advance()
            else:
                break
        self._emit(TokenKind.LITERAL, self._source[start.offset : self._pos], start)

    def _lex_string(self) -> None:
        start = self._current_pos()
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == "\\" and self._pos < len(self._source):
                self._advance()
            elif ch == '"':
                self._emit(TokenKind.LITERAL, self._source[start.offset : self._pos], start)
                return
        raise self._error("unterminated string literal", start)


def tokenize(
    source: str, filename: str = "input.tag", mode: SpanMode = SpanMode.FULL
) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename, mode).tokenize()
