"""Error types with formatted source context."""

from __future__ import annotations

from tagtext.tokens import Position, Span


def _snippet(message: str, filename: str, source: str, line: int, col: int, width: int) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = line - 1

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    pad = " " * max(0, col - 1)
    carets = "^" * max(1, width)

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.tag") -> str:
        return _snippet(
            self.message, filename, self.source, self.position.line, self.position.column, 1
        )


class ParseError(Exception):
    """Raised on the first structural or tree-building error.

    This is the only hard failure: an unbalanced delimiter, an unclosed
    element, or a malformed tag.
    """

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.tag") -> str:
        start, end = self.span.start, self.span.end
        # Underline the full span when on one line, otherwise just the start
        if end.line == start.line:
            width = end.column - start.column
        else:
            width = 1
        return _snippet(self.message, filename, self.source, start.line, start.column, width)
