"""Immutable cursor infrastructure for the lexer.

Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - One character of pushback is free: keep the old cursor
    - Line:column computed on-demand (only for errors)

Line Ending Support:
    LF and CRLF are supported (\\n is the line delimiter). CR-only files
    produce incorrect line numbers in diagnostics but lex correctly.
"""

from dataclasses import dataclass

from loctable.diagnostics import SourceSpan

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character at position + offset, or None beyond EOF."""
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def skip_whitespace(self) -> "Cursor":
        """Skip any Unicode whitespace (spaces, tabs, line endings)."""
        c = self
        while not c.is_eof and c.current.isspace():
            c = c.advance()
        return c

    def slice_to(self, end_pos: int) -> str:
        """Source substring from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute (line, column) for current position, both 1-indexed.

        Performance:
            O(n) where n = current position. Only call for error reporting
            and token spans, never in a per-character loop.

        Example:
            >>> source = "line1\\nline2"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return line, col

    def span_to(self, end: "Cursor") -> SourceSpan:
        """Span from this cursor up to (excluding) ``end``."""
        line, column = self.compute_line_col()
        return SourceSpan(start=self.pos, end=max(end.pos, self.pos), line=line, column=column)

    def span(self) -> SourceSpan:
        """Span covering the current character (empty at EOF)."""
        return self.span_to(self.advance())
