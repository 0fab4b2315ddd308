"""Character lexer for the localization table format.

Converts raw source text into a lazy, single-pass stream of tokens. The
lexer is an iterator: it is not restartable, and a fresh instance must be
created to re-scan a source.

Token rules (at token start, after skipping whitespace):
    '#'          Comment through end of line (newline excluded)
    '!'          Config through end of line, text from '#' onward dropped
    '"'          Value up to the next unescaped '"' ('\\"' embeds a quote)
    name char    Key (closed by ':') or Locale (closed by '"', which is
                 left in place to be read as the following Value)
    otherwise    INVALID_CHARACTER

One character of pushback is implicit in the immutable cursor: the lexer
leaves the cursor on a character it wants the next step to consume.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from loctable.constants import MAX_SOURCE_SIZE
from loctable.core import NameBuilder, is_name_char
from loctable.diagnostics import ErrorTemplate, LexicalError
from loctable.syntax.cursor import Cursor
from loctable.syntax.tokens import (
    CommentToken,
    ConfigToken,
    KeyToken,
    LocaleToken,
    ValueToken,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from loctable.syntax.tokens import Token

__all__ = ["Lexer", "tokenize"]

logger = logging.getLogger(__name__)

_QUOTE = '"'
_ESCAPE = "\\"
_KEY_DELIMITER = ":"
_COMMENT_START = "#"
_CONFIG_START = "!"


def _strip_line_end(text: str) -> str:
    """Drop the '\\r' left behind by CRLF line endings."""
    return text.removesuffix("\r")


class Lexer:
    """Lazy tokenizer over one source text.

    Example:
        >>> [str(t) for t in Lexer('!locales en\\ngreet:\\n en "hi"')]
        ['Config(locales en)', 'Key(greet)', 'Locale(en)', 'Value(hi)']

    Raises:
        LexicalError: From ``__init__`` when the source exceeds the size
            limit, and from ``__next__`` on the first malformed token.
    """

    __slots__ = ("_cursor",)

    def __init__(self, source: str, *, max_source_size: int | None = None) -> None:
        """Initialize lexer.

        Args:
            source: Raw table text
            max_source_size: Maximum source length in characters (default:
                MAX_SOURCE_SIZE). 0 disables the limit.
        """
        limit = MAX_SOURCE_SIZE if max_source_size is None else max_source_size
        if limit and len(source) > limit:
            raise LexicalError(ErrorTemplate.source_too_large(len(source), limit))
        self._cursor = Cursor(source)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        self._cursor = self._cursor.skip_whitespace()
        cursor = self._cursor
        if cursor.is_eof:
            raise StopIteration

        match cursor.current:
            case "#":
                return self._read_comment()
            case "!":
                return self._read_config()
            case '"':
                return self._read_value()
            case ch if is_name_char(ch):
                return self._read_name()
            case ch:
                raise LexicalError(ErrorTemplate.invalid_character(ch, cursor.span()))

    def _read_line(self) -> tuple[Cursor, str]:
        """Consume the marker character and the rest of the line.

        Returns:
            (start cursor, line text without marker and newline)
        """
        start = self._cursor
        cursor = start.advance()
        body_start = cursor
        while not cursor.is_eof and cursor.current != "\n":
            cursor = cursor.advance()
        text = body_start.slice_to(cursor.pos)
        # Consume the newline itself
        self._cursor = cursor.advance()
        return start, _strip_line_end(text)

    def _read_comment(self) -> CommentToken:
        start, text = self._read_line()
        return CommentToken(text, start.span_to(self._cursor))

    def _read_config(self) -> ConfigToken:
        start, text = self._read_line()
        text, _, _ = text.partition(_COMMENT_START)
        return ConfigToken(text, start.span_to(self._cursor))

    def _read_value(self) -> ValueToken:
        start = self._cursor
        cursor = start.advance()
        chars: list[str] = []
        while True:
            if cursor.is_eof:
                raise LexicalError(ErrorTemplate.unterminated_value(start.span()))
            ch = cursor.current
            cursor = cursor.advance()
            if ch != _QUOTE:
                chars.append(ch)
            elif chars and chars[-1] == _ESCAPE:
                chars[-1] = _QUOTE
            else:
                break
        self._cursor = cursor
        return ValueToken("".join(chars), start.span_to(cursor))

    def _read_name(self) -> KeyToken | LocaleToken:
        start = self._cursor
        builder = NameBuilder(start.current, start.span())
        cursor = start.advance()

        # Name characters up to whitespace or a delimiter
        while not cursor.is_eof:
            ch = cursor.current
            if ch.isspace():
                break
            if ch == _KEY_DELIMITER:
                self._cursor = cursor.advance()
                return KeyToken(builder.build(), start.span_to(self._cursor))
            if ch == _QUOTE:
                # Leave the quote for the Value that follows
                self._cursor = cursor
                return LocaleToken(builder.build(), start.span_to(cursor))
            builder.add(ch, cursor.span())
            cursor = cursor.advance()

        # Whitespace may separate the name from its delimiter
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            raise LexicalError(ErrorTemplate.unexpected_eof(builder.peek(), start.span()))
        ch = cursor.current
        if ch == _KEY_DELIMITER:
            self._cursor = cursor.advance()
            return KeyToken(builder.build(), start.span_to(self._cursor))
        if ch == _QUOTE:
            self._cursor = cursor
            return LocaleToken(builder.build(), start.span_to(cursor))
        raise LexicalError(ErrorTemplate.invalid_character(ch, cursor.span()))


def tokenize(source: str) -> list[Token]:
    """Lex a whole source eagerly.

    Convenience wrapper for tests and tooling; the assembler consumes
    ``Lexer`` lazily instead.
    """
    tokens = list(Lexer(source))
    logger.debug("Lexed %d tokens", len(tokens))
    return tokens
