"""Lexical layer: cursor, tokens, lexer and pushback token stream.

Separate from assembly so tooling (linters, highlighters) can tokenize a
table without assembling it.

Python 3.13+.
"""

from .cursor import Cursor
from .lexer import Lexer, tokenize
from .stream import TokenStream
from .tokens import (
    CommentToken,
    ConfigToken,
    KeyToken,
    LocaleToken,
    Token,
    ValueToken,
)

__all__ = [
    "CommentToken",
    "ConfigToken",
    "Cursor",
    "KeyToken",
    "Lexer",
    "LocaleToken",
    "Token",
    "TokenStream",
    "ValueToken",
    "tokenize",
]
