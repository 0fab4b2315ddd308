"""Token definitions produced by the lexer.

Five token shapes make up the table format:

    !locales en se        ConfigToken("locales en se")
    # shown on start      CommentToken(" shown on start")
    greet:                KeyToken(Name("greet"))
    en "Hi {name}!"       LocaleToken(Name("en")), ValueToken("Hi {name}!")

Python 3.13+.
"""

from typing import TypeAlias
from dataclasses import dataclass, field

from loctable.core import Name
from loctable.diagnostics import SourceSpan
from loctable.enums import TokenKind

__all__ = [
    "CommentToken",
    "ConfigToken",
    "KeyToken",
    "LocaleToken",
    "Token",
    "ValueToken",
]


@dataclass(frozen=True, slots=True)
class ConfigToken:
    """Directive line text after '!', with any trailing '# comment' removed."""

    text: str
    span: SourceSpan | None = field(default=None, compare=False)

    kind = TokenKind.CONFIG

    def __str__(self) -> str:
        return f"Config({self.text})"


@dataclass(frozen=True, slots=True)
class CommentToken:
    """Comment text after '#', up to but excluding the newline."""

    text: str
    span: SourceSpan | None = field(default=None, compare=False)

    kind = TokenKind.COMMENT

    def __str__(self) -> str:
        return f"Comment({self.text})"


@dataclass(frozen=True, slots=True)
class KeyToken:
    """Key name closed by ':'."""

    name: Name
    span: SourceSpan | None = field(default=None, compare=False)

    kind = TokenKind.KEY

    def __str__(self) -> str:
        return f"Key({self.name})"


@dataclass(frozen=True, slots=True)
class LocaleToken:
    """Locale name closed by the opening quote of its value."""

    name: Name
    span: SourceSpan | None = field(default=None, compare=False)

    kind = TokenKind.LOCALE

    def __str__(self) -> str:
        return f"Locale({self.name})"


@dataclass(frozen=True, slots=True)
class ValueToken:
    """Quoted template text with escapes resolved."""

    text: str
    span: SourceSpan | None = field(default=None, compare=False)

    kind = TokenKind.VALUE

    def __str__(self) -> str:
        return f"Value({self.text})"


Token: TypeAlias = ConfigToken | CommentToken | KeyToken | LocaleToken | ValueToken
"""Any token produced by the lexer."""
