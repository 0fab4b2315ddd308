"""Validated identifiers for keys and locales.

This module provides the single source of truth for the identifier grammar
shared by the lexer (keys, locales), the directive parser (declared
locales) and the placeholder extractor (argument names).

Name Grammar:
    [a-zA-Z][a-zA-Z0-9_-]*

    - Start: ASCII letter
    - Continue: ASCII letter, ASCII digit, hyphen, or underscore
    - Folding: uppercase letters fold to lowercase, '-' folds to '_'

    After folding, every Name matches [a-z][a-z0-9_]*, so "EN-us" and
    "en_US" are the same Name.

Thread Safety:
    All functions are pure and Name is immutable. Safe for concurrent use.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from loctable.diagnostics import ErrorTemplate, LexicalError, SourceSpan

__all__ = [
    "Name",
    "NameBuilder",
    "fold_name_char",
    "fold_name_start",
    "is_name_char",
    "is_name_start",
]


def fold_name_char(ch: str) -> str | None:
    """Fold a character continuing a Name, or return None if it is invalid.

    Example:
        >>> fold_name_char("A")
        'a'
        >>> fold_name_char("-")
        '_'
        >>> fold_name_char("7")
        '7'
        >>> fold_name_char("$") is None
        True
    """
    if len(ch) != 1 or not ch.isascii():
        return None
    if ch.isalnum():
        return ch.lower()
    if ch in "-_":
        return "_"
    return None


def fold_name_start(ch: str) -> str | None:
    """Fold a character starting a Name, or return None if it is invalid.

    Only ASCII letters may start a Name. Python's str.isalpha() accepts
    Unicode letters, so the ASCII check comes first.
    """
    if len(ch) == 1 and ch.isascii() and ch.isalpha():
        return ch.lower()
    return None


def is_name_char(ch: str) -> bool:
    """Check if character can appear in a Name (before folding)."""
    return fold_name_char(ch) is not None


def is_name_start(ch: str) -> bool:
    """Check if character can start a Name (before folding)."""
    return fold_name_start(ch) is not None


class NameBuilder:
    """Accumulates a Name one raw character at a time.

    Used by the lexer, which validates characters as it reads them so the
    error points at the offending character.

    Example:
        >>> builder = NameBuilder("E")
        >>> builder.add("N")
        >>> builder.add("-")
        >>> builder.add("u")
        >>> builder.build()
        Name(value='en_u')
    """

    __slots__ = ("_chars",)

    def __init__(self, first: str, span: SourceSpan | None = None) -> None:
        """Start a Name with its first character.

        Raises:
            LexicalError: If ``first`` cannot start a Name
        """
        folded = fold_name_start(first)
        if folded is None:
            raise LexicalError(ErrorTemplate.name_invalid_start(first, span))
        self._chars: list[str] = [folded]

    def add(self, ch: str, span: SourceSpan | None = None) -> None:
        """Append a character.

        Raises:
            LexicalError: If ``ch`` is not a Name character
        """
        folded = fold_name_char(ch)
        if folded is None:
            raise LexicalError(ErrorTemplate.name_invalid_char(ch, span))
        self._chars.append(folded)

    def peek(self) -> str:
        """Return the folded text accumulated so far."""
        return "".join(self._chars)

    def build(self) -> Name:
        """Return the accumulated Name."""
        return Name(self.peek())


@dataclass(frozen=True, slots=True)
class Name:
    """Folded, validated identifier.

    Construction folds the input, so ``Name("EN-us") == Name("en_US")``.
    Building a Name from its own string form yields an equal Name.

    Attributes:
        value: Folded identifier text

    Raises:
        LexicalError: If the text is empty, starts with a non-letter, or
            contains a character outside [a-zA-Z0-9_-]
    """

    value: str

    def __post_init__(self) -> None:
        """Fold and validate the identifier text."""
        text = self.value
        if not text:
            raise LexicalError(ErrorTemplate.empty_name())
        builder = NameBuilder(text[0])
        for ch in text[1:]:
            builder.add(ch)
        object.__setattr__(self, "value", builder.peek())

    def __str__(self) -> str:
        return self.value

    @property
    def type_name(self) -> str:
        """CamelCase form suitable for a type or enum member.

        Example:
            >>> Name("en_us").type_name
            'EnUs'
            >>> Name("se").type_name
            'Se'
        """
        return "".join(part[0].upper() + part[1:] for part in self.value.split("_") if part)
