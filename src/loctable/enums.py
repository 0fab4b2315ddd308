"""Enumerations for loctable type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TokenKind(StrEnum):
    """Kind of lexical token.

    StrEnum provides automatic string conversion: str(TokenKind.KEY) == "key"
    """

    CONFIG = "config"
    """Directive line: !locales en se"""

    COMMENT = "comment"
    """Comment line: # greeting shown on start"""

    KEY = "key"
    """Key declaration: greet:"""

    LOCALE = "locale"
    """Locale tag preceding a value: en "..." """

    VALUE = "value"
    """Quoted template text: "Hi {name}!" """


class DirectiveKind(StrEnum):
    """Directive word selecting a configuration action."""

    LOCALES = "locales"
    """Declare locales in order; the first one is the default."""

    INCLUDE = "include"
    """Queue further sources relative to the current one."""


class ParameterKind(StrEnum):
    """How an accessor parameter is bound.

    StrEnum provides automatic string conversion: str(ParameterKind.NAMED) == "named"
    """

    NAMED = "named"
    """Placeholder referenced by name: {name}"""

    POSITIONAL = "positional"
    """Placeholder referenced by index ({0}) or auto-numbered ({})."""


__all__ = [
    "DirectiveKind",
    "ParameterKind",
    "TokenKind",
]
