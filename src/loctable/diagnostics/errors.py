"""loctable exception hierarchy with structured diagnostics.

Integrates with diagnostic codes for Rust/Elm-inspired error messages.
Every compile failure surfaces as exactly one of these exceptions; there is
no partial-success mode.

Python 3.13+. Zero external dependencies.
"""

from typing import Self

from .codes import Diagnostic, ErrorCategory

__all__ = [
    "CompileError",
    "DirectiveError",
    "LexicalError",
    "LocTableError",
    "LocaleStoreError",
    "SemanticError",
    "SourceLoadError",
    "StructuralError",
    "UnknownKeyError",
    "error_from_diagnostic",
]


class LocTableError(Exception):
    """Base exception for all loctable errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocTableError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    def with_source(self, source: str) -> Self:
        """Return this error attributed to ``source``.

        Components that do not know which file they are processing raise
        unsourced errors; the callers that do know attach the source here.
        Errors that already carry a source are returned unchanged.
        """
        if self.diagnostic is None or self.diagnostic.source is not None:
            return self
        return type(self)(self.diagnostic.with_source(source))


CompileError = LocTableError
"""Alias used by callers that only care that a compile failed."""


class LexicalError(LocTableError):
    """Invalid character, unterminated value, or invalid identifier."""


class DirectiveError(LocTableError):
    """Unknown directive, missing directive values, or duplicate locale."""


class StructuralError(LocTableError):
    """Unexpected token ordering, undeclared locale, or re-included source."""


class SemanticError(LocTableError):
    """Missing or duplicate entries, placeholder errors, argument mismatch."""


class SourceLoadError(LocTableError):
    """A source could not be retrieved by the loader.

    Attributes:
        source_id: Identifier the loader failed to read
    """

    def __init__(self, message: str | Diagnostic, *, source_id: str = "") -> None:
        """Initialize SourceLoadError.

        Args:
            message: Error message string OR Diagnostic object
            source_id: Identifier the loader failed to read
        """
        super().__init__(message)
        if not source_id and isinstance(message, Diagnostic):
            source_id = message.source or ""
        self.source_id = source_id


class LocaleStoreError(LocTableError):
    """The current-locale store could not be read or written.

    Raised instead of returning a possibly stale locale when the store's
    lock cannot be acquired, or when an undeclared locale is requested.
    """


class UnknownKeyError(LocTableError):
    """A runtime lookup named a key absent from the compiled table."""


_ERROR_CLASSES: dict[ErrorCategory, type[LocTableError]] = {
    ErrorCategory.LEXICAL: LexicalError,
    ErrorCategory.DIRECTIVE: DirectiveError,
    ErrorCategory.STRUCTURAL: StructuralError,
    ErrorCategory.SEMANTIC: SemanticError,
}


def error_from_diagnostic(diagnostic: Diagnostic) -> LocTableError:
    """Build the exception matching a compile diagnostic's category."""
    error_class = _ERROR_CLASSES.get(diagnostic.category, LocTableError)
    return error_class(diagnostic)
