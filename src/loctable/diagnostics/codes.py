"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, replace
from enum import Enum, StrEnum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
]


class ErrorCategory(StrEnum):
    """Error categorization for compile and runtime failures.

    Inherits from ``StrEnum`` so that ``str(category)`` yields the plain
    string (``"lexical"``, ``"semantic"``...) for logs and JSON output.

    Categories:
        LEXICAL: Character-level failures while producing tokens
        DIRECTIVE: Malformed ``!`` configuration lines
        STRUCTURAL: Tokens in an order the assembler cannot accept
        SEMANTIC: Cross-entry and placeholder consistency failures
        RUNTIME: Source loading and current-locale store failures
    """

    LEXICAL = "lexical"
    DIRECTIVE = "directive"
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    RUNTIME = "runtime"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lexical errors
        2000-2999: Directive errors
        3000-3999: Structural errors
        4000-4999: Semantic errors
        5000-5999: Runtime errors (loading, locale store, lookup)
    """

    # Lexical errors (1000-1999)
    INVALID_CHARACTER = 1001
    UNTERMINATED_VALUE = 1002
    NAME_INVALID_START = 1003
    NAME_INVALID_CHAR = 1004
    EMPTY_NAME = 1005
    UNEXPECTED_EOF = 1006
    SOURCE_TOO_LARGE = 1007

    # Directive errors (2000-2999)
    EMPTY_DIRECTIVE = 2001
    UNKNOWN_DIRECTIVE = 2002
    MISSING_VALUES = 2003
    DUPLICATE_LOCALE = 2004

    # Structural errors (3000-3999)
    UNEXPECTED_TOKEN = 3001
    LOCALE_WITHOUT_KEY = 3002
    VALUE_WITHOUT_KEY = 3003
    EXPECTED_LOCALE = 3004
    EXPECTED_VALUE = 3005
    UNDECLARED_LOCALE = 3006
    SOURCE_REINCLUDED = 3007

    # Semantic errors (4000-4999)
    NO_LOCALES = 4001
    MISSING_LOCALE = 4002
    DUPLICATE_ENTRY = 4003
    NESTED_BRACE = 4004
    EXTRA_CLOSING_BRACE = 4005
    ARG_BAD_START = 4006
    ARG_BAD_CHAR = 4007
    ARGUMENT_MISMATCH = 4008
    PARAMETER_COLLISION = 4009

    # Runtime errors (5000-5999)
    SOURCE_LOAD_FAILED = 5001
    LOCALE_LOCK_FAILED = 5002
    UNKNOWN_LOCALE = 5003
    UNKNOWN_KEY = 5004

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the code's thousands block."""
        return _CATEGORY_BY_BLOCK[self.value // 1000]


_CATEGORY_BY_BLOCK: dict[int, ErrorCategory] = {
    1: ErrorCategory.LEXICAL,
    2: ErrorCategory.DIRECTIVE,
    3: ErrorCategory.STRUCTURAL,
    4: ErrorCategory.SEMANTIC,
    5: ErrorCategory.RUNTIME,
}


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context (source,
    key, locale) to act on an error without re-running the compile.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        source: Source identifier being processed when the error occurred
        key: Key id involved, if any (possibly shortened)
        locale: Locale name involved, if any
        span: Location inside the source (lexical and structural errors)
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    source: str | None = None
    key: str | None = None
    locale: str | None = None
    span: SourceSpan | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @property
    def category(self) -> ErrorCategory:
        """Error category of this diagnostic's code."""
        return self.code.category

    def with_source(self, source: str) -> "Diagnostic":
        """Return a copy attributed to ``source`` unless one is already set."""
        if self.source is not None:
            return self
        return replace(self, source=source)

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_LOCALE]: Key 'greet' is missing locale 'se'
              --> strings/main.txt
              = key: greet
              = locale: se
              = help: Add a 'se "..."' line to the key

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
