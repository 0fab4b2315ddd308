"""Tests for the diagnostic system.

Tests verify:
- Code numbering and category derivation
- SourceSpan invariants
- Preview shortening
- Rust, simple and JSON formatting
- Exception hierarchy, source attribution and error_from_diagnostic
"""

import json

import pytest

from loctable.diagnostics import (
    CompileError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DirectiveError,
    ErrorCategory,
    ErrorTemplate,
    LexicalError,
    LocaleStoreError,
    LocTableError,
    OutputFormat,
    SemanticError,
    SourceLoadError,
    SourceSpan,
    StructuralError,
    UnknownKeyError,
    error_from_diagnostic,
    shorten,
)


class TestDiagnosticCodes:
    """Codes and categories."""

    def test_codes_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (DiagnosticCode.INVALID_CHARACTER, ErrorCategory.LEXICAL),
            (DiagnosticCode.UNKNOWN_DIRECTIVE, ErrorCategory.DIRECTIVE),
            (DiagnosticCode.UNDECLARED_LOCALE, ErrorCategory.STRUCTURAL),
            (DiagnosticCode.ARGUMENT_MISMATCH, ErrorCategory.SEMANTIC),
            (DiagnosticCode.LOCALE_LOCK_FAILED, ErrorCategory.RUNTIME),
        ],
    )
    def test_category_by_block(self, code: DiagnosticCode, category: ErrorCategory) -> None:
        """Thousands block selects the category."""
        assert code.category is category

    def test_every_code_has_category(self) -> None:
        """Every code maps to a category."""
        for code in DiagnosticCode:
            assert isinstance(code.category, ErrorCategory)

    def test_category_is_str(self) -> None:
        """Categories print as plain strings."""
        assert str(ErrorCategory.SEMANTIC) == "semantic"


class TestSourceSpan:
    """Span validation."""

    def test_valid(self) -> None:
        """A well-formed span constructs."""
        span = SourceSpan(start=3, end=5, line=2, column=1)
        assert (span.line, span.column) == (2, 1)

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid(self, start: int, end: int, line: int, column: int) -> None:
        """Negative offsets, inverted ranges and zero line/column fail."""
        with pytest.raises(ValueError):
            SourceSpan(start=start, end=end, line=line, column=column)


class TestShorten:
    """Preview capping."""

    def test_short_unchanged(self) -> None:
        """Text up to the limit is kept."""
        assert shorten("a" * 24) == "a" * 24

    def test_long_truncated(self) -> None:
        """Long text is cut to exactly the limit with an ellipsis."""
        result = shorten("b" * 25)
        assert result == "b" * 21 + "..."
        assert len(result) == 24


class TestFormatter:
    """Output formats."""

    @pytest.fixture
    def diagnostic(self) -> Diagnostic:
        """A missing-locale diagnostic with full context."""
        return ErrorTemplate.missing_locale("greet", "se").with_source("main.txt")

    def test_rust(self, diagnostic: Diagnostic) -> None:
        """Rust style lists location, key, locale and help."""
        lines = DiagnosticFormatter().format(diagnostic).splitlines()
        assert lines[0] == "error[MISSING_LOCALE]: Key 'greet' is missing locale 'se'"
        assert lines[1] == "  --> main.txt"
        assert "  = key: greet" in lines
        assert "  = locale: se" in lines
        assert lines[-1].startswith("  = help: ")

    def test_rust_with_span(self) -> None:
        """Spans render as line:column after the source."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.INVALID_CHARACTER,
            message="bad",
            source="a.txt",
            span=SourceSpan(start=4, end=5, line=2, column=3),
        )
        assert "  --> a.txt:2:3" in DiagnosticFormatter().format(diagnostic)

    def test_rust_color(self, diagnostic: Diagnostic) -> None:
        """Color wraps the severity in ANSI codes."""
        output = DiagnosticFormatter(color=True).format(diagnostic)
        assert output.startswith("\033[1;31merror\033[0m[MISSING_LOCALE]")

    def test_simple(self, diagnostic: Diagnostic) -> None:
        """Simple style is one line."""
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)
        assert output == "main.txt: MISSING_LOCALE: Key 'greet' is missing locale 'se'"

    def test_simple_without_location(self) -> None:
        """No location prefix when none is known."""
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(
            ErrorTemplate.no_locales()
        )
        assert output == "NO_LOCALES: There are no locales set up"

    def test_json(self, diagnostic: Diagnostic) -> None:
        """JSON output carries every populated field."""
        data = json.loads(DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic))
        assert data["code"] == "MISSING_LOCALE"
        assert data["code_value"] == 4002
        assert data["category"] == "semantic"
        assert data["source"] == "main.txt"
        assert data["key"] == "greet"
        assert data["locale"] == "se"
        assert "line" not in data

    def test_format_all(self) -> None:
        """Multiple diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_all([ErrorTemplate.no_locales(), ErrorTemplate.empty_name()])
        assert output.count("\n\n") == 1

    def test_format_error_method(self, diagnostic: Diagnostic) -> None:
        """Diagnostic.format_error uses the Rust style."""
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)


class TestErrors:
    """Exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Every error is a LocTableError; CompileError is an alias."""
        for error_class in (
            LexicalError,
            DirectiveError,
            StructuralError,
            SemanticError,
            SourceLoadError,
            LocaleStoreError,
            UnknownKeyError,
        ):
            assert issubclass(error_class, LocTableError)
        assert CompileError is LocTableError

    def test_message_from_diagnostic(self) -> None:
        """str() of the error is the formatted diagnostic."""
        error = SemanticError(ErrorTemplate.no_locales())
        assert str(error).startswith("error[NO_LOCALES]")
        assert error.diagnostic is not None

    def test_plain_message(self) -> None:
        """Errors may carry a plain message."""
        error = LocTableError("boom")
        assert error.diagnostic is None
        assert str(error) == "boom"

    def test_with_source_attributes(self) -> None:
        """with_source fills a missing source and keeps the class."""
        error = LexicalError(ErrorTemplate.empty_name()).with_source("a.txt")
        assert isinstance(error, LexicalError)
        assert error.diagnostic is not None
        assert error.diagnostic.source == "a.txt"

    def test_with_source_keeps_existing(self) -> None:
        """An existing source is not overwritten."""
        error = LexicalError(ErrorTemplate.empty_name().with_source("a.txt"))
        assert error.with_source("b.txt") is error

    def test_with_source_plain_message(self) -> None:
        """Plain-message errors are returned unchanged."""
        error = LocTableError("boom")
        assert error.with_source("a.txt") is error

    @pytest.mark.parametrize(
        ("diagnostic", "error_class"),
        [
            (ErrorTemplate.empty_name(), LexicalError),
            (ErrorTemplate.unknown_directive("x"), DirectiveError),
            (ErrorTemplate.source_reincluded("a.txt"), StructuralError),
            (ErrorTemplate.no_locales(), SemanticError),
        ],
    )
    def test_error_from_diagnostic(
        self, diagnostic: Diagnostic, error_class: type[LocTableError]
    ) -> None:
        """Compile diagnostics map to their category's exception."""
        error = error_from_diagnostic(diagnostic)
        assert type(error) is error_class
        assert error.diagnostic is diagnostic

    def test_source_load_error_source_id(self) -> None:
        """SourceLoadError remembers the failing identifier."""
        error = SourceLoadError("cannot read", source_id="x.txt")
        assert error.source_id == "x.txt"
