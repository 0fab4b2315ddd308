"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.missing_locale("greet", "se")
        >>> print(formatter.format(diagnostic))
        error[MISSING_LOCALE]: Key 'greet' is missing locale 'se'
          = key: greet
          = locale: se
          = help: Add a 'se "..."' line to the key

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        MISSING_LOCALE: Key 'greet' is missing locale 'se'
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    @staticmethod
    def _location(diagnostic: Diagnostic) -> str | None:
        """Render 'source:line:column' from whatever location parts are known."""
        parts: list[str] = []
        if diagnostic.source is not None:
            parts.append(diagnostic.source)
        if diagnostic.span is not None:
            parts.append(f"{diagnostic.span.line}:{diagnostic.span.column}")
        if not parts:
            return None
        return ":".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[UNDECLARED_LOCALE]: Encountered locale 'fr' in key 'greet', ...
              --> strings/main.txt:4:5
              = key: greet
              = locale: fr
        """
        severity = "\033[1;31merror\033[0m" if self.color else "error"
        parts = [f"{severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = self._location(diagnostic)
        if location is not None:
            parts.append(f"  --> {location}")

        if diagnostic.key:
            parts.append(f"  = key: {diagnostic.key}")

        if diagnostic.locale:
            parts.append(f"  = locale: {diagnostic.locale}")

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            MISSING_LOCALE: Key 'greet' is missing locale 'se'
        """
        location = self._location(diagnostic)
        if location is None:
            return f"{diagnostic.code.name}: {diagnostic.message}"
        return f"{location}: {diagnostic.code.name}: {diagnostic.message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "MISSING_LOCALE", "category": "semantic", "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "category": str(diagnostic.category),
            "message": diagnostic.message,
        }

        if diagnostic.source is not None:
            data["source"] = diagnostic.source

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.key:
            data["key"] = diagnostic.key

        if diagnostic.locale:
            data["locale"] = diagnostic.locale

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)
