"""Diagnostic system for loctable errors.

Provides structured error diagnostics with codes, categories, source
locations and hints. Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory, SourceSpan
from .errors import (
    CompileError,
    DirectiveError,
    LexicalError,
    LocaleStoreError,
    LocTableError,
    SemanticError,
    SourceLoadError,
    StructuralError,
    UnknownKeyError,
    error_from_diagnostic,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate, shorten

__all__ = [
    "CompileError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DirectiveError",
    "ErrorCategory",
    "ErrorTemplate",
    "LexicalError",
    "LocTableError",
    "LocaleStoreError",
    "OutputFormat",
    "SemanticError",
    "SourceLoadError",
    "SourceSpan",
    "StructuralError",
    "UnknownKeyError",
    "error_from_diagnostic",
    "shorten",
]
