"""loctable - compiler for cross-locale localization tables.

Compiles a line-oriented table of keys, locales and brace-placeholder
templates into a validated Artifact, and formats it at runtime through a
thread-safe current-locale store.

Public API:
    compile_source - Compile table text to an Artifact
    compile_file - Compile a table file and its includes
    Localizer - Runtime accessors over an Artifact
    LocaleStore - Thread-safe current locale
    Artifact - Compiled locale enumeration and accessor specifications
    Name - Folded, validated identifier

Exceptions:
    LocTableError - Base exception class (alias: CompileError)
    SourceLoadError - A source could not be read
    LocaleStoreError - Current locale unavailable or undeclared locale
    UnknownKeyError - Lookup of a key that was not compiled

Submodules:
    loctable.syntax - Lexer, tokens and token stream
    loctable.assembly - Directive handling and multi-source assembly
    loctable.validation - Placeholder extraction and cross-locale checks
    loctable.emit - Artifact data model and emitter
    loctable.loading - Source loaders
    loctable.diagnostics - Error codes, templates and formatting
"""

from .compiler import compile_file, compile_source, compile_table
from .core import Name
from .diagnostics import (
    CompileError,
    LocaleStoreError,
    LocTableError,
    SourceLoadError,
    UnknownKeyError,
)
from .emit import AccessorSpec, Artifact, LocaleEnum, LocaleInfo
from .loading import MemorySourceLoader, PathSourceLoader, SourceLoader
from .runtime import Accessor, LocaleStore, Localizer

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("loctable")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Accessor",
    "AccessorSpec",
    "Artifact",
    "CompileError",
    "LocTableError",
    "LocaleEnum",
    "LocaleInfo",
    "LocaleStore",
    "LocaleStoreError",
    "Localizer",
    "MemorySourceLoader",
    "Name",
    "PathSourceLoader",
    "SourceLoadError",
    "SourceLoader",
    "UnknownKeyError",
    "__version__",
    "compile_file",
    "compile_source",
    "compile_table",
]
