"""Shared constants for loctable.

This module provides centralized configuration constants used across the
syntax, assembly, validation and runtime packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Diagnostics: Preview lengths for text quoted in error messages
- Input limits: Size constraints on compiled sources
- Runtime: Current-locale store configuration

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Diagnostics
    "PREVIEW_LENGTH",
    "PREVIEW_ELLIPSIS",
    # Input limits
    "MAX_SOURCE_SIZE",
    "STRING_SOURCE_ID",
    # Runtime
    "LOCALE_ENV_VAR",
    "LOCALE_LOCK_TIMEOUT",
    "LOCALE_FAILURE_MESSAGE",
    "POSITIONAL_PREFIX",
    "LOCALE_NOTES_HEADER",
]

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Raw key or template text quoted in an error message is capped at this many
# characters. When the text is longer, the last characters of the preview
# are replaced by PREVIEW_ELLIPSIS.
PREVIEW_LENGTH: int = 24
PREVIEW_ELLIPSIS: str = "..."

# Header inserted between a key comment and its per-locale notes.
LOCALE_NOTES_HEADER: str = " # Locale notes\n"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of ASCII).
# Prevents unbounded memory allocation from runaway include trees.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Source identifier used when compiling text that did not come from a loader.
STRING_SOURCE_ID: str = "<string>"

# ============================================================================
# RUNTIME
# ============================================================================

# Environment variable consulted by LocaleStore.from_environment().
LOCALE_ENV_VAR: str = "LOCTABLE_LOCALE"

# Seconds to wait for the current-locale lock before failing loudly.
LOCALE_LOCK_TIMEOUT: float = 5.0

LOCALE_FAILURE_MESSAGE: str = "could not acquire current locale"

# Numeric placeholders become accessor parameters named arg<N>.
POSITIONAL_PREFIX: str = "arg"
