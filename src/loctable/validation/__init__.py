"""Semantic validation: placeholder extraction and cross-locale checks.

Python 3.13+.
"""

from .arguments import (
    Placeholder,
    Segment,
    TextSegment,
    extract_arguments,
    extract_placeholders,
    is_positional,
)
from .validator import Key, ValidatedTable, validate, validate_key

__all__ = [
    "Key",
    "Placeholder",
    "Segment",
    "TextSegment",
    "ValidatedTable",
    "extract_arguments",
    "extract_placeholders",
    "is_positional",
    "validate",
    "validate_key",
]
