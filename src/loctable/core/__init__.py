"""Core utilities shared across syntax, assembly and validation layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- syntax <- assembly <- validation <- emit <- runtime

Exports:
    Name: Folded, validated identifier for keys and locales
    NameBuilder: Incremental Name construction used by the lexer

Python 3.13+.
"""

from .name import (
    Name,
    NameBuilder,
    fold_name_char,
    fold_name_start,
    is_name_char,
    is_name_start,
)

__all__ = [
    "Name",
    "NameBuilder",
    "fold_name_char",
    "fold_name_start",
    "is_name_char",
    "is_name_start",
]
