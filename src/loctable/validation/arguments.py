"""Placeholder extraction from template strings.

Templates embed brace-delimited placeholders:

    {name}        named argument
    {0}           positional argument
    {}            auto-numbered positional argument (0, 1, ... per template)
    {name:>8}     argument with a format suffix (excluded from the name)

Placeholder names follow the Name character rules (uppercase folds to
lowercase, '-' folds to '_') and must either be all digits or start with
a letter. There is no escape for literal braces.

Python 3.13+.
"""

from __future__ import annotations

from typing import TypeAlias
from dataclasses import dataclass

from loctable.core import fold_name_char
from loctable.diagnostics import ErrorTemplate, SemanticError

__all__ = [
    "Placeholder",
    "Segment",
    "TextSegment",
    "extract_arguments",
    "extract_placeholders",
    "is_positional",
]


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Literal template text between placeholders."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One brace-delimited placeholder.

    Attributes:
        argument: Folded placeholder name ("0", "1"... for positional)
        format_spec: Text after ':' inside the braces ("" when absent)
    """

    argument: str
    format_spec: str = ""


Segment: TypeAlias = TextSegment | Placeholder
"""Element of a parsed template."""


def is_positional(argument: str) -> bool:
    """True for numeric placeholder names such as "0" or "12"."""
    return argument.isascii() and argument.isdigit()


def extract_placeholders(template: str) -> list[Segment]:
    """Parse a template into literal text and placeholders.

    Args:
        template: Raw template text from a Value token

    Returns:
        Segments in template order. Adjacent literal text is merged; empty
        literal text is omitted.

    Raises:
        SemanticError: NESTED_BRACE for '{' inside an open placeholder or a
            placeholder left open at the end (distinct messages),
            EXTRA_CLOSING_BRACE for an unmatched '}', ARG_BAD_CHAR for a
            non-Name character in a name, ARG_BAD_START for a name neither
            numeric nor starting with a letter

    Example:
        >>> extract_placeholders("Hi {name}!")
        [TextSegment(text='Hi '), Placeholder(argument='name', format_spec=''), TextSegment(text='!')]
    """
    segments: list[Segment] = []
    text: list[str] = []
    argument: list[str] = []
    spec: list[str] = []
    opened = False
    formatting = False
    unnamed_index = 0

    for ch in template:
        if ch == "{":
            if opened:
                raise SemanticError(ErrorTemplate.nested_brace(template))
            opened = True
            if text:
                segments.append(TextSegment("".join(text)))
                text = []
        elif ch == "}":
            if not opened:
                raise SemanticError(ErrorTemplate.extra_closing_brace(template))
            name = "".join(argument)
            if not name:
                name = str(unnamed_index)
                unnamed_index += 1
            elif not (name[0].isalpha() or is_positional(name)):
                raise SemanticError(ErrorTemplate.arg_bad_start(template, name))
            segments.append(Placeholder(name, "".join(spec)))
            argument, spec = [], []
            opened = formatting = False
        elif not opened:
            text.append(ch)
        elif formatting:
            spec.append(ch)
        elif ch == ":":
            formatting = True
        else:
            folded = fold_name_char(ch)
            if folded is None:
                raise SemanticError(
                    ErrorTemplate.arg_bad_char(template, "".join(argument), ch)
                )
            argument.append(folded)

    if opened:
        raise SemanticError(ErrorTemplate.unclosed_brace(template))
    if text:
        segments.append(TextSegment("".join(text)))
    return segments


def extract_arguments(template: str) -> list[str]:
    """Distinct placeholder names of a template, in order of first appearance.

    Example:
        >>> extract_arguments("{0}{1}{3}")
        ['0', '1', '3']
        >>> extract_arguments("{}{}{}")
        ['0', '1', '2']
        >>> extract_arguments("{a} and {b}, {a} again")
        ['a', 'b']
    """
    arguments: list[str] = []
    for segment in extract_placeholders(template):
        if isinstance(segment, Placeholder) and segment.argument not in arguments:
            arguments.append(segment.argument)
    return arguments
