"""Artifact emission from validated keys.

Turns the validated table into an Artifact: the locale enumeration and one
AccessorSpec per key.

Parameter Layout:
    Named placeholders become parameters with the placeholder's name.
    Numeric placeholders become positional parameters named ``arg<N>``.
    Named parameters come first, then positional ones; both groups keep the
    placeholder order of the default locale's template.

    {0}{1}{3}           -> (arg0, arg1, arg3)
    {count} of {0}      -> (count, arg0)

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from loctable.constants import POSITIONAL_PREFIX
from loctable.diagnostics import ErrorTemplate, SemanticError
from loctable.emit.artifact import (
    AccessorSpec,
    Artifact,
    LocaleEnum,
    Parameter,
    Substitution,
    TemplateBinding,
)
from loctable.enums import ParameterKind
from loctable.validation import Placeholder, extract_placeholders, is_positional

if TYPE_CHECKING:
    from collections.abc import Sequence

    from loctable.core import Name
    from loctable.emit.artifact import BoundSegment, LocaleInfo
    from loctable.validation import Key, ValidatedTable

__all__ = ["build_parameters", "emit", "emit_accessor", "emit_artifact"]

logger = logging.getLogger(__name__)


def build_parameters(key_id: Name, arguments: Sequence[str]) -> tuple[Parameter, ...]:
    """Order a key's arguments into accessor parameters.

    Raises:
        SemanticError: PARAMETER_COLLISION when a named placeholder has the
            same name as a renamed positional one (``{arg0}`` with ``{0}``)

    Example:
        >>> [p.name for p in build_parameters(Name("k"), ["0", "who", "1"])]
        ['who', 'arg0', 'arg1']
    """
    named = [
        Parameter(argument, argument, ParameterKind.NAMED)
        for argument in arguments
        if not is_positional(argument)
    ]
    positional = [
        Parameter(f"{POSITIONAL_PREFIX}{argument}", argument, ParameterKind.POSITIONAL)
        for argument in arguments
        if is_positional(argument)
    ]

    named_ids = {parameter.name for parameter in named}
    for parameter in positional:
        if parameter.name in named_ids:
            raise SemanticError(ErrorTemplate.parameter_collision(key_id.value, parameter.name))

    return (*named, *positional)


def _bind_template(
    locale: LocaleInfo, template: str, by_placeholder: dict[str, Parameter]
) -> TemplateBinding:
    segments: list[BoundSegment] = []
    for segment in extract_placeholders(template):
        if isinstance(segment, Placeholder):
            segments.append(Substitution(by_placeholder[segment.argument], segment.format_spec))
        else:
            segments.append(segment)
    return TemplateBinding(locale=locale, template=template, segments=tuple(segments))


def emit_accessor(key: Key, locales: LocaleEnum) -> AccessorSpec:
    """Build the accessor specification for one validated key.

    Raises:
        SemanticError: PARAMETER_COLLISION, attributed to the key's source
    """
    try:
        parameters = build_parameters(key.id, key.arguments)
    except SemanticError as e:
        if key.source is None:
            raise
        attributed = e.with_source(key.source)
        if attributed is e:
            raise
        raise attributed from e
    by_placeholder = {parameter.placeholder: parameter for parameter in parameters}
    templates = tuple(
        _bind_template(locale, template, by_placeholder)
        for locale, template in zip(locales, key.entries, strict=True)
    )
    return AccessorSpec(
        id=key.id,
        parameters=parameters,
        templates=templates,
        comment=key.comment,
    )


def emit_artifact(locales: Sequence[Name], keys: Sequence[Key]) -> Artifact:
    """Produce an Artifact from the final locale list and validated keys.

    Raises:
        SemanticError: PARAMETER_COLLISION (see build_parameters)
    """
    locale_enum = LocaleEnum.from_names(tuple(locales))
    accessors = tuple(emit_accessor(key, locale_enum) for key in keys)
    logger.debug(
        "Emitted %d accessors for locales %s", len(accessors), ", ".join(locale_enum.names)
    )
    return Artifact(locales=locale_enum, accessors=accessors)


def emit(table: ValidatedTable) -> Artifact:
    """Produce an Artifact from a validated table."""
    return emit_artifact(table.locales, table.keys)
