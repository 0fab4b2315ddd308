"""Cross-locale semantic validation of assembled keys.

Runs once after assembly, over every key in first-declaration order, with
the final locale list. Fails fast: the first key with a problem aborts
validation with that key's specific error.

Checks, per key:
    1. Completeness: every declared locale has an entry (MISSING_LOCALE)
    2. Placeholder syntax in every entry (brace and argument-name errors)
    3. Consistency: every locale yields exactly the ordered argument list
       of locale 0 (ARGUMENT_MISMATCH)

Per-locale entry comments are folded into the key comment as a trailing
"Locale notes" block.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from loctable.constants import LOCALE_NOTES_HEADER
from loctable.diagnostics import ErrorTemplate, SemanticError, shorten
from loctable.validation.arguments import extract_arguments

if TYPE_CHECKING:
    from collections.abc import Sequence

    from loctable.assembly import AssembledTable, Entry, TempKey
    from loctable.core import Name
    from loctable.diagnostics import Diagnostic
    from loctable.loading import SourceId

__all__ = ["Key", "ValidatedTable", "validate", "validate_key"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Key:
    """A validated key.

    Invariant: every template in ``entries`` has exactly ``arguments`` as
    its ordered placeholder list.

    Attributes:
        id: Key identifier
        arguments: Distinct placeholder names, first-seen order, from the
            default locale's template
        comment: Key comment with any per-locale notes appended
        entries: One template per locale, in locale declaration order
        source: Source of the first block declaring the key
    """

    id: Name
    arguments: tuple[str, ...]
    comment: str | None
    entries: tuple[str, ...]
    source: SourceId | None = None


@dataclass(frozen=True, slots=True)
class ValidatedTable:
    """Locales and validated keys, input to emission."""

    locales: tuple[Name, ...]
    keys: tuple[Key, ...]


def _attribute(diagnostic: Diagnostic, source: SourceId | None) -> Diagnostic:
    return diagnostic if source is None else diagnostic.with_source(source)


def _collect_entries(key: TempKey, locales: Sequence[Name]) -> list[Entry]:
    entries: list[Entry] = []
    for index, locale in enumerate(locales):
        entry = key.entries[index] if index < len(key.entries) else None
        if entry is None:
            raise SemanticError(
                _attribute(ErrorTemplate.missing_locale(key.id.value, locale.value), key.source)
            )
        entries.append(entry)
    return entries


def _merge_comment(
    key_comment: str | None, entries: Sequence[Entry], locales: Sequence[Name]
) -> str | None:
    """Append a '- *{locale}*: {comment}' line per commented entry."""
    notes = "".join(
        f"- *{locale}*: {entry.comment}\n"
        for locale, entry in zip(locales, entries, strict=True)
        if entry.comment is not None
    )
    if not notes:
        return key_comment
    return f"{key_comment or ''}{LOCALE_NOTES_HEADER}{notes}"


def _arguments_of(key_id: Name, locale: Name, entry: Entry) -> list[str]:
    """Extract arguments, attributing placeholder syntax errors to the entry."""
    try:
        return extract_arguments(entry.value)
    except SemanticError as e:
        if e.diagnostic is None or e.diagnostic.key is not None:
            raise
        diagnostic = replace(e.diagnostic, key=shorten(key_id.value), locale=locale.value)
        raise SemanticError(_attribute(diagnostic, entry.source)) from e


def _check_arguments(
    key_id: Name, entries: Sequence[Entry], locales: Sequence[Name]
) -> list[str]:
    """Return locale 0's arguments after checking every locale matches them."""
    arguments = _arguments_of(key_id, locales[0], entries[0])
    for locale, entry in zip(locales[1:], entries[1:], strict=True):
        found = _arguments_of(key_id, locale, entry)
        if found != arguments:
            diagnostic = ErrorTemplate.argument_mismatch(
                key_id.value, locale.value, found, arguments
            )
            raise SemanticError(_attribute(diagnostic, entry.source))
    return arguments


def validate_key(key: TempKey, locales: Sequence[Name]) -> Key:
    """Validate one assembled key against the final locale list.

    Errors name the source declaring the offending entry, or the key's
    first source for a missing locale.

    Raises:
        SemanticError: NO_LOCALES, MISSING_LOCALE, placeholder syntax
            errors, or ARGUMENT_MISMATCH
    """
    if not locales:
        raise SemanticError(ErrorTemplate.no_locales())

    entries = _collect_entries(key, locales)
    arguments = _check_arguments(key.id, entries, locales)

    return Key(
        id=key.id,
        arguments=tuple(arguments),
        comment=_merge_comment(key.comment, entries, locales),
        entries=tuple(entry.value for entry in entries),
        source=key.source,
    )


def validate(table: AssembledTable) -> ValidatedTable:
    """Validate every key of an assembled table, failing on the first error.

    Raises:
        SemanticError: NO_LOCALES when no locale was declared in any source
            (even if no keys exist), or the first key's semantic error
    """
    if not table.locales:
        raise SemanticError(ErrorTemplate.no_locales())

    keys = tuple(validate_key(key, table.locales) for key in table.keys)
    logger.debug("Validated %d keys", len(keys))
    return ValidatedTable(locales=table.locales, keys=keys)
