"""Directive handling for '!'-prefixed configuration lines.

Directives:
    !locales <name>+    Declare locales in order; index 0 is the default
    !include <path>+    Queue sources relative to the current one

Python 3.13+.
"""

from __future__ import annotations

from typing import TypeAlias
import logging
from collections.abc import Callable

from loctable.constants import STRING_SOURCE_ID
from loctable.core import Name
from loctable.diagnostics import DirectiveError, ErrorTemplate
from loctable.enums import DirectiveKind
from loctable.loading import SourceId

__all__ = ["Configuration"]

logger = logging.getLogger(__name__)

PathResolver: TypeAlias = Callable[[str, SourceId], SourceId]
"""Resolves an include path relative to the including source."""


def _identity_resolver(path: str, base: SourceId) -> SourceId:  # noqa: ARG001
    return path


class Configuration:
    """Declared locales and pending includes accumulated during assembly.

    Attributes:
        locales: Declared locales in declaration order (index 0 = default)
        current_source: Source identifier currently being lexed
    """

    __slots__ = ("_pending", "_resolve", "current_source", "locales")

    def __init__(
        self,
        *,
        resolve: PathResolver | None = None,
        current_source: SourceId = STRING_SOURCE_ID,
    ) -> None:
        """Initialize an empty configuration.

        Args:
            resolve: Include path resolver, usually ``SourceLoader.resolve``
            current_source: Identifier of the first source
        """
        self.locales: list[Name] = []
        self.current_source: SourceId = current_source
        self._pending: list[SourceId] = []
        self._resolve: PathResolver = resolve or _identity_resolver

    @property
    def pending_includes(self) -> tuple[SourceId, ...]:
        """Queued include identifiers, next one first."""
        return tuple(self._pending)

    def apply(self, text: str) -> None:
        """Apply one directive line (the text after '!').

        Raises:
            DirectiveError: Empty line, unknown directive, missing values,
                or duplicate locale
            LexicalError: A declared locale is not a valid Name
        """
        words = text.split()
        if not words:
            raise DirectiveError(ErrorTemplate.empty_directive())

        word, values = words[0], words[1:]
        match word:
            case DirectiveKind.LOCALES:
                self.declare_locales(values)
            case DirectiveKind.INCLUDE:
                self.queue_includes(values)
            case _:
                raise DirectiveError(ErrorTemplate.unknown_directive(word))

    def declare_locales(self, values: list[str]) -> None:
        """Append locales in order, rejecting duplicates after folding."""
        if not values:
            raise DirectiveError(ErrorTemplate.missing_values(DirectiveKind.LOCALES))

        for value in values:
            locale = Name(value)
            if locale in self.locales:
                raise DirectiveError(ErrorTemplate.duplicate_locale(locale.value))
            self.locales.append(locale)
            logger.debug("Declared locale %s at index %d", locale, len(self.locales) - 1)

    def queue_includes(self, values: list[str]) -> None:
        """Prepend resolved include paths as a block, keeping their order.

        Includes declared later are therefore processed before ones queued
        earlier, which gives depth-first traversal of nested includes.
        """
        if not values:
            raise DirectiveError(ErrorTemplate.missing_values(DirectiveKind.INCLUDE))

        resolved = [self._resolve(value, self.current_source) for value in values]
        self._pending[0:0] = resolved
        logger.debug("Queued includes %s from %s", resolved, self.current_source)

    def next_include(self) -> SourceId | None:
        """Dequeue the next include, or None when the queue is empty."""
        if not self._pending:
            return None
        return self._pending.pop(0)

    def find_locale(self, locale: Name) -> int | None:
        """Position of ``locale`` in declaration order, or None if undeclared."""
        try:
            return self.locales.index(locale)
        except ValueError:
            return None
