"""Multi-source assembling parser.

Consumes tokens (possibly spanning several included sources), builds a
per-key entry table, merges keys declared across files and detects
re-included sources.

Grammar (whitespace-insignificant):
    table     := (directive | comment | key_block)*
    directive := '!' text
    key_block := KEY (comment* LOCALE comment* VALUE)+

Architecture:
    A state machine over a TokenStream with single-token pushback. When the
    current source runs out of tokens, the next queued include is loaded
    (blocking) and the stream is re-sourced. Includes are never fetched in
    parallel: merge order depends on sequential processing.

Error Attribution:
    Every error escaping the assembler carries the source identifier being
    processed when it happened.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NoReturn

from loctable.assembly.config import Configuration
from loctable.constants import STRING_SOURCE_ID
from loctable.diagnostics import (
    ErrorTemplate,
    LocTableError,
    SemanticError,
    SourceLoadError,
    StructuralError,
)
from loctable.syntax import (
    CommentToken,
    ConfigToken,
    KeyToken,
    Lexer,
    LocaleToken,
    TokenStream,
    ValueToken,
)

if TYPE_CHECKING:
    from loctable.core import Name
    from loctable.loading import SourceId, SourceLoader
    from loctable.syntax import Token

__all__ = ["AssembledTable", "Assembler", "Entry", "TempKey"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Entry:
    """Template text, optional comment and declaring source for one (key, locale) pair."""

    value: str
    comment: str | None = None
    source: SourceId | None = None


@dataclass(slots=True)
class TempKey:
    """A key being accumulated during assembly.

    ``entries`` is indexed by locale position. It may be shorter than the
    final locale list when the key was first declared before every locale
    directive had been seen; it grows on demand.

    ``source`` is the source of the first block declaring the key.
    """

    id: Name
    comment: str | None = None
    source: SourceId | None = None
    entries: list[Entry | None] = field(default_factory=list)

    def ensure_slots(self, count: int) -> None:
        """Grow ``entries`` to at least ``count`` slots."""
        if len(self.entries) < count:
            self.entries.extend([None] * (count - len(self.entries)))


@dataclass(frozen=True, slots=True)
class AssembledTable:
    """Result of assembly, input to validation.

    Attributes:
        locales: Declared locales in order (index 0 = default)
        keys: Keys in first-declaration order
        sources: Source identifiers consumed, in processing order
    """

    locales: tuple[Name, ...]
    keys: tuple[TempKey, ...]
    sources: tuple[SourceId, ...]


def _join_comments(first: str | None, second: str | None) -> str | None:
    """Concatenate two optional comments, existing text first."""
    if first is None:
        return second
    if second is None:
        return first
    return first + second


class Assembler:
    """Assembles one table from a root source and its includes.

    An Assembler holds no state between calls; each ``assemble`` call
    starts from an empty configuration.

    Example:
        >>> table = Assembler().assemble('!locales en\\ngreet:\\n en "hi"')
        >>> [str(k.id) for k in table.keys]
        ['greet']
    """

    __slots__ = (
        "_comment",
        "_config",
        "_consumed",
        "_keys",
        "_loader",
        "_max_source_size",
        "_stream",
    )

    def __init__(
        self,
        loader: SourceLoader | None = None,
        *,
        max_source_size: int | None = None,
    ) -> None:
        """Initialize assembler.

        Args:
            loader: Source loader for includes (and for ``assemble_source``).
                Without one, any include directive fails to load.
            max_source_size: Per-source size limit passed to each Lexer
        """
        self._loader = loader
        self._max_source_size = max_source_size
        self._config = Configuration()
        self._keys: dict[Name, TempKey] = {}
        self._comment: str | None = None
        self._consumed: list[SourceId] = []
        self._stream = TokenStream(iter(()))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def assemble_source(self, source_id: SourceId) -> AssembledTable:
        """Load ``source_id`` through the loader and assemble it.

        Raises:
            SourceLoadError: If the loader is missing or fails
            LocTableError: Any lexical, directive, structural or semantic
                error found during assembly
        """
        self._reset(source_id)
        try:
            self._enter_source(source_id)
            return self._run()
        except LocTableError as error:
            self._reraise_attributed(error)

    def assemble(self, source: str, source_id: SourceId = STRING_SOURCE_ID) -> AssembledTable:
        """Assemble already-loaded root text.

        Args:
            source: Root source text
            source_id: Identifier used for errors, include resolution and
                re-inclusion detection

        Raises:
            LocTableError: Any error found during assembly
        """
        self._reset(source_id)
        try:
            self._consumed.append(source_id)
            self._stream.resource(Lexer(source, max_source_size=self._max_source_size))
            return self._run()
        except LocTableError as error:
            self._reraise_attributed(error)

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def _reset(self, source_id: SourceId) -> None:
        resolve = self._loader.resolve if self._loader is not None else None
        self._config = Configuration(resolve=resolve, current_source=source_id)
        self._keys = {}
        self._comment = None
        self._consumed = []
        self._stream = TokenStream(iter(()))

    def _reraise_attributed(self, error: LocTableError) -> NoReturn:
        attributed = error.with_source(self._config.current_source)
        if attributed is error:
            raise error
        raise attributed from error

    def _run(self) -> AssembledTable:
        while True:
            token = self._stream.next()
            if token is None:
                if not self._advance_source():
                    break
                continue
            self._dispatch(token)

        table = AssembledTable(
            locales=tuple(self._config.locales),
            keys=tuple(self._keys.values()),
            sources=tuple(self._consumed),
        )
        logger.info(
            "Assembled %d keys in %d locales from %d sources",
            len(table.keys),
            len(table.locales),
            len(table.sources),
        )
        return table

    def _advance_source(self) -> bool:
        """Switch to the next queued include; False when none remain."""
        source_id = self._config.next_include()
        if source_id is None:
            return False
        self._enter_source(source_id)
        return True

    def _enter_source(self, source_id: SourceId) -> None:
        if source_id in self._consumed:
            raise StructuralError(ErrorTemplate.source_reincluded(source_id))
        if self._loader is None:
            raise SourceLoadError(
                ErrorTemplate.source_load_failed(source_id, "no source loader configured"),
                source_id=source_id,
            )

        try:
            text = self._loader.load(source_id)
        except (OSError, ValueError) as e:
            raise SourceLoadError(
                ErrorTemplate.source_load_failed(source_id, str(e)), source_id=source_id
            ) from e

        self._config.current_source = source_id
        self._consumed.append(source_id)
        logger.debug("Reading source %s (%d chars)", source_id, len(text))
        self._stream.resource(Lexer(text, max_source_size=self._max_source_size))

    # ------------------------------------------------------------------
    # Token dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, token: Token) -> None:
        match token:
            case ConfigToken(text=text):
                self._config.apply(text)
                # A comment only ever attaches to a following key or entry
                self._comment = None
            case CommentToken(text=text):
                self._comment = text
            case KeyToken():
                self._parse_key(token)
            case LocaleToken(name=name, span=span):
                raise StructuralError(ErrorTemplate.locale_without_key(name.value, span))
            case ValueToken(text=text, span=span):
                raise StructuralError(ErrorTemplate.value_without_key(text, span))

    def _parse_key(self, key_token: KeyToken) -> None:
        key_id = key_token.name
        key = TempKey(id=key_id, comment=self._comment, source=self._config.current_source)
        key.ensure_slots(len(self._config.locales))
        self._comment = None

        did_something = False
        while True:
            locale_token = self._next_locale(key_id)
            if locale_token is None:
                break

            index = self._config.find_locale(locale_token.name)
            if index is None and not self._config.locales:
                raise SemanticError(ErrorTemplate.no_locales())
            if index is None:
                raise StructuralError(
                    ErrorTemplate.undeclared_locale(
                        locale_token.name.value, key_id.value, locale_token.span
                    )
                )

            value = self._next_value(key_id, locale_token)
            key.ensure_slots(index + 1)
            if key.entries[index] is not None:
                raise SemanticError(
                    ErrorTemplate.duplicate_entry(key_id.value, locale_token.name.value)
                )
            key.entries[index] = Entry(
                value=value, comment=self._comment, source=self._config.current_source
            )
            self._comment = None
            did_something = True

        if not did_something:
            raise StructuralError(ErrorTemplate.expected_locale(key_id.value, key_token.span))

        self._add_key(key)

    def _next_locale(self, key_id: Name) -> LocaleToken | None:
        """Read the next Locale of a key block, or None at the block's end."""
        while (token := self._stream.next()) is not None:
            match token:
                case CommentToken(text=text):
                    self._comment = text
                case LocaleToken():
                    return token
                case KeyToken():
                    self._stream.push_back(token)
                    return None
                case _:
                    raise StructuralError(
                        ErrorTemplate.unexpected_token(str(token), token.span, key=key_id.value)
                    )
        return None

    def _next_value(self, key_id: Name, locale_token: LocaleToken) -> str:
        """Read the Value that must immediately follow a Locale."""
        token = self._stream.next()
        if isinstance(token, ValueToken):
            return token.text
        raise StructuralError(
            ErrorTemplate.expected_value(
                key_id.value,
                locale_token.name.value,
                None if token is None else str(token),
                locale_token.span if token is None else token.span,
            )
        )

    def _add_key(self, key: TempKey) -> None:
        """Record a key block, merging it into an earlier one with the same id."""
        existing = self._keys.get(key.id)
        if existing is None:
            self._keys[key.id] = key
            logger.debug("Declared key %s", key.id)
            return

        existing.ensure_slots(len(key.entries))
        for index, entry in enumerate(key.entries):
            if entry is None:
                continue
            if existing.entries[index] is not None:
                raise SemanticError(
                    ErrorTemplate.duplicate_entry(
                        key.id.value, self._config.locales[index].value
                    )
                )
            existing.entries[index] = entry

        existing.comment = _join_comments(existing.comment, key.comment)
        logger.debug("Merged key %s from %s", key.id, self._config.current_source)
