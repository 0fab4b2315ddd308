"""Compile driver: source text or file to Artifact.

Runs the pipeline lex -> assemble -> validate -> emit synchronously on the
calling thread. A compile either returns a complete Artifact or raises
exactly one LocTableError; no partial Artifact is ever produced.

Example:
    >>> artifact = compile_source('!locales en se\\ngreet:\\n en "Hi {name}!"\\n se "Hej {name}!"')
    >>> artifact.keys
    ('greet',)
    >>> artifact.accessor("greet").parameter_names
    ('name',)

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

from loctable.assembly import Assembler
from loctable.constants import STRING_SOURCE_ID
from loctable.diagnostics import LocTableError
from loctable.emit import emit
from loctable.loading import PathSourceLoader
from loctable.validation import validate

if TYPE_CHECKING:
    from pathlib import Path

    from loctable.assembly import AssembledTable
    from loctable.emit import Artifact
    from loctable.loading import SourceId, SourceLoader

__all__ = ["compile_file", "compile_source", "compile_table"]

logger = logging.getLogger(__name__)


def _fail(error: LocTableError, source_id: SourceId) -> NoReturn:
    """Log a failed compile and re-raise, attributing unsourced errors to the root."""
    attributed = error.with_source(source_id)
    logger.error("Compile of %s failed: %s", source_id, attributed.diagnostic or attributed)
    if attributed is error:
        raise error
    raise attributed from error


def compile_table(table: AssembledTable) -> Artifact:
    """Validate an assembled table and emit its Artifact.

    Raises:
        SemanticError: First semantic problem found
    """
    return emit(validate(table))


def compile_source(
    source: str,
    *,
    source_id: SourceId = STRING_SOURCE_ID,
    loader: SourceLoader | None = None,
    max_source_size: int | None = None,
) -> Artifact:
    """Compile table text.

    Args:
        source: Root table text
        source_id: Identifier for error attribution and include resolution
        loader: Loader used for ``!include`` directives. Without one, any
            include fails with SourceLoadError.
        max_source_size: Per-source size limit (default MAX_SOURCE_SIZE,
            0 disables)

    Raises:
        LocTableError: The first lexical, directive, structural, semantic or
            loading error
    """
    try:
        table = Assembler(loader, max_source_size=max_source_size).assemble(source, source_id)
        artifact = compile_table(table)
    except LocTableError as e:
        _fail(e, source_id)

    logger.info(
        "Compiled %s: %d keys, %d locales", source_id, len(artifact.accessors), len(artifact.locales)
    )
    return artifact


def compile_file(
    path: str | Path,
    *,
    loader: SourceLoader | None = None,
    max_source_size: int | None = None,
) -> Artifact:
    """Compile a table file and everything it includes.

    Args:
        path: Root file path, resolved by the loader against the working
            directory
        loader: Source loader (default: PathSourceLoader without root guard)
        max_source_size: Per-source size limit (default MAX_SOURCE_SIZE,
            0 disables)

    Raises:
        SourceLoadError: If the root file or an include cannot be read
        LocTableError: The first compile error
    """
    if loader is None:
        loader = PathSourceLoader()
    source_id = loader.resolve(str(path), STRING_SOURCE_ID)

    try:
        table = Assembler(loader, max_source_size=max_source_size).assemble_source(source_id)
        artifact = compile_table(table)
    except LocTableError as e:
        _fail(e, source_id)

    logger.info(
        "Compiled %s: %d keys, %d locales", source_id, len(artifact.accessors), len(artifact.locales)
    )
    return artifact
