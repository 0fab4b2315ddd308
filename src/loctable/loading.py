"""Source loading infrastructure for the assembler.

Provides the protocol the assembler uses to fetch included sources, a
filesystem implementation with path-traversal protection, and an in-memory
implementation for embedded tables and tests.

Components:
    SourceLoader - Protocol for retrieving source text (structural typing)
    PathSourceLoader - Disk-based loader, UTF-8, optional root directory
    MemorySourceLoader - Mapping-backed loader with POSIX-style paths

Loaders are synchronous and fallible: ``load`` raises ``OSError`` (or
``ValueError`` for rejected paths), which the assembler converts into
``SourceLoadError`` carrying the source identifier.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TypeAlias

from loctable.constants import STRING_SOURCE_ID

__all__ = [
    "MemorySourceLoader",
    "PathSourceLoader",
    "SourceId",
    "SourceLoader",
    "SourceText",
]

SourceId: TypeAlias = str
"""Canonical identifier of one source (e.g. an absolute file path)."""

SourceText: TypeAlias = str
"""Raw table text as a Python string."""


class SourceLoader(Protocol):
    """Protocol for retrieving table sources.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, files):
        ...         self.files = files
        ...     def load(self, source_id):
        ...         return self.files[source_id]
        ...     def resolve(self, path, base):
        ...         return path
    """

    def load(self, source_id: SourceId) -> SourceText:
        """Return the text of ``source_id``.

        Raises:
            FileNotFoundError: If the source does not exist
            OSError: If the source cannot be read
        """
        ...

    def resolve(self, path: str, base: SourceId) -> SourceId:
        """Resolve an include ``path`` relative to the source ``base``.

        The result must be canonical: two spellings of the same source must
        resolve to the same identifier, since identity is how re-inclusion
        is detected.
        """
        ...


@dataclass(frozen=True, slots=True)
class PathSourceLoader:
    """File system loader.

    Include paths are resolved relative to the directory of the including
    file. Sources compiled from a string resolve relative to the current
    working directory.

    Security:
        When ``root_dir`` is given, every resolved path must stay inside
        it; anything else is rejected with ValueError on load.

    Attributes:
        root_dir: Optional directory all sources must live under
        encoding: Text encoding of source files
    """

    root_dir: str | None = None
    encoding: str = "utf-8"
    _resolved_root: Path | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        """Cache the resolved root directory."""
        if self.root_dir is not None:
            object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    def resolve(self, path: str, base: SourceId) -> SourceId:
        """Resolve ``path`` against the directory of ``base``."""
        base_dir = Path.cwd() if base == STRING_SOURCE_ID else Path(base).parent
        return str((base_dir / path).resolve())

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path is within base_dir (both resolved)."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
        except ValueError:
            return False
        return True

    def load(self, source_id: SourceId) -> SourceText:
        """Read a source file from disk.

        Raises:
            ValueError: If the path escapes ``root_dir``
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        full_path = Path(source_id)
        if self._resolved_root is not None and not self._is_safe_path(
            self._resolved_root, full_path
        ):
            msg = f"Path traversal detected: '{source_id}' escapes root directory"
            raise ValueError(msg)
        return full_path.read_text(encoding=self.encoding)


@dataclass(frozen=True, slots=True)
class MemorySourceLoader:
    """Loader over an in-memory mapping of POSIX-style paths to text.

    Example:
        >>> loader = MemorySourceLoader({
        ...     "main.txt": "!locales en\\n!include parts/a.txt",
        ...     "parts/a.txt": 'greet:\\n en "hi"',
        ... })
        >>> loader.resolve("a.txt", "parts/b.txt")
        'parts/a.txt'
    """

    sources: Mapping[str, str]

    def resolve(self, path: str, base: SourceId) -> SourceId:
        """Join ``path`` to the directory of ``base`` and normalize it."""
        base_dir = "" if base == STRING_SOURCE_ID else posixpath.dirname(base)
        return posixpath.normpath(posixpath.join(base_dir, path))

    def load(self, source_id: SourceId) -> SourceText:
        """Return the mapped text.

        Raises:
            FileNotFoundError: If ``source_id`` is not in the mapping
        """
        try:
            return self.sources[source_id]
        except KeyError:
            msg = f"No such source: '{source_id}'"
            raise FileNotFoundError(msg) from None
