"""Thread-safe current-locale store.

Holds the locale used by accessor calls that do not name one explicitly.
Many threads may read and write it concurrently; the last write wins and a
read never observes anything but a declared locale.

A store is an explicit object owned by the caller (one per Localizer by
default), not process-global state. Applications that want a single
process-wide locale share one store.

Failure Semantics:
    If the lock cannot be acquired within ``lock_timeout`` seconds, get()
    and set() raise LocaleStoreError rather than returning or keeping a
    possibly stale value.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from loctable.constants import LOCALE_LOCK_TIMEOUT
from loctable.diagnostics import ErrorTemplate, LocaleStoreError
from loctable.locale_utils import negotiate_declared_locale, preferred_locales
from loctable.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from loctable.emit import LocaleEnum, LocaleInfo, LocaleRef

__all__ = ["LocaleStore"]

logger = logging.getLogger(__name__)


class LocaleStore:
    """Current locale of one locale enumeration.

    Example:
        >>> store = LocaleStore(artifact.locales)
        >>> store.get().is_default
        True
        >>> store.set("se")
        >>> str(store.get())
        'se'
    """

    __slots__ = ("_current", "_enum", "_lock", "_lock_timeout")

    def __init__(
        self,
        locales: LocaleEnum,
        initial: LocaleRef | None = None,
        *,
        lock_timeout: float | None = LOCALE_LOCK_TIMEOUT,
    ) -> None:
        """Initialize store.

        Args:
            locales: Enumeration the store's values come from
            initial: Starting locale (default: the enumeration's default)
            lock_timeout: Seconds to wait for the lock; None waits forever

        Raises:
            LocaleStoreError: UNKNOWN_LOCALE if ``initial`` is not declared
        """
        self._enum = locales
        self._lock = RWLock()
        self._lock_timeout = lock_timeout
        self._current: LocaleInfo = (
            locales.default if initial is None else locales.lookup(initial)
        )

    @classmethod
    def from_environment(
        cls,
        locales: LocaleEnum,
        environ: Mapping[str, str] | None = None,
        *,
        lock_timeout: float | None = LOCALE_LOCK_TIMEOUT,
    ) -> LocaleStore:
        """Create a store starting at the locale the environment prefers.

        Consults LOCTABLE_LOCALE, then the system locale variables, and
        negotiates them against the declared locales with Babel. Falls back
        to the default locale when nothing matches.

        Args:
            locales: Enumeration the store's values come from
            environ: Environment mapping (default: os.environ)
            lock_timeout: Seconds to wait for the lock; None waits forever
        """
        preferred = preferred_locales(environ)
        match = negotiate_declared_locale(preferred, locales.names) if preferred else None
        if match is None:
            if preferred:
                logger.warning(
                    "No declared locale matches environment locales %s. Using default '%s'",
                    preferred,
                    locales.default,
                )
            return cls(locales, lock_timeout=lock_timeout)

        logger.debug("Initial locale '%s' negotiated from %s", match, preferred)
        return cls(locales, match, lock_timeout=lock_timeout)

    @property
    def locales(self) -> LocaleEnum:
        """Enumeration this store is bound to."""
        return self._enum

    def get(self) -> LocaleInfo:
        """Return the current locale.

        Raises:
            LocaleStoreError: LOCALE_LOCK_FAILED if the lock times out
        """
        try:
            with self._lock.read(self._lock_timeout):
                return self._current
        except TimeoutError as e:
            raise LocaleStoreError(ErrorTemplate.locale_lock_failed("get")) from e

    def set(self, locale: LocaleRef) -> None:
        """Replace the current locale.

        Raises:
            LocaleStoreError: UNKNOWN_LOCALE if ``locale`` is not declared,
                LOCALE_LOCK_FAILED if the lock times out
        """
        resolved = self._enum.lookup(locale)
        try:
            with self._lock.write(self._lock_timeout):
                self._current = resolved
        except TimeoutError as e:
            raise LocaleStoreError(ErrorTemplate.locale_lock_failed("set")) from e
        logger.debug("Current locale set to '%s'", resolved)

    def __repr__(self) -> str:
        return f"LocaleStore(locales={list(self._enum.names)!r})"
