"""Locale utilities bridging declared locale Names and Babel/POSIX codes.

Declared locales are Names ("en", "en_us", "pt_br"). This module maps them
to Babel ``Locale`` objects when they name a CLDR locale, detects the
process's preferred locale from the environment, and negotiates that
preference against a table's declared locales.

Python 3.13+. Uses Babel for locale parsing and negotiation.
"""

from __future__ import annotations

import functools
import locale as locale_module
import logging
import os
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError, negotiate_locale

from loctable.constants import LOCALE_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = [
    "get_babel_locale",
    "negotiate_declared_locale",
    "normalize_locale",
    "preferred_locales",
]

logger = logging.getLogger(__name__)

_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 or POSIX locale code to the folded Name form.

    Strips any encoding or modifier suffix, replaces '-' with '_' and
    lowercases, matching how locale Names are folded.

    Example:
        >>> normalize_locale("en-US")
        'en_us'
        >>> normalize_locale("de_DE.UTF-8")
        'de_de'
        >>> normalize_locale("sr_RS@latin")
        'sr_rs'
    """
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    return code.replace("-", "_").lower()


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_name: str) -> Locale | None:
    """Get a Babel Locale for a declared locale name, with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_name: Locale Name text (e.g. "en_us")

    Returns:
        Babel Locale, or None when the name is not a CLDR locale (declared
        locales are free-form identifiers such as "l1" or "pirate").

    Example:
        >>> get_babel_locale("en_us").territory
        'US'
        >>> get_babel_locale("pirate") is None
        True
    """
    try:
        return Locale.parse(locale_name, sep="_")
    except (UnknownLocaleError, ValueError):
        return None


def preferred_locales(environ: Mapping[str, str] | None = None) -> list[str]:
    """Detect preferred locale codes, most specific source first.

    Detection order:
    1. LOCTABLE_LOCALE environment variable (explicit override)
    2. LC_ALL, LC_MESSAGES, LANG environment variables
    3. Python locale.getlocale() (OS-level locale)

    "C" and "POSIX" pseudo-locales are skipped. Codes are normalized with
    normalize_locale() and de-duplicated.

    Args:
        environ: Environment mapping (default: os.environ)
    """
    env = os.environ if environ is None else environ
    candidates: list[str] = []

    for var in (LOCALE_ENV_VAR, "LC_ALL", "LC_MESSAGES", "LANG"):
        value = env.get(var, "")
        if value not in _PSEUDO_LOCALES:
            candidates.append(value)

    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    if system_locale and system_locale not in _PSEUDO_LOCALES:
        candidates.append(system_locale)

    preferred: list[str] = []
    for candidate in candidates:
        normalized = normalize_locale(candidate)
        if normalized and normalized not in preferred:
            preferred.append(normalized)
    return preferred


def negotiate_declared_locale(
    preferred: Sequence[str], declared: Sequence[str]
) -> str | None:
    """Pick the declared locale best matching the preferred codes.

    Uses Babel's negotiation: exact match first, then Babel's default
    aliases (e.g. "de" to "de_DE"), then the language part alone (so "en_us"
    selects a declared "en").

    Args:
        preferred: Locale codes in preference order
        declared: Declared locale names (folded)

    Returns:
        The matching declared name, or None
    """
    match = negotiate_locale(
        [normalize_locale(code) for code in preferred], list(declared), sep="_"
    )
    if match is None:
        logger.debug("No declared locale among %s matches %s", declared, preferred)
        return None
    return normalize_locale(match)
