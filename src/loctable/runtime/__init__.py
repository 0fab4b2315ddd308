"""Runtime support: thread-safe current-locale store and accessor dispatch.

Python 3.13+. Uses Babel (through loctable.locale_utils) for initial locale
negotiation.
"""

from .locale_store import LocaleStore
from .registry import Accessor, Localizer, render_template
from .rwlock import RWLock

__all__ = [
    "Accessor",
    "LocaleStore",
    "Localizer",
    "RWLock",
    "render_template",
]
