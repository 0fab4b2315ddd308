"""Runtime dispatch over a compiled Artifact.

Binds each AccessorSpec to a callable Accessor and exposes them by key:

    >>> ui = Localizer(compile_source(SOURCE))
    >>> ui.greet(name="Ada")
    'Hi Ada!'
    >>> ui.set_locale("se")
    >>> ui.greet(name="Ada")
    'Hej Ada!'
    >>> ui.items.format("en", 3)
    '3 items'

Every placeholder is an explicit parameter. Positional parameters
(``arg0``, ``arg1``...) may be passed positionally or by keyword; named
parameters are keyword-only. Values are rendered with the builtin
``format(value, format_spec)``, so ``{0:>4}`` pads and ``{price:.2f}``
rounds exactly like str.format.

Thread Safety:
    Accessors are immutable. The only shared mutable state is the
    LocaleStore, which is thread-safe.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from loctable.diagnostics import UnknownKeyError
from loctable.runtime.locale_store import LocaleStore
from loctable.validation import TextSegment

if TYPE_CHECKING:
    from collections.abc import Mapping

    from loctable.core import Name
    from loctable.emit import AccessorSpec, Artifact, LocaleInfo, LocaleRef, Parameter
    from loctable.emit.artifact import TemplateBinding

__all__ = ["Accessor", "Localizer", "render_template"]

logger = logging.getLogger(__name__)


def render_template(binding: TemplateBinding, values: Mapping[str, object]) -> str:
    """Render a bound template with values keyed by parameter name.

    Raises:
        KeyError: If a parameter used by the template has no value
        ValueError: If a format suffix does not suit its value
    """
    parts: list[str] = []
    for segment in binding.segments:
        if isinstance(segment, TextSegment):
            parts.append(segment.text)
        else:
            parts.append(format(values[segment.parameter.name], segment.format_spec))
    return "".join(parts)


class Accessor:
    """Callable rendering one key in the current or an explicit locale."""

    __slots__ = ("_positional", "_spec", "_store")

    def __init__(self, spec: AccessorSpec, store: LocaleStore) -> None:
        """Bind an accessor specification to a locale store."""
        self._spec = spec
        self._store = store
        self._positional: tuple[Parameter, ...] = spec.positional_parameters

    @property
    def key(self) -> Name:
        """Key identifier."""
        return self._spec.id

    @property
    def spec(self) -> AccessorSpec:
        """Underlying accessor specification."""
        return self._spec

    @property
    def comment(self) -> str | None:
        """Key comment, including any per-locale notes."""
        return self._spec.comment

    def __call__(self, *args: object, **kwargs: object) -> str:
        """Render in the store's current locale.

        Raises:
            TypeError: On missing, surplus or unknown arguments
            LocaleStoreError: If the current locale cannot be read
        """
        return self._render(self._store.get(), args, kwargs)

    def format(self, locale: LocaleRef, /, *args: object, **kwargs: object) -> str:
        """Render in an explicit locale, ignoring the store.

        Raises:
            TypeError: On missing, surplus or unknown arguments
            LocaleStoreError: UNKNOWN_LOCALE if ``locale`` is not declared
        """
        return self._render(self._store.locales.lookup(locale), args, kwargs)

    def _render(
        self, locale: LocaleInfo, args: tuple[object, ...], kwargs: Mapping[str, object]
    ) -> str:
        values = self._bind(args, kwargs)
        return render_template(self._spec.template_for(locale), values)

    def _bind(self, args: tuple[object, ...], kwargs: Mapping[str, object]) -> dict[str, object]:
        """Map call arguments to parameter names, mirroring Python's call errors."""
        key = self._spec.id.value
        if len(args) > len(self._positional):
            msg = (
                f"{key}() takes {len(self._positional)} positional arguments "
                f"but {len(args)} were given"
            )
            raise TypeError(msg)

        values: dict[str, object] = {
            parameter.name: value for parameter, value in zip(self._positional, args, strict=False)
        }
        known = self._spec.parameter_names
        for name, value in kwargs.items():
            if name not in known:
                msg = f"{key}() got an unexpected keyword argument '{name}'"
                raise TypeError(msg)
            if name in values:
                msg = f"{key}() got multiple values for argument '{name}'"
                raise TypeError(msg)
            values[name] = value

        missing = [name for name in known if name not in values]
        if missing:
            listed = ", ".join(f"'{name}'" for name in missing)
            msg = f"{key}() missing {len(missing)} required argument(s): {listed}"
            raise TypeError(msg)
        return values

    def __repr__(self) -> str:
        params = ", ".join(self._spec.parameter_names)
        return f"Accessor({self._spec.id.value}({params}))"


class Localizer:
    """Runtime table of accessors sharing one current-locale store.

    Keys are available as attributes (``ui.greet``) and through get().
    Keys that clash with Localizer's own attributes (``get``, ``text``,
    ``locale``...) are reachable through get() only.
    """

    __slots__ = ("_accessors", "_artifact", "_store")

    def __init__(self, artifact: Artifact, store: LocaleStore | None = None) -> None:
        """Initialize Localizer.

        Args:
            artifact: Compiled artifact
            store: Current-locale store (default: a new store at the
                default locale). Must be bound to ``artifact.locales``.

        Raises:
            ValueError: If ``store`` belongs to a different enumeration
        """
        if store is None:
            store = artifact.create_store()
        elif store.locales != artifact.locales:
            msg = "LocaleStore is bound to a different locale enumeration"
            raise ValueError(msg)
        self._artifact = artifact
        self._store = store
        self._accessors: dict[Name, Accessor] = {
            spec.id: Accessor(spec, store) for spec in artifact.accessors
        }
        logger.debug("Localizer ready with %d accessors", len(self._accessors))

    @classmethod
    def from_environment(
        cls, artifact: Artifact, environ: Mapping[str, str] | None = None
    ) -> Localizer:
        """Create a Localizer whose initial locale is negotiated from the environment."""
        return cls(artifact, LocaleStore.from_environment(artifact.locales, environ))

    @property
    def artifact(self) -> Artifact:
        """Compiled artifact."""
        return self._artifact

    @property
    def store(self) -> LocaleStore:
        """Shared current-locale store."""
        return self._store

    @property
    def locale(self) -> LocaleInfo:
        """Current locale."""
        return self._store.get()

    def set_locale(self, locale: LocaleRef) -> None:
        """Switch the current locale for every accessor of this Localizer."""
        self._store.set(locale)

    @property
    def keys(self) -> tuple[str, ...]:
        """Key ids in declaration order."""
        return self._artifact.keys

    def __contains__(self, key: object) -> bool:
        return key in self._artifact

    def get(self, key: Name | str) -> Accessor:
        """Return the accessor for ``key``.

        Raises:
            UnknownKeyError: If the key was not compiled
        """
        return self._accessors[self._artifact.accessor(key).id]

    def text(self, key: Name | str, /, *args: object, **kwargs: object) -> str:
        """Render ``key`` in the current locale."""
        return self.get(key)(*args, **kwargs)

    def __getattr__(self, name: str) -> Accessor:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get(name)
        except UnknownKeyError as e:
            msg = f"{type(self).__name__!r} object has no key {name!r}"
            raise AttributeError(msg) from e

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self.keys})
