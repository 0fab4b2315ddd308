"""Compiled artifact data model.

An Artifact is the complete output of a compile: the ordered locale
enumeration, a factory for the thread-safe current-locale store, and one
AccessorSpec per key. It is plain immutable data. Rendering it (generating
source, or dispatching at runtime through ``loctable.runtime.Localizer``)
is left to consumers.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from loctable.core import Name
from loctable.diagnostics import (
    ErrorTemplate,
    LexicalError,
    LocaleStoreError,
    UnknownKeyError,
)
from loctable.enums import ParameterKind
from loctable.locale_utils import get_babel_locale
from loctable.validation import TextSegment

if TYPE_CHECKING:
    from collections.abc import Iterator

    from babel import Locale

    from loctable.runtime import LocaleStore

__all__ = [
    "AccessorSpec",
    "Artifact",
    "BoundSegment",
    "LocaleEnum",
    "LocaleInfo",
    "LocaleRef",
    "Parameter",
    "Substitution",
    "TemplateBinding",
]


# ============================================================================
# LOCALES
# ============================================================================


@dataclass(frozen=True, slots=True)
class LocaleInfo:
    """One member of the locale enumeration.

    Attributes:
        index: Declaration position (0 = default locale)
        name: Folded locale Name
    """

    index: int
    name: Name

    def __str__(self) -> str:
        return self.name.value

    @property
    def type_name(self) -> str:
        """CamelCase member name (``en_us`` -> ``EnUs``)."""
        return self.name.type_name

    @property
    def is_default(self) -> bool:
        """True for the first declared locale."""
        return self.index == 0

    @property
    def babel_locale(self) -> Locale | None:
        """Babel Locale for this name, or None if it is not a CLDR locale."""
        return get_babel_locale(self.name.value)


LocaleRef: TypeAlias = LocaleInfo | Name | str
"""Anything LocaleEnum.lookup() accepts."""


@dataclass(frozen=True, slots=True)
class LocaleEnum:
    """Ordered, closed set of declared locales.

    Example:
        >>> locales = LocaleEnum.from_names([Name("en"), Name("se")])
        >>> locales.default.name.value
        'en'
        >>> locales.lookup("SE").index
        1
    """

    members: tuple[LocaleInfo, ...]

    def __post_init__(self) -> None:
        """Validate member ordering.

        Raises:
            ValueError: If empty, or if member indices are not 0..n-1
        """
        if not self.members:
            msg = "LocaleEnum requires at least one locale"
            raise ValueError(msg)
        for position, member in enumerate(self.members):
            if member.index != position:
                msg = f"LocaleEnum member {member} has index {member.index}, expected {position}"
                raise ValueError(msg)

    @classmethod
    def from_names(cls, names: tuple[Name, ...] | list[Name]) -> LocaleEnum:
        """Build the enumeration from locale Names in declaration order."""
        return cls(tuple(LocaleInfo(index, name) for index, name in enumerate(names)))

    @property
    def default(self) -> LocaleInfo:
        """The default locale (index 0)."""
        return self.members[0]

    @property
    def names(self) -> tuple[str, ...]:
        """Locale name strings in declaration order."""
        return tuple(member.name.value for member in self.members)

    def __iter__(self) -> Iterator[LocaleInfo]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, index: int) -> LocaleInfo:
        return self.members[index]

    def __contains__(self, locale: object) -> bool:
        if not isinstance(locale, LocaleInfo | Name | str):
            return False
        try:
            self.lookup(locale)
        except LocaleStoreError:
            return False
        return True

    def lookup(self, locale: LocaleRef) -> LocaleInfo:
        """Resolve a locale reference to its enumeration member.

        Strings are folded like any Name, so "EN-us" finds "en_us".

        Raises:
            LocaleStoreError: UNKNOWN_LOCALE if the locale is not declared
        """
        if isinstance(locale, LocaleInfo):
            if locale.index < len(self.members) and self.members[locale.index] == locale:
                return locale
            raise LocaleStoreError(ErrorTemplate.unknown_locale(str(locale)))

        if isinstance(locale, str):
            try:
                locale = Name(locale)
            except LexicalError as e:
                raise LocaleStoreError(ErrorTemplate.unknown_locale(locale)) from e

        for member in self.members:
            if member.name == locale:
                return member
        raise LocaleStoreError(ErrorTemplate.unknown_locale(locale.value))


# ============================================================================
# ACCESSORS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Parameter:
    """One accessor parameter.

    Attributes:
        name: Parameter identifier (named placeholders keep their name,
            positional ones become ``arg<N>``)
        placeholder: Placeholder argument as written in templates ("name", "0")
        kind: NAMED or POSITIONAL
    """

    name: str
    placeholder: str
    kind: ParameterKind


@dataclass(frozen=True, slots=True)
class Substitution:
    """A placeholder bound to the parameter that fills it."""

    parameter: Parameter
    format_spec: str = ""


BoundSegment: TypeAlias = TextSegment | Substitution
"""Element of a bound template."""


@dataclass(frozen=True, slots=True)
class TemplateBinding:
    """One locale's template with each placeholder resolved to a parameter.

    Attributes:
        locale: Locale the template belongs to
        template: Original template text
        segments: Literal text and substitutions in template order
    """

    locale: LocaleInfo
    template: str
    segments: tuple[BoundSegment, ...]


@dataclass(frozen=True, slots=True)
class AccessorSpec:
    """Everything needed to render one key, independent of binding strategy.

    Attributes:
        id: Key identifier
        parameters: Named parameters, then positional ones, each group in
            placeholder order
        templates: One binding per locale, in locale order
        comment: Key comment (with locale notes), or None
    """

    id: Name
    parameters: tuple[Parameter, ...]
    templates: tuple[TemplateBinding, ...]
    comment: str | None = None

    @property
    def named_parameters(self) -> tuple[Parameter, ...]:
        """Parameters bound by identifier."""
        return tuple(p for p in self.parameters if p.kind is ParameterKind.NAMED)

    @property
    def positional_parameters(self) -> tuple[Parameter, ...]:
        """``arg<N>`` parameters, in placeholder order."""
        return tuple(p for p in self.parameters if p.kind is ParameterKind.POSITIONAL)

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Parameter identifiers in declaration order."""
        return tuple(p.name for p in self.parameters)

    def template_for(self, locale: LocaleInfo) -> TemplateBinding:
        """Binding for ``locale``, selected by its enumeration index."""
        return self.templates[locale.index]


# ============================================================================
# ARTIFACT
# ============================================================================


@dataclass(frozen=True, slots=True)
class Artifact:
    """Complete, immutable compile output.

    Attributes:
        locales: Locale enumeration (index 0 = default)
        accessors: One AccessorSpec per key, in key declaration order
    """

    locales: LocaleEnum
    accessors: tuple[AccessorSpec, ...]
    _by_id: dict[Name, AccessorSpec] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        """Index accessors by key id."""
        object.__setattr__(self, "_by_id", {spec.id: spec for spec in self.accessors})

    @property
    def keys(self) -> tuple[str, ...]:
        """Key ids in declaration order."""
        return tuple(spec.id.value for spec in self.accessors)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            try:
                key = Name(key)
            except LexicalError:
                return False
        return isinstance(key, Name) and key in self._by_id

    def accessor(self, key: Name | str) -> AccessorSpec:
        """Look up the accessor specification for a key.

        Raises:
            UnknownKeyError: If the key was not compiled
        """
        try:
            name = key if isinstance(key, Name) else Name(key)
        except LexicalError as e:
            raise UnknownKeyError(ErrorTemplate.unknown_key(str(key))) from e
        spec = self._by_id.get(name)
        if spec is None:
            raise UnknownKeyError(ErrorTemplate.unknown_key(name.value))
        return spec

    def create_store(self, initial: LocaleRef | None = None) -> LocaleStore:
        """Create a new thread-safe current-locale store for this artifact.

        Args:
            initial: Starting locale (default: the default locale)
        """
        from loctable.runtime import LocaleStore  # noqa: PLC0415 - circular

        return LocaleStore(self.locales, initial)
