"""Artifact emission: locale enumeration and per-key accessor specifications.

Python 3.13+.
"""

from .artifact import (
    AccessorSpec,
    Artifact,
    BoundSegment,
    LocaleEnum,
    LocaleInfo,
    LocaleRef,
    Parameter,
    Substitution,
    TemplateBinding,
)
from .emitter import build_parameters, emit, emit_accessor, emit_artifact

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
    "build_parameters",
    "emit",
    "emit_accessor",
    "emit_artifact",
]
