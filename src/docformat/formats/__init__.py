"""Format data model, static definitions and the format registry."""

from .definitions import build_default_descriptors
from .models import (
    AccessorSpec,
    Computed,
    DirectKey,
    FileType,
    FormatDescriptor,
    FormatParser,
    PriorityList,
    RawMetadata,
    computed,
    first_of,
    key,
)
from .registry import FormatRegistry, build_default_registry, default_registry

__all__ = [
    "AccessorSpec",
    "Computed",
    "DirectKey",
    "FileType",
    "FormatDescriptor",
    "FormatParser",
    "FormatRegistry",
    "PriorityList",
    "RawMetadata",
    "build_default_descriptors",
    "build_default_registry",
    "computed",
    "default_registry",
    "first_of",
    "key",
]
