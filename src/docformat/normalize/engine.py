"""Field normalization: raw parser output -> display metadata / canonical metadata."""

from __future__ import annotations

import re
from typing import Iterable, Pattern, Union

from docformat.formats.models import (
    AccessorSpec,
    Computed,
    DirectKey,
    FormatDescriptor,
    PriorityList,
    RawMetadata,
    Transform,
    accessor_key,
)
from docformat.normalize.identifiers import normalize_identifiers
from docformat.normalize.transforms import (
    format_date_times,
    format_dates,
    normalize_languages,
    pluralize,
    titleize,
)

EN_SPACE = "\u2002"
BLACK_CIRCLE = "\u25cf"

# Separator between values of a multi-valued display field.
FIELD_VALUE_SEPARATOR = f"{EN_SPACE}{BLACK_CIRCLE}{EN_SPACE}"

# Display fields rendered as a list even when there is a single value.
FIELD_ALWAYS_ARRAY = frozenset(
    {
        "AccessibilityControl",
        "AccessibilityFeature",
        "AccessibilityHazard",
        "AccessMode",
        "AccessModeSufficient",
        "Author",
        "Contributor",
        "CoverImage",
        "Creator",
        "Keywords",
        "Subject",
    }
)

FieldMatcher = Union[str, Pattern[str]]

# Display-only transforms keyed by display field name; first match wins.
FIELD_TRANSFORMS: tuple[tuple[FieldMatcher, Transform], ...] = (
    ("Date", format_dates),
    ("CopyrightDate", format_dates),
    ("PublicationDate", format_dates),
    ("CreationDate", format_date_times),
    ("ModifiedDate", format_date_times),
    ("ProductionDate", format_date_times),
    ("RevisionDate", format_date_times),
    ("SourceDate", format_date_times),
    ("SubmissionDate", format_date_times),
    (re.compile(r"DateTime$"), format_date_times),
    ("Identifier", normalize_identifiers),
    ("Language", normalize_languages),
)

# Canonical schema fields that hold a list of values.
MULTI_VALUED_SCHEMA_FIELDS = frozenset(
    {
        "dc_creator",
        "dc_identifier",
        "dc_language",
        "dc_relation",
        "dc_subject",
        "emma_formatFeature",
        "s_accessibilityAPI",
        "s_accessibilityControl",
        "s_accessibilityFeature",
        "s_accessibilityHazard",
        "s_accessMode",
        "s_accessModeSufficient",
    }
)

DisplayMetadata = dict[str, Union[str, list[str]]]
CanonicalMetadata = dict[str, Union[str, list[str], bool]]


def _as_list(result: object) -> list[str]:
    if result is None:
        return []
    if isinstance(result, (str, bytes)) or not isinstance(result, Iterable):
        items: Iterable[object] = [result]
    else:
        items = result
    values: list[str] = []
    for item in items:
        if item is None:
            continue
        text = item.decode() if isinstance(item, bytes) else str(item)
        if text.strip():
            values.append(text.strip())
    return values


def apply_field_accessor(raw: RawMetadata, accessor: AccessorSpec) -> list[str]:
    """Resolve ``accessor`` against ``raw``; the result is always a list."""

    if isinstance(accessor, PriorityList):
        for candidate in accessor.candidates:
            values = apply_field_accessor(raw, candidate)
            if values:
                return values
        return []
    if isinstance(accessor, Computed):
        return _as_list(accessor.function(raw))
    if isinstance(accessor, DirectKey):
        return _as_list(raw.lookup(accessor.name))
    raise TypeError(f"Unsupported accessor: {accessor!r}")


def _matches(matcher: FieldMatcher, name: str) -> bool:
    if isinstance(matcher, str):
        return matcher == name
    return matcher.search(name) is not None


def apply_field_transform(field: str, values: list[str]) -> list[str]:
    for matcher, transform in FIELD_TRANSFORMS:
        if _matches(matcher, field):
            return transform(values)
    return values


def apply_accessor_transform(descriptor: FormatDescriptor, accessor: AccessorSpec, values: list[str]) -> list[str]:
    name = accessor_key(accessor)
    transform = descriptor.accessor_transforms.get(name) if name else None
    return transform(values) if transform else values


def format_metadata(raw: RawMetadata, descriptor: FormatDescriptor) -> DisplayMetadata:
    """Human-labelled metadata in field-table order, for presentation."""

    result: DisplayMetadata = {}
    if not raw:
        return result

    for field, accessor in descriptor.field_table.items():
        values = apply_field_accessor(raw, accessor)
        if not values:
            continue
        values = apply_field_transform(field, values)
        values = apply_accessor_transform(descriptor, accessor, values)
        if not values:
            continue
        label = titleize(field)
        if len(values) > 1:
            label = pluralize(label)
        if field in FIELD_ALWAYS_ARRAY:
            result[label] = values
        else:
            result[label] = FIELD_VALUE_SEPARATOR.join(values)
    return result


def mapped_metadata(raw: RawMetadata, descriptor: FormatDescriptor) -> CanonicalMetadata:
    """Metadata keyed by shared schema field names, for indexing.

    Only accessor-keyed transforms apply here; the display transforms are
    specific to presentation.
    """

    result: CanonicalMetadata = {}
    if not raw:
        return result

    for field, schema_field in descriptor.field_map.items():
        accessor = descriptor.field_table[field]
        values = apply_field_accessor(raw, accessor)
        if not values:
            continue
        values = apply_accessor_transform(descriptor, accessor, values)
        if not values:
            continue
        if schema_field in MULTI_VALUED_SCHEMA_FIELDS:
            result[schema_field] = values
        else:
            result[schema_field] = values[0]
    return result
