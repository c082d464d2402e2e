"""Field normalization: display and canonical metadata from raw parser output."""

from .engine import (
    FIELD_ALWAYS_ARRAY,
    FIELD_VALUE_SEPARATOR,
    apply_field_accessor,
    apply_field_transform,
    format_metadata,
    mapped_metadata,
)
from .identifiers import PublicationIdentifier, normalize_identifiers, parse_identifier
from .transforms import format_date, format_date_time, normalize_language

__all__ = [
    "FIELD_ALWAYS_ARRAY",
    "FIELD_VALUE_SEPARATOR",
    "PublicationIdentifier",
    "apply_field_accessor",
    "apply_field_transform",
    "format_date",
    "format_date_time",
    "format_metadata",
    "mapped_metadata",
    "normalize_identifiers",
    "normalize_language",
    "parse_identifier",
]
