"""Format detection, metadata parsing and field normalization for remediated documents."""

from .config import ExtractionSettings
from .errors import ConfigurationError, FormatError, IncompatibleSourceError, UnknownFormatError
from .extraction import MetadataExtractor, display_metadata, extract_metadata, parse_raw
from .formats import FileType, FormatDescriptor, FormatRegistry, RawMetadata, default_registry
from .sources import FileSource

__all__ = [
    "ConfigurationError",
    "ExtractionSettings",
    "FileSource",
    "FileType",
    "FormatDescriptor",
    "FormatError",
    "FormatRegistry",
    "IncompatibleSourceError",
    "MetadataExtractor",
    "RawMetadata",
    "UnknownFormatError",
    "default_registry",
    "display_metadata",
    "extract_metadata",
    "parse_raw",
]
