"""Data model shared by the registry, the parsers and the normalization engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Mapping, Protocol, Union

from docformat.errors import ConfigurationError

if TYPE_CHECKING:
    from docformat.config import ExtractionSettings
    from docformat.sources import FileSource


class FileType(str, Enum):
    """Tags for the supported remediated file formats."""

    BRF = "brf"
    BRAILLE = "braille"
    DAISY = "daisy"
    DAISY_AUDIO = "daisyAudio"
    EPUB = "epub"
    KURZWEIL = "kurzweil"
    PDF = "pdf"
    RTF = "rtf"
    TACTILE = "tactile"
    WORD = "word"

    @classmethod
    def coerce(cls, value: "FileType | str") -> "FileType | None":
        """Return the member for a tag string, or ``None`` when unknown."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def _clean_values(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    items = [value] if isinstance(value, str) else value
    result: list[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return tuple(result)


class RawMetadata(Mapping[str, tuple[str, ...]]):
    """Per-parse key/value output; every value is an ordered, de-duplicated list.

    Instances are built fresh by one parser invocation and not modified
    afterwards. :meth:`merged` returns a new instance.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str | Iterable[str]] | None = None) -> None:
        cleaned: dict[str, tuple[str, ...]] = {}
        for key, value in (values or {}).items():
            items = _clean_values(value)
            if items:
                cleaned[str(key)] = items
        self._values = cleaned

    @classmethod
    def empty(cls) -> "RawMetadata":
        return cls()

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"

    def lookup(self, key: str) -> list[str]:
        """Values stored under ``key`` (empty list when absent)."""

        return list(self._values.get(key, ()))

    def merged(self, other: Mapping[str, Iterable[str]]) -> "RawMetadata":
        """Right-biased merge: values from ``other`` are appended, not replaced."""

        combined: dict[str, list[str]] = {key: list(values) for key, values in self._values.items()}
        for key, values in other.items():
            combined.setdefault(key, []).extend(_clean_values(values))
        return RawMetadata(combined)


@dataclass(frozen=True, slots=True)
class DirectKey:
    """Look up a single raw metadata key."""

    name: str


@dataclass(frozen=True, slots=True)
class PriorityList:
    """Alternative accessors; the first one yielding a non-blank value wins."""

    candidates: tuple["AccessorSpec", ...]


@dataclass(frozen=True, slots=True)
class Computed:
    """Derive a value from the whole raw metadata object."""

    name: str
    function: Callable[[RawMetadata], object] = field(compare=False)


AccessorSpec = Union[DirectKey, PriorityList, Computed]

Transform = Callable[[list[str]], list[str]]


def key(name: str) -> DirectKey:
    return DirectKey(name)


def first_of(*candidates: str | AccessorSpec) -> PriorityList:
    """Build a :class:`PriorityList`; bare strings become :class:`DirectKey`."""

    specs = tuple(DirectKey(item) if isinstance(item, str) else item for item in candidates)
    return PriorityList(specs)


def computed(name: str, function: Callable[[RawMetadata], object]) -> Computed:
    return Computed(name=name, function=function)


def accessor_key(spec: AccessorSpec) -> str | None:
    """Name under which accessor-keyed transforms are registered."""

    if isinstance(spec, (DirectKey, Computed)):
        return spec.name
    return None


class FormatParser(Protocol):
    """Common parser contract: read the borrowed source once, return raw metadata."""

    def parse(self) -> RawMetadata:
        """Extract raw metadata; an unreadable source yields an empty result."""


ParserFactory = Callable[["FileSource", "ExtractionSettings"], FormatParser]


@dataclass(frozen=True, slots=True)
class FormatDescriptor:
    """Immutable configuration for one file type."""

    file_type: FileType
    mime_types: tuple[str, ...]
    file_extensions: tuple[str, ...]
    field_table: Mapping[str, AccessorSpec]
    field_map: Mapping[str, str]
    parser_factory: ParserFactory
    accessor_transforms: Mapping[str, Transform] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.mime_types:
            raise ConfigurationError(f"{self.file_type.value}: at least one MIME type is required")
        if not self.file_extensions:
            raise ConfigurationError(f"{self.file_type.value}: at least one file extension is required")
        unmapped = [name for name in self.field_map if name not in self.field_table]
        if unmapped:
            missing = ", ".join(unmapped)
            raise ConfigurationError(f"{self.file_type.value}: field_map entries without a field rule: {missing}")

        object.__setattr__(self, "mime_types", tuple(self.mime_types))
        object.__setattr__(self, "file_extensions", tuple(self.file_extensions))
        object.__setattr__(self, "field_table", MappingProxyType(dict(self.field_table)))
        object.__setattr__(self, "field_map", MappingProxyType(dict(self.field_map)))
        object.__setattr__(self, "accessor_transforms", MappingProxyType(dict(self.accessor_transforms)))

    @property
    def preferred_mime_type(self) -> str:
        return self.mime_types[0]

    @property
    def preferred_extension(self) -> str:
        return self.file_extensions[0]
