from __future__ import annotations

import pytest

from docformat.errors import ConfigurationError
from docformat.formats.models import (
    DirectKey,
    FileType,
    FormatDescriptor,
    PriorityList,
    RawMetadata,
    accessor_key,
    computed,
    first_of,
    key,
)
from docformat.formats.parsers import StubParser


def _descriptor(**overrides: object) -> FormatDescriptor:
    options: dict[str, object] = {
        "file_type": FileType.RTF,
        "mime_types": ("application/rtf",),
        "file_extensions": (".rtf",),
        "field_table": {"Title": key("title")},
        "field_map": {"Title": "dc_title"},
        "parser_factory": StubParser,
    }
    options.update(overrides)
    return FormatDescriptor(**options)  # type: ignore[arg-type]


def test_raw_metadata_wraps_every_value_in_a_list() -> None:
    raw = RawMetadata({"title": "  Sample ", "subject": ["a", "", "b", "a"], "blank": "   ", "none": None})

    assert raw["title"] == ("Sample",)
    assert raw.lookup("subject") == ["a", "b"]
    assert "blank" not in raw
    assert "none" not in raw
    assert raw.lookup("missing") == []
    assert len(RawMetadata.empty()) == 0


def test_merged_appends_values_from_the_right() -> None:
    left = RawMetadata({"subject": ["a"], "title": "T"})

    merged = left.merged({"subject": ["b", "a"], "depth": ["2"]})

    assert merged.lookup("subject") == ["a", "b"]
    assert merged.lookup("title") == ["T"]
    assert merged.lookup("depth") == ["2"]
    assert left.lookup("subject") == ["a"]


def test_accessor_builders() -> None:
    spec = first_of("description", key("synopsis"))

    assert spec == PriorityList((DirectKey("description"), DirectKey("synopsis")))
    assert accessor_key(key("title")) == "title"
    assert accessor_key(computed("creator", lambda raw: [])) == "creator"
    assert accessor_key(spec) is None


def test_descriptor_invariants_are_validated() -> None:
    with pytest.raises(ConfigurationError, match="MIME"):
        _descriptor(mime_types=())
    with pytest.raises(ConfigurationError, match="extension"):
        _descriptor(file_extensions=())
    with pytest.raises(ConfigurationError, match="Creator"):
        _descriptor(field_map={"Title": "dc_title", "Creator": "dc_creator"})


def test_descriptor_is_read_only() -> None:
    descriptor = _descriptor()

    with pytest.raises(TypeError):
        descriptor.field_table["Extra"] = key("extra")  # type: ignore[index]
    with pytest.raises(AttributeError):
        descriptor.mime_types = ("text/rtf",)  # type: ignore[misc]


def test_file_type_coerce() -> None:
    assert FileType.coerce("daisyAudio") is FileType.DAISY_AUDIO
    assert FileType.coerce(FileType.PDF) is FileType.PDF
    assert FileType.coerce("DAISYAUDIO") is None
