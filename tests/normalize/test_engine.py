from __future__ import annotations

import pytest

from docformat.formats.definitions import ACCESSOR_TRANSFORMS
from docformat.formats.models import FileType, FormatDescriptor, RawMetadata, computed, first_of, key
from docformat.formats.parsers import StubParser
from docformat.normalize.engine import (
    FIELD_VALUE_SEPARATOR,
    apply_accessor_transform,
    apply_field_accessor,
    apply_field_transform,
    format_metadata,
    mapped_metadata,
)


def _descriptor(field_table: dict, field_map: dict | None = None) -> FormatDescriptor:
    return FormatDescriptor(
        file_type=FileType.EPUB,
        mime_types=("application/epub+zip",),
        file_extensions=(".epub",),
        field_table=field_table,
        field_map=field_map or {},
        parser_factory=StubParser,
        accessor_transforms=ACCESSOR_TRANSFORMS,
    )


def test_separator_is_en_space_black_circle_en_space() -> None:
    assert FIELD_VALUE_SEPARATOR == "\u2002\u25cf\u2002"


def test_priority_list_takes_first_non_blank_candidate() -> None:
    raw = RawMetadata({"description": "   ", "synopsis": "A short synopsis"})

    assert apply_field_accessor(raw, first_of("description", "synopsis")) == ["A short synopsis"]
    assert apply_field_accessor(raw, first_of("missing", "absent")) == []


def test_accessor_results_are_always_lists() -> None:
    raw = RawMetadata({"title": "Sample"})

    assert apply_field_accessor(raw, key("title")) == ["Sample"]
    assert apply_field_accessor(raw, computed("scalar", lambda _raw: "one")) == ["one"]
    assert apply_field_accessor(raw, computed("number", lambda _raw: 3)) == ["3"]
    assert apply_field_accessor(raw, computed("nothing", lambda _raw: None)) == []
    assert apply_field_accessor(raw, computed("mixed", lambda _raw: ["a", "", None, " b "])) == ["a", "b"]


def test_unknown_accessor_type_is_a_programmer_error() -> None:
    with pytest.raises(TypeError):
        apply_field_accessor(RawMetadata.empty(), "title")  # type: ignore[arg-type]


def test_field_transforms_match_by_name() -> None:
    assert apply_field_transform("Date", ["2001-02-03T10:00:00"]) == ["2001-02-03"]
    assert apply_field_transform("ModifiedDate", ["2001-02-03T10:15:00"]) == ["2001-02-03 10:15"]
    assert apply_field_transform("SignatureDateTime", ["2001-02-03T00:00:00"]) == ["2001-02-03"]
    assert apply_field_transform("Identifier", ["9780000000002", "bogus"]) == ["isbn:9780000000002"]
    assert apply_field_transform("Language", ["en-US", "Klingon"]) == ["eng", "Klingon"]
    assert apply_field_transform("Title", ["2001-02-03"]) == ["2001-02-03"]


def test_accessor_transform_runs_after_field_transform() -> None:
    descriptor = _descriptor({"Relation": key("relation")})

    assert apply_accessor_transform(descriptor, key("relation"), ["issn:0317-8471", "junk"]) == ["issn:03178471"]
    assert apply_accessor_transform(descriptor, first_of("relation"), ["junk"]) == ["junk"]


def test_multi_valued_display_field_is_joined_and_pluralized() -> None:
    raw = RawMetadata({"publisher": ["A", "B"], "subject": ["History"], "title": "Only"})
    descriptor = _descriptor(
        {"Title": key("title"), "Publisher": key("publisher"), "Subject": key("subject")},
    )

    display = format_metadata(raw, descriptor)

    assert display == {
        "Title": "Only",
        "Publishers": f"A{FIELD_VALUE_SEPARATOR}B",
        "Subject": ["History"],
    }
    assert list(display) == ["Title", "Publishers", "Subject"]


def test_display_labels_are_titleized() -> None:
    raw = RawMetadata({"date_copyrighted": "2004-05-06T08:00:00", "access_mode": ["textual", "visual"]})
    descriptor = _descriptor({"CopyrightDate": key("date_copyrighted"), "AccessMode": key("access_mode")})

    display = format_metadata(raw, descriptor)

    assert display["Copyright Date"] == "2004-05-06"
    assert display["Access Modes"] == ["textual", "visual"]


def test_unmapped_fields_appear_only_in_display_output() -> None:
    raw = RawMetadata({"title": "Sample", "narrator": "Reader"})
    descriptor = _descriptor({"Title": key("title"), "Narrator": key("narrator")}, {"Title": "dc_title"})

    assert format_metadata(raw, descriptor) == {"Title": "Sample", "Narrator": "Reader"}
    assert mapped_metadata(raw, descriptor) == {"dc_title": "Sample"}


def test_canonical_output_skips_display_only_transforms() -> None:
    raw = RawMetadata(
        {
            "modified": "2020-03-05T10:15:00",
            "identifier": ["isbn:9780000000002", "not-an-id"],
            "language": "en",
            "subject": ["History", "Maps"],
            "title": ["First", "Second"],
        }
    )
    descriptor = _descriptor(
        {
            "Title": key("title"),
            "ModifiedDate": key("modified"),
            "Identifier": key("identifier"),
            "Language": key("language"),
            "Subject": key("subject"),
        },
        {
            "Title": "dc_title",
            "ModifiedDate": "emma_lastRemediationDate",
            "Identifier": "dc_identifier",
            "Language": "dc_language",
            "Subject": "dc_subject",
        },
    )

    canonical = mapped_metadata(raw, descriptor)

    assert canonical == {
        "dc_title": "First",
        "emma_lastRemediationDate": "2020-03-05T10:15:00",
        "dc_identifier": ["isbn:9780000000002"],
        "dc_language": ["eng"],
        "dc_subject": ["History", "Maps"],
    }


def test_empty_raw_metadata_produces_empty_outputs() -> None:
    descriptor = _descriptor({"Title": key("title")}, {"Title": "dc_title"})

    assert format_metadata(RawMetadata.empty(), descriptor) == {}
    assert mapped_metadata(RawMetadata.empty(), descriptor) == {}
