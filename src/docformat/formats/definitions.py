"""Static format configuration: MIME types, extensions, field tables and field maps.

Field tables list display fields in display order. Field maps name the
shared search-record field each display field feeds.
"""

from __future__ import annotations

from typing import Mapping

from docformat.formats.models import (
    AccessorSpec,
    FileType,
    FormatDescriptor,
    ParserFactory,
    RawMetadata,
    Transform,
    computed,
    first_of,
    key,
)
from docformat.formats.parsers import DaisyParser, EpubParser, PdfParser, StubParser, WordParser
from docformat.formats.parsers.pdf_parser import split_keywords
from docformat.normalize.identifiers import normalize_identifiers
from docformat.normalize.transforms import format_dates, normalize_languages

# Transforms keyed by raw accessor name; these also shape canonical output.
ACCESSOR_TRANSFORMS: dict[str, Transform] = {
    "identifier": normalize_identifiers,
    "relation": normalize_identifiers,
    "language": normalize_languages,
    "publication_date": format_dates,
    "date_copyrighted": format_dates,
    "date": format_dates,
}


def _combined(*names: str):
    def _collect(raw: RawMetadata) -> list[str]:
        values: list[str] = []
        for name in names:
            values.extend(value for value in raw.lookup(name) if value not in values)
        return values

    return _collect


def _keywords(raw: RawMetadata) -> list[str]:
    words: list[str] = []
    for value in raw.lookup("keywords"):
        words.extend(word for word in split_keywords(value) if word not in words)
    return words


ACCESSIBILITY_FIELDS: dict[str, AccessorSpec] = {
    "AccessMode": key("access_mode"),
    "AccessModeSufficient": key("access_mode_sufficient"),
    "AccessibilityFeature": key("accessibility_feature"),
    "AccessibilityHazard": key("accessibility_hazard"),
    "AccessibilityControl": key("accessibility_control"),
    "AccessibilityAPI": key("accessibility_api"),
    "AccessibilitySummary": key("accessibility_summary"),
}

OCF_FIELDS: dict[str, AccessorSpec] = {
    "Title": key("title"),
    "Creator": computed("creator", _combined("author", "creator", "editor")),
    "Author": key("author"),
    "Editor": key("editor"),
    "Contributor": key("contributor"),
    "Language": key("language"),
    "Date": key("date"),
    "PublicationDate": key("publication_date"),
    "ProductionDate": key("produced_date"),
    "ModifiedDate": key("modified"),
    "CopyrightDate": key("date_copyrighted"),
    "Publisher": key("publisher"),
    "Subject": key("subject"),
    "Type": key("type"),
    "Format": key("format"),
    "Rights": key("rights"),
    "Source": key("source"),
    "Coverage": key("coverage"),
    "Relation": key("relation"),
    "Description": first_of("description", "synopsis"),
    "Identifier": key("identifier"),
    **ACCESSIBILITY_FIELDS,
    "FormatVersion": key("format_version"),
    "CoverImage": key("cover_image"),
}

DAISY_FIELDS: dict[str, AccessorSpec] = {
    **OCF_FIELDS,
    "Narrator": key("narrator"),
    "Producer": key("producer"),
    "Revision": key("revision"),
    "RevisionDate": key("revision_date"),
    "RevisionDescription": key("revision_description"),
    "SourceDate": key("source_date"),
    "SourceEdition": key("source_edition"),
    "SourcePublisher": key("source_publisher"),
    "SourceRights": key("source_rights"),
    "SourceTitle": key("source_title"),
    "TotalTime": key("total_time"),
    "AudioFormat": key("audio_format"),
    "MultimediaType": key("multimedia_type"),
    "MultimediaContent": key("multimedia_content"),
    "Depth": key("depth"),
    "TotalPageCount": key("total_page_count"),
    "MaxPageNumber": key("max_page_number"),
    "Generator": key("generator"),
    "Uid": key("uid"),
}

ACCESSIBILITY_MAP: dict[str, str] = {
    "AccessMode": "s_accessMode",
    "AccessModeSufficient": "s_accessModeSufficient",
    "AccessibilityFeature": "s_accessibilityFeature",
    "AccessibilityHazard": "s_accessibilityHazard",
    "AccessibilityControl": "s_accessibilityControl",
    "AccessibilityAPI": "s_accessibilityAPI",
    "AccessibilitySummary": "s_accessibilitySummary",
}

OCF_MAP: dict[str, str] = {
    "Title": "dc_title",
    "Creator": "dc_creator",
    "Identifier": "dc_identifier",
    "Publisher": "dc_publisher",
    "Language": "dc_language",
    "Description": "dc_description",
    "Subject": "dc_subject",
    "Type": "dc_type",
    "Rights": "dc_rights",
    "Relation": "dc_relation",
    "CopyrightDate": "dcterms_dateCopyright",
    "PublicationDate": "emma_publicationDate",
    "FormatVersion": "emma_formatVersion",
    **ACCESSIBILITY_MAP,
}

PDF_FIELDS: dict[str, AccessorSpec] = {
    "Title": key("title"),
    "Author": key("author"),
    "Subject": key("subject"),
    "Keywords": key("keywords"),
    "Creator": key("creator"),
    "Producer": key("producer"),
    "CreationDate": key("creation_date"),
    "ModifiedDate": key("mod_date"),
    "PdfVersion": key("pdf_version"),
    "PageCount": key("page_count"),
}

PDF_MAP: dict[str, str] = {
    "Title": "dc_title",
    "Author": "dc_creator",
    "Subject": "dc_description",
    "Keywords": "dc_subject",
    "PdfVersion": "emma_formatVersion",
}

WORD_FIELDS: dict[str, AccessorSpec] = {
    "Title": key("title"),
    "Creator": key("creator"),
    "Subject": key("subject"),
    "Description": key("description"),
    "Keywords": computed("keywords", _keywords),
    "Category": key("category"),
    "Language": key("language"),
    "Identifier": key("identifier"),
    "CreationDate": key("created"),
    "ModifiedDate": key("modified"),
    "LastModifiedBy": key("last_modified_by"),
    "Revision": key("revision"),
    "Pages": key("pages"),
    "Words": key("words"),
    "Company": key("company"),
    "Application": key("application"),
    "AppVersion": key("app_version"),
}

WORD_MAP: dict[str, str] = {
    "Title": "dc_title",
    "Creator": "dc_creator",
    "Description": "dc_description",
    "Keywords": "dc_subject",
    "Language": "dc_language",
    "Identifier": "dc_identifier",
}


def _descriptor(
    file_type: FileType,
    mime_types: tuple[str, ...],
    file_extensions: tuple[str, ...],
    parser_factory: ParserFactory,
    field_table: Mapping[str, AccessorSpec] | None = None,
    field_map: Mapping[str, str] | None = None,
) -> FormatDescriptor:
    return FormatDescriptor(
        file_type=file_type,
        mime_types=mime_types,
        file_extensions=file_extensions,
        field_table=field_table or {},
        field_map=field_map or {},
        parser_factory=parser_factory,
        accessor_transforms=ACCESSOR_TRANSFORMS,
    )


def brf_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.BRF, ("text/x-brf",), (".brf",), StubParser)


def braille_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.BRAILLE, ("text/x-braille", "application/x-braille"), (".brl", ".bra"), StubParser)


def daisy_descriptor() -> FormatDescriptor:
    return _descriptor(
        FileType.DAISY,
        ("application/x-daisy", "application/zip"),
        (".zip",),
        DaisyParser,
        DAISY_FIELDS,
        OCF_MAP,
    )


def daisy_audio_descriptor() -> FormatDescriptor:
    return _descriptor(
        FileType.DAISY_AUDIO,
        ("application/x-daisy-audio", "application/zip"),
        (".zip",),
        DaisyParser,
        DAISY_FIELDS,
        OCF_MAP,
    )


def epub_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.EPUB, ("application/epub+zip",), (".epub",), EpubParser, OCF_FIELDS, OCF_MAP)


def kurzweil_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.KURZWEIL, ("application/x-kurzweil",), (".kes",), StubParser)


def pdf_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.PDF, ("application/pdf",), (".pdf",), PdfParser, PDF_FIELDS, PDF_MAP)


def rtf_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.RTF, ("application/rtf", "text/rtf"), (".rtf",), StubParser)


def tactile_descriptor() -> FormatDescriptor:
    return _descriptor(FileType.TACTILE, ("application/x-tactile-graphics",), (".tgr",), StubParser)


def word_descriptor() -> FormatDescriptor:
    return _descriptor(
        FileType.WORD,
        (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/msword",
        ),
        (".docx", ".doc"),
        WordParser,
        WORD_FIELDS,
        WORD_MAP,
    )


def build_default_descriptors() -> list[FormatDescriptor]:
    """Descriptors for every supported format, in registration order."""

    return [
        brf_descriptor(),
        braille_descriptor(),
        daisy_descriptor(),
        daisy_audio_descriptor(),
        epub_descriptor(),
        kurzweil_descriptor(),
        pdf_descriptor(),
        rtf_descriptor(),
        tactile_descriptor(),
        word_descriptor(),
    ]
