"""Value transforms applied to resolved field values."""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
import logging
import re

import dateparser

logger = logging.getLogger(__name__)

_DATEPARSER_LANGUAGES = ["en"]
_DATEPARSER_SETTINGS = {"REQUIRE_PARTS": ["day", "month", "year"], "STRICT_PARSING": True}
_MIDNIGHT_SUFFIX_RE = re.compile(r" 00:00$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def parse_datetime(value: str) -> datetime | None:
    """Strict ISO-8601 first, then a flexible parse that needs a full calendar day.

    Partial or relative values ("2004", "May", "n.d.") give ``None``.
    """

    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dateparser.parse(text, languages=_DATEPARSER_LANGUAGES, settings=_DATEPARSER_SETTINGS)
    except (ValueError, OverflowError) as exc:
        logger.debug("Unparseable date %r: %s", text, exc)
        return None


def format_date(value: str | date | datetime) -> str:
    """Render as ``YYYY-MM-DD``; an unparseable string is returned unchanged."""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    parsed = parse_datetime(value)
    return parsed.date().isoformat() if parsed else value


def format_date_time(value: str | date | datetime) -> str:
    """Render as ``YYYY-MM-DD HH:MM``, dropping a ``00:00`` time of day."""

    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            return value
        value = parsed
    if isinstance(value, datetime):
        return _MIDNIGHT_SUFFIX_RE.sub("", value.strftime("%Y-%m-%d %H:%M"))
    return format_date(value)


def format_dates(values: list[str]) -> list[str]:
    return [format_date(value) for value in values]


def format_date_times(values: list[str]) -> list[str]:
    return [format_date_time(value) for value in values]


@lru_cache(maxsize=1)
def _language_codes() -> dict[str, str]:
    from lingua import Language

    codes: dict[str, str] = {}
    for language in Language.all():
        alpha3 = language.iso_code_639_3.name.lower()
        codes[language.iso_code_639_1.name.lower()] = alpha3
        codes[alpha3] = alpha3
        codes[language.name.lower()] = alpha3
    return codes


def normalize_language(value: str) -> str:
    """Map a language tag or name to its ISO 639-3 code.

    Region subtags are ignored (``en-US`` -> ``eng``). Values that are not
    recognized are returned unchanged.
    """

    text = value.strip()
    primary = text.split("-", 1)[0].split("_", 1)[0].lower()
    return _language_codes().get(primary, text)


def normalize_languages(values: list[str]) -> list[str]:
    result: list[str] = []
    for value in values:
        code = normalize_language(value)
        if code not in result:
            result.append(code)
    return result


def titleize(name: str) -> str:
    """``CopyrightDate`` -> ``Copyright Date``; ``total_page_count`` -> ``Total Page Count``.

    Acronyms are treated as ordinary words: ``AccessibilityAPI`` -> ``Accessibility Api``.
    """

    spaced = _CAMEL_BOUNDARY_RE.sub(" ", name).replace("_", " ")
    return " ".join(word.capitalize() for word in spaced.split())


def pluralize(label: str) -> str:
    """Pluralize the last word of a label."""

    head, _, word = label.rpartition(" ")
    lowered = word.lower()
    if not word or lowered.endswith("s"):
        plural = word
    elif lowered.endswith("y") and lowered[-2:-1] not in "aeiou":
        plural = word[:-1] + "ies"
    elif lowered.endswith(("x", "ch", "sh")):
        plural = word + "es"
    else:
        plural = word + "s"
    return f"{head} {plural}" if head else plural
