"""Runtime limits for container access and parsing."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from docformat.errors import ConfigurationError

DEFAULT_MAX_ENTRY_BYTES = 100 * 1024 * 1024
DEFAULT_MAX_ZIP_ENTRIES = 20_000

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag")


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    """Validated guard rails applied while reading containers."""

    max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES
    max_zip_entries: int = DEFAULT_MAX_ZIP_ENTRIES
    recursive_lookup: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractionSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        max_entry_bytes = DEFAULT_MAX_ENTRY_BYTES
        raw = source.get("DOCFORMAT_MAX_ENTRY_BYTES", "").strip()
        if raw:
            max_entry_bytes = _parse_positive_int(name="DOCFORMAT_MAX_ENTRY_BYTES", raw_value=raw)

        max_zip_entries = DEFAULT_MAX_ZIP_ENTRIES
        raw = source.get("DOCFORMAT_MAX_ZIP_ENTRIES", "").strip()
        if raw:
            max_zip_entries = _parse_positive_int(name="DOCFORMAT_MAX_ZIP_ENTRIES", raw_value=raw)

        recursive_lookup = True
        raw = source.get("DOCFORMAT_RECURSIVE_LOOKUP", "").strip()
        if raw:
            recursive_lookup = _parse_bool(name="DOCFORMAT_RECURSIVE_LOOKUP", raw_value=raw)

        return cls(
            max_entry_bytes=max_entry_bytes,
            max_zip_entries=max_zip_entries,
            recursive_lookup=recursive_lookup,
        )
