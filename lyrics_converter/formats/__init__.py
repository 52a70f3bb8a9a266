"""Format registry: lookup table from SubtitleFormat to format class.

WHY: The CLI, the HTTP API and the editor all need "parse this as X"
and "write these cues as Y" without knowing which module implements X
or Y. A central dict keeps that dispatch in one place: adding a format
means one class and one line here.

HOW: FORMATS maps SubtitleFormat members to BaseFormat subclasses (not
instances). get_format() accepts the enum or its string value and
returns an instance. The module-level helpers wrap the common flows:
detect + parse (load_document), serialize, and export file naming.

RULES:
- Every SubtitleFormat member has exactly one entry
- Unknown format keys raise ValueError naming the available keys
- A leading UTF-8 BOM is stripped before parsing
- Export file names keep the source stem and swap in the canonical
  extension; an empty name becomes config.DEFAULT_EXPORT_STEM
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional, Sequence, Tuple, Union

from lyrics_converter.config import DEFAULT_EXPORT_STEM
from lyrics_converter.core.ir import Cue, Metadata, ParseResult
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat
from lyrics_converter.formats.detect import detect_format
from lyrics_converter.formats.json_document import JSONFormat
from lyrics_converter.formats.lrc import EnhancedLRCFormat, LRCFormat
from lyrics_converter.formats.plain_text import PlainTextFormat
from lyrics_converter.formats.srt import SRTFormat
from lyrics_converter.formats.ttml import TTMLFormat, TTMLKaraokeFormat
from lyrics_converter.formats.vtt import VTTFormat, VTTKaraokeFormat


FORMATS: dict[SubtitleFormat, type[BaseFormat]] = {
    SubtitleFormat.LRC: LRCFormat,
    SubtitleFormat.LRC_ENHANCED: EnhancedLRCFormat,
    SubtitleFormat.SRT: SRTFormat,
    SubtitleFormat.VTT: VTTFormat,
    SubtitleFormat.VTT_KARAOKE: VTTKaraokeFormat,
    SubtitleFormat.TTML: TTMLFormat,
    SubtitleFormat.TTML_KARAOKE: TTMLKaraokeFormat,
    SubtitleFormat.JSON: JSONFormat,
    SubtitleFormat.TXT: PlainTextFormat,
}

FormatKey = Union[SubtitleFormat, str]

_BOM = "\ufeff"


def available_formats() -> str:
    return ", ".join(fmt.value for fmt in FORMATS)


def resolve_format(key: FormatKey) -> SubtitleFormat:
    """Normalize a format key (enum or string, any case) to SubtitleFormat."""
    if isinstance(key, SubtitleFormat):
        return key
    try:
        return SubtitleFormat(str(key).strip().lower())
    except ValueError:
        raise ValueError(
            "Unknown format '{}'. Available formats: {}".format(key, available_formats())
        ) from None


def get_format(key: FormatKey) -> BaseFormat:
    """Instantiate the format class registered for ``key``."""
    return FORMATS[resolve_format(key)]()


def parse_content(content: str, fmt: FormatKey) -> ParseResult:
    return get_format(fmt).parse(content.lstrip(_BOM))


def serialize_content(
    cues: Sequence[Cue],
    fmt: FormatKey,
    metadata: Optional[Metadata] = None,
) -> str:
    return get_format(fmt).serialize(cues, metadata)


def export_filename(source_name: Optional[str], fmt: FormatKey) -> str:
    """Name for an exported file: source stem + canonical extension.

    >>> export_filename("song.lrc", "ttml_karaoke")
    'song.ttml'
    """
    stem = PurePath(source_name).stem if source_name else ""
    return "{}.{}".format(stem or DEFAULT_EXPORT_STEM, get_format(fmt).extension)


def load_document(
    filename: Optional[str],
    content: str,
    fmt: Optional[FormatKey] = None,
) -> Tuple[SubtitleFormat, ParseResult]:
    """Detect (unless ``fmt`` is given) and parse a document.

    Returns:
        (format used, ParseResult)
    """
    content = content.lstrip(_BOM)
    source = resolve_format(fmt) if fmt is not None else detect_format(filename, content)
    return source, get_format(source).parse(content)


__all__ = [
    "FORMATS",
    "SubtitleFormat",
    "available_formats",
    "detect_format",
    "export_filename",
    "get_format",
    "load_document",
    "parse_content",
    "resolve_format",
    "serialize_content",
]
