"""Format detection from file name and content.

WHY: Users drop files on the tool without saying what they are. The
extension is usually right; when it is missing or unfamiliar we sniff
the first bytes of the text.

HOW: Extension lookup in config.DETECTABLE_EXTENSIONS first (case
insensitive). Otherwise content checks in a fixed order: JSON, WebVTT,
TTML namespace, LRC timestamp line. SRT is the fallback because its
parser is the most forgiving.

RULES:
- Extension wins over content
- ``.xml`` and ``.ttml`` both mean TTML
- A leading ``[`` means JSON unless it opens an LRC tag (``[00:`` or
  ``[ti:``), so extensionless LRC files are not mistaken for arrays
- Detection only ever returns parseable formats (never a karaoke or
  enhanced export variant)
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePath
from typing import Optional

from lyrics_converter.config import DETECTABLE_EXTENSIONS, TTML_NAMESPACE
from lyrics_converter.formats.base import SubtitleFormat

logger = logging.getLogger(__name__)

_BOM = "\ufeff"
_LRC_TAG_START_RE = re.compile(r"^\[(?:\d{1,3}:\d{2}|[A-Za-z]+:)")
_LRC_LINE_RE = re.compile(r"^\s*\[\d{2}:\d{2}\.\d{2}\]", re.MULTILINE)


def format_from_extension(filename: Optional[str]) -> Optional[SubtitleFormat]:
    """Map a file name's extension to a format, or None if unrecognized."""
    if not filename:
        return None
    suffix = PurePath(filename).suffix.lower()
    key = DETECTABLE_EXTENSIONS.get(suffix)
    return SubtitleFormat(key) if key else None


def sniff_content(content: str) -> SubtitleFormat:
    """Guess a format from the text alone.

    A leading ``[`` is not JSON when it opens an LRC tag (``[00:01.00]``,
    ``[ti:Song]``). This deliberately departs from a plain "starts with
    ``{`` or ``[``" JSON rule, which would hand extensionless LRC files to
    the JSON parser and return nothing.
    """
    trimmed = content.lstrip(_BOM).strip()
    if trimmed.startswith("{"):
        return SubtitleFormat.JSON
    if trimmed.startswith("[") and not _LRC_TAG_START_RE.match(trimmed):
        return SubtitleFormat.JSON
    if trimmed.startswith("WEBVTT"):
        return SubtitleFormat.VTT
    if TTML_NAMESPACE in content:
        return SubtitleFormat.TTML
    if _LRC_LINE_RE.search(trimmed) or _LRC_TAG_START_RE.match(trimmed):
        return SubtitleFormat.LRC
    return SubtitleFormat.SRT


def detect_format(filename: Optional[str], content: str) -> SubtitleFormat:
    """Detect the format of a file from its name, falling back to content.

    Args:
        filename: Original file name (may be empty or None).
        content: Decoded file text.

    Returns:
        The SubtitleFormat to parse with. Always returns a value; SRT is
        the last resort.
    """
    fmt = format_from_extension(filename)
    if fmt is not None:
        return fmt
    fmt = sniff_content(content)
    logger.debug("Detected %s from content of %r", fmt.value, filename)
    return fmt
