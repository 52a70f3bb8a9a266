"""Timestamp codec: milliseconds ↔ the textual spellings of each format.

WHY: Every format spells time differently. SRT uses a comma, VTT a dot,
LRC counts centiseconds with unbounded minutes, TTML uses suffixed or
bare numbers of seconds. Formats also disagree on how many fraction
digits they write. One permissive decoder and one encoder per target
keeps all of that out of the format modules.

HOW: Encoders split a millisecond count with integer floor division.
The decoder tries each grammar in a fixed priority order and falls back
to 0 for anything it cannot read.

RULES:
- Encoders floor, never round, so to_lrc() is never ahead of to_srt()
- Hours (SRT/VTT) and minutes (LRC) are unbounded, padded to 2 digits
- Fractions of 1-3 digits are right-padded: .1 → 100, .12 → 120
- Bare numbers are SECONDS (TTML convention); callers that hold
  millisecond integers must not route them through parse_timestamp()
- parse_timestamp() never raises
- Encoders write NaN and infinity as zero
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple, Union

Millis = Union[int, float]

# M+:SS[.f{1,3}], minutes unbounded
_LRC_RE = re.compile(r"^(\d+):(\d{2})(?:\.(\d{1,3}))?$")

# [H+:]MM:SS(.|,)f{1,3}, hours unbounded
_CLOCK_RE = re.compile(r"^(?:(\d+):)?(\d{2}):(\d{2})[.,](\d{1,3})$")

_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


def _split(ms: Millis) -> Tuple[int, int, int, int]:
    """Split into (hours, minutes, seconds, milliseconds), flooring.

    Negative and non-finite values (NaN, infinity) count as 0.
    """
    if isinstance(ms, float) and not math.isfinite(ms):
        return 0, 0, 0, 0
    total = max(0, int(ms // 1))
    hours, rest = divmod(total, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return hours, minutes, seconds, millis


def to_srt(ms: Millis) -> str:
    """``HH:MM:SS,mmm``: SRT timing line."""
    h, m, s, mmm = _split(ms)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(h, m, s, mmm)


def to_vtt(ms: Millis) -> str:
    """``HH:MM:SS.mmm``: WebVTT timing line and TTML clock time."""
    h, m, s, mmm = _split(ms)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(h, m, s, mmm)


def to_lrc(ms: Millis) -> str:
    """``MM:SS.cc``: LRC tag, minutes unbounded, centiseconds truncated."""
    h, m, s, mmm = _split(ms)
    return "{:02d}:{:02d}.{:02d}".format(h * 60 + m, s, mmm // 10)


def to_precise_mm_ss(ms: Millis) -> str:
    """``MM:SS.mmm``: full precision for word-level edit fields."""
    h, m, s, mmm = _split(ms)
    return "{:02d}:{:02d}.{:03d}".format(h * 60 + m, s, mmm)


def _fraction_ms(digits: Optional[str]) -> int:
    """Right-pad a 1-3 digit fraction to milliseconds."""
    if not digits:
        return 0
    return int(digits.ljust(3, "0"))


def _scaled(number: str, factor: int) -> Millis:
    """Parse a decimal string and scale it without float drift.

    Returns an int when the result is integral, otherwise a float.
    """
    try:
        value = Decimal(number) * factor
    except InvalidOperation:
        return 0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def parse_timestamp(text: Optional[str]) -> Millis:
    """Decode any supported timestamp spelling into milliseconds.

    Priority order:
      1. ``…ms`` suffix: literal milliseconds (fraction kept)
      2. ``…s`` suffix: seconds × 1000
      3. LRC ``M+:SS[.f{1,3}]``
      4. SRT/VTT ``[H+:]MM:SS[.,]f{1,3}``
      5. bare number: seconds × 1000
      6. anything else: 0
    """
    if not text:
        return 0
    clean = text.strip()

    if clean.endswith("ms"):
        body = clean[:-2].strip()
        return _scaled(body, 1) if _NUMBER_RE.match(body) else 0
    if clean.endswith("s"):
        body = clean[:-1].strip()
        return _scaled(body, 1000) if _NUMBER_RE.match(body) else 0

    match = _LRC_RE.match(clean)
    if match:
        minutes, seconds, fraction = match.groups()
        return int(minutes) * 60_000 + int(seconds) * 1000 + _fraction_ms(fraction)

    match = _CLOCK_RE.match(clean)
    if match:
        hours, minutes, seconds, fraction = match.groups()
        return (
            int(hours or 0) * 3_600_000
            + int(minutes) * 60_000
            + int(seconds) * 1000
            + _fraction_ms(fraction)
        )

    if _NUMBER_RE.match(clean):
        return _scaled(clean, 1000)

    return 0


def is_timestamp(text: str) -> bool:
    """True if ``text`` is a colon-delimited LRC or SRT/VTT timestamp."""
    clean = text.strip()
    return bool(_LRC_RE.match(clean) or _CLOCK_RE.match(clean))
