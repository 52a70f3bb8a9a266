"""Inline timestamp tag scanner for Enhanced LRC and WebVTT karaoke lines.

WHY: Enhanced LRC (``<00:01.00>Hello <00:01.50>world``) and WebVTT
karaoke cues (``<00:00:01.000>Hello``) embed word start times as tags
inside the text. The same lines may also hold ordinary markup such as
``<i>`` or ``<c.yellow>``. Splitting on a capturing regex makes the
timestamp/text alternation depend on group indexes; a small scanner
makes each piece explicit.

HOW: Walk the line once. Outside a tag, characters accumulate into the
current segment's text. A ``<`` opens a tag candidate that closes at the
next ``>``. If the tag body is a timestamp, the current segment is closed
and a new one starts, carrying that timestamp. Any other tag is markup
and is dropped. A ``<`` with no closing ``>`` is literal text.

RULES:
- The first segment has timestamp None and holds any text before the
  first timestamp tag (often empty)
- Segment text is raw: not trimmed, entities not decoded
- A timestamp tag followed directly by another timestamp tag produces a
  segment with empty text
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from lyrics_converter.core.timecode import is_timestamp


@dataclass(frozen=True)
class InlineSegment:
    """Text that follows one inline timestamp tag."""

    timestamp: Optional[str]
    text: str


def scan_inline_timestamps(line: str) -> List[InlineSegment]:
    """Split a line into segments at inline timestamp tags."""
    segments: List[InlineSegment] = []
    current_stamp: Optional[str] = None
    buffer: List[str] = []

    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char != "<":
            buffer.append(char)
            i += 1
            continue

        close = line.find(">", i + 1)
        reopen = line.find("<", i + 1)
        if close == -1 or (reopen != -1 and reopen < close):
            # Unterminated tag: keep the bracket as text
            buffer.append(char)
            i += 1
            continue

        body = line[i + 1:close]
        if body and is_timestamp(body):
            segments.append(InlineSegment(current_stamp, "".join(buffer)))
            current_stamp = body.strip()
            buffer = []
        i = close + 1

    segments.append(InlineSegment(current_stamp, "".join(buffer)))
    return segments


def has_inline_timestamps(segments: List[InlineSegment]) -> bool:
    return any(segment.timestamp is not None for segment in segments)


def visible_text(segments: List[InlineSegment]) -> str:
    """The line with every tag removed, untrimmed."""
    return "".join(segment.text for segment in segments)
