"""SubRip (SRT) subtitle format.

WHY: SRT is the lowest common denominator of subtitle formats: numbered
blocks with a ``HH:MM:SS,mmm --> HH:MM:SS,mmm`` line and one or more
lines of text. No word-level timing.

HOW: Blocks are split on blank lines. In each block an optional numeric
index line is skipped, the timing line is split on ``-->``, and the rest
of the block is the cue text with its line breaks preserved.

RULES:
- Blocks without a two-sided ``-->`` timing line are skipped
- Anything after the end timestamp (position coordinates) is ignored
- The index in the file is not kept; export renumbers from 1
- Export: ``n\\nstart --> end\\ntext\\n`` blocks separated by a blank line
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from lyrics_converter.core.ir import Cue, Metadata, ParseResult
from lyrics_converter.core.text import decode_entities
from lyrics_converter.core.timecode import parse_timestamp, to_srt
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat

logger = logging.getLogger(__name__)

_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


def split_timing_line(line: str) -> Optional[Tuple[str, str]]:
    """Return (start_text, end_text) or None when ``line`` is not a timing line.

    Shared with the VTT parser: cue settings or coordinates after the end
    timestamp are dropped.
    """
    parts = line.split("-->")
    if len(parts) != 2:
        return None
    start = parts[0].strip().split()
    end = parts[1].strip().split()
    return (start[0] if start else ""), (end[0] if end else "")


class SRTFormat(BaseFormat):
    """Numbered SubRip blocks."""

    key = SubtitleFormat.SRT
    media_type = "application/x-subrip"

    @property
    def name(self) -> str:
        return "SRT"

    def parse(self, content: str) -> ParseResult:
        blocks = _BLANK_LINE_RE.split(normalize_newlines(content).strip())
        cues: List[Cue] = []

        for index, block in enumerate(blocks):
            lines = block.split("\n")
            if len(lines) < 2:
                if block.strip():
                    logger.debug("Skipping SRT block %d: too short", index)
                continue

            timing_index = 1 if lines[0].strip().isdigit() else 0
            times = split_timing_line(lines[timing_index])
            if times is None:
                logger.debug("Skipping SRT block %d: no timing line", index)
                continue

            cues.append(Cue(
                id="srt-{}".format(index),
                start=parse_timestamp(times[0]),
                end=parse_timestamp(times[1]),
                text=decode_entities("\n".join(lines[timing_index + 1:])),
            ))

        return ParseResult(cues=cues, metadata=Metadata())

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        return "\n".join(
            "{}\n{} --> {}\n{}\n".format(i + 1, to_srt(cue.start), to_srt(cue.end), cue.text)
            for i, cue in enumerate(cues)
        )
