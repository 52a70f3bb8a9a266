"""Plain text lyrics format.

WHY: Lyrics usually start life as plain text pasted from somewhere,
with no timing at all. Importing it as evenly spaced cues gives the
editor something to sync against; exporting to it gives a clean lyric
sheet with verses separated by blank lines.

HOW: Import turns every non-blank line into a cue with a fixed
synthetic duration (config.TXT_LINE_MS), laid end to end. Export writes
one line per cue and inserts a blank line wherever the pause between
two cues is long enough to look like a stanza break.

RULES:
- Blank lines on import are dropped (they carry no timing)
- Cue i spans [i * TXT_LINE_MS, (i + 1) * TXT_LINE_MS)
- Blank line on export when next.start - current.end >= STANZA_GAP_MS
- Multi-line cue text is exported on one line, joined with spaces
- Output is trimmed; no trailing newline
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from lyrics_converter.config import STANZA_GAP_MS, TXT_LINE_MS
from lyrics_converter.core.ir import Cue, Metadata, ParseResult
from lyrics_converter.core.text import decode_entities
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat
from lyrics_converter.formats.srt import normalize_newlines


class PlainTextFormat(BaseFormat):
    """One lyric line per text line."""

    key = SubtitleFormat.TXT
    media_type = "text/plain"

    @property
    def name(self) -> str:
        return "Plain Text"

    def parse(self, content: str) -> ParseResult:
        lines = [
            line.strip()
            for line in normalize_newlines(content).split("\n")
            if line.strip()
        ]
        cues = [
            Cue(
                id="txt-{}".format(i),
                start=i * TXT_LINE_MS,
                end=(i + 1) * TXT_LINE_MS,
                text=decode_entities(line),
            )
            for i, line in enumerate(lines)
        ]
        return ParseResult(cues=cues, metadata=Metadata())

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        out: List[str] = []
        for i, cue in enumerate(cues):
            out.append(" ".join(cue.text.split("\n")))
            if i + 1 < len(cues) and cues[i + 1].start - cue.end >= STANZA_GAP_MS:
                out.append("")
        return "\n".join(out).strip()
