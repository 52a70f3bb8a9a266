"""WebVTT subtitle format, with optional word-level karaoke timing.

WHY: WebVTT is the browser-native caption format. Besides plain cues it
supports inline timestamp tags (``<00:00:01.500>word``) that mark when
each word becomes active, which karaoke players use for highlighting.

HOW: A line-oriented state machine. The ``WEBVTT`` header line is
skipped. A line containing ``-->`` opens a cue; following non-blank
lines are its text; a blank line closes it. Text lines are run through
the inline scanner: each timestamp tag starts a new word whose end is
left open (the next word's start or the cue end, see core.timing).

RULES:
- Cue settings after the end timestamp are ignored
- Lines outside a cue (NOTE, STYLE, REGION blocks, cue identifiers) are
  ignored; a ``Note Title:`` header line fills metadata.title
- Word text before the first timestamp tag starts at the cue start
- Cue text is the tag-stripped text, each line trimmed, joined by \\n
- A cue with no text lines is dropped
- Karaoke export writes ``<HH:MM:SS.mmm>word`` tokens joined by spaces
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from lyrics_converter.core.ir import Cue, Metadata, ParseResult, Word
from lyrics_converter.core.scanner import (
    has_inline_timestamps,
    scan_inline_timestamps,
    visible_text,
)
from lyrics_converter.core.text import decode_entities
from lyrics_converter.core.timecode import parse_timestamp, to_vtt
from lyrics_converter.core.timing import word_timings
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat
from lyrics_converter.formats.srt import normalize_newlines, split_timing_line

logger = logging.getLogger(__name__)

_HEADER = "WEBVTT"
_TITLE_PREFIX = "Note Title:"


def _parse_header_title(lines: List[str]) -> Optional[str]:
    """Look for ``Note Title:`` in the header block (before the first blank line)."""
    for line in lines:
        if not line.strip():
            break
        if line.startswith(_TITLE_PREFIX):
            return line[len(_TITLE_PREFIX):].strip()
    return None


class _CueBuilder:
    """Accumulates the text lines and words of the cue being read."""

    def __init__(self, cue_id: str, start: float, end: float) -> None:
        self.cue_id = cue_id
        self.start = start
        self.end = end
        self.text_lines: List[str] = []
        self.words: List[Word] = []

    def add_line(self, line: str, line_index: int) -> None:
        segments = scan_inline_timestamps(line)
        if has_inline_timestamps(segments):
            current = self.start
            for segment in segments:
                if segment.timestamp is not None:
                    current = parse_timestamp(segment.timestamp)
                word_text = decode_entities(segment.text.strip())
                if word_text:
                    self.words.append(Word(
                        id="vtt-w-{}-{}".format(line_index, len(self.words)),
                        text=word_text,
                        start=current,
                    ))
        self.text_lines.append(visible_text(segments).strip())

    def build(self) -> Optional[Cue]:
        if not self.text_lines:
            return None
        return Cue(
            id=self.cue_id,
            start=self.start,
            end=self.end,
            text=decode_entities("\n".join(self.text_lines)),
            words=tuple(self.words) if self.words else None,
        )


class VTTFormat(BaseFormat):
    """WebVTT cues; line text only on export."""

    key = SubtitleFormat.VTT
    media_type = "text/vtt"
    karaoke = False

    @property
    def name(self) -> str:
        return "WebVTT"

    def parse(self, content: str) -> ParseResult:
        lines = normalize_newlines(content).strip().split("\n")
        metadata = Metadata(title=_parse_header_title(lines))

        cues: List[Cue] = []
        builder: Optional[_CueBuilder] = None

        def flush() -> None:
            if builder is None:
                return
            cue = builder.build()
            if cue is None:
                logger.debug("Dropping VTT cue %s: no text", builder.cue_id)
            else:
                cues.append(cue)

        first = 1 if lines[0].startswith(_HEADER) else 0
        for index in range(first, len(lines)):
            line = lines[index].strip()
            if "-->" in line:
                flush()
                times = split_timing_line(line)
                builder = None if times is None else _CueBuilder(
                    "vtt-{}".format(index),
                    parse_timestamp(times[0]),
                    parse_timestamp(times[1]),
                )
            elif not line:
                flush()
                builder = None
            elif builder is not None:
                builder.add_line(line, index)
        flush()

        return ParseResult(cues=cues, metadata=metadata)

    def _cue_text(self, cue: Cue) -> str:
        if self.karaoke and cue.has_words:
            return " ".join(
                "<{}>{}".format(to_vtt(start), word.text)
                for (start, _end), word in zip(word_timings(cue), cue.words)
            )
        return cue.text

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        header = _HEADER + "\n"
        if metadata is not None and metadata.title:
            header += "{} {}\n".format(_TITLE_PREFIX, metadata.title)
        header += "\n"

        return header + "\n".join(
            "{} --> {}\n{}\n".format(to_vtt(cue.start), to_vtt(cue.end), self._cue_text(cue))
            for cue in cues
        )


class VTTKaraokeFormat(VTTFormat):
    """WebVTT with ``<timestamp>word`` tokens for cues that have words."""

    key = SubtitleFormat.VTT_KARAOKE
    karaoke = True

    @property
    def name(self) -> str:
        return "WebVTT (Words)"
