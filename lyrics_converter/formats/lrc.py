"""LRC and Enhanced LRC lyrics format.

WHY: LRC is the de-facto lyrics format for music players: one
``[MM:SS.cc]text`` line per lyric line, with ``[ti:]``/``[ar:]``/
``[al:]``/``[by:]`` header tags. Enhanced LRC adds ``<MM:SS.cc>`` tags
before each word for karaoke highlighting.

HOW: Parsing is line-oriented. Header tags fill Metadata. Each line
starting with one or more timestamp tags yields one cue per tag. The
remaining text is run through the inline scanner; timestamp tags inside
it become words. LRC has no end times, so every cue first gets a
placeholder end and a second pass sets each end to the next cue's start.

RULES:
- Cue lines must START with a [timestamp] tag (leading spaces allowed)
- A line with several leading tags is repeated at each timestamp; word
  times are shifted by the same offset
- Cues are stably ordered by start before end inference
- The last cue keeps start + config.LRC_PLACEHOLDER_MS
- Cue text is the tag-stripped, trimmed line
- A word tag with no text after it closes the preceding word (sets end)
- Export writes centisecond precision only; 1234 ms reads back as 1230
- Multi-line cue text is exported on one line, joined with spaces
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from lyrics_converter.config import LRC_PLACEHOLDER_MS
from lyrics_converter.core.ir import Cue, Metadata, ParseResult, Word
from lyrics_converter.core.scanner import scan_inline_timestamps, visible_text
from lyrics_converter.core.text import decode_entities
from lyrics_converter.core.timecode import parse_timestamp, to_lrc
from lyrics_converter.core.timing import word_timings
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat

logger = logging.getLogger(__name__)

_STAMP = r"\[(\d+:\d{2}(?:\.\d{1,3})?)\]"
_CUE_LINE_RE = re.compile(r"^\s*(?P<stamps>(?:" + _STAMP + r"\s*)+)(?P<body>.*)$")
_STAMP_RE = re.compile(_STAMP)
_HEADER_RE = re.compile(r"^\s*\[(ti|ar|al|by):(.*?)\]", re.IGNORECASE)

# LRC header tag → Metadata field
_HEADER_FIELDS = (("ti", "title"), ("ar", "artist"), ("al", "album"), ("by", "by"))


def _parse_metadata(lines: List[str]) -> Metadata:
    found = {}
    for line in lines:
        match = _HEADER_RE.match(line)
        if not match:
            continue
        tag = match.group(1).lower()
        if tag not in found:
            found[tag] = match.group(2).strip()
    return Metadata(**{name: found.get(tag) for tag, name in _HEADER_FIELDS})


def _parse_words(body: str, line_index: int, cue_start: float) -> Tuple[str, Optional[List[Word]]]:
    """Split the text after the line tags into display text and words."""
    segments = scan_inline_timestamps(body)
    text = decode_entities(visible_text(segments).strip())

    words: List[Word] = []
    for segment in segments:
        word_text = decode_entities(segment.text.strip())
        if segment.timestamp is None:
            # Text before the first word tag starts with the line
            if word_text and len(segments) > 1:
                words.append(Word(
                    id="lrc-w-{}-{}".format(line_index, len(words)),
                    text=word_text,
                    start=cue_start,
                ))
            continue
        stamp = parse_timestamp(segment.timestamp)
        if word_text:
            words.append(Word(
                id="lrc-w-{}-{}".format(line_index, len(words)),
                text=word_text,
                start=stamp,
            ))
        elif words and words[-1].end is None:
            words[-1] = replace(words[-1], end=stamp)

    return text, (words or None)


def _shift(words: Optional[List[Word]], delta: float, suffix: str) -> Optional[Tuple[Word, ...]]:
    if words is None:
        return None
    if not delta and not suffix:
        return tuple(words)
    return tuple(
        replace(
            w,
            id=w.id + suffix,
            start=None if w.start is None else w.start + delta,
            end=None if w.end is None else w.end + delta,
        )
        for w in words
    )


class LRCFormat(BaseFormat):
    """Plain LRC: one timestamped line per cue, no word tags on export."""

    key = SubtitleFormat.LRC
    media_type = "text/plain"
    enhanced = False

    @property
    def name(self) -> str:
        return "LRC"

    def parse(self, content: str) -> ParseResult:
        lines = content.splitlines()
        metadata = _parse_metadata(lines)

        cues: List[Cue] = []
        for index, line in enumerate(lines):
            match = _CUE_LINE_RE.match(line)
            if not match:
                continue
            stamps = [parse_timestamp(s) for s in _STAMP_RE.findall(match.group("stamps"))]
            text, words = _parse_words(match.group("body"), index, stamps[0])
            for k, start in enumerate(stamps):
                suffix = "" if k == 0 else "-{}".format(k)
                cues.append(Cue(
                    id="lrc-{}{}".format(index, suffix),
                    start=start,
                    end=start + LRC_PLACEHOLDER_MS,
                    text=text,
                    words=_shift(words, start - stamps[0], suffix),
                ))

        cues.sort(key=lambda cue: cue.start)
        for i in range(len(cues) - 1):
            cues[i] = replace(cues[i], end=cues[i + 1].start)

        logger.debug("Parsed %d LRC cues from %d lines", len(cues), len(lines))
        return ParseResult(cues=cues, metadata=metadata)

    def _line_text(self, cue: Cue) -> str:
        if self.enhanced and cue.has_words:
            return " ".join(
                "<{}>{}".format(to_lrc(start), word.text)
                for (start, _end), word in zip(word_timings(cue), cue.words)
            )
        return cue.text.replace("\n", " ")

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        header = ""
        if metadata is not None:
            for tag, field_name in _HEADER_FIELDS:
                value = getattr(metadata, field_name)
                if value:
                    header += "[{}:{}]\n".format(tag, value)

        body = "\n".join(
            "[{}]{}".format(to_lrc(cue.start), self._line_text(cue))
            for cue in cues
        )
        return header + body


class EnhancedLRCFormat(LRCFormat):
    """Enhanced LRC: word cues exported as ``<MM:SS.cc>word`` tokens."""

    key = SubtitleFormat.LRC_ENHANCED
    enhanced = True

    @property
    def name(self) -> str:
        return "Enhanced LRC"
