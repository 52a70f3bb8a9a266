"""Word timing inference and synthetic timing layouts.

WHY: Word-level timing is often incomplete. Enhanced LRC and WebVTT
karaoke only carry word *starts*; hand-edited JSON may omit either
value; a plain line of text has no words at all. Serializers and the
editor still need a start and an end for every word.

HOW: word_timings() resolves every word of a cue in two passes. Starts
come from the word, or from an equal-slice layout across the cue when the
word has none. Ends come from the word, or the next word's start, or the
cue's end for the last word. The other helpers build on that.

RULES:
- Never mutates; returns tuples or new Cue objects
- Equal slices use integer floor division so slot edges are whole ms
- Effective ends are NOT clamped here except in non_overlapping_timings()
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Tuple

from lyrics_converter.config import GENERATED_LINE_MS, GENERATED_STANZA_GAP_MS
from lyrics_converter.core.ir import Cue, Word

Timing = Tuple[float, float]


def synthetic_slot(cue: Cue, index: int, count: int) -> Timing:
    """Equal-duration slice ``index`` of ``count`` across the cue."""
    duration = max(0, cue.duration)
    start = cue.start + (duration * index) // count
    end = cue.start + (duration * (index + 1)) // count
    return start, end


def word_timings(cue: Cue) -> List[Timing]:
    """Resolve (start, end) for every word of ``cue``."""
    words = cue.words or ()
    count = len(words)
    starts = [
        word.start if word.start is not None else synthetic_slot(cue, i, count)[0]
        for i, word in enumerate(words)
    ]
    timings: List[Timing] = []
    for i, word in enumerate(words):
        if word.end is not None:
            end = word.end
        elif i + 1 < count:
            end = starts[i + 1]
        else:
            end = cue.end
        timings.append((starts[i], end))
    return timings


def effective_word_end(cue: Cue, index: int) -> float:
    """The end of word ``index``, inferred when not stored."""
    return word_timings(cue)[index][1]


def non_overlapping_timings(cue: Cue) -> List[Timing]:
    """word_timings() with each end clamped to the next word's start.

    Used by karaoke export so emitted word spans never overlap, whatever
    the in-memory data says.
    """
    timings = word_timings(cue)
    clamped: List[Timing] = []
    for i, (start, end) in enumerate(timings):
        if i + 1 < len(timings):
            next_start = timings[i + 1][0]
            if end > next_start:
                end = next_start
        clamped.append((start, end))
    return clamped


def fill_word_gaps(cue: Cue) -> Cue:
    """Make word timing contiguous across the cue.

    Words are ordered by start, the first word is pulled back to the cue
    start, each word is extended to the next word's start and the last
    word ends with the cue.
    """
    if not cue.has_words:
        return cue
    ordered = sorted(zip(word_timings(cue), cue.words), key=lambda pair: pair[0][0])
    filled: List[Word] = []
    for i, ((start, _end), word) in enumerate(ordered):
        if i == 0 and start > cue.start:
            start = cue.start
        if i + 1 < len(ordered):
            end = ordered[i + 1][0][0]
        else:
            end = cue.end
        filled.append(replace(word, start=start, end=end))
    return cue.with_words(filled)


def generate_words(cue: Cue, id_prefix: str = "auto") -> Cue:
    """Split a cue's text into equal-duration words.

    Cues that already have words, or whose text is blank, are returned
    unchanged.
    """
    if cue.words:
        return cue
    tokens = cue.text.split()
    if not tokens:
        return cue
    words = []
    for i, token in enumerate(tokens):
        start, end = synthetic_slot(cue, i, len(tokens))
        words.append(Word(
            id="{}-{}-{}".format(id_prefix, cue.id, i),
            text=token,
            start=start,
            end=end,
        ))
    return cue.with_words(words)


def layout_lines(
    text: str,
    line_ms: int = GENERATED_LINE_MS,
    stanza_gap_ms: int = GENERATED_STANZA_GAP_MS,
    id_prefix: str = "gen",
) -> List[Cue]:
    """Lay out untimed lyric text as back-to-back cues.

    WHY: Generated or pasted lyrics arrive as plain lines with blank lines
    between stanzas. Giving each line a fixed slot and each stanza break
    an extra pause produces a timeline the editor can then refine, and
    which TXT export turns back into the same stanzas.

    RULES:
    - Each non-blank line: [t, t + line_ms), then t += line_ms
    - Each blank line: t += stanza_gap_ms, no cue
    """
    cues: List[Cue] = []
    current = 0
    for line in text.splitlines():
        clean = line.strip()
        if not clean:
            current += stanza_gap_ms
            continue
        cues.append(Cue(
            id="{}-{}".format(id_prefix, len(cues)),
            start=current,
            end=current + line_ms,
            text=clean,
        ))
        current += line_ms
    return cues
