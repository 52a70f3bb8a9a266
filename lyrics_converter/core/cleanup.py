"""Whole-document cue transforms used before export.

WHY: Imported and AI-produced documents often need the same small
repairs: stray whitespace, empty word tokens, cues out of order, gaps in
word timing. Each repair is a pure function over the cue list so the
editor (or the CLI) can chain them.

RULES:
- Every function takes a list of cues and returns a new list
- Input lists and cues are never mutated
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from lyrics_converter.core.ir import Cue
from lyrics_converter.core.text import collapse_whitespace
from lyrics_converter.core.timing import fill_word_gaps, generate_words


def compact_whitespace(cues: Sequence[Cue]) -> List[Cue]:
    """Collapse whitespace in cue text and trim word text."""
    result = []
    for cue in cues:
        words = None
        if cue.words is not None:
            words = tuple(replace(w, text=w.text.strip()) for w in cue.words)
        result.append(replace(cue, text=collapse_whitespace(cue.text), words=words))
    return result


def remove_empty_words(cues: Sequence[Cue]) -> List[Cue]:
    """Drop words whose text is blank."""
    result = []
    for cue in cues:
        if not cue.words:
            result.append(cue)
            continue
        result.append(cue.with_words([w for w in cue.words if w.text.strip()]))
    return result


def sort_by_start(cues: Sequence[Cue]) -> List[Cue]:
    """Stable sort by cue start."""
    return sorted(cues, key=lambda cue: cue.start)


def clear_words(cues: Sequence[Cue]) -> List[Cue]:
    """Remove word-level timing from every cue."""
    return [cue if cue.words is None else cue.with_words(None) for cue in cues]


def fill_all_word_gaps(cues: Sequence[Cue]) -> List[Cue]:
    return [fill_word_gaps(cue) for cue in cues]


def generate_all_words(cues: Sequence[Cue]) -> List[Cue]:
    return [generate_words(cue) for cue in cues]


def hot_fix(cues: Sequence[Cue]) -> List[Cue]:
    """Compact whitespace, drop empty words, then close word gaps."""
    return fill_all_word_gaps(remove_empty_words(compact_whitespace(cues)))
