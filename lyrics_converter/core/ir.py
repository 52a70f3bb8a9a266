"""Intermediate representation dataclasses for timed lyrics and subtitles.

WHY: LRC, SRT, VTT, TTML, JSON and plain text all describe the same
thing (lines of text with timing, sometimes with per-word timing) but
spell it differently. The IR provides a single, well-typed form that
every parser produces and every serializer consumes, so formats never
have to know about each other.

HOW: Four dataclasses:
  Word        one sub-cue timed token (karaoke highlighting)
  Cue         one timed line of text, optionally broken into words
  Metadata    document-level descriptive fields
  ParseResult what every parser returns: cues plus metadata

RULES:
- All times are milliseconds (int; float only when a source spelled a
  fractional millisecond value and it was kept unrounded)
- Cue and Word are frozen; edit with dataclasses.replace() and build
  new lists, never mutate in place
- Cue.words is None when the source carries no word timing; an empty
  tuple means the word list exists but is empty
- Word.start / Word.end are None when the source did not give them;
  see core.timing for how missing values are inferred
- Cue.text and the words are stored independently and may diverge
- Metadata fields are None when absent from the source
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Word:
    """A single word-level timed token inside a cue.

    RULES:
    - id: unique within the parent cue's word list
    - text: token text, may include inline markup
    - start / end: milliseconds or None when not given by the source
    """

    id: str
    text: str
    start: Optional[float] = None
    end: Optional[float] = None


@dataclass(frozen=True)
class Cue:
    """One timed line of lyrics or subtitle text.

    WHY: The cue is the unit the editor selects, diffs and re-times. Its
    id survives round-trips through JSON and AI refinement so edits can be
    mapped back onto the original lines.

    RULES:
    - id: opaque, unique within a document, never reused
    - start >= 0; end >= start by convention but not enforced
    - text: the whole line, independent of the word breakdown
    - words: None means "no word-level timing"
    """

    id: str
    start: float
    end: float
    text: str
    words: Optional[Tuple[Word, ...]] = None

    @property
    def has_words(self) -> bool:
        return bool(self.words)

    @property
    def duration(self) -> float:
        return self.end - self.start

    def with_words(self, words: Optional[List[Word]]) -> "Cue":
        """Return a copy with ``words`` replaced (None clears word timing)."""
        return replace(self, words=None if words is None else tuple(words))


@dataclass(frozen=True)
class Metadata:
    """Document-level descriptive fields (LRC header tags, TTML ttm:*).

    RULES:
    - title, artist, album, by: None when absent from the source
    - Some formats normalize absence to "" on load (see blank())
    - merged() is a shallow merge: present fields win over defaults
    """

    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    by: Optional[str] = None

    @classmethod
    def blank(cls) -> "Metadata":
        """All fields present but empty, the JSON loader's default."""
        return cls(title="", artist="", album="", by="")

    @classmethod
    def from_dict(cls, data: Any) -> "Metadata":
        """Build Metadata from a loosely typed mapping.

        Unknown keys are ignored; non-string values are dropped.
        """
        if not isinstance(data, dict):
            return cls()
        values: Dict[str, Optional[str]] = {}
        for f in fields(cls):
            value = data.get(f.name)
            if isinstance(value, str):
                values[f.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Present fields only, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def merged(self, defaults: "Metadata") -> "Metadata":
        """Fill absent fields from ``defaults``."""
        return Metadata(**{
            f.name: getattr(self, f.name) if getattr(self, f.name) is not None
            else getattr(defaults, f.name)
            for f in fields(self)
        })

    def is_empty(self) -> bool:
        """True when no field carries a non-empty value."""
        return not any(getattr(self, f.name) for f in fields(self))


@dataclass
class ParseResult:
    """The output of every parser.

    RULES:
    - cues: in source order (LRC re-orders by start, see formats.lrc)
    - metadata: never None; an empty Metadata when the format has none
    """

    cues: List[Cue] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)
