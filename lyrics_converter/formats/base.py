"""Format identifiers and the abstract base for format modules.

WHY: The editor, CLI and HTTP API all dispatch on a format. A closed
enum plus one class per format keeps that dispatch in a single lookup
table instead of scattered conditionals, and makes a new format a
localized change.

HOW: SubtitleFormat is a str-valued Enum (serializes cleanly, accepted
straight from CLI flags and form fields). BaseFormat is an ABC with a
``name`` property, a ``parse()`` and a ``serialize()`` method. Variants
that differ only on export (Enhanced LRC, VTT/TTML karaoke) subclass the
base format and flip a class attribute.

RULES:
- parse() never raises on malformed content; it returns what it can
- serialize() never mutates the cues it is given
- ``key`` must match the FORMATS registry key
- Export extensions come from config.FORMAT_EXTENSIONS

To add a new format:
1. Create a module in formats/
2. Subclass BaseFormat, set ``key`` and ``media_type``
3. Implement ``name``, ``parse()`` and ``serialize()``
4. Register it in FORMATS in formats/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Optional, Sequence

from lyrics_converter.config import FORMAT_EXTENSIONS
from lyrics_converter.core.ir import Cue, Metadata, ParseResult


class SubtitleFormat(str, Enum):
    """Every format the engine can read or write."""

    LRC = "lrc"
    LRC_ENHANCED = "lrc_enhanced"
    SRT = "srt"
    VTT = "vtt"
    VTT_KARAOKE = "vtt_karaoke"
    TTML = "ttml"
    TTML_KARAOKE = "ttml_karaoke"
    JSON = "json"
    TXT = "txt"


class BaseFormat(ABC):
    """Abstract base for all format modules."""

    key: ClassVar[SubtitleFormat]
    media_type: ClassVar[str] = "text/plain"

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Enhanced LRC'."""

    @property
    def extension(self) -> str:
        """Canonical export extension, without the dot."""
        return FORMAT_EXTENSIONS[self.key.value]

    @abstractmethod
    def parse(self, content: str) -> ParseResult:
        """Parse decoded file text into cues and metadata.

        Args:
            content: The whole file as text (already decoded).

        Returns:
            ParseResult with cues in document order and metadata (empty
            Metadata when the format carries none).
        """

    @abstractmethod
    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        """Render cues (and metadata where the format supports it) as text."""
