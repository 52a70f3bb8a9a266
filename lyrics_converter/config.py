"""Configuration constants, format tables, and .env loading.

WHY: Several formats synthesize timing that the file does not carry
(LRC has no end times, TXT has no times at all, TTML may omit end).
Those durations are plain data, not logic, so they live here where
they are easy to find and override.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level ints, strings, and dicts. Integer values can be
overridden through environment variables parsed by env_int().

RULES:
- All durations are integer milliseconds
- Bad environment values fall back to the default, never raise
- FORMAT_EXTENSIONS is keyed by format identifier string, not the enum,
  so this module stays importable without the formats package
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def env_int(name: str, default: int) -> int:
    """Read an integer override from the environment.

    Returns ``default`` when the variable is unset, empty, or not an
    integer.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Synthesized timing
# ---------------------------------------------------------------------------

LRC_PLACEHOLDER_MS = env_int("LYRICS_LRC_PLACEHOLDER_MS", 3000)
"""End-time placeholder for the last LRC cue (start + this)."""

TXT_LINE_MS = env_int("LYRICS_TXT_LINE_MS", 2000)
"""Fixed duration given to each line of a plain text import."""

STANZA_GAP_MS = env_int("LYRICS_STANZA_GAP_MS", 2000)
"""Gap between cues at or above which TXT export inserts a blank line."""

TTML_DEFAULT_DURATION_MS = env_int("LYRICS_TTML_DEFAULT_DURATION_MS", 2000)
"""Duration used for a TTML <p> that has neither end nor dur."""

GENERATED_LINE_MS = env_int("LYRICS_GENERATED_LINE_MS", 3000)
GENERATED_STANZA_GAP_MS = env_int("LYRICS_GENERATED_STANZA_GAP_MS", 4000)
REFINED_LINE_MS = env_int("LYRICS_REFINED_LINE_MS", 2000)

TTML_LANGUAGE = os.getenv("LYRICS_TTML_LANGUAGE", "en")

# ---------------------------------------------------------------------------
# Format tables
# ---------------------------------------------------------------------------

TTML_NAMESPACE = "http://www.w3.org/ns/ttml"
TTML_METADATA_NAMESPACE = "http://www.w3.org/ns/ttml#metadata"

FORMAT_EXTENSIONS: dict[str, str] = {
    "lrc": "lrc",
    "lrc_enhanced": "lrc",
    "srt": "srt",
    "vtt": "vtt",
    "vtt_karaoke": "vtt",
    "ttml": "ttml",
    "ttml_karaoke": "ttml",
    "json": "json",
    "txt": "txt",
}
"""Canonical export extension (without dot) per format identifier."""

DETECTABLE_EXTENSIONS: dict[str, str] = {
    ".lrc": "lrc",
    ".srt": "srt",
    ".vtt": "vtt",
    ".xml": "ttml",
    ".ttml": "ttml",
    ".json": "json",
    ".txt": "txt",
}
"""File extension (lowercase, with dot) → format identifier used for parsing."""

DEFAULT_EXPORT_STEM = "export"
