"""Lyrics Converter: subtitle and lyrics interchange hub.

WHY: Lyrics and subtitle files arrive in many loosely specified text
formats (LRC, Enhanced LRC, SRT, WebVTT, TTML, JSON, plain text). An
editor needs one normalized cue model it can work on, and it needs to
write any of those formats back out without losing word-level timing.

HOW: Three-stage pipeline: detect (format sniffing), parse (format
module → cue IR), serialize (cue IR → format text). The timestamp codec
underneath every format is a separate leaf module.

RULES:
- All formats parse into and serialize from the same Cue/Word/Metadata IR
- Adding a new format = one new module in formats/, one registry line
- The IR is immutable; transforms always return new collections
"""

__version__ = "0.1.0"
