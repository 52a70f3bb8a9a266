"""Text utilities shared by parsers and serializers.

WHY: Subtitle text frequently carries HTML/XML character entities and
inline tags (<i>, <b>, karaoke timestamps). Parsers need the display
text; serializers need to escape what the target syntax reserves.

RULES:
- decode_entities() handles exactly the five named XML entities plus
  decimal and hex numeric references; anything else is left as-is
- &amp; is decoded last so "&amp;lt;" becomes "&lt;", not "<"
- escape_xml() escapes &, <, > (text content only, not attributes)
"""

from __future__ import annotations

import re

TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_ENTITY_RE = re.compile(r"&(?:#(\d+)|#[xX]([0-9a-fA-F]+)|(lt|gt|quot|apos));")

_NAMED_ENTITIES = {"lt": "<", "gt": ">", "quot": '"', "apos": "'"}


def _codepoint(value: int, original: str) -> str:
    try:
        return chr(value)
    except (ValueError, OverflowError):
        return original


def _replace_entity(match: "re.Match[str]") -> str:
    decimal, hexadecimal, name = match.groups()
    if decimal is not None:
        return _codepoint(int(decimal), match.group(0))
    if hexadecimal is not None:
        return _codepoint(int(hexadecimal, 16), match.group(0))
    return _NAMED_ENTITIES[name]


def decode_entities(text: str) -> str:
    """Decode ``&lt; &gt; &quot; &apos; &#NNN; &#xHH; &amp;``."""
    if "&" not in text:
        return text
    decoded = _ENTITY_RE.sub(_replace_entity, text)
    return decoded.replace("&amp;", "&")


def strip_tags(text: str) -> str:
    """Remove every ``<…>`` tag."""
    return TAG_RE.sub("", text)


def escape_xml(text: str) -> str:
    """Escape text content for XML output."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def collapse_lines(text: str) -> str:
    """Collapse whitespace within each line, keeping the line breaks.

    Leading and trailing empty lines are dropped.
    """
    lines = [collapse_whitespace(line) for line in text.split("\n")]
    return "\n".join(lines).strip("\n")
