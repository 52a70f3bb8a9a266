"""TTML (Timed Text Markup Language) format, with optional karaoke spans.

WHY: TTML is the XML subtitle format used by streaming platforms and by
synced-lyrics services, where each word of a line is a ``<span>`` with
its own ``begin``/``end``. It is the richest format we read, and the
only one that needs a real XML parser.

HOW: The document is parsed with xml.dom.minidom and walked by local
element name (so ``tt:p`` and ``p`` are treated alike). Each ``<p>`` is
one cue; its text is gathered recursively with ``<br>`` as a newline.
Timed ``<span>`` elements become words. Export builds the XML text
directly, escaping cue and metadata text.

RULES:
- Cue end: ``end`` if present, else ``begin + dur``, else
  ``begin + config.TTML_DEFAULT_DURATION_MS``
- Bare numeric times are seconds (codec convention)
- ``metadata``, ``head`` and ``style`` subtrees never contribute text
- Source whitespace (indentation between spans) collapses to one space;
  only ``<br>`` produces a line break
- Words are spans with their own begin or end; of nested timed spans
  only the innermost count
- Malformed XML yields an empty result, never an exception
- Karaoke export never emits overlapping word spans: each end is clamped
  to the next word's start
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Sequence
from xml.dom import Node, minidom
from xml.parsers.expat import ExpatError

from lyrics_converter.config import (
    TTML_DEFAULT_DURATION_MS,
    TTML_LANGUAGE,
    TTML_METADATA_NAMESPACE,
    TTML_NAMESPACE,
)
from lyrics_converter.core.ir import Cue, Metadata, ParseResult, Word
from lyrics_converter.core.text import collapse_lines, escape_xml
from lyrics_converter.core.timecode import parse_timestamp, to_vtt
from lyrics_converter.core.timing import non_overlapping_timings
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat

logger = logging.getLogger(__name__)

_EXCLUDED_ELEMENTS = frozenset({"metadata", "head", "style"})
_SPACE_RE = re.compile(r"\s+")

_ALBUM_PREFIX = "Album: "
_BY_PREFIX = "By: "


def _local_name(node: Node) -> str:
    name = node.localName or node.nodeName
    return name.rsplit(":", 1)[-1].lower()


def _iter_elements(node: Node, local_name: str) -> Iterator[Node]:
    """All descendant elements named ``local_name``, in document order."""
    for child in node.childNodes:
        if child.nodeType != Node.ELEMENT_NODE:
            continue
        if _local_name(child) == local_name:
            yield child
        yield from _iter_elements(child, local_name)


def _extract_text(node: Node) -> str:
    parts: List[str] = []
    for child in node.childNodes:
        if child.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
            parts.append(_SPACE_RE.sub(" ", child.data))
        elif child.nodeType == Node.ELEMENT_NODE:
            name = _local_name(child)
            if name == "br":
                parts.append("\n")
            elif name not in _EXCLUDED_ELEMENTS:
                parts.append(_extract_text(child))
    return "".join(parts)


def _is_timed(element: Node) -> bool:
    return element.hasAttribute("begin") or element.hasAttribute("end")


def _timed_spans(paragraph: Node) -> List[Node]:
    spans = [span for span in _iter_elements(paragraph, "span") if _is_timed(span)]
    return [
        span for span in spans
        if not any(_is_timed(inner) for inner in _iter_elements(span, "span"))
    ]


def _optional_time(element: Node, attribute: str) -> Optional[float]:
    if not element.hasAttribute(attribute):
        return None
    return parse_timestamp(element.getAttribute(attribute))


def _cue_end(paragraph: Node, start: float) -> float:
    end = _optional_time(paragraph, "end")
    if end is not None:
        return end
    dur = _optional_time(paragraph, "dur")
    if dur is not None:
        return start + dur
    return start + TTML_DEFAULT_DURATION_MS


def _first_text(root: Node, local_name: str, prefix: str = "") -> Optional[str]:
    for element in _iter_elements(root, local_name):
        text = collapse_lines(_extract_text(element))
        if prefix and text.startswith(prefix):
            text = text[len(prefix):]
        return text
    return None


def _parse_metadata(root: Node) -> Metadata:
    artist = None
    for agent in _iter_elements(root, "agent"):
        if agent.getAttribute("role") in ("", "artist"):
            artist = collapse_lines(_extract_text(agent))
            break
    return Metadata(
        title=_first_text(root, "title"),
        artist=artist,
        album=_first_text(root, "desc", _ALBUM_PREFIX),
        by=_first_text(root, "copyright", _BY_PREFIX),
    )


def _metadata_block(metadata: Optional[Metadata]) -> str:
    if metadata is None or metadata.is_empty():
        return ""
    items = ""
    if metadata.title:
        items += "      <ttm:title>{}</ttm:title>\n".format(escape_xml(metadata.title))
    if metadata.artist:
        items += '      <ttm:agent type="person" role="artist">{}</ttm:agent>\n'.format(
            escape_xml(metadata.artist)
        )
    if metadata.album:
        items += "      <ttm:desc>{}{}</ttm:desc>\n".format(_ALBUM_PREFIX, escape_xml(metadata.album))
    if metadata.by:
        items += "      <ttm:copyright>{}{}</ttm:copyright>\n".format(_BY_PREFIX, escape_xml(metadata.by))
    if not items:
        return ""
    return "  <head>\n    <metadata>\n{}    </metadata>\n  </head>\n".format(items)


class TTMLFormat(BaseFormat):
    """TTML with one ``<p>`` per cue; plain text on export."""

    key = SubtitleFormat.TTML
    media_type = "application/ttml+xml"
    karaoke = False

    @property
    def name(self) -> str:
        return "TTML"

    def parse(self, content: str) -> ParseResult:
        try:
            document = minidom.parseString(content)
        except (ExpatError, ValueError) as exc:
            logger.warning("TTML parse failed: %s", exc)
            return ParseResult()

        cues: List[Cue] = []
        for index, paragraph in enumerate(_iter_elements(document, "p")):
            start = parse_timestamp(paragraph.getAttribute("begin") or "0")
            words = []
            for j, span in enumerate(_timed_spans(paragraph)):
                text = collapse_lines(_extract_text(span))
                if not text:
                    continue
                words.append(Word(
                    id="ttml-w-{}-{}".format(index, j),
                    text=text,
                    start=_optional_time(span, "begin"),
                    end=_optional_time(span, "end"),
                ))
            cues.append(Cue(
                id="ttml-{}".format(index),
                start=start,
                end=_cue_end(paragraph, start),
                text=collapse_lines(_extract_text(paragraph)),
                words=tuple(words) if words else None,
            ))

        metadata = _parse_metadata(document)
        document.unlink()
        return ParseResult(cues=cues, metadata=metadata)

    def _paragraph_content(self, cue: Cue) -> str:
        if self.karaoke and cue.has_words:
            spans = [
                '        <span begin="{}" end="{}">{}</span>'.format(
                    to_vtt(start), to_vtt(end), escape_xml(word.text)
                )
                for (start, end), word in zip(non_overlapping_timings(cue), cue.words)
            ]
            return "\n" + "\n".join(spans) + "\n      "
        return escape_xml(cue.text).replace("\n", "<br/>")

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        body = "".join(
            '      <p begin="{}" end="{}">{}</p>\n'.format(
                to_vtt(cue.start), to_vtt(cue.end), self._paragraph_content(cue)
            )
            for cue in cues
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<tt xmlns="{}" xmlns:ttm="{}" xml:lang="{}">\n'
            "{}"
            "  <body>\n"
            "    <div>\n"
            "{}"
            "    </div>\n"
            "  </body>\n"
            "</tt>"
        ).format(
            TTML_NAMESPACE,
            TTML_METADATA_NAMESPACE,
            TTML_LANGUAGE,
            _metadata_block(metadata),
            body,
        )


class TTMLKaraokeFormat(TTMLFormat):
    """TTML with one timed ``<span>`` per word."""

    key = SubtitleFormat.TTML_KARAOKE
    karaoke = True

    @property
    def name(self) -> str:
        return "TTML (Words)"
