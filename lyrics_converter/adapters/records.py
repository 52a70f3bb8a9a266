"""Adapter: cue-shaped dict records ↔ Cue IR.

WHY: Two sources hand us cues as loose JSON objects. Hand-written JSON
files spell times as timestamps ("00:01.50") or seconds ("5.0"), while
AI transcription payloads send integer milliseconds, sometimes as
strings ("5000"). Routing "5000" through the timestamp decoder would
read it as 5000 *seconds*, a 1000× error. This module owns the one
coercion rule both sources share.

HOW: coerce_time() decides per value:
  - int/float          → used as milliseconds
  - string of digits   → literal integer milliseconds
  - any other string   → core.timecode.parse_timestamp()
  - anything else      → 0
cue_from_record() applies it to a cue and its words, filling ids and
decoding entities; cue_to_record() is the inverse used by JSON export.

RULES:
- A digit-only string is ALWAYS milliseconds, even though the same
  text as a bare TTML attribute would mean seconds. Keep it that way.
- Booleans are not numbers here (JSON true → 0)
- NaN and infinity (which json.loads accepts) → 0
- Word.end is only set when the record's value is truthy
- Missing word start stays None (timing inferred later, see core.timing)
- Records that are not dicts are skipped, never raise
"""

from __future__ import annotations

import math
import re
import uuid
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from lyrics_converter.config import REFINED_LINE_MS
from lyrics_converter.core.ir import Cue, Word
from lyrics_converter.core.text import decode_entities
from lyrics_converter.core.timecode import Millis, parse_timestamp

_DIGITS_RE = re.compile(r"^\d+$")


def coerce_time(value: Any) -> Millis:
    """Coerce a record time value to milliseconds (see module docstring)."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        trimmed = value.strip()
        if _DIGITS_RE.match(trimmed):
            return int(trimmed)
        return parse_timestamp(trimmed)
    return 0


def _text(value: Any) -> str:
    if value is None:
        return ""
    return decode_entities(value if isinstance(value, str) else str(value))


def _record_id(value: Any, fallback: str) -> str:
    if value is None or value == "":
        return fallback
    return str(value)


def _word_from_record(record: Dict[str, Any], cue_index: int, index: int, id_prefix: str) -> Word:
    start = record.get("start")
    end = record.get("end")
    return Word(
        id=_record_id(record.get("id"), "{}-w-{}-{}".format(id_prefix, cue_index, index)),
        text=_text(record.get("text")),
        start=coerce_time(start) if start is not None else None,
        end=coerce_time(end) if end else None,
    )


def cue_from_record(record: Any, index: int, id_prefix: str = "json") -> Optional[Cue]:
    """Build a Cue from one record, or None when the record is not a dict."""
    if not isinstance(record, dict):
        return None

    words = None
    raw_words = record.get("words")
    if isinstance(raw_words, list):
        words = tuple(
            _word_from_record(w, index, wi, id_prefix)
            for wi, w in enumerate(raw_words)
            if isinstance(w, dict)
        )

    return Cue(
        id=_record_id(record.get("id"), "{}-{}".format(id_prefix, index)),
        start=coerce_time(record.get("start")),
        end=coerce_time(record.get("end")),
        text=_text(record.get("text")),
        words=words,
    )


def cues_from_records(records: Iterable[Any], id_prefix: str = "json") -> List[Cue]:
    """Convert a sequence of records, skipping anything that is not a dict."""
    cues = []
    for index, record in enumerate(records):
        cue = cue_from_record(record, index, id_prefix)
        if cue is not None:
            cues.append(cue)
    return cues


def _word_to_record(word: Word) -> Dict[str, Any]:
    record: Dict[str, Any] = {"id": word.id, "text": word.text}
    if word.start is not None:
        record["start"] = word.start
    if word.end is not None:
        record["end"] = word.end
    return record


def cue_to_record(cue: Cue) -> Dict[str, Any]:
    """Plain dict form of a cue; None fields are omitted."""
    record: Dict[str, Any] = {
        "id": cue.id,
        "start": cue.start,
        "end": cue.end,
        "text": cue.text,
    }
    if cue.words is not None:
        record["words"] = [_word_to_record(w) for w in cue.words]
    return record


def merge_refined_text(
    cues: List[Cue],
    refined: Iterable[Any],
    line_ms: int = REFINED_LINE_MS,
) -> List[Cue]:
    """Map ``{id, text}`` refinement records back onto existing cues.

    WHY: A text-only refinement pass (e.g. an AI proofreading step) only
    returns ids and new text. Timing must come from the cues we already
    have, and word timing is only trustworthy while the text is unchanged.

    RULES:
    - Known id: keep timing; replace text; drop words if the text changed
    - Unknown id: new cue placed right after the previous cue's end,
      ``line_ms`` long; missing ids get a fresh unique id
    - Output order follows the refinement records
    """
    by_id = {cue.id: cue for cue in cues}
    merged: List[Cue] = []
    last_end: Millis = 0

    for item in refined:
        if not isinstance(item, dict):
            continue
        text = _text(item.get("text"))
        original = by_id.get(str(item.get("id")))
        if original is not None:
            words = original.words if text == original.text else None
            merged.append(replace(original, text=text, words=words))
            last_end = original.end
            continue
        merged.append(Cue(
            id=_record_id(item.get("id"), "refine-{}".format(uuid.uuid4().hex[:12])),
            start=last_end,
            end=last_end + line_ms,
            text=text,
        ))
        last_end += line_ms

    return merged
