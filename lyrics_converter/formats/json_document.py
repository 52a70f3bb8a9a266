"""JSON cue document format.

WHY: JSON is the lossless interchange format: it keeps cue ids, exact
millisecond times and every word, so the editor and AI collaborators
can round-trip a document without any timing resolution loss.

HOW: Parsing accepts either a bare array of cue objects or an object
with ``cues`` and ``metadata``. Time values go through
adapters.records.coerce_time(), which keeps digit-only strings as
milliseconds. Export dumps ``{metadata, cues}`` and validates it against
cue_document.schema.json (shipped next to this module) before returning.

RULES:
- Invalid or too deeply nested JSON → empty cues and empty metadata,
  logged as a warning
- Non-dict entries in the cue array are skipped
- Loaded metadata is merged with all-empty-string defaults
- Export omits None fields and keeps non-ASCII text as-is
- Export validates with jsonschema; raises ValidationError on failure
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import jsonschema

from lyrics_converter.adapters.records import cue_to_record, cues_from_records
from lyrics_converter.core.ir import Cue, Metadata, ParseResult
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "cue_document.schema.json"


def _load_schema() -> Dict[str, Any]:
    """Load the cue document JSON schema from disk."""
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    """The cue document schema, cached at module level after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        _CACHED_SCHEMA = _load_schema()
    return _CACHED_SCHEMA


class JSONFormat(BaseFormat):
    """``{metadata, cues}`` JSON document."""

    key = SubtitleFormat.JSON
    media_type = "application/json"

    @property
    def name(self) -> str:
        return "JSON"

    def parse(self, content: str) -> ParseResult:
        try:
            parsed = json.loads(content)
        except (ValueError, RecursionError) as exc:
            logger.warning("JSON parse error: %s", exc)
            return ParseResult()

        if isinstance(parsed, list):
            records = parsed
            metadata = Metadata.blank()
        elif isinstance(parsed, dict):
            records = parsed.get("cues")
            if not isinstance(records, list):
                records = []
            metadata = Metadata.from_dict(parsed.get("metadata")).merged(Metadata.blank())
        else:
            records = []
            metadata = Metadata.blank()

        return ParseResult(cues=cues_from_records(records), metadata=metadata)

    def serialize(self, cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
        document: Dict[str, Any] = {}
        if metadata is not None:
            document["metadata"] = metadata.to_dict()
        document["cues"] = [cue_to_record(cue) for cue in cues]

        jsonschema.validate(instance=document, schema=get_schema())
        return json.dumps(document, indent=2, ensure_ascii=False)
