"""Adapter modules for converting between the cue IR and loose records.

WHY: JSON documents and AI transcription payloads describe cues as
plain dicts whose time values follow no single convention. Adapters
turn those records into IR objects (and back) so format modules and
collaborators share one set of coercion rules.

RULES:
- Adapters are pure data transformations: no I/O, no side effects.
- Adapters must not modify the source IR objects or input records.
"""

from lyrics_converter.adapters.records import (
    coerce_time,
    cue_from_record,
    cue_to_record,
    cues_from_records,
    merge_refined_text,
)

__all__ = [
    "coerce_time",
    "cue_from_record",
    "cue_to_record",
    "cues_from_records",
    "merge_refined_text",
]
