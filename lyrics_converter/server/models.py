"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. The cue
models mirror the JSON document format so a client can post back
exactly what /parse returned.

HOW: One model per IR type (WordModel, CueModel, MetadataModel) plus
small request/response wrappers. Conversions to and from the frozen IR
dataclasses live here so the route handlers stay thin.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Times are milliseconds; ints stay ints, fractional values stay floats
- NaN and infinity are rejected (422) so they never reach a serializer
- Format fields take SubtitleFormat values (e.g. "lrc_enhanced")
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from lyrics_converter.core.ir import Cue, Metadata, ParseResult, Word

TimeValue = Union[int, float]


# ---------------------------------------------------------------------------
# Document models
# ---------------------------------------------------------------------------


class WordModel(BaseModel):
    """One timed word inside a cue."""

    id: str = Field(description="Word identifier, unique within its cue.")
    text: str = Field(description="Word text.")
    start: Optional[TimeValue] = Field(
        default=None,
        description="Start in milliseconds. Absent when the word has no timing of its own.",
    )
    end: Optional[TimeValue] = Field(
        default=None,
        description="End in milliseconds. Absent means inferred from the next word or the cue end.",
    )

    model_config = {"allow_inf_nan": False}

    def to_word(self) -> Word:
        return Word(id=self.id, text=self.text, start=self.start, end=self.end)


class CueModel(BaseModel):
    """One timed line of lyrics or subtitle text.

    RULES:
    - words=None means "no word-level timing", not "zero words"
    """

    id: str = Field(description="Cue identifier, unique within the document.")
    start: TimeValue = Field(description="Start in milliseconds.")
    end: TimeValue = Field(description="End in milliseconds.")
    text: str = Field(description="Display text; may contain newlines.")
    words: Optional[List[WordModel]] = Field(
        default=None,
        description="Word-level timing, when the cue has any.",
    )

    model_config = {"allow_inf_nan": False, "json_schema_extra": {
        "examples": [
            {
                "id": "lrc-0",
                "start": 1000,
                "end": 4000,
                "text": "Hello world",
                "words": [
                    {"id": "lrc-w-0-0", "text": "Hello", "start": 1000},
                    {"id": "lrc-w-0-1", "text": "world", "start": 1500},
                ],
            }
        ]
    }}

    @classmethod
    def from_cue(cls, cue: Cue) -> "CueModel":
        words = None
        if cue.words is not None:
            words = [
                WordModel(id=w.id, text=w.text, start=w.start, end=w.end)
                for w in cue.words
            ]
        return cls(id=cue.id, start=cue.start, end=cue.end, text=cue.text, words=words)

    def to_cue(self) -> Cue:
        words = None
        if self.words is not None:
            words = tuple(w.to_word() for w in self.words)
        return Cue(id=self.id, start=self.start, end=self.end, text=self.text, words=words)


class MetadataModel(BaseModel):
    """Document-level descriptive fields."""

    title: Optional[str] = Field(default=None, description="Song or programme title.")
    artist: Optional[str] = Field(default=None, description="Performing artist.")
    album: Optional[str] = Field(default=None, description="Album name.")
    by: Optional[str] = Field(default=None, description="Creator or translator credit.")

    @classmethod
    def from_metadata(cls, metadata: Metadata) -> "MetadataModel":
        return cls(**metadata.to_dict())

    def to_metadata(self) -> Metadata:
        return Metadata(title=self.title, artist=self.artist, album=self.album, by=self.by)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SerializeRequest(BaseModel):
    """Body of POST /serialize.

    WHY: The editor keeps cues in memory and only needs the server to
    render them; it should not have to upload a file first.
    """

    format: str = Field(description="Target format key, e.g. 'ttml_karaoke'.")
    cues: List[CueModel] = Field(description="Cues to serialize, in order.")
    metadata: Optional[MetadataModel] = Field(
        default=None,
        description="Optional metadata; written by formats that support it.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DocumentResponse(BaseModel):
    """Parsed document returned by POST /parse."""

    format: str = Field(description="Format the upload was parsed as.")
    metadata: MetadataModel = Field(description="Metadata found in the document.")
    cues: List[CueModel] = Field(description="Parsed cues in document order.")

    @classmethod
    def from_result(cls, fmt: str, result: ParseResult) -> "DocumentResponse":
        return cls(
            format=fmt,
            metadata=MetadataModel.from_metadata(result.metadata),
            cues=[CueModel.from_cue(cue) for cue in result.cues],
        )


class DetectResponse(BaseModel):
    """Result of format detection."""

    format: str = Field(description="Detected format key.")


class FormatInfo(BaseModel):
    """Description of an available format.

    WHY: Clients can query the /formats endpoint to discover which
    formats are supported and what file they produce.
    """

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    extension: str = Field(description="Export file extension, without the dot.")
    media_type: str = Field(description="MIME type of exported content.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
