"""FastAPI application exposing the format engine over HTTP.

WHY: The browser editor, scripts and other tools need the parsers and
serializers without bundling Python. FastAPI provides automatic OpenAPI
documentation, request validation and multipart upload handling.

HOW: A single FastAPI app exposes stateless endpoints grouped by tags.
Uploads are decoded as UTF-8 (BOM tolerated) and handed to
formats.load_document(); responses are built from the pydantic models
in server.models. Nothing is stored between requests.

RULES:
- All endpoints have OpenAPI descriptions on every parameter and response
- Error responses use a consistent ErrorResponse schema ({detail})
- Unknown format keys and undecodable uploads are 400s
- /convert returns the file body with a Content-Disposition filename
  built by formats.export_filename()
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Annotated, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from lyrics_converter import __version__
from lyrics_converter.core.cleanup import hot_fix as apply_hot_fix
from lyrics_converter.formats import (
    FORMATS,
    detect_format,
    export_filename,
    get_format,
    load_document,
    resolve_format,
)
from lyrics_converter.formats.base import BaseFormat, SubtitleFormat
from lyrics_converter.server.models import (
    DetectResponse,
    DocumentResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    SerializeRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lyrics Converter API",
    description=(
        "REST API for converting lyrics and subtitle files between LRC, "
        "Enhanced LRC, SRT, WebVTT, TTML, JSON and plain text. Upload a file "
        "to detect, parse or convert it, or post cues to serialize them."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _format_or_400(key: str) -> BaseFormat:
    """Resolve a format key, raising HTTPException for unknown keys."""
    try:
        return get_format(key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _source_or_400(key: Optional[str]) -> Optional[SubtitleFormat]:
    if not key:
        return None
    try:
        return resolve_format(key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


async def _read_upload(file: UploadFile) -> str:
    """Read an uploaded file as text, raising HTTPException if it is not UTF-8."""
    content_bytes = await file.read()
    try:
        return content_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=400,
            detail="File '{}' is not valid UTF-8 text".format(file.filename or "upload"),
        )


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/detect",
    response_model=DetectResponse,
    tags=["documents"],
    summary="Detect the format of an uploaded file",
    description=(
        "Detects the format from the file name extension, falling back to "
        "content sniffing (JSON, WebVTT, TTML namespace, LRC timestamps, "
        "else SRT)."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Upload is not UTF-8 text"},
    },
)
async def detect(
    file: Annotated[
        UploadFile,
        File(description="Lyrics or subtitle file."),
    ],
) -> DetectResponse:
    content = await _read_upload(file)
    return DetectResponse(format=detect_format(file.filename, content).value)


@app.post(
    "/parse",
    response_model=DocumentResponse,
    tags=["documents"],
    summary="Parse an uploaded file into cues",
    description=(
        "Parses the upload into cues with optional word timing and document "
        "metadata. The format is detected unless given explicitly."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown format or undecodable upload"},
    },
)
async def parse(
    file: Annotated[
        UploadFile,
        File(description="Lyrics or subtitle file to parse."),
    ],
    format: Annotated[
        Optional[str],
        Form(description="Source format key. Detected from the file when omitted."),
    ] = None,
) -> DocumentResponse:
    source = _source_or_400(format)
    content = await _read_upload(file)
    fmt, result = load_document(file.filename, content, source)
    logger.info("Parsed %s as %s: %d cues", file.filename, fmt.value, len(result.cues))
    return DocumentResponse.from_result(fmt.value, result)


@app.post(
    "/convert",
    tags=["documents"],
    summary="Convert an uploaded file to another format",
    description=(
        "Parses the upload and returns it serialized in the target format. "
        "The response carries a Content-Disposition header with the source "
        "file name and the target format's extension."
    ),
    responses={
        200: {"description": "Converted file content."},
        400: {"model": ErrorResponse, "description": "Unknown format or undecodable upload"},
    },
)
async def convert(
    file: Annotated[
        UploadFile,
        File(description="Lyrics or subtitle file to convert."),
    ],
    target: Annotated[
        str,
        Form(description="Target format key, e.g. 'srt' or 'ttml_karaoke'."),
    ],
    source: Annotated[
        Optional[str],
        Form(description="Source format key. Detected from the file when omitted."),
    ] = None,
    hot_fix: Annotated[
        bool,
        Form(description="Compact whitespace, drop empty words and close word gaps first."),
    ] = False,
) -> Response:
    target_format = _format_or_400(target)
    source_format = _source_or_400(source)
    content = await _read_upload(file)

    fmt, result = load_document(file.filename, content, source_format)
    cues = apply_hot_fix(result.cues) if hot_fix else result.cues
    output = target_format.serialize(cues, result.metadata)
    filename = export_filename(file.filename, target_format.key)
    logger.info("Converted %s from %s to %s", file.filename, fmt.value, target_format.key.value)

    return Response(
        content=output,
        media_type=target_format.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


@app.post(
    "/serialize",
    tags=["documents"],
    summary="Serialize cues to a format",
    description=(
        "Renders cues (and optional metadata) as text in the requested "
        "format. The body uses the same cue shape that /parse returns."
    ),
    responses={
        200: {"description": "Serialized document text."},
        400: {"model": ErrorResponse, "description": "Unknown format"},
    },
)
async def serialize(request: SerializeRequest) -> Response:
    target_format = _format_or_400(request.format)
    cues = [cue.to_cue() for cue in request.cues]
    metadata = request.metadata.to_metadata() if request.metadata is not None else None
    return Response(
        content=target_format.serialize(cues, metadata),
        media_type=target_format.media_type,
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available formats",
    description=(
        "Returns all supported formats with their identifiers, "
        "human-readable names, export extensions and media types."
    ),
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, format_cls in FORMATS.items():
        fmt = format_cls()
        result.append(FormatInfo(
            key=key.value,
            name=fmt.name,
            extension=fmt.extension,
            media_type=fmt.media_type,
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the lyrics-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run_api()
