"""Command-line interface for the lyrics converter.

WHY: Converting a lyrics or subtitle file should not need the editor.
The CLI wires detection, parsing, optional cleanup and serialization
behind a single command so files can be converted in batches or from
scripts.

HOW: Uses argparse to accept an input file, an optional source format,
a comma-separated list of target formats and an output directory. The
input is parsed once; each target format is serialized and saved next
to the source (or to --output-dir). Status messages go to stderr.

RULES:
- Positional argument: input lyrics/subtitle file path
- --from overrides detection; --to takes comma-separated format keys
  (default: every registered format)
- Output naming: {stem}.{ext}, numeric suffix on conflict (song-2.lrc);
  the input file is never overwritten
- Cleanup flags run in order: --generate-words, --hot-fix, --fill-word-gaps
- Status output goes to stderr (not stdout); errors exit with code 1
- Python 3.9 compatible, no match/case, no X | Y unions
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lyrics_converter.core.cleanup import fill_all_word_gaps, generate_all_words, hot_fix
from lyrics_converter.core.ir import Cue
from lyrics_converter.formats import (
    FORMATS,
    available_formats,
    export_filename,
    get_format,
    load_document,
    resolve_format,
)
from lyrics_converter.formats.base import SubtitleFormat


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(filename: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Several targets share an extension (LRC and Enhanced LRC both
    write ``.lrc``) and users may convert the same file more than once.
    Overwriting an earlier output, or the input itself, would lose work.

    RULES:
    - First attempt: {filename} (e.g. song.lrc)
    - Conflict: insert -N before the extension (song-2.lrc), N from 2
    """
    base_path = output_dir / filename
    if not base_path.exists():
        return base_path

    dot_idx = filename.rfind(".")
    if dot_idx > 0:
        name, ext = filename[:dot_idx], filename[dot_idx:]
    else:
        name, ext = filename, ""

    counter = 2
    while True:
        candidate = output_dir / "{}-{}{}".format(name, counter, ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(content: str, filename: str, output_dir: Path) -> Path:
    path = _resolve_output_path(filename, output_dir)
    path.write_text(content, encoding="utf-8")
    return path


def _parse_targets(value: Optional[str]) -> List[SubtitleFormat]:
    if not value:
        return list(FORMATS)
    return [resolve_format(key) for key in value.split(",") if key.strip()]


def _apply_cleanup(cues: List[Cue], args: argparse.Namespace) -> List[Cue]:
    if args.generate_words:
        cues = generate_all_words(cues)
        _status("  Generated word timing")
    if args.hot_fix:
        cues = hot_fix(cues)
        _status("  Applied hot fix")
    if args.fill_word_gaps:
        cues = fill_all_word_gaps(cues)
        _status("  Filled word gaps")
    return cues


def _list_formats() -> None:
    for key, cls in FORMATS.items():
        fmt = cls()
        print("{:<14} {:<16} .{}".format(key.value, fmt.name, fmt.extension))


def _run(args: argparse.Namespace) -> None:
    """Convert one input file to every requested target format."""
    if not args.input_file:
        _fail("No input file given")

    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        targets = _parse_targets(args.to)
        source = resolve_format(args.source) if args.source else None
    except ValueError as e:
        _fail(str(e))

    try:
        content = input_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        _fail("Could not decode {} as UTF-8 text".format(input_path.name))

    source, result = load_document(input_path.name, content, source)
    _status("Parsed {} as {}: {} cue(s)".format(
        input_path.name, get_format(source).name, len(result.cues)
    ))

    cues = _apply_cleanup(result.cues, args)

    saved_files: List[Path] = []
    for target in targets:
        fmt = get_format(target)
        output = fmt.serialize(cues, result.metadata)
        saved_path = _save_output(output, export_filename(input_path.name, target), output_dir)
        saved_files.append(saved_path)
        _status("  Saved {}: {}".format(fmt.name, saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect the parser without
    running a conversion.
    """
    parser = argparse.ArgumentParser(
        prog="lyrics-convert",
        description="Convert lyrics and subtitle files between LRC, Enhanced LRC, "
                    "SRT, WebVTT, TTML, JSON and plain text.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Path to the lyrics or subtitle file to convert.",
    )

    parser.add_argument(
        "--from",
        dest="source",
        default=None,
        help="Source format key (default: detect from file name and content).",
    )

    parser.add_argument(
        "--to",
        default=None,
        help="Comma-separated list of target formats. "
             "Available: {}. Default: all.".format(available_formats()),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--hot-fix",
        action="store_true",
        help="Compact whitespace, drop empty words and close word timing gaps.",
    )

    parser.add_argument(
        "--fill-word-gaps",
        action="store_true",
        help="Stretch word timing so words cover their whole cue.",
    )

    parser.add_argument(
        "--generate-words",
        action="store_true",
        help="Split cues without word timing into equal-duration words.",
    )

    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="List available formats and exit.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``lyrics-convert`` and ``python -m lyrics_converter``.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.list_formats:
        _list_formats()
        return
    _run(args)


if __name__ == "__main__":
    main()
