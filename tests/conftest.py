"""Shared test fixtures for the lyrics_converter test suite.

WHY: Most test modules need the same small documents: a few cues with
and without word timing, their metadata, and one sample file per format.
Centralizing them here avoids duplication and keeps expected values in
one place.

HOW: Pytest fixtures return fresh lists of frozen Cue objects and raw
file text. The sample files are written by hand, not produced by our own
serializers, so parser tests do not just confirm the serializers.

RULES:
- All times are integer milliseconds and exactly representable in every
  timed format (multiples of 10 ms) unless a test says otherwise
- SAMPLE_CUES[1] carries word timing; the others do not
"""

from typing import List

import pytest

from lyrics_converter.core.ir import Cue, Metadata, Word


SAMPLE_CUES: List[Cue] = [
    Cue(id="c1", start=1000, end=3500, text="First line"),
    Cue(
        id="c2",
        start=3500,
        end=6000,
        text="Hello world",
        words=(
            Word(id="w1", text="Hello", start=3500, end=4200),
            Word(id="w2", text="world", start=4500),
        ),
    ),
    Cue(id="c3", start=9000, end=12340, text="After the break"),
]

SAMPLE_METADATA = Metadata(title="Song", artist="Band", album="Record", by="Editor")


SAMPLE_LRC = """[ti:Song]
[ar:Band]
[al:Record]
[by:Editor]
[00:01.00]First line
[00:03.50]<00:03.50>Hello <00:04.50>world
[00:09.00]After the break
"""

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:03,500
First line

2
00:00:03,500 --> 00:00:06,000 X1:10 X2:20
Hello
world

3
00:00:09,000 --> 00:00:12,340
After the break
"""

SAMPLE_VTT = """WEBVTT
Note Title: Song

NOTE this block is ignored

intro
00:00:01.000 --> 00:00:03.500 align:center
First line

00:00:03.500 --> 00:00:06.000
<00:00:03.500>Hello <00:00:04.500>world
"""

SAMPLE_TTML = """<?xml version="1.0" encoding="UTF-8"?>
<tt xmlns="http://www.w3.org/ns/ttml" xmlns:ttm="http://www.w3.org/ns/ttml#metadata" xml:lang="en">
  <head>
    <metadata>
      <ttm:title>Song</ttm:title>
      <ttm:agent type="person" role="artist">Band</ttm:agent>
      <ttm:desc>Album: Record</ttm:desc>
      <ttm:copyright>By: Editor</ttm:copyright>
    </metadata>
  </head>
  <body>
    <div>
      <p begin="1s" end="3.5s">First &amp; only<br/>line</p>
      <p begin="00:00:03.500" dur="2500ms">
        <span begin="00:00:03.500" end="00:00:04.200">Hello</span>
        <span begin="00:00:04.500">world</span>
      </p>
      <p begin="9">No end</p>
    </div>
  </body>
</tt>
"""


@pytest.fixture
def sample_cues():
    """Three cues; the second has two words (the second word has no end)."""
    return list(SAMPLE_CUES)


@pytest.fixture
def sample_metadata():
    return SAMPLE_METADATA


@pytest.fixture
def overlapping_cue():
    """A cue whose first word's stored end runs past the second word's start."""
    return Cue(
        id="ov",
        start=0,
        end=2000,
        text="one two",
        words=(
            Word(id="a", text="one", start=0, end=1500),
            Word(id="b", text="two", start=1000, end=2000),
        ),
    )


@pytest.fixture
def sample_lrc():
    return SAMPLE_LRC


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT


@pytest.fixture
def sample_ttml():
    return SAMPLE_TTML
