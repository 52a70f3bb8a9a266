"""Tests for word timing inference and whole-document cleanup transforms.

WHY: Karaoke exports depend on every word having a start and an end.
When those are inferred wrongly, highlights jump ahead, overlap, or
never end.

HOW: Small hand-built cues with partial timing; expected values are
computed by hand in each test.

RULES:
- Missing end → next word's start → cue end
- Missing start → equal-slice synthetic slot
- Transforms never mutate their input
"""

from lyrics_converter.core.cleanup import (
    clear_words,
    compact_whitespace,
    generate_all_words,
    hot_fix,
    remove_empty_words,
    sort_by_start,
)
from lyrics_converter.core.ir import Cue, Word
from lyrics_converter.core.timing import (
    effective_word_end,
    fill_word_gaps,
    generate_words,
    layout_lines,
    non_overlapping_timings,
    synthetic_slot,
    word_timings,
)


def _cue(words, start=0, end=3000, text="a b c"):
    return Cue(id="c", start=start, end=end, text=text, words=tuple(words))


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


class TestWordTimings:
    def test_end_from_next_start_then_cue_end(self):
        cue = _cue([
            Word(id="1", text="a", start=0),
            Word(id="2", text="b", start=1200),
        ])
        assert word_timings(cue) == [(0, 1200), (1200, 3000)]

    def test_stored_end_wins(self):
        cue = _cue([
            Word(id="1", text="a", start=0, end=500),
            Word(id="2", text="b", start=1200),
        ])
        assert effective_word_end(cue, 0) == 500
        assert effective_word_end(cue, 1) == 3000

    def test_missing_start_uses_synthetic_slot(self):
        cue = _cue([
            Word(id="1", text="a"),
            Word(id="2", text="b"),
            Word(id="3", text="c"),
        ], start=1000, end=4000)
        assert word_timings(cue) == [(1000, 2000), (2000, 3000), (3000, 4000)]

    def test_synthetic_slot_floors(self):
        cue = Cue(id="c", start=0, end=1000, text="x")
        assert synthetic_slot(cue, 0, 3) == (0, 333)
        assert synthetic_slot(cue, 2, 3) == (666, 1000)

    def test_no_words(self):
        assert word_timings(Cue(id="c", start=0, end=1, text="x")) == []


class TestNonOverlapping:
    def test_clamps_to_next_start(self, overlapping_cue):
        assert non_overlapping_timings(overlapping_cue) == [(0, 1000), (1000, 2000)]

    def test_leaves_gaps_alone(self):
        cue = _cue([
            Word(id="1", text="a", start=0, end=500),
            Word(id="2", text="b", start=1000, end=1500),
        ])
        assert non_overlapping_timings(cue) == [(0, 500), (1000, 1500)]


# ---------------------------------------------------------------------------
# Cue transforms
# ---------------------------------------------------------------------------


class TestFillWordGaps:
    def test_contiguous_from_cue_start_to_end(self):
        cue = _cue([
            Word(id="2", text="b", start=2000, end=2100),
            Word(id="1", text="a", start=500, end=800),
        ], start=0, end=3000)
        filled = fill_word_gaps(cue)
        assert [(w.id, w.start, w.end) for w in filled.words] == [
            ("1", 0, 2000),
            ("2", 2000, 3000),
        ]

    def test_original_untouched(self):
        words = (Word(id="1", text="a", start=500, end=800),)
        cue = Cue(id="c", start=0, end=1000, text="a", words=words)
        fill_word_gaps(cue)
        assert cue.words == words

    def test_cue_without_words_returned_as_is(self):
        cue = Cue(id="c", start=0, end=1000, text="a")
        assert fill_word_gaps(cue) is cue


class TestGenerateWords:
    def test_equal_slices(self):
        cue = Cue(id="c", start=1000, end=2000, text="one two")
        generated = generate_words(cue)
        assert [(w.id, w.text, w.start, w.end) for w in generated.words] == [
            ("auto-c-0", "one", 1000, 1500),
            ("auto-c-1", "two", 1500, 2000),
        ]

    def test_existing_words_kept(self, sample_cues):
        assert generate_words(sample_cues[1]) is sample_cues[1]

    def test_blank_text(self):
        cue = Cue(id="c", start=0, end=1000, text="   ")
        assert generate_words(cue).words is None


class TestLayoutLines:
    def test_stanza_gap(self):
        cues = layout_lines("one\ntwo\n\nthree", line_ms=3000, stanza_gap_ms=4000)
        assert [(c.id, c.start, c.end, c.text) for c in cues] == [
            ("gen-0", 0, 3000, "one"),
            ("gen-1", 3000, 6000, "two"),
            ("gen-2", 10000, 13000, "three"),
        ]


class TestCleanup:
    def test_compact_whitespace(self):
        cue = Cue(id="c", start=0, end=1, text="  a   b ", words=(Word(id="w", text=" a "),))
        [compacted] = compact_whitespace([cue])
        assert compacted.text == "a b"
        assert compacted.words[0].text == "a"

    def test_remove_empty_words(self):
        cue = Cue(id="c", start=0, end=1, text="a", words=(
            Word(id="1", text="a"),
            Word(id="2", text="  "),
        ))
        [cleaned] = remove_empty_words([cue])
        assert [w.id for w in cleaned.words] == ["1"]

    def test_sort_by_start_is_stable(self):
        a = Cue(id="a", start=5, end=6, text="a")
        b = Cue(id="b", start=1, end=2, text="b")
        c = Cue(id="c", start=5, end=7, text="c")
        assert [x.id for x in sort_by_start([a, b, c])] == ["b", "a", "c"]

    def test_clear_words(self, sample_cues):
        assert all(cue.words is None for cue in clear_words(sample_cues))

    def test_generate_all_words(self, sample_cues):
        result = generate_all_words(sample_cues)
        assert [w.text for w in result[0].words] == ["First", "line"]
        assert result[1].words == sample_cues[1].words

    def test_hot_fix(self):
        cue = Cue(id="c", start=0, end=1000, text=" x  y ", words=(
            Word(id="1", text=" x", start=100, end=200),
            Word(id="2", text=""),
            Word(id="3", text="y", start=600, end=700),
        ))
        [fixed] = hot_fix([cue])
        assert fixed.text == "x y"
        assert [(w.text, w.start, w.end) for w in fixed.words] == [
            ("x", 0, 600),
            ("y", 600, 1000),
        ]

    def test_input_list_not_mutated(self, sample_cues):
        before = list(sample_cues)
        hot_fix(sample_cues)
        assert sample_cues == before
