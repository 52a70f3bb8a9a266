"""Tests for the cue record adapter (JSON/AI payload coercion).

WHY: The digit-string rule is the one place where a unit-scale mistake
(5000 ms read as 5000 s) can slip in silently. These tests pin it.

HOW: coerce_time() is tested value by value; cue_from_record() and
merge_refined_text() with small dict payloads.

RULES:
- "5000" → 5000 ms; "5.0" → 5000 ms via the codec (seconds)
- Missing ids are filled; word end only set when truthy
"""

from lyrics_converter.adapters.records import (
    coerce_time,
    cue_from_record,
    cue_to_record,
    cues_from_records,
    merge_refined_text,
)
from lyrics_converter.core.ir import Cue, Word


class TestCoerceTime:
    def test_numbers_pass_through(self):
        assert coerce_time(1234) == 1234
        assert coerce_time(12.5) == 12.5

    def test_digit_string_is_milliseconds(self):
        assert coerce_time("5000") == 5000

    def test_decimal_string_goes_through_codec(self):
        assert coerce_time("5.0") == 5000

    def test_timestamp_string(self):
        assert coerce_time("00:01.50") == 1500

    def test_other_values_are_zero(self):
        assert coerce_time(None) == 0
        assert coerce_time(True) == 0
        assert coerce_time([1]) == 0
        assert coerce_time("garbage") == 0

    def test_non_finite_numbers_are_zero(self):
        assert coerce_time(float("inf")) == 0
        assert coerce_time(float("-inf")) == 0
        assert coerce_time(float("nan")) == 0


class TestCueFromRecord:
    def test_full_record(self):
        cue = cue_from_record({
            "id": "x",
            "start": "5000",
            "end": 7000,
            "text": "Tom &amp; Jerry",
            "words": [
                {"id": "w", "text": "Tom", "start": "5000", "end": "5500"},
            ],
        }, 0)
        assert cue == Cue(
            id="x",
            start=5000,
            end=7000,
            text="Tom & Jerry",
            words=(Word(id="w", text="Tom", start=5000, end=5500),),
        )

    def test_missing_ids_and_word_times(self):
        cue = cue_from_record({"start": 0, "end": 1000, "text": "a", "words": [
            {"text": "a", "end": 0},
        ]}, 3)
        assert cue.id == "json-3"
        assert cue.words[0].id == "json-w-3-0"
        assert cue.words[0].start is None
        assert cue.words[0].end is None

    def test_no_words_key_means_no_word_timing(self):
        assert cue_from_record({"text": "a"}, 0).words is None

    def test_non_dict_is_none(self):
        assert cue_from_record("nope", 0) is None

    def test_cues_from_records_skips_junk(self):
        cues = cues_from_records([{"text": "a"}, 3, None, {"text": "b"}], id_prefix="ai")
        assert [c.id for c in cues] == ["ai-0", "ai-3"]


class TestCueToRecord:
    def test_omits_none(self):
        cue = Cue(id="c", start=0, end=10, text="t", words=(Word(id="w", text="t"),))
        assert cue_to_record(cue) == {
            "id": "c",
            "start": 0,
            "end": 10,
            "text": "t",
            "words": [{"id": "w", "text": "t"}],
        }

    def test_no_words_key(self):
        assert "words" not in cue_to_record(Cue(id="c", start=0, end=10, text="t"))


class TestMergeRefinedText:
    def test_known_ids_keep_timing(self, sample_cues):
        merged = merge_refined_text(sample_cues, [
            {"id": "c1", "text": "First line!"},
            {"id": "c2", "text": "Hello world"},
        ])
        assert (merged[0].start, merged[0].end, merged[0].text) == (1000, 3500, "First line!")
        assert merged[1].words == sample_cues[1].words

    def test_changed_text_drops_words(self, sample_cues):
        merged = merge_refined_text(sample_cues, [{"id": "c2", "text": "Hello there"}])
        assert merged[0].words is None

    def test_new_cue_after_previous(self, sample_cues):
        merged = merge_refined_text(sample_cues, [
            {"id": "c1", "text": "First line"},
            {"text": "Inserted"},
        ], line_ms=2000)
        inserted = merged[1]
        assert (inserted.start, inserted.end, inserted.text) == (3500, 5500, "Inserted")
        assert inserted.id.startswith("refine-")
