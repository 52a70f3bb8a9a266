"""Tests for the timestamp codec.

WHY: Every format goes through these functions. A unit-scale error
(seconds read as milliseconds) or a rounding error here shifts every
cue in every exported file.

HOW: Encoders are checked against hand-computed strings; the decoder is
checked grammar by grammar, then the inverse bounds are checked over a
spread of millisecond values.

RULES:
- Encoders floor; LRC truncates to centiseconds
- Bare numbers decode as seconds
- Malformed input decodes to 0, never raises
"""

import pytest

from lyrics_converter.core.timecode import (
    is_timestamp,
    parse_timestamp,
    to_lrc,
    to_precise_mm_ss,
    to_srt,
    to_vtt,
)


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------


class TestEncoders:
    def test_srt_uses_comma(self):
        assert to_srt(3_723_456) == "01:02:03,456"

    def test_vtt_uses_dot(self):
        assert to_vtt(3_723_456) == "01:02:03.456"

    def test_zero(self):
        assert to_srt(0) == "00:00:00,000"
        assert to_vtt(0) == "00:00:00.000"
        assert to_lrc(0) == "00:00.00"
        assert to_precise_mm_ss(0) == "00:00.000"

    def test_hours_not_wrapped(self):
        assert to_srt(100 * 3_600_000) == "100:00:00,000"

    def test_lrc_minutes_unbounded(self):
        assert to_lrc(3_723_456) == "62:03.45"

    def test_lrc_truncates_to_centiseconds(self):
        assert to_lrc(1234) == "00:01.23"
        assert to_lrc(1239) == "00:01.23"

    def test_precise_keeps_milliseconds(self):
        assert to_precise_mm_ss(61_234) == "01:01.234"

    def test_fractional_ms_floors(self):
        assert to_srt(1999.9) == "00:00:01,999"
        assert to_lrc(1999.9) == "00:01.99"

    def test_negative_clamps_to_zero(self):
        assert to_vtt(-50) == "00:00:00.000"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_encodes_as_zero(self, value):
        assert to_srt(value) == "00:00:00,000"
        assert to_lrc(value) == "00:00.00"

    @pytest.mark.parametrize("ms", [0, 9, 1234, 59_999, 3_599_999, 86_399_999])
    def test_lrc_never_ahead_of_srt(self, ms):
        assert parse_timestamp(to_lrc(ms)) <= parse_timestamp(to_srt(ms))


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class TestParseTimestamp:
    def test_ms_suffix(self):
        assert parse_timestamp("1500ms") == 1500

    def test_ms_suffix_keeps_fraction(self):
        assert parse_timestamp("12.5ms") == 12.5

    def test_seconds_suffix(self):
        assert parse_timestamp("1.5s") == 1500

    def test_lrc_centiseconds(self):
        assert parse_timestamp("01:02.34") == 62_340

    def test_lrc_without_fraction(self):
        assert parse_timestamp("1:05") == 65_000

    def test_lrc_single_digit_fraction_is_tenths(self):
        assert parse_timestamp("00:01.5") == 1500

    def test_lrc_three_digit_minutes(self):
        assert parse_timestamp("100:00.00") == 6_000_000

    def test_srt(self):
        assert parse_timestamp("01:02:03,456") == 3_723_456

    def test_vtt(self):
        assert parse_timestamp("01:02:03.456") == 3_723_456

    def test_vtt_without_hours(self):
        assert parse_timestamp("02:03.456") == 123_456

    def test_bare_number_is_seconds(self):
        assert parse_timestamp("5") == 5000
        assert parse_timestamp("5.0") == 5000
        assert parse_timestamp("0.25") == 250

    def test_surrounding_whitespace(self):
        assert parse_timestamp("  2s ") == 2000

    def test_integral_results_are_ints(self):
        assert isinstance(parse_timestamp("1.5s"), int)

    @pytest.mark.parametrize("text", ["", None, "abc", "1:2:3:4", "s", "ms", "-5", "xs"])
    def test_malformed_is_zero(self, text):
        assert parse_timestamp(text) == 0


class TestIsTimestamp:
    @pytest.mark.parametrize("text", ["00:01.00", "1:05", "00:00:01.000", "00:01,5"])
    def test_accepts(self, text):
        assert is_timestamp(text)

    @pytest.mark.parametrize("text", ["i", "c.yellow", "5", "1.5s", "/i", ""])
    def test_rejects(self, text):
        assert not is_timestamp(text)


# ---------------------------------------------------------------------------
# Inverse bounds
# ---------------------------------------------------------------------------


_SAMPLES = [0, 1, 9, 10, 999, 1000, 1234, 59_999, 60_000, 3_599_999, 3_600_000, 45_296_789, 86_399_999]


class TestInverseBounds:
    @pytest.mark.parametrize("ms", _SAMPLES)
    def test_srt_inverse(self, ms):
        assert parse_timestamp(to_srt(ms)) == ms

    @pytest.mark.parametrize("ms", _SAMPLES)
    def test_vtt_inverse(self, ms):
        assert parse_timestamp(to_vtt(ms)) == ms

    @pytest.mark.parametrize("ms", _SAMPLES)
    def test_lrc_truncates_to_10ms(self, ms):
        assert parse_timestamp(to_lrc(ms)) == ms - ms % 10
