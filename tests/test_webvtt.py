"""Unit tests for the WebVTT parser.

WHY: The WebVTT parser reconstructs cue boundaries from a line-oriented
format. An off-by-one in the state machine silently drops cues, merges
neighbouring cues, or emits empty ones that later crash the merge engine.

HOW: Tests cover the header check, the timing grammar (hour optional on
each side), text concatenation inside a block, empty-text blocks, the
unfinished cue at end of input, text outside timed blocks, and the scanner's
transitions in isolation.
"""

import pytest

from cue_converter.core.cue import Cue, FormatError
from cue_converter.parsers.webvtt import (
    CueScanner,
    LineKind,
    ScanState,
    classify_line,
    parse_timing,
    parse_webvtt,
)


class TestHeader:
    """Line 1 must be exactly WEBVTT."""

    def test_minimal_file(self):
        cues = parse_webvtt("WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello")
        assert cues == [Cue(start=0, end=1000, text="Hello")]

    def test_missing_header_raises(self):
        with pytest.raises(FormatError) as exc_info:
            parse_webvtt("00:00:00.000 --> 00:00:01.000\nHello")
        assert exc_info.value.line == 1

    def test_header_must_be_on_first_line(self):
        with pytest.raises(FormatError):
            parse_webvtt("\nWEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello")

    def test_header_with_title_is_rejected(self):
        with pytest.raises(FormatError):
            parse_webvtt("WEBVTT - Interview\n\n00:00:00.000 --> 00:00:01.000\nHello")

    def test_empty_input_raises(self):
        with pytest.raises(FormatError):
            parse_webvtt("")

    def test_header_whitespace_and_bom_are_trimmed(self):
        cues = parse_webvtt("\ufeffWEBVTT  \r\n\r\n00:00:00.000 --> 00:00:01.000\r\nHello\r\n")
        assert cues == [Cue(start=0, end=1000, text="Hello")]

    def test_header_only_yields_no_cues(self):
        assert parse_webvtt("WEBVTT\n") == []


class TestTimingGrammar:
    """[HH:]MM:SS.mmm --> [HH:]MM:SS.mmm, all integer arithmetic."""

    def test_hour_optional(self):
        assert parse_timing("00:00.000 --> 00:00.500") == (0, 500)

    def test_with_hours(self):
        assert parse_timing("01:00:00.000 --> 01:00:01.000") == (3_600_000, 3_601_000)

    def test_mixed_hour_presence(self):
        assert parse_timing("59:59.999 --> 01:00:00.000") == (3_599_999, 3_600_000)

    def test_all_components(self):
        assert parse_timing("02:03:04.005 --> 02:03:04.006") == (
            2 * 3_600_000 + 3 * 60_000 + 4 * 1_000 + 5,
            2 * 3_600_000 + 3 * 60_000 + 4 * 1_000 + 6,
        )

    @pytest.mark.parametrize("line", [
        "0:00:00.000 --> 00:00:01.000",
        "00:00:00,000 --> 00:00:01,000",
        "00:00:00.00 --> 00:00:01.000",
        "00:00:00.000 -> 00:00:01.000",
        "00:00:00.000 --> 00:00:01.000 align:start",
        "Hello --> world",
    ])
    def test_non_matching_lines(self, line):
        assert parse_timing(line) is None
        assert classify_line(line) is LineKind.TEXT

    def test_non_ascii_digits_do_not_match(self):
        arabic = "\u0660\u0660:\u0660\u0660.\u0660\u0660\u0660"
        assert parse_timing("{0} --> {0}".format(arabic)) is None

    def test_parsed_cues_use_timing(self):
        cues = parse_webvtt(
            "WEBVTT\n\n"
            "00:00.000 --> 00:00.500\nShort\n\n"
            "01:00:00.000 --> 01:00:01.000\nLate\n"
        )
        assert [(c.start, c.end) for c in cues] == [(0, 500), (3_600_000, 3_601_000)]


class TestCueText:
    """Text lines are concatenated verbatim into the current cue."""

    def test_multi_line_text_concatenated_without_separator(self):
        cues = parse_webvtt("WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello\nworld\n")
        assert cues[0].text == "Helloworld"

    def test_text_lines_are_trimmed(self):
        cues = parse_webvtt("WEBVTT\n\n00:00:00.000 --> 00:00:01.000\n   Hello   \n")
        assert cues[0].text == "Hello"

    def test_sample_file(self, sample_vtt):
        cues = parse_webvtt(sample_vtt)
        assert cues == [
            Cue(start=0, end=1000, text="Hello"),
            Cue(start=1000, end=2500, text="world."),
            Cue(start=3000, end=4250, text="Bye"),
        ]

    def test_speaker_and_misc_unset(self, sample_vtt):
        for cue in parse_webvtt(sample_vtt):
            assert cue.speaker is None
            assert cue.misc is None

    def test_blocks_without_blank_separator(self):
        cues = parse_webvtt(
            "WEBVTT\n"
            "00:00:00.000 --> 00:00:01.000\nOne\n"
            "00:00:01.000 --> 00:00:02.000\nTwo\n"
        )
        assert [c.text for c in cues] == ["One", "Two"]


class TestEmptyBlocks:
    """Cues are only emitted once they have text."""

    def test_consecutive_timing_lines_emit_no_empty_cue(self):
        cues = parse_webvtt(
            "WEBVTT\n\n"
            "00:00:00.000 --> 00:00:01.000\n"
            "00:00:02.000 --> 00:00:03.000\n"
            "Text\n"
        )
        assert cues == [Cue(start=2000, end=3000, text="Text")]

    def test_trailing_empty_block_is_dropped(self):
        cues = parse_webvtt(
            "WEBVTT\n\n"
            "00:00:00.000 --> 00:00:01.000\nText\n\n"
            "00:00:02.000 --> 00:00:03.000\n\n"
        )
        assert cues == [Cue(start=0, end=1000, text="Text")]

    def test_unfinished_cue_at_end_of_input_is_emitted(self):
        cues = parse_webvtt("WEBVTT\n\n00:00:05.000 --> 00:00:06.000\nLast")
        assert cues == [Cue(start=5000, end=6000, text="Last")]


class TestStrayTextLines:
    """Text outside a timed block is appended like any other cue text."""

    def test_identifiers_join_surrounding_cues(self):
        cues = parse_webvtt(
            "WEBVTT\n\n"
            "1\n00:00:00.000 --> 00:00:01.000\nHello\n\n"
            "2\n00:00:01.000 --> 00:00:02.000\nworld"
        )
        assert cues == [
            Cue(start=0, end=0, text="1"),
            Cue(start=0, end=1000, text="Hello2"),
            Cue(start=1000, end=2000, text="world"),
        ]

    def test_header_metadata_forms_untimed_cue(self):
        cues = parse_webvtt(
            "WEBVTT\nKind: captions\nLanguage: en\n\n"
            "00:00:00.000 --> 00:00:01.000\nHello\n"
        )
        assert cues == [
            Cue(start=0, end=0, text="Kind: captionsLanguage: en"),
            Cue(start=0, end=1000, text="Hello"),
        ]

    def test_text_after_blank_line_stays_cue_text(self):
        cues = parse_webvtt(
            "WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello\n\nagain\n"
        )
        assert cues == [Cue(start=0, end=1000, text="Helloagain")]

    def test_text_only_file_is_single_untimed_cue(self):
        assert parse_webvtt("WEBVTT\nHello\nworld") == [
            Cue(start=0, end=0, text="Helloworld")
        ]


class TestCueScanner:
    """Scanner transitions in isolation."""

    def test_initial_state_idle(self):
        assert CueScanner().state is ScanState.IDLE

    def test_timing_enters_assembling(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        assert scanner.state is ScanState.ASSEMBLING

    def test_blank_returns_to_idle_without_emitting(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        scanner.on_text("Hi")
        scanner.on_blank()
        assert scanner.state is ScanState.IDLE
        assert scanner.cues == []

    def test_next_timing_finalizes_previous_cue(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        scanner.on_text("Hi")
        scanner.on_timing(200, 300)
        assert scanner.cues == [Cue(start=0, end=100, text="Hi")]

    def test_finish_flushes_current_cue(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        scanner.on_text("Hi")
        assert scanner.finish() == [Cue(start=0, end=100, text="Hi")]

    def test_finish_without_text_emits_nothing(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        assert scanner.finish() == []

    def test_text_while_idle_joins_current_cue(self):
        scanner = CueScanner()
        scanner.on_timing(0, 100)
        scanner.on_text("Hi")
        scanner.on_blank()
        scanner.on_text("3")
        assert scanner.finish() == [Cue(start=0, end=100, text="Hi3")]
