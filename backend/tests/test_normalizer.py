"""
Tests for the one-line note normalizer and the note-append helpers.
"""

import pytest

from pokerstudy.text.normalizer import (
    NOTE_SEPARATOR,
    append_note_line,
    merge_notes,
    to_note_one_liner,
)


class TestToNoteOneLiner:

    def test_empty_string(self):
        assert to_note_one_liner("") == ""

    def test_only_newlines_is_empty(self):
        assert to_note_one_liner("\n\n\n") == ""

    def test_only_mixed_line_breaks_is_empty(self):
        assert to_note_one_liner("\r\n\r\n") == ""

    def test_single_newline(self):
        assert to_note_one_liner("a\nb") == "a // b"

    def test_crlf(self):
        assert to_note_one_liner("a\r\nb\r\nc") == "a // b // c"

    def test_outer_whitespace_and_blank_line_run(self):
        assert to_note_one_liner("  a\n\nb  ") == "a // b"

    def test_trailing_newline_leaves_no_separator(self):
        assert to_note_one_liner("hero opens AK\n") == "hero opens AK"

    def test_leading_newline_leaves_no_separator(self):
        assert to_note_one_liner("\nflop Ks 7d 2c") == "flop Ks 7d 2c"

    def test_lone_carriage_return_counts_as_line_break(self):
        assert to_note_one_liner("a\rb") == "a // b"

    def test_inner_spaces_are_kept(self):
        assert to_note_one_liner("a  b\nc   d") == "a  b // c   d"

    @pytest.mark.parametrize("s", ["", "   ", "abc", "  padded  ", "\ttabbed\t", "a // b"])
    def test_without_line_breaks_equals_strip(self, s):
        assert to_note_one_liner(s) == s.strip()

    @pytest.mark.parametrize(
        "s",
        ["a\nb", "\r\r\n\n", " x \r\n y \n", "one\n\n\ntwo\rthree", "\n", "trail\n\n"],
    )
    def test_output_has_no_line_breaks(self, s):
        out = to_note_one_liner(s)
        assert "\n" not in out
        assert "\r" not in out

    def test_idempotent(self):
        once = to_note_one_liner("hero opens `x` `x` in the \nvillain calls in \nflop \n")
        assert to_note_one_liner(once) == once

    def test_template_body_flattens(self):
        text = "villain opens `x` `x` from the \nhero \nflop \n\nturn \n\nriver \n"
        assert to_note_one_liner(text) == (
            "villain opens `x` `x` from the  // hero  // flop  // turn  // river"
        )


class TestAppendNoteLine:

    def test_append_to_empty_note(self):
        assert append_note_line("", "a\nb") == "a // b"

    def test_append_adds_new_line(self):
        assert append_note_line("first", "second\nthird") == "first\nsecond // third"

    def test_trailing_whitespace_of_existing_is_dropped(self):
        assert append_note_line("first\n\n", "second") == "first\nsecond"

    def test_blank_addition_keeps_existing(self):
        assert append_note_line("first", "\n  \n") == "first"


class TestMergeNotes:

    def test_blank_line_between_notes(self):
        assert merge_notes("old", "new") == "old\n\nnew"

    def test_empty_parts_skipped(self):
        assert merge_notes("", "new") == "new"
        assert merge_notes("old", "") == "old"

    def test_separator_constant(self):
        assert NOTE_SEPARATOR == " // "
