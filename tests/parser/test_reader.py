# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for reading namelist blocks from a text stream."""

import io
import logging

import pytest

from nmlkit.errors import ErrorCode
from nmlkit.parser.reader import NamelistReadError, get_namelist, get_namelist_e, iter_namelists

# ###############
# Test Helpers
# ###############


def _read(text: str, capacity: int = 65536) -> str | None:
    """Read the first block from a string."""
    return get_namelist(io.StringIO(text), capacity)


# ###############
# Single Blocks
# ###############


class TestSingleBlock:
    def test_one_line_block(self) -> None:
        assert _read("&cfg threads = 8 &end\n") == "&cfg threads = 8 &end"

    def test_newlines_become_spaces(self) -> None:
        text = _read("&cfg\n  a = 1,\n  b = 2,\n&end\n")
        assert text == "&cfg   a = 1,   b = 2, &end"

    def test_leading_whitespace_skipped(self) -> None:
        assert _read("\n\n   \t&cfg a = 1 &end") == "&cfg a = 1 &end"

    def test_comment_lines_before_block_skipped(self) -> None:
        text = _read("! a comment\n# another\n&cfg a = 1 &end")
        assert text == "&cfg a = 1 &end"

    def test_bang_comment_inside_block_removed(self) -> None:
        text = _read("&cfg a = 1, ! trailing note\n b = 2 &end")
        assert text is not None
        assert "note" not in text
        assert "!" not in text
        assert text.endswith("b = 2 &end")

    def test_hash_comment_at_line_start_removed(self) -> None:
        text = _read("&cfg\n  # section header\n a = 1 &end")
        assert text is not None
        assert "section" not in text

    def test_hash_inside_line_is_kept(self) -> None:
        text = _read("&cfg tag = a#b &end")
        assert text == "&cfg tag = a#b &end"

    def test_quoted_bang_is_not_a_comment(self) -> None:
        assert _read('&cfg title = "a!b" &end') == '&cfg title = "a!b" &end'

    def test_quoted_end_tag_does_not_close_block(self) -> None:
        text = _read('&cfg title = "x &end" &end')
        assert text == '&cfg title = "x &end" &end'

    def test_escaped_quote_inside_string(self) -> None:
        text = _read('&cfg title = "a \\" &end" &end')
        assert text == '&cfg title = "a \\" &end" &end'

    def test_stream_positioned_after_end_tag(self) -> None:
        stream = io.StringIO("&a x = 1 &end rest")
        assert get_namelist(stream) == "&a x = 1 &end"
        assert stream.read() == " rest"


# ###############
# End of Input
# ###############


class TestEndOfInput:
    def test_empty_stream_returns_none(self) -> None:
        assert _read("") is None

    def test_whitespace_and_comments_only_returns_none(self) -> None:
        assert _read("  \n! only a comment\n\n") is None

    def test_comment_without_newline_returns_none(self) -> None:
        assert _read("! only a comment") is None

    def test_iter_namelists_yields_every_block(self) -> None:
        blocks = list(iter_namelists(io.StringIO("&a x = 1 &end\n\n&b y = 2 &end\n")))
        assert blocks == ["&a x = 1 &end", "&b y = 2 &end"]

    def test_iter_namelists_on_empty_stream(self) -> None:
        assert list(iter_namelists(io.StringIO("\n"))) == []


# ###############
# Errors
# ###############


class TestReadErrors:
    def test_unterminated_block(self) -> None:
        with pytest.raises(NamelistReadError) as exc_info:
            _read("&cfg a = 1,\n b = 2\n")
        assert exc_info.value.code == ErrorCode.IMPROPER_CONSTRUCTION

    def test_unterminated_quote_runs_to_end_of_input(self) -> None:
        with pytest.raises(NamelistReadError) as exc_info:
            _read('&cfg title = "abc &end\n')
        assert exc_info.value.code == ErrorCode.IMPROPER_CONSTRUCTION

    def test_stray_text_before_block(self) -> None:
        with pytest.raises(NamelistReadError) as exc_info:
            _read("junk &cfg a = 1 &end")
        assert exc_info.value.code == ErrorCode.IMPROPER_CONSTRUCTION

    def test_capacity_exceeded(self) -> None:
        with pytest.raises(NamelistReadError) as exc_info:
            _read("&cfg a = 1 &end", capacity=5)
        assert exc_info.value.code == ErrorCode.BUFFER_TOO_SMALL

    def test_block_exactly_at_capacity(self) -> None:
        text = "&cfg a = 1 &end"
        assert _read(text, capacity=len(text)) == text

    def test_error_reports_line_number(self) -> None:
        with pytest.raises(NamelistReadError) as exc_info:
            _read("\n\n&cfg a = 1")
        assert exc_info.value.line == 3
        assert str(exc_info.value).startswith("Line 3:")


# ###############
# Error-Code Variant
# ###############


class TestGetNamelistE:
    def test_success_reports_no_error(self) -> None:
        text, code = get_namelist_e(io.StringIO("&cfg a = 1 &end"))
        assert text == "&cfg a = 1 &end"
        assert code == ErrorCode.NO_ERROR

    def test_end_of_input_reports_no_error(self) -> None:
        assert get_namelist_e(io.StringIO("")) == (None, ErrorCode.NO_ERROR)

    def test_failure_reports_code_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="nmlkit.parser.reader"):
            text, code = get_namelist_e(io.StringIO("&cfg a = 1 &end"), capacity=4)
        assert text is None
        assert code == ErrorCode.BUFFER_TOO_SMALL
        assert "capacity" in caplog.text
