# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for parsing namelist blocks into entities."""

import io

import pytest

from nmlkit.errors import ErrorCode
from nmlkit.model.text import Entity, ParsedNamelist
from nmlkit.parser.parser import ParseError, extract_subscripts, parse_namelist_stream, scan_namelist

# ###############
# Test Helpers
# ###############


def _entity(text: str, index: int = 0) -> Entity:
    """Parse a block and return one of its entities."""
    return scan_namelist(text).entities[index]


# ###############
# Group Names
# ###############


class TestGroupName:
    def test_group_name_is_extracted(self) -> None:
        assert scan_namelist("&cfg threads = 8 &end").group_name == "cfg"

    def test_empty_block_has_no_entities(self) -> None:
        parsed = scan_namelist("&cfg &end")
        assert parsed.group_name == "cfg"
        assert parsed.entities == []

    def test_surrounding_whitespace_ignored(self) -> None:
        assert scan_namelist("   &run_setup a = 1 &end  ").group_name == "run_setup"

    def test_missing_group_name(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("a = 1 &end")

    def test_end_tag_is_not_a_group_name(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&end")

    def test_missing_end_tag(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&cfg a = 1")

    def test_unbalanced_quotes(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            scan_namelist('&cfg a = "x &end')
        assert exc_info.value.code == ErrorCode.IMPROPER_CONSTRUCTION


# ###############
# Assignments
# ###############


class TestAssignments:
    def test_scalar_assignment(self) -> None:
        entity = _entity("&cfg threads = 8 &end")
        assert entity.name == "threads"
        assert entity.subscripts == []
        assert entity.values == ["8"]
        assert entity.repeats == [1]

    def test_multiple_assignments_in_order(self) -> None:
        parsed = scan_namelist("&cfg a = 1, b = 2, c = x &end")
        assert [e.name for e in parsed.entities] == ["a", "b", "c"]
        assert [e.values for e in parsed.entities] == [["1"], ["2"], ["x"]]

    def test_assignments_without_separating_commas(self) -> None:
        parsed = scan_namelist("&cfg a = 1 b = 2 &end")
        assert [e.name for e in parsed.entities] == ["a", "b"]

    def test_value_list(self) -> None:
        assert _entity("&cfg w = 1, 2, 3 &end").values == ["1", "2", "3"]

    def test_trailing_comma_ignored(self) -> None:
        assert _entity("&cfg w = 1, 2, &end").values == ["1", "2"]

    def test_assignment_without_values(self) -> None:
        parsed = scan_namelist("&cfg a = , b = 1 &end")
        assert parsed.entities[0].values == []
        assert parsed.entities[1].values == ["1"]

    def test_unquoted_value_with_spaces(self) -> None:
        assert _entity("&cfg title = hello world &end").values == ["hello world"]

    def test_dotted_name(self) -> None:
        assert _entity("&cfg a.b = 1 &end").name == "a.b"

    def test_missing_equals(self) -> None:
        with pytest.raises(ParseError, match="missing '='"):
            scan_namelist("&cfg threads 8 &end")

    def test_text_before_first_assignment(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&cfg stray a = 1 &end")


# ###############
# Quoted Literals
# ###############


class TestQuotedLiterals:
    def test_quotes_are_stripped(self) -> None:
        assert _entity('&cfg title = "hello" &end').values == ["hello"]

    def test_separators_inside_quotes_are_literal(self) -> None:
        assert _entity('&cfg title = "a, b = c" &end').values == ["a, b = c"]

    def test_escaped_quotes_are_unescaped(self) -> None:
        assert _entity('&cfg title = "say \\"hi\\"" &end').values == ['say "hi"']

    def test_quoted_end_tag_is_a_value(self) -> None:
        parsed = scan_namelist('&cfg title = "x &end" &end')
        assert parsed.entities[0].values == ["x &end"]

    def test_empty_quoted_string(self) -> None:
        assert _entity('&cfg title = "" &end').values == [""]


# ###############
# Repeat Counts
# ###############


class TestRepeatCounts:
    def test_repeat_prefix(self) -> None:
        entity = _entity("&cfg w = 3*0.5, 1.0 &end")
        assert entity.values == ["0.5", "1.0"]
        assert entity.repeats == [3, 1]
        assert entity.slot_count == 4

    def test_repeat_with_quoted_literal(self) -> None:
        entity = _entity('&cfg names = 2*"a b" &end')
        assert entity.values == ["a b"]
        assert entity.repeats == [2]

    def test_star_inside_quotes_is_literal(self) -> None:
        entity = _entity('&cfg pattern = "2*x" &end')
        assert entity.values == ["2*x"]
        assert entity.repeats == [1]

    def test_non_numeric_prefix_is_literal(self) -> None:
        entity = _entity("&cfg pattern = *.sdds &end")
        assert entity.values == ["*.sdds"]
        assert entity.repeats == [1]

    def test_zero_repeat_rejected(self) -> None:
        with pytest.raises(ParseError, match="must be positive"):
            scan_namelist("&cfg w = 0*1 &end")

    def test_fractional_repeat_rejected(self) -> None:
        with pytest.raises(ParseError, match="not an integer"):
            scan_namelist("&cfg w = 2.5*1 &end")

    def test_non_ascii_digit_prefix_is_not_a_repeat(self) -> None:
        entity = _entity("&cfg w = ٢*1 &end")
        assert entity.values == ["٢*1"]
        assert entity.repeats == [1]


# ###############
# Subscripts
# ###############


class TestSubscripts:
    def test_single_subscript(self) -> None:
        entity = _entity("&cfg x[2] = 1, 2 &end")
        assert entity.name == "x"
        assert entity.subscripts == [2]
        assert entity.values == ["1", "2"]

    def test_bracket_per_subscript(self) -> None:
        assert _entity("&cfg x[1][2] = 5 &end").subscripts == [1, 2]

    def test_comma_separated_subscripts(self) -> None:
        assert _entity("&cfg x[1,2] = 5 &end").subscripts == [1, 2]

    def test_space_before_bracket(self) -> None:
        entity = _entity("&cfg x [3] = 5 &end")
        assert entity.name == "x"
        assert entity.subscripts == [3]

    def test_non_integer_subscript(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&cfg x[a] = 1 &end")

    def test_negative_subscript(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&cfg x[-1] = 1 &end")

    def test_non_ascii_digit_subscript(self) -> None:
        with pytest.raises(ParseError):
            scan_namelist("&cfg x[٣] = 1 &end")


class TestExtractSubscripts:
    def test_plain_name(self) -> None:
        assert extract_subscripts("alpha") == ("alpha", [])

    def test_mixed_forms(self) -> None:
        assert extract_subscripts("a[1, 2][3]") == ("a", [1, 2, 3])

    def test_unmatched_closing_bracket(self) -> None:
        with pytest.raises(ParseError):
            extract_subscripts("a]")

    def test_trailing_text_after_brackets(self) -> None:
        with pytest.raises(ParseError):
            extract_subscripts("a[1]junk")

    def test_empty_subscript(self) -> None:
        with pytest.raises(ParseError):
            extract_subscripts("a[]")


# ###############
# Stream Parsing
# ###############


class TestParseNamelistStream:
    def test_reads_and_parses_blocks_in_order(self) -> None:
        stream = io.StringIO("&a x = 1 &end\n&b y = 2 &end\n")
        first = parse_namelist_stream(stream)
        second = parse_namelist_stream(stream)
        assert isinstance(first, ParsedNamelist)
        assert first.group_name == "a"
        assert second is not None
        assert second.group_name == "b"
        assert parse_namelist_stream(stream) is None

    def test_clear_empties_parsed_namelist(self) -> None:
        parsed = scan_namelist("&cfg a = 1 &end")
        parsed.clear()
        assert parsed.group_name == ""
        assert parsed.entities == []
