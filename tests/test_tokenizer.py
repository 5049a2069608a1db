"""Tests for the line splitter and source locations."""

import pytest

from markymark import SourceLocation, parse_markdown
from markymark.tokenizer import Line, join_lines, span_location, split_lines


class TestSplitLines:
    """Tests for split_lines()."""

    def test_empty_input(self) -> None:
        assert split_lines("") == ()

    def test_single_line(self) -> None:
        assert split_lines("hello") == (Line("hello", 1, 0),)

    @pytest.mark.parametrize("terminator", ["\n", "\r\n", "\r"])
    def test_line_endings_normalized(self, terminator: str) -> None:
        """All terminator variants split the same way."""
        source = terminator.join(["a", "b", "c"])

        assert [line.text for line in split_lines(source)] == ["a", "b", "c"]

    def test_mixed_line_endings_keep_offsets(self) -> None:
        """Offsets point into the original string, terminators included."""
        source = "a\r\nbb\rc\n"
        lines = split_lines(source)

        assert [(line.text, line.lineno, line.offset) for line in lines] == [
            ("a", 1, 0),
            ("bb", 2, 3),
            ("c", 3, 6),
        ]
        for line in lines:
            assert source[line.offset : line.end_offset] == line.text

    def test_trailing_terminator_adds_no_line(self) -> None:
        assert [line.text for line in split_lines("a\n")] == ["a"]

    def test_blank_lines_preserved(self) -> None:
        """Blank lines stay in the sequence as empty spans."""
        lines = split_lines("a\n\n  \nb")

        assert [line.text for line in lines] == ["a", "", "  ", "b"]
        assert [line.is_blank for line in lines] == [False, True, True, False]

    def test_lone_terminator(self) -> None:
        assert split_lines("\n") == (Line("", 1, 0),)


class TestLine:
    """Tests for Line indentation helpers."""

    def test_indent_spaces(self) -> None:
        assert Line("   x", 1, 0).indent() == 3

    def test_indent_tabs_expand_to_tab_stops(self) -> None:
        assert Line("\t  x", 1, 0).indent(4) == 6
        assert Line("  \tx", 1, 0).indent(4) == 4
        assert Line("\tx", 1, 0).indent(2) == 2

    def test_dedent_advances_offset(self) -> None:
        line = Line("    code", 3, 10).dedent(2)

        assert line == Line("  code", 3, 12)

    def test_dedent_consumes_straddling_tab(self) -> None:
        assert Line("\tx", 1, 0).dedent(2) == Line("x", 1, 1)

    def test_dedent_stops_at_text(self) -> None:
        assert Line(" x", 1, 0).dedent(4) == Line("x", 1, 1)

    def test_dedent_nothing_returns_same_line(self) -> None:
        line = Line("x", 1, 0)
        assert line.dedent(4) is line

    def test_advance(self) -> None:
        assert Line("> quote", 1, 5).advance(2) == Line("quote", 1, 7)


class TestJoinAndLocation:
    """Tests for join_lines() and span_location()."""

    def test_join_lines_normalizes(self) -> None:
        assert join_lines(split_lines("a\r\nb")) == "a\nb"

    def test_span_location(self) -> None:
        lines = split_lines("one\ntwo\nthree")

        loc = span_location(lines, 1, 3)

        assert loc == SourceLocation(lineno=2, end_lineno=3, offset=4, end_offset=13)
        assert str(loc) == "2-3"

    def test_single_line_location_str(self) -> None:
        assert str(SourceLocation(lineno=4, end_lineno=4)) == "4"

    def test_unknown(self) -> None:
        assert SourceLocation.unknown().lineno == 0


class TestBlockLocations:
    """Block items carry the lines they came from."""

    def test_top_level_blocks(self) -> None:
        source = "# A\n\nsome\ntext\n\n- x"
        header, para, lst = parse_markdown(source)

        assert (header.location.lineno, header.location.end_lineno) == (1, 1)
        assert (para.location.lineno, para.location.end_lineno) == (3, 4)
        assert source[para.location.offset : para.location.end_offset] == "some\ntext"
        assert lst.location.lineno == 6

    def test_nested_blocks_point_into_original_source(self) -> None:
        """Quote content is re-parsed, but offsets stay absolute."""
        source = "intro\n\n> quoted"
        quote = parse_markdown(source)[1]
        inner = quote.children[0]

        assert inner.location.lineno == 3
        assert source[inner.location.offset : inner.location.end_offset] == "quoted"
