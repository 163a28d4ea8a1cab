"""Tests for mdstream.table_format"""
from mdstream.table_format import (
    break_word,
    format_fixed_width_table,
    format_table_separator,
    normalize_cells,
    wrap_cell,
)
from mdstream.utils import visible_width


class TestFormatFixedWidthTable:
    def test_basic_grid(self):
        table = format_fixed_width_table(["id", "note"], [12, 12], [["1", "hi"]])
        assert table.split("\n") == [
            "| id         | note       |",
            "|------------|------------|",
            "| 1          | hi         |",
            "",
        ]

    def test_wraps_within_fixed_width(self):
        table = format_fixed_width_table(
            ["id", "note"],
            [12, 12],
            [["1", "supercalifragilisticexpialidocious"]],
        )
        body = [ln for ln in table.split("\n") if ln.startswith("|") and "----" not in ln]
        assert len(body) > 2
        for line in body:
            for cell in line.split("|"):
                assert visible_width(cell.strip()) <= 10

    def test_every_line_has_same_width(self):
        table = format_fixed_width_table(
            ["name", "desc"],
            [12, 16],
            [["中文名字", "some longer description here"], ["x", ""]],
        )
        widths = {visible_width(ln) for ln in table.splitlines()}
        assert widths == {1 + 12 + 1 + 16 + 1}

    def test_row_height_is_tallest_cell(self):
        table = format_fixed_width_table(["a", "b"], [12, 12], [["one two three four", "x"]])
        lines = table.splitlines()
        # header + separator + 2 wrapped lines
        assert len(lines) == 4
        assert lines[3] == "| three four |            |"

    def test_missing_and_extra_cells_normalized(self):
        table = format_fixed_width_table(["a", "b"], [12, 12], [["only"], ["1", "2", "3"]])
        lines = table.splitlines()
        assert len(lines) == 4
        assert lines[2] == "| only       |            |"
        assert lines[3] == "| 1          | 2          |"

    def test_no_columns(self):
        assert format_fixed_width_table([], [], [["x"]]) == ""


class TestSeparator:
    def test_min_one_dash(self):
        assert format_table_separator([0, 3]) == "|-|---|\n"


class TestWrapCell:
    def test_empty_cell(self):
        assert wrap_cell("", 10) == [""]
        assert wrap_cell("   ", 10) == [""]

    def test_greedy_packing(self):
        assert wrap_cell("hello world", 10) == ["hello", "world"]
        assert wrap_cell("a b c d", 3) == ["a b", "c d"]

    def test_newlines_collapse_to_spaces(self):
        assert wrap_cell("one\ntwo", 10) == ["one two"]

    def test_long_word_flushes_current_line(self):
        assert wrap_cell("ab abcdefghijkl", 5) == ["ab", "abcde", "fghij", "kl"]

    def test_wide_characters(self):
        lines = wrap_cell("中文中文中文", 5)
        assert all(visible_width(ln) <= 5 for ln in lines)
        assert "".join(lines) == "中文中文中文"


class TestBreakWord:
    def test_exact_multiple(self):
        assert break_word("abcdef", 3) == ["abc", "def"]

    def test_remainder(self):
        assert break_word("abcdefg", 3) == ["abc", "def", "g"]

    def test_zero_width_returns_word(self):
        assert break_word("abc", 0) == ["abc"]


class TestNormalizeCells:
    def test_pads_and_trims(self):
        assert normalize_cells([" a ", "b"], 3) == ["a", "b", ""]

    def test_truncates(self):
        assert normalize_cells(["a", "b", "c"], 2) == ["a", "b"]
