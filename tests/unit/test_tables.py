#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tables.py
"""Unit tests for pretty table grid layout.

Tests cover:
- Grid borders, padding and alignment
- Header and footer formatting
- Minimum-raggedness word wrapping
- Table context bookkeeping

"""

import pytest

from html2gemini.options import PrettyTablesOptions, TableBorders
from html2gemini.renderers.tables import (
    TableContext,
    TableStack,
    display_width,
    format_title,
    render_grid,
    wrap_text,
)

DESCRIPTION = (
    "Open source programming language that makes it easy to build simple, reliable, and efficient software"
)


@pytest.mark.unit
class TestRenderGrid:
    """Tests for render_grid()."""

    def test_single_row(self) -> None:
        """Test a two-column, one-row grid."""
        assert render_grid([], [["a", "b"]], []) == "+---+---+\n| a | b |\n+---+---+\n"

    def test_empty_cells(self) -> None:
        """Test that empty cells still produce a bordered grid."""
        assert render_grid([], [["", ""]], []) == "+--+--+\n|  |  |\n+--+--+\n"

    def test_header_and_numeric_alignment(self) -> None:
        """Test centred headers and right-aligned numbers."""
        grid = render_grid(["name", "qty"], [["apple", "3"], ["kiwi", "12"]], [])
        assert grid.splitlines() == [
            "+-------+-----+",
            "| NAME  | QTY |",
            "+-------+-----+",
            "| apple |   3 |",
            "| kiwi  |  12 |",
            "+-------+-----+",
        ]

    def test_footer(self) -> None:
        """Test that the footer follows a separator line."""
        grid = render_grid(["name", "qty"], [["apple", "3"]], ["total", "15"])
        assert grid.splitlines()[-3:] == [
            "+-------+-----+",
            "| TOTAL | 15  |",
            "+-------+-----+",
        ]

    def test_rows_are_padded_and_empty_rows_dropped(self) -> None:
        """Test that short rows get empty cells and empty rows vanish."""
        grid = render_grid([], [["a", "b"], [], ["c"]], [])
        assert grid.splitlines() == ["+---+---+", "| a | b |", "| c |   |", "+---+---+"]

    def test_every_line_has_same_width_and_separators(self) -> None:
        """Test that all grid lines align."""
        grid = render_grid(["h1", "h2", "h3"], [["x", "longer text", "1.5"], ["yy", "", "-2"]], [])
        lines = grid.splitlines()
        assert len({len(line) for line in lines}) == 1
        for line in lines:
            separator = "+" if line.startswith("+") else "|"
            assert line.count(separator) == 4

    def test_wrapped_description_column(self) -> None:
        """Test word wrapping at the default column width."""
        grid = render_grid(["Item", "Description", "Price"], [["Golang", DESCRIPTION, "Free"]], [])
        lines = grid.splitlines()
        assert lines[1] == "|  ITEM  |          DESCRIPTION           | PRICE |"
        assert lines[3] == f"| Golang | {'Open source programming':<30} | Free  |"
        assert lines[4] == f"|        | {'language that makes it easy':<30} |       |"
        assert lines[5] == "|        | to build simple, reliable, and |       |"
        assert lines[6] == f"|        | {'efficient software':<30} |       |"
        assert len(lines) == 8

    def test_row_line(self) -> None:
        """Test separators between body rows."""
        grid = render_grid([], [["a"], ["b"]], [], PrettyTablesOptions(row_line=True))
        assert grid == "+---+\n| a |\n+---+\n| b |\n+---+\n"

    def test_auto_merge_cells(self) -> None:
        """Test that repeated cells are blanked."""
        grid = render_grid([], [["a", "1"], ["a", "2"]], [], PrettyTablesOptions(auto_merge_cells=True))
        assert grid.splitlines()[2] == "|   | 2 |"

    def test_explicit_alignment(self) -> None:
        """Test right alignment of body text."""
        grid = render_grid([], [["a"], ["bbb"]], [], PrettyTablesOptions(alignment="right"))
        assert grid.splitlines()[1] == "|   a |"

    def test_column_alignment_overrides(self) -> None:
        """Test per-column alignment."""
        options = PrettyTablesOptions(column_alignment=("center", "left"))
        grid = render_grid([], [["a", "1"], ["bbb", "222"]], [], options)
        assert grid.splitlines()[1] == "|  a  | 1   |"

    def test_without_side_borders(self) -> None:
        """Test disabling the left and right borders."""
        options = PrettyTablesOptions(borders=TableBorders(left=False, right=False))
        assert render_grid([], [["a", "b"]], [], options) == "---+---\n a | b \n---+---\n"

    def test_header_format_disabled(self) -> None:
        """Test that header text is kept as-is without auto formatting."""
        grid = render_grid(["my_col"], [["x"]], [], PrettyTablesOptions(auto_format_header=False))
        assert grid.splitlines()[1] == "| my_col |"

    def test_multiline_cell_without_reflow(self) -> None:
        """Test that paragraphs are kept apart when reflow is off."""
        grid = render_grid([], [["x\ny"]], [], PrettyTablesOptions(reflow_during_auto_wrap=False))
        assert grid.splitlines()[1:4] == ["| x |", "|   |", "| y |"]

    def test_multiline_cell_with_reflow(self) -> None:
        """Test that reflow joins the lines of a cell before wrapping."""
        grid = render_grid([], [["a\nb c d e"]], [])
        assert grid.splitlines()[1:3] == ["| a b c d |", "| e       |"]


@pytest.mark.unit
class TestWrapText:
    """Tests for wrap_text()."""

    def test_minimum_raggedness(self) -> None:
        """Test the balanced line breaks of a long sentence."""
        assert wrap_text(DESCRIPTION, 30) == [
            "Open source programming",
            "language that makes it easy",
            "to build simple, reliable, and",
            "efficient software",
        ]

    def test_short_text_is_single_line(self) -> None:
        """Test that fitting text is not wrapped."""
        assert wrap_text("fits fine", 30) == ["fits fine"]

    def test_long_word_widens_limit(self) -> None:
        """Test that a word longer than the limit stays whole."""
        assert wrap_text("a verylongword b", 5) == ["a", "verylongword", "b"]


@pytest.mark.unit
class TestFormatting:
    """Tests for title formatting and width measurement."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("unit_price", "UNIT PRICE"),
            ("file.name", "FILE NAME"),
            ("v1.5", "V1.5"),
            ("  padded ", "PADDED"),
            ("_", " "),
        ],
    )
    def test_format_title(self, text: str, expected: str) -> None:
        """Test header text formatting."""
        assert format_title(text) == expected

    def test_display_width_wide_characters(self) -> None:
        """Test that East Asian wide characters count double."""
        assert display_width("abc") == 3
        assert display_width("日本") == 4


@pytest.mark.unit
class TestTableContext:
    """Tests for TableContext and TableStack."""

    def test_data_cells_go_to_open_row(self) -> None:
        """Test that cells are appended to the most recent row."""
        table = TableContext()
        table.open_row()
        table.add_data_cell("a")
        table.close_row()
        table.open_row()
        table.add_data_cell("b")
        assert table.body == [["a"], ["b"]]
        assert table.current_row == 1

    def test_cell_without_row_opens_one(self) -> None:
        """Test that a stray cell creates a row."""
        table = TableContext()
        table.add_data_cell("a")
        assert table.body == [["a"]]

    def test_footer_cells(self) -> None:
        """Test that cells inside the footer go to the footer."""
        table = TableContext()
        table.in_footer = True
        table.add_data_cell("sum")
        assert table.footer == ["sum"]
        assert table.body == []

    def test_stack_depth(self) -> None:
        """Test pushing and popping nested tables."""
        stack = TableStack()
        outer = stack.push()
        inner = stack.push()
        assert stack.depth == 2
        assert stack.current is inner
        stack.pop()
        assert stack.current is outer
