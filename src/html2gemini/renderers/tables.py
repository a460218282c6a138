#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/renderers/tables.py
"""ASCII grid layout for pretty tables.

While a ``<table>`` subtree is walked, cell text is buffered in a
:class:`TableContext`; when the table closes, :func:`render_grid` lays the
collected header, body and footer out as a bordered grid::

    +------+-------+
    | NAME | COUNT |
    +------+-------+
    | foo  |    12 |
    +------+-------+

Cell text is word wrapped with a minimum-raggedness algorithm so that
columns stay within ``col_width`` wherever the words allow.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field

from html2gemini.constants import TABLE_WRAP_OVERFLOW_PENALTY
from html2gemini.options.gemtext import PrettyTablesOptions

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^-?(?:\d{1,3}(?:,\d{3})*|\d+)(?:\.\d+)?$")
_PERCENT_RE = re.compile(r"^-?\d+\.?\d*%$")


@dataclass
class TableContext:
    """Cell text collected for one open table.

    Attributes
    ----------
    header : list[str]
        Header cell texts
    body : list[list[str]]
        Body rows; the last row is the one currently open
    footer : list[str]
        Footer cell texts
    in_footer : bool
        True while inside ``<tfoot>``
    current_row : int
        Index of the next row to be opened

    """

    header: list[str] = field(default_factory=list)
    body: list[list[str]] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)
    in_footer: bool = False
    current_row: int = 0

    def open_row(self) -> None:
        self.body.append([])

    def close_row(self) -> None:
        self.current_row += 1

    def add_header_cell(self, text: str) -> None:
        self.header.append(text)

    def add_data_cell(self, text: str) -> None:
        """Append a data cell to the footer or to the open body row."""
        if self.in_footer:
            self.footer.append(text)
            return
        if not self.body:
            self.open_row()
        self.body[-1].append(text)


@dataclass
class TableStack:
    """Open tables of one render, innermost last."""

    contexts: list[TableContext] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.contexts)

    @property
    def current(self) -> TableContext | None:
        return self.contexts[-1] if self.contexts else None

    def push(self) -> TableContext:
        context = TableContext()
        self.contexts.append(context)
        return context

    def pop(self) -> TableContext:
        return self.contexts.pop()


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies.

    East Asian wide and full-width characters count as two columns and
    combining marks as none.
    """
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def format_title(text: str) -> str:
    """Format header or footer text.

    Underscores become spaces, as do dots unless they sit between digits
    or spaces (so ``0.5`` survives), and the result is uppercased. A
    non-empty input never becomes empty.

    Examples
    --------
    >>> format_title("unit_price")
    'UNIT PRICE'
    >>> format_title("v1.5")
    'V1.5'

    """
    chars = list(text)
    for i, char in enumerate(chars):
        if char == "_":
            chars[i] = " "
        elif char == ".":
            before_ok = i == 0 or chars[i - 1].isdigit() or chars[i - 1] == " "
            after_ok = i == len(chars) - 1 or text[i + 1].isdigit() or text[i + 1] == " "
            if not (before_ok and after_ok):
                chars[i] = " "
    result = "".join(chars).strip()
    if not result and text:
        result = " "
    return result.upper()


def wrap_words(words: list[str], limit: int, spacing: int = 1) -> list[list[str]]:
    """Split ``words`` into lines minimising raggedness.

    Each non-final line costs the square of its unused width; lines that
    overflow ``limit`` carry an additional penalty. The last line is free
    when it fits.

    Parameters
    ----------
    words : list[str]
        Words to lay out
    limit : int
        Target line width
    spacing : int, default 1
        Width of the gap between words

    Returns
    -------
    list[list[str]]
        Words grouped per line

    """
    n = len(words)
    if n == 0:
        return []

    widths = [display_width(word) for word in words]
    # line_width[i][j]: width of words i..j joined on one line
    line_width = [[0] * n for _ in range(n)]
    for i in range(n):
        line_width[i][i] = widths[i]
        for j in range(i + 1, n):
            line_width[i][j] = line_width[i][j - 1] + spacing + widths[j]

    cost = [0] * n
    next_break = [n] * n
    for i in range(n - 1, -1, -1):
        if line_width[i][n - 1] <= limit:
            cost[i] = 0
            next_break[i] = n
            continue
        best = None
        for j in range(i + 1, n):
            gap = limit - line_width[i][j - 1]
            candidate = gap * gap + cost[j]
            if line_width[i][j - 1] > limit:
                candidate += TABLE_WRAP_OVERFLOW_PENALTY
            if best is None or candidate < best:
                best = candidate
                next_break[i] = j
        cost[i] = best if best is not None else 0

    lines = []
    i = 0
    while i < n:
        lines.append(words[i : next_break[i]])
        i = next_break[i]
    return lines


def wrap_text(text: str, limit: int) -> list[str]:
    """Wrap ``text`` at ``limit`` columns, widening the limit to the longest word."""
    words = text.replace("\n", " ").split(" ")
    for word in words:
        limit = max(limit, display_width(word))
    return [" ".join(line) for line in wrap_words(words, limit)]


def _cell_lines(text: str, options: PrettyTablesOptions) -> list[str]:
    lines = text.split("\n")
    if not options.auto_wrap_text:
        return lines

    limit = min(max(display_width(line) for line in lines), options.col_width)
    if options.reflow_during_auto_wrap:
        lines = [" ".join(lines)]

    wrapped: list[str] = []
    for i, paragraph in enumerate(lines):
        if i > 0:
            wrapped.append(" ")
        wrapped.extend(wrap_text(paragraph, limit))
    return wrapped


def _is_numeric(text: str) -> bool:
    text = text.strip()
    return bool(_DECIMAL_RE.match(text) or _PERCENT_RE.match(text))


def _pad(text: str, width: int, alignment: str, centered_default: bool) -> str:
    gap = max(width - display_width(text), 0)
    if alignment == "default":
        if centered_default:
            alignment = "center"
        else:
            alignment = "right" if _is_numeric(text) else "left"

    if alignment == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    if alignment == "right":
        return " " * gap + text
    return text + " " * gap


class GridLayout:
    """Lay out one table as bordered ASCII text.

    Parameters
    ----------
    header : list[str]
        Header cell texts (may be empty)
    body : list[list[str]]
        Body rows
    footer : list[str]
        Footer cell texts (may be empty)
    options : PrettyTablesOptions
        Layout configuration

    """

    def __init__(
        self,
        header: list[str],
        body: list[list[str]],
        footer: list[str],
        options: PrettyTablesOptions,
    ):
        self.options = options
        rows = [row for row in body if row]
        self.columns = max([len(header), len(footer), *(len(row) for row in rows)], default=0)

        if options.auto_format_header:
            header = [format_title(cell) for cell in header]
            footer = [format_title(cell) for cell in footer]

        self.header = self._split_row(header) if header else None
        self.footer = self._split_row(footer) if footer else None
        self.rows = [self._split_row(row) for row in rows]
        if options.auto_merge_cells:
            self._merge_repeated_cells()

        self.widths = [0] * self.columns
        for row in self._all_rows():
            for col, lines in enumerate(row):
                self.widths[col] = max(self.widths[col], *(display_width(line) for line in lines))

    def _split_row(self, cells: list[str]) -> list[list[str]]:
        padded = list(cells) + [""] * (self.columns - len(cells))
        return [_cell_lines(cell, self.options) for cell in padded]

    def _all_rows(self) -> list[list[list[str]]]:
        rows = list(self.rows)
        if self.header is not None:
            rows.append(self.header)
        if self.footer is not None:
            rows.append(self.footer)
        return rows

    def _merge_repeated_cells(self) -> None:
        previous: list[list[str]] | None = None
        for row in self.rows:
            original = [list(lines) for lines in row]
            if previous is not None:
                for col, lines in enumerate(row):
                    if lines == previous[col] and any(line.strip() for line in lines):
                        row[col] = [""]
            previous = original

    def _border_line(self) -> str:
        opts = self.options
        segments = [opts.row_separator * (width + 2) for width in self.widths]
        left = opts.center_separator if opts.borders.left else ""
        right = opts.center_separator if opts.borders.right else ""
        return left + opts.center_separator.join(segments) + right

    def _row_lines(self, row: list[list[str]], alignments: list[str], centered_default: bool) -> list[str]:
        opts = self.options
        height = max((len(lines) for lines in row), default=1)
        left = opts.column_separator if opts.borders.left else ""
        right = opts.column_separator if opts.borders.right else ""

        out = []
        for line_no in range(height):
            cells = []
            for col, lines in enumerate(row):
                text = lines[line_no] if line_no < len(lines) else ""
                cells.append(" " + _pad(text, self.widths[col], alignments[col], centered_default) + " ")
            out.append(left + opts.column_separator.join(cells) + right)
        return out

    def _body_alignments(self) -> list[str]:
        opts = self.options
        return [
            opts.column_alignment[col] if col < len(opts.column_alignment) else opts.alignment
            for col in range(self.columns)
        ]

    def render(self) -> str:
        """Return the grid, one line per ``options.newline``, ending with a newline."""
        opts = self.options
        border = self._border_line()
        lines: list[str] = []

        if opts.borders.top:
            lines.append(border)
        if self.header is not None:
            lines.extend(self._row_lines(self.header, [opts.header_alignment] * self.columns, True))
            if opts.header_line:
                lines.append(border)

        body_alignments = self._body_alignments()
        for i, row in enumerate(self.rows):
            if i > 0 and opts.row_line:
                lines.append(border)
            lines.extend(self._row_lines(row, body_alignments, False))

        if self.footer is not None:
            lines.append(border)
            lines.extend(self._row_lines(self.footer, [opts.footer_alignment] * self.columns, True))
        if opts.borders.bottom:
            lines.append(border)

        return opts.newline.join(lines) + opts.newline


def render_grid(
    header: list[str],
    body: list[list[str]],
    footer: list[str],
    options: PrettyTablesOptions | None = None,
) -> str:
    """Render collected table cells as an ASCII grid.

    Parameters
    ----------
    header : list[str]
        Header cell texts
    body : list[list[str]]
        Body rows; rows without cells are dropped and short rows padded
    footer : list[str]
        Footer cell texts
    options : PrettyTablesOptions, optional
        Layout configuration, defaults used when None

    Returns
    -------
    str
        The grid text, terminated by a newline

    Examples
    --------
    >>> print(render_grid([], [["a", "b"]], []), end="")
    +---+---+
    | a | b |
    +---+---+

    """
    layout = GridLayout(header, body, footer, options or PrettyTablesOptions())
    logger.debug(f"Laying out table grid: {len(layout.rows)} row(s) x {layout.columns} column(s)")
    return layout.render()


def render_table_context(context: TableContext, options: PrettyTablesOptions) -> str:
    """Render the cells collected in ``context``."""
    return render_grid(context.header, context.body, context.footer, options)
