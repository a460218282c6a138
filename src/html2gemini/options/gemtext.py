#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/options/gemtext.py
"""Configuration options for gemtext rendering.

This module defines the options controlling how an HTML tree is rendered
as gemtext, including citation handling and the ASCII grid layout used for
pretty tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from html2gemini.constants import (
    DEFAULT_CITATION_MARKERS,
    DEFAULT_CITATION_START,
    DEFAULT_EMIT_IMAGES_AS_LINKS,
    DEFAULT_EMPTY_LINK_PREFIX,
    DEFAULT_HTML_PARSER,
    DEFAULT_IMAGE_MARKER_PREFIX,
    DEFAULT_LINK_EMIT_FREQUENCY,
    DEFAULT_LIST_ITEM_LINK_WORD_THRESHOLD,
    DEFAULT_NUMBERED_LINKS,
    DEFAULT_OMIT_LINKS,
    DEFAULT_PRETTY_TABLES,
    DEFAULT_SKIP_NAVIGATION,
    DEFAULT_TABLE_ALIGNMENT,
    DEFAULT_TABLE_AUTO_FORMAT_HEADER,
    DEFAULT_TABLE_AUTO_MERGE_CELLS,
    DEFAULT_TABLE_AUTO_WRAP_TEXT,
    DEFAULT_TABLE_CENTER_SEPARATOR,
    DEFAULT_TABLE_COL_WIDTH,
    DEFAULT_TABLE_COLUMN_SEPARATOR,
    DEFAULT_TABLE_HEADER_LINE,
    DEFAULT_TABLE_MARKER,
    DEFAULT_TABLE_NEWLINE,
    DEFAULT_TABLE_REFLOW_DURING_AUTO_WRAP,
    DEFAULT_TABLE_ROW_LINE,
    DEFAULT_TABLE_ROW_SEPARATOR,
    HTML_PARSERS,
    TABLE_ALIGNMENTS,
    HtmlParser,
    TableAlignment,
)
from html2gemini.exceptions import ValidationError
from html2gemini.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class TableBorders(CloneFrozenMixin):
    """Which outer borders a pretty table grid draws.

    Parameters
    ----------
    left, right, top, bottom : bool, default True
        Draw the corresponding outer border

    """

    left: bool = field(default=True, metadata={"help": "Draw the left border", "importance": "advanced"})
    right: bool = field(default=True, metadata={"help": "Draw the right border", "importance": "advanced"})
    top: bool = field(default=True, metadata={"help": "Draw the top border", "importance": "advanced"})
    bottom: bool = field(default=True, metadata={"help": "Draw the bottom border", "importance": "advanced"})


@dataclass(frozen=True)
class PrettyTablesOptions(CloneFrozenMixin):
    """Layout options for ASCII grid tables.

    Parameters
    ----------
    auto_format_header : bool, default True
        Uppercase header and footer text, turning underscores and
        non-numeric dots into spaces.
    auto_wrap_text : bool, default True
        Word-wrap cell text at ``col_width``.
    reflow_during_auto_wrap : bool, default True
        Join the lines of a cell into one paragraph before wrapping.
    col_width : int, default 30
        Target maximum column width for wrapping. A single word longer than
        this widens the column.
    column_separator, row_separator, center_separator : str
        Characters used for vertical lines, horizontal lines and crossings.
    header_alignment, footer_alignment, alignment : {"default", "left", "center", "right"}
        Alignment of header, footer and body cells. ``"default"`` centres
        header and footer and left-aligns body text, right-aligning numbers.
    column_alignment : tuple of str, default ()
        Per-column body alignment, overriding ``alignment``.
    newline : str, default "\\n"
        Line terminator used between grid lines.
    header_line : bool, default True
        Draw a separator under the header row.
    row_line : bool, default False
        Draw a separator between body rows.
    auto_merge_cells : bool, default False
        Blank out body cells identical to the cell directly above.
    borders : TableBorders
        Which outer borders to draw.

    """

    auto_format_header: bool = field(
        default=DEFAULT_TABLE_AUTO_FORMAT_HEADER,
        metadata={"help": "Uppercase header/footer text", "cli_name": "no-table-header-format", "importance": "core"},
    )
    auto_wrap_text: bool = field(
        default=DEFAULT_TABLE_AUTO_WRAP_TEXT,
        metadata={"help": "Word-wrap cell text at col_width", "importance": "advanced"},
    )
    reflow_during_auto_wrap: bool = field(
        default=DEFAULT_TABLE_REFLOW_DURING_AUTO_WRAP,
        metadata={"help": "Join cell lines before wrapping", "importance": "advanced"},
    )
    col_width: int = field(
        default=DEFAULT_TABLE_COL_WIDTH,
        metadata={
            "help": "Maximum column width for wrapping",
            "type": int,
            "cli_name": "table-col-width",
            "importance": "core",
        },
    )
    column_separator: str = field(
        default=DEFAULT_TABLE_COLUMN_SEPARATOR,
        metadata={"help": "Vertical line character", "type": str, "importance": "advanced"},
    )
    row_separator: str = field(
        default=DEFAULT_TABLE_ROW_SEPARATOR,
        metadata={"help": "Horizontal line character", "type": str, "importance": "advanced"},
    )
    center_separator: str = field(
        default=DEFAULT_TABLE_CENTER_SEPARATOR,
        metadata={"help": "Line crossing character", "type": str, "importance": "advanced"},
    )
    header_alignment: TableAlignment = field(
        default=DEFAULT_TABLE_ALIGNMENT,
        metadata={"help": "Header cell alignment", "choices": list(TABLE_ALIGNMENTS), "importance": "advanced"},
    )
    footer_alignment: TableAlignment = field(
        default=DEFAULT_TABLE_ALIGNMENT,
        metadata={"help": "Footer cell alignment", "choices": list(TABLE_ALIGNMENTS), "importance": "advanced"},
    )
    alignment: TableAlignment = field(
        default=DEFAULT_TABLE_ALIGNMENT,
        metadata={"help": "Body cell alignment", "choices": list(TABLE_ALIGNMENTS), "importance": "advanced"},
    )
    column_alignment: tuple[TableAlignment, ...] = field(
        default=(),
        metadata={"help": "Per-column body alignment", "importance": "advanced"},
    )
    newline: str = field(
        default=DEFAULT_TABLE_NEWLINE,
        metadata={"help": "Line terminator between grid lines", "type": str, "importance": "advanced"},
    )
    header_line: bool = field(
        default=DEFAULT_TABLE_HEADER_LINE,
        metadata={"help": "Draw a line under the header", "importance": "advanced"},
    )
    row_line: bool = field(
        default=DEFAULT_TABLE_ROW_LINE,
        metadata={"help": "Draw a line between body rows", "cli_name": "table-row-line", "importance": "advanced"},
    )
    auto_merge_cells: bool = field(
        default=DEFAULT_TABLE_AUTO_MERGE_CELLS,
        metadata={"help": "Blank cells repeating the cell above", "importance": "advanced"},
    )
    borders: TableBorders = field(
        default_factory=TableBorders,
        metadata={"help": "Outer borders to draw", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate grid options."""
        if self.col_width < 1:
            raise ValueError(f"col_width must be positive, got {self.col_width}")
        for name in ("column_separator", "row_separator", "center_separator"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        for name in ("header_alignment", "footer_alignment", "alignment"):
            value = getattr(self, name)
            if value not in TABLE_ALIGNMENTS:
                raise ValueError(f"{name} must be one of {', '.join(TABLE_ALIGNMENTS)}, got {value!r}")
        for value in self.column_alignment:
            if value not in TABLE_ALIGNMENTS:
                raise ValueError(f"column_alignment entries must be one of {', '.join(TABLE_ALIGNMENTS)}, got {value!r}")

    @classmethod
    def _coerce_field(cls, name: str, value: Any) -> Any:
        if name == "borders" and isinstance(value, Mapping):
            return TableBorders.from_dict(value)
        if name == "column_alignment" and isinstance(value, list):
            return tuple(value)
        return value


@dataclass(frozen=True)
class GemtextOptions(CloneFrozenMixin):
    """Configuration options for rendering HTML as gemtext.

    Parameters
    ----------
    pretty_tables : bool, default False
        Render tables as ASCII grids inside preformatted blocks. When False,
        a table becomes a marker line followed by its rows as plain lines.
    pretty_tables_options : PrettyTablesOptions
        Grid layout options used when ``pretty_tables`` is on.
    omit_links : bool, default False
        Do not collect hyperlinks or emit citation markers.
    citation_start : int, default 1
        Index given to the first citation.
    citation_markers : bool, default True
        Emit ``[n]`` where a link is referenced in the text.
    numbered_links : bool, default True
        Include ``[n]`` in flushed link lines.
    link_emit_frequency : int, default 2
        Number of paragraph-like blocks after which pending citations are
        flushed.
    emit_images_as_links : bool, default True
        Render images as bracketed text plus a citation for their source.
    image_marker_prefix : str, default "‡"
        Glyph placed before image text.
    empty_link_prefix : str, default ">>"
        Marker emitted for anchors whose only content is an image.
    list_item_link_word_threshold : int, default 30
        Maximum word count for a list item or paragraph holding a single
        link to be rendered as a stand-alone link line.
    table_marker : str, default "⊞ table ⊞"
        Marker line placed before tables when ``pretty_tables`` is off.
    skip_navigation : bool, default False
        Skip ``<nav>`` and ``<footer>`` subtrees.
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used by the string/bytes entry points.

    Examples
    --------
    >>> options = GemtextOptions(pretty_tables=True, link_emit_frequency=1)
    >>> options.create_updated(omit_links=True).omit_links
    True

    """

    pretty_tables: bool = field(
        default=DEFAULT_PRETTY_TABLES,
        metadata={"help": "Render tables as ASCII grids", "importance": "core"},
    )
    pretty_tables_options: PrettyTablesOptions = field(
        default_factory=PrettyTablesOptions,
        metadata={"help": "Grid layout options for pretty tables", "importance": "advanced"},
    )
    omit_links: bool = field(
        default=DEFAULT_OMIT_LINKS,
        metadata={"help": "Drop hyperlinks and citation markers", "importance": "core"},
    )
    citation_start: int = field(
        default=DEFAULT_CITATION_START,
        metadata={"help": "Index of the first citation", "type": int, "importance": "core"},
    )
    citation_markers: bool = field(
        default=DEFAULT_CITATION_MARKERS,
        metadata={"help": "Emit [n] markers in text", "cli_name": "no-citation-markers", "importance": "core"},
    )
    numbered_links: bool = field(
        default=DEFAULT_NUMBERED_LINKS,
        metadata={"help": "Number flushed link lines", "cli_name": "no-numbered-links", "importance": "core"},
    )
    link_emit_frequency: int = field(
        default=DEFAULT_LINK_EMIT_FREQUENCY,
        metadata={"help": "Paragraphs between citation flushes", "type": int, "importance": "core"},
    )
    emit_images_as_links: bool = field(
        default=DEFAULT_EMIT_IMAGES_AS_LINKS,
        metadata={"help": "Cite image sources as links", "cli_name": "no-images-as-links", "importance": "core"},
    )
    image_marker_prefix: str = field(
        default=DEFAULT_IMAGE_MARKER_PREFIX,
        metadata={"help": "Glyph placed before image text", "type": str, "importance": "advanced"},
    )
    empty_link_prefix: str = field(
        default=DEFAULT_EMPTY_LINK_PREFIX,
        metadata={"help": "Marker for image-only links", "type": str, "importance": "advanced"},
    )
    list_item_link_word_threshold: int = field(
        default=DEFAULT_LIST_ITEM_LINK_WORD_THRESHOLD,
        metadata={"help": "Max words for single-link lines", "type": int, "importance": "advanced"},
    )
    table_marker: str = field(
        default=DEFAULT_TABLE_MARKER,
        metadata={"help": "Marker line for non-pretty tables", "type": str, "importance": "advanced"},
    )
    skip_navigation: bool = field(
        default=DEFAULT_SKIP_NAVIGATION,
        metadata={"help": "Skip <nav> and <footer> elements", "importance": "core"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup tree builder", "choices": list(HTML_PARSERS), "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.citation_start < 0:
            raise ValueError(f"citation_start must be non-negative, got {self.citation_start}")
        if self.link_emit_frequency < 0:
            raise ValueError(f"link_emit_frequency must be non-negative, got {self.link_emit_frequency}")
        if self.list_item_link_word_threshold < 0:
            raise ValueError(
                f"list_item_link_word_threshold must be non-negative, got {self.list_item_link_word_threshold}"
            )
        if self.html_parser not in HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}")
        if not isinstance(self.pretty_tables_options, PrettyTablesOptions):
            raise ValueError("pretty_tables_options must be a PrettyTablesOptions instance")

    @classmethod
    def _coerce_field(cls, name: str, value: Any) -> Any:
        if name == "pretty_tables_options" and isinstance(value, Mapping):
            return PrettyTablesOptions.from_dict(value)
        return value

    def scratch(self) -> GemtextOptions:
        """Return a copy suitable for peek-ahead renders (no in-text citation markers)."""
        if not self.citation_markers:
            return self
        return self.create_updated(citation_markers=False)


def validate_options(options: Any) -> GemtextOptions:
    """Return ``options`` as ``GemtextOptions``, accepting None or a mapping.

    Raises
    ------
    ValidationError
        If ``options`` has an unsupported type.

    """
    if options is None:
        return GemtextOptions()
    if isinstance(options, GemtextOptions):
        return options
    if isinstance(options, Mapping):
        return GemtextOptions.from_dict(options)
    raise ValidationError(
        f"options must be GemtextOptions, a mapping or None, got {type(options).__name__}",
        parameter_name="options",
        parameter_value=options,
    )
