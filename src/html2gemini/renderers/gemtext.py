#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/renderers/gemtext.py
"""Gemtext rendering from a parsed HTML tree.

This module provides the GemtextRenderer class which walks a BeautifulSoup
tree and writes gemtext: ``#`` headings, ``* `` list items, ``>`` quotes,
fenced preformatted blocks and ``=>`` link lines. Hyperlinks are collected
as numbered citations and flushed as link-line blocks between paragraphs;
tables are written either as ASCII grids or as plain rows.

Every element is classified into a :class:`NodeKind` and dispatched through
a handler table. All mutable render state lives in a :class:`RenderContext`,
so one renderer can be reused for any number of documents.
"""

from __future__ import annotations

import logging
import re
from dataclasses import InitVar, dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from bs4.element import NavigableString, PreformattedString, Tag

from html2gemini.constants import HEADING_PREFIXES, LIST_ITEM_PREFIX, PREFORMATTED_FENCE, QUOTE_MARKER
from html2gemini.exceptions import RenderingError
from html2gemini.options.gemtext import GemtextOptions
from html2gemini.renderers.citations import CitationAccumulator, format_link_line, normalize_link
from html2gemini.renderers.emitter import TextEmitter, collapse_whitespace, normalize_output, strip_control_chars
from html2gemini.renderers.tables import TableStack, render_table_context

logger = logging.getLogger(__name__)

_MULTI_SPACE_RE = re.compile(r" {2,}")


class NodeKind(Enum):
    """Rendering category of an HTML element."""

    HEADING_1 = "h1"
    HEADING_2 = "h2"
    HEADING_3 = "h3"
    PARAGRAPH = "p"
    DIVISION = "div"
    LIST_ITEM = "li"
    UNORDERED_LIST = "ul"
    ANCHOR = "a"
    IMAGE = "img"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "tr"
    TABLE_HEADER_CELL = "th"
    TABLE_DATA_CELL = "td"
    TABLE_FOOTER_SECTION = "tfoot"
    PREFORMATTED = "pre"
    LINE_BREAK = "br"
    STYLE = "style"
    SCRIPT = "script"
    HEAD = "head"
    NAVIGATION = "nav"
    OTHER = "other"


_TAG_KINDS: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind if kind is not NodeKind.OTHER}
_TAG_KINDS["footer"] = NodeKind.NAVIGATION


def classify(tag: Tag) -> NodeKind:
    """Return the :class:`NodeKind` for an element.

    Examples
    --------
    >>> from bs4 import BeautifulSoup
    >>> classify(BeautifulSoup("<footer></footer>", "html.parser").footer)
    <NodeKind.NAVIGATION: 'nav'>

    """
    name = (tag.name or "").lower()
    return _TAG_KINDS.get(name, NodeKind.OTHER)


@dataclass
class RenderContext:
    """Mutable state for one render.

    A scratch context (used to probe how a block renders before committing
    to an output form) never flushes citations, so its text stays free of
    link lines.
    """

    options: GemtextOptions
    emitter: TextEmitter = field(default_factory=TextEmitter)
    tables: TableStack = field(default_factory=TableStack)
    blockquote_depth: int = 0
    just_closed_div: bool = False
    scratch: bool = False
    shared_citations: InitVar[Optional[CitationAccumulator]] = None
    citations: CitationAccumulator = field(init=False)

    def __post_init__(self, shared_citations: Optional[CitationAccumulator]) -> None:
        self.citations = shared_citations if shared_citations is not None else CitationAccumulator(self.options)

    def check_flush(self) -> None:
        if not self.scratch:
            self.citations.check_flush(self.emitter, self.tables.depth)

    def flush(self) -> None:
        if not self.scratch:
            self.citations.flush(self.emitter, self.tables.depth)

    def scratch_context(self) -> RenderContext:
        """Return an isolated context for a peek-ahead render."""
        context = RenderContext(options=self.options.scratch(), scratch=True)
        context.emitter.in_pre = self.emitter.in_pre
        return context

    def cell_context(self) -> RenderContext:
        """Return a context for one table cell child, sharing citations and tables."""
        return RenderContext(
            options=self.options,
            shared_citations=self.citations,
            tables=self.tables,
            scratch=self.scratch,
        )


class GemtextRenderer:
    """Render a BeautifulSoup tree as gemtext.

    Parameters
    ----------
    options : GemtextOptions or None, default None
        Rendering options; defaults are used when None

    Examples
    --------
    >>> from bs4 import BeautifulSoup
    >>> html = '<h1>Hi</h1><p>See <a href="/x">this</a> and <a href="/y">that</a></p>'
    >>> print(GemtextRenderer().render_to_string(BeautifulSoup(html, "html.parser")))
    # Hi
    <BLANKLINE>
    See this [1] and that [2]
    <BLANKLINE>
    => /x [1] this
    => /y [2] that

    """

    _HANDLERS: dict[NodeKind, str] = {
        NodeKind.HEADING_1: "_render_heading",
        NodeKind.HEADING_2: "_render_heading",
        NodeKind.HEADING_3: "_render_heading",
        NodeKind.PARAGRAPH: "_render_paragraph",
        NodeKind.DIVISION: "_render_division",
        NodeKind.LIST_ITEM: "_render_list_item",
        NodeKind.UNORDERED_LIST: "_render_block",
        NodeKind.ANCHOR: "_render_anchor",
        NodeKind.IMAGE: "_render_image",
        NodeKind.BLOCKQUOTE: "_render_blockquote",
        NodeKind.TABLE: "_render_table",
        NodeKind.TABLE_ROW: "_render_table_row",
        NodeKind.TABLE_HEADER_CELL: "_render_table_cell",
        NodeKind.TABLE_DATA_CELL: "_render_table_cell",
        NodeKind.TABLE_FOOTER_SECTION: "_render_table_footer",
        NodeKind.PREFORMATTED: "_render_preformatted",
        NodeKind.LINE_BREAK: "_render_line_break",
        NodeKind.STYLE: "_skip",
        NodeKind.SCRIPT: "_skip",
        NodeKind.HEAD: "_skip",
        NodeKind.NAVIGATION: "_render_navigation",
        NodeKind.OTHER: "_render_children",
    }

    def __init__(self, options: GemtextOptions | None = None):
        self.options = options or GemtextOptions()

    def render_to_string(self, node: Any) -> str:
        """Render ``node`` and everything below it.

        Parameters
        ----------
        node : bs4.Tag or bs4.NavigableString
            Root of the tree, usually a ``BeautifulSoup`` document

        Returns
        -------
        str
            Normalized gemtext, with every collected citation flushed

        Raises
        ------
        RenderingError
            If the tree is too deeply nested to traverse

        """
        context = RenderContext(options=self.options)
        try:
            self._walk(node, context)
        except RecursionError as e:
            raise RenderingError(
                "Document is too deeply nested to render",
                rendering_stage="traversal",
                original_error=e,
            ) from e

        context.citations.flush(context.emitter)
        return normalize_output(context.emitter.getvalue())

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _walk(self, node: Any, ctx: RenderContext) -> None:
        if isinstance(node, NavigableString):
            # Comments, doctypes, CDATA, declarations and processing instructions
            if isinstance(node, PreformattedString):
                return
            self._render_text(node, ctx)
            return

        if not isinstance(node, Tag):
            return

        ctx.just_closed_div = False
        handler = getattr(self, self._HANDLERS[classify(node)])
        handler(node, ctx)

    def _render_children(self, node: Tag, ctx: RenderContext) -> None:
        for child in node.children:
            self._walk(child, ctx)

    def _skip(self, node: Tag, ctx: RenderContext) -> None:
        return

    def _peek(self, node: Tag, ctx: RenderContext) -> tuple[str, RenderContext]:
        """Render the children of ``node`` into a scratch context."""
        scratch = ctx.scratch_context()
        self._render_children(node, scratch)
        return scratch.emitter.getvalue().strip(), scratch

    def _single_short_link(self, text: str, scratch: RenderContext) -> bool:
        words = len(strip_control_chars(text).split())
        return len(scratch.citations) == 1 and words < self.options.list_item_link_word_threshold

    # ------------------------------------------------------------------
    # Text and inline elements
    # ------------------------------------------------------------------

    def _render_text(self, node: NavigableString, ctx: RenderContext) -> None:
        text = strip_control_chars(str(node))
        if ctx.emitter.in_pre:
            ctx.emitter.emit(text)
        else:
            ctx.emitter.emit(collapse_whitespace(text))

    def _render_line_break(self, node: Tag, ctx: RenderContext) -> None:
        ctx.emitter.emit("\n")

    def _render_anchor(self, node: Tag, ctx: RenderContext) -> None:
        children = list(node.children)
        sole_child = children[0] if len(children) == 1 else None

        display = ""
        if isinstance(sole_child, NavigableString) and not isinstance(sole_child, PreformattedString):
            display = collapse_whitespace(str(sole_child))

        self._render_children(node, ctx)

        if self.options.omit_links:
            return

        if isinstance(sole_child, Tag) and classify(sole_child) is NodeKind.IMAGE:
            ctx.emitter.emit(" " + self.options.empty_link_prefix)
            display = self.options.empty_link_prefix

        href = normalize_link(str(node.get("href") or ""))
        if href and href != display:
            ctx.emitter.emit(ctx.citations.register(href, display))

    def _render_image(self, node: Tag, ctx: RenderContext) -> None:
        src = str(node.get("src") or "").strip()
        display = collapse_whitespace(str(node.get("alt") or ""))
        if not display and src:
            display = PurePosixPath(unquote(urlsplit(src).path)).stem

        prefix = self.options.image_marker_prefix
        text = f"[{prefix} {display}]" if prefix else f"[{display}]"
        text = _MULTI_SPACE_RE.sub(" ", text.replace("_", " ").replace("-", " "))
        ctx.emitter.emit(text)

        if self.options.emit_images_as_links and not self.options.omit_links and src:
            ctx.emitter.emit(ctx.citations.register(src, text))

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def _render_block(self, node: Tag, ctx: RenderContext) -> None:
        """Render ``node`` as a paragraph-like block separated by blank lines."""
        ctx.check_flush()
        ctx.emitter.emit("\n\n")
        self._render_children(node, ctx)
        ctx.emitter.emit("\n\n")

    def _render_heading(self, node: Tag, ctx: RenderContext) -> None:
        ctx.flush()
        level = int(classify(node).value[1])
        ctx.emitter.emit("\n\n" + HEADING_PREFIXES[level])
        self._render_children(node, ctx)
        ctx.emitter.emit("\n\n")

    def _render_division(self, node: Tag, ctx: RenderContext) -> None:
        if ctx.emitter.line_length > 0:
            ctx.emitter.emit("\n")
        self._render_children(node, ctx)
        if not ctx.just_closed_div:
            ctx.emitter.emit("\n")
        ctx.just_closed_div = True

    def _render_blockquote(self, node: Tag, ctx: RenderContext) -> None:
        ctx.flush()
        emitter = ctx.emitter
        emitter.emit("\n")
        ctx.blockquote_depth += 1
        emitter.prefix = QUOTE_MARKER * ctx.blockquote_depth + " "
        emitter.emit("\n")

        self._render_children(node, ctx)

        ctx.blockquote_depth -= 1
        emitter.prefix = QUOTE_MARKER * ctx.blockquote_depth + " " if ctx.blockquote_depth else ""
        emitter.emit("\n\n")

    def _render_list_item(self, node: Tag, ctx: RenderContext) -> None:
        text, scratch = self._peek(node, ctx)
        emitter = ctx.emitter

        if self._single_short_link(text, scratch):
            citation = scratch.citations.citations[0]
            logger.debug(f"List item rendered as link line: {citation.url}")
            emitter.ensure_line_start()
            emitter.emit(format_link_line(citation.url, text))
            emitter.emit("\n")
            ctx.citations.register_inline(citation.url, text)
        elif not len(scratch.citations):
            emitter.ensure_line_start()
            emitter.emit(LIST_ITEM_PREFIX + text + "\n")
        else:
            emitter.ensure_line_start()
            emitter.emit(LIST_ITEM_PREFIX)
            self._render_children(node, ctx)
            emitter.emit("\n")

    def _render_paragraph(self, node: Tag, ctx: RenderContext) -> None:
        text, scratch = self._peek(node, ctx)

        if self._single_short_link(text, scratch):
            citation = scratch.citations.citations[0]
            logger.debug(f"Paragraph rendered as link line: {citation.url}")
            ctx.check_flush()
            ctx.emitter.emit("\n\n" + format_link_line(citation.url, text) + "\n\n")
            ctx.citations.register_inline(citation.url, text)
        elif not len(scratch.citations):
            ctx.check_flush()
            ctx.emitter.emit("\n\n" + text + "\n\n")
        else:
            self._render_block(node, ctx)

    def _render_preformatted(self, node: Tag, ctx: RenderContext) -> None:
        emitter = ctx.emitter
        if emitter.in_pre:
            self._render_children(node, ctx)
            return

        emitter.emit(f"\n\n{PREFORMATTED_FENCE}\n")
        emitter.in_pre = True
        emitter.open_verbatim()
        try:
            self._render_children(node, ctx)
        finally:
            emitter.close_verbatim()
            emitter.in_pre = False
        emitter.emit(f"\n{PREFORMATTED_FENCE}\n\n")

    def _render_navigation(self, node: Tag, ctx: RenderContext) -> None:
        if not self.options.skip_navigation:
            self._render_children(node, ctx)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _render_table(self, node: Tag, ctx: RenderContext) -> None:
        if not self.options.pretty_tables:
            ctx.check_flush()
            ctx.emitter.emit(f"\n\n{self.options.table_marker}\n\n")
            self._render_children(node, ctx)
            ctx.emitter.emit("\n\n")
            return

        emitter = ctx.emitter
        table_options = self.options.pretty_tables_options
        emitter.emit(f"\n\n{PREFORMATTED_FENCE}\n" if ctx.tables.depth == 0 else "\n\n")
        table = ctx.tables.push()
        try:
            self._render_children(node, ctx)
            grid = render_table_context(table, table_options)
            emitter.emit_verbatim(grid.rstrip(table_options.newline))
        finally:
            ctx.tables.pop()
        emitter.emit(f"\n{PREFORMATTED_FENCE}\n\n" if ctx.tables.depth == 0 else "\n\n")

    def _render_table_row(self, node: Tag, ctx: RenderContext) -> None:
        table = ctx.tables.current if self.options.pretty_tables else None
        if table is None:
            if not self.options.pretty_tables:
                ctx.emitter.ensure_line_start()
            self._render_children(node, ctx)
            return

        table.open_row()
        self._render_children(node, ctx)
        table.close_row()

    def _render_table_footer(self, node: Tag, ctx: RenderContext) -> None:
        table = ctx.tables.current if self.options.pretty_tables else None
        if table is None:
            self._render_children(node, ctx)
            return

        table.in_footer = True
        self._render_children(node, ctx)
        table.in_footer = False

    def _render_table_cell(self, node: Tag, ctx: RenderContext) -> None:
        table = ctx.tables.current if self.options.pretty_tables else None
        if table is None:
            self._render_children(node, ctx)
            return

        parts = []
        for child in node.children:
            cell_ctx = ctx.cell_context()
            self._walk(child, cell_ctx)
            cell_ctx.flush()
            text = normalize_output(cell_ctx.emitter.getvalue())
            if text:
                parts.append(text)
        cell_text = "\n".join(parts)

        if classify(node) is NodeKind.TABLE_HEADER_CELL:
            table.add_header_cell(cell_text)
        else:
            table.add_data_cell(cell_text)


def render_gemtext(node: Any, options: GemtextOptions | None = None) -> str:
    """Render a parsed HTML tree as gemtext with a fresh renderer."""
    return GemtextRenderer(options).render_to_string(node)
