#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/html2gemini/renderers/__init__.py
"""Gemtext rendering for parsed HTML trees.

- GemtextRenderer: walks a BeautifulSoup tree and produces gemtext
- TextEmitter: output buffer with word separation and line prefixes
- CitationAccumulator: collects hyperlinks and flushes them as link lines
- render_grid: lays out pretty tables as bordered ASCII grids
"""

from html2gemini.renderers.citations import Citation, CitationAccumulator, normalize_link
from html2gemini.renderers.emitter import TextEmitter, normalize_output
from html2gemini.renderers.gemtext import GemtextRenderer, NodeKind, RenderContext, classify, render_gemtext
from html2gemini.renderers.tables import TableContext, TableStack, render_grid

__all__ = [
    "Citation",
    "CitationAccumulator",
    "GemtextRenderer",
    "NodeKind",
    "RenderContext",
    "TableContext",
    "TableStack",
    "TextEmitter",
    "classify",
    "normalize_link",
    "normalize_output",
    "render_gemtext",
    "render_grid",
]
