#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/renderers/citations.py
"""Citation accumulation for gemtext link output.

Gemtext has no inline links, so hyperlinks found while rendering are
collected as numbered citations and written out later as ``=>`` link lines.
The accumulator decides when that happens: headings and blockquotes flush
unconditionally, other blocks only after ``link_emit_frequency`` paragraphs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from html2gemini.constants import LINK_LINE_PREFIX, MAILTO_PREFIX

if TYPE_CHECKING:
    from html2gemini.options.gemtext import GemtextOptions
    from html2gemini.renderers.emitter import TextEmitter

logger = logging.getLogger(__name__)


def normalize_link(url: str) -> str:
    """Prepare a link target for a gemtext link line.

    Surrounding whitespace and a ``mailto:`` scheme are removed and literal
    spaces are percent-encoded.

    Examples
    --------
    >>> normalize_link("  mailto:me@example.com ")
    'me@example.com'
    >>> normalize_link("/my page.html")
    '/my%20page.html'

    """
    url = url.strip()
    if url.startswith(MAILTO_PREFIX):
        url = url[len(MAILTO_PREFIX) :]
    return url.replace(" ", "%20")


def format_link_line(url: str, text: str) -> str:
    """Return a gemtext link line for ``url`` labelled ``text``."""
    return " ".join(part for part in (LINK_LINE_PREFIX.rstrip(), url, text) if part)


@dataclass(frozen=True)
class Citation:
    """A hyperlink recorded during rendering.

    Parameters
    ----------
    index : int
        Citation number, unique within one render
    url : str
        Normalized link target
    display : str
        Text the link was shown with
    inline : bool
        True when the link was already written as its own link line and
        must not be repeated by a flush

    """

    index: int
    url: str
    display: str
    inline: bool = False


class CitationAccumulator:
    """Collect citations and write them out as link-line blocks.

    Parameters
    ----------
    options : GemtextOptions
        Supplies ``citation_start``, ``citation_markers``, ``numbered_links``
        and ``link_emit_frequency``

    """

    def __init__(self, options: GemtextOptions):
        self.options = options
        self.citations: list[Citation] = []
        self.flushed_through = options.citation_start - 1
        self.paragraphs_since_flush = 0

    def __len__(self) -> int:
        return len(self.citations)

    @property
    def next_index(self) -> int:
        return len(self.citations) + self.options.citation_start

    @property
    def pending(self) -> list[Citation]:
        """Citations not yet written out."""
        return [c for c in self.citations if c.index > self.flushed_through and not c.inline]

    def register(self, url: str, display: str) -> str:
        """Record a link and return the marker to place in the text.

        Fragment links (``#...``) are not recorded.

        Returns
        -------
        str
            ``"[n]"`` when citation markers are enabled, otherwise ``""``

        """
        if url.startswith("#"):
            return ""

        citation = Citation(index=self.next_index, url=normalize_link(url), display=display)
        self.citations.append(citation)
        return f"[{citation.index}]" if self.options.citation_markers else ""

    def register_inline(self, url: str, display: str) -> Citation:
        """Record a link that was written as a stand-alone link line.

        The citation consumes an index but is never repeated by a flush.
        When nothing earlier is pending the flush cursor moves past it.
        """
        citation = Citation(index=self.next_index, url=normalize_link(url), display=display, inline=True)
        if self.flushed_through == citation.index - 1 and not self.pending:
            self.flushed_through = citation.index
        self.citations.append(citation)
        return citation

    def check_flush(self, emitter: TextEmitter, table_depth: int = 0) -> None:
        """Count a paragraph boundary and flush once enough have passed."""
        self.paragraphs_since_flush += 1
        if self.paragraphs_since_flush > self.options.link_emit_frequency and self.pending:
            self.flush(emitter, table_depth)

    def flush(self, emitter: TextEmitter, table_depth: int = 0) -> None:
        """Write all pending citations as a block of link lines.

        Nothing is written when no citation is pending or while a table is
        being rendered.
        """
        if table_depth > 0:
            return
        pending = self.pending
        if not pending:
            return

        lines = []
        for citation in pending:
            marker = f"[{citation.index}]" if self.options.numbered_links else ""
            lines.append(
                " ".join(part for part in (LINK_LINE_PREFIX.rstrip(), citation.url, marker, citation.display) if part)
            )

        logger.debug(f"Flushing {len(pending)} citation(s) [{pending[0].index}..{pending[-1].index}]")
        emitter.write_raw("\n\n" + "\n".join(lines) + "\n")
        emitter.restore_prefix()

        self.flushed_through = self.citations[-1].index
        self.paragraphs_since_flush = 0
