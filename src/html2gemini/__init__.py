"""html2gemini - Render HTML documents as gemtext.

html2gemini converts HTML into gemtext, the line-oriented markup of the
Gemini protocol. Headings, list items, blockquotes and preformatted blocks
map onto their gemtext counterparts; hyperlinks, which gemtext cannot place
inline, are numbered in the text and collected into ``=>`` link lines that
are written out between paragraphs.

Key Features
------------
- Footnote-style link citations with configurable flush frequency
- Single-link paragraphs and list items collapse into link lines
- Tables as bordered ASCII grids with word wrapping, or as plain rows
- Byte-order mark, ``<meta charset>`` and chardet based decoding
- Command line interface with TOML/YAML/JSON configuration files

Requirements
------------
- Python 3.10+
- beautifulsoup4; html5lib, lxml and chardet are optional

Examples
--------
Convert a string:

    >>> from html2gemini import html_to_gemtext
    >>> print(html_to_gemtext('<h1>Hello</h1><p>Visit <a href="gemini://example.org/">the capsule</a> today.</p>'))
    # Hello
    <BLANKLINE>
    => gemini://example.org/ Visit the capsule today.

Render tables as grids:

    >>> from html2gemini import GemtextOptions
    >>> options = GemtextOptions(pretty_tables=True)
    >>> gemtext = html_to_gemtext("<table><tr><td>a</td></tr></table>", options)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "html2gemini requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from html2gemini.api import (
    from_bytes,
    from_html_node,
    from_reader,
    from_string,
    html_to_gemtext,
    parse_html,
)
from html2gemini.exceptions import (
    DecodingError,
    DependencyError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    Html2GeminiError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from html2gemini.options import GemtextOptions, PrettyTablesOptions, TableBorders
from html2gemini.renderers import GemtextRenderer

__all__ = [
    "__version__",
    "DecodingError",
    "DependencyError",
    "FileAccessError",
    "FileError",
    "FileNotFoundError",
    "GemtextOptions",
    "GemtextRenderer",
    "Html2GeminiError",
    "OutputWriteError",
    "ParsingError",
    "PrettyTablesOptions",
    "RenderingError",
    "TableBorders",
    "ValidationError",
    "from_bytes",
    "from_html_node",
    "from_reader",
    "from_string",
    "html_to_gemtext",
    "parse_html",
]
