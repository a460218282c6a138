#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2gemini.

This module centralizes the hardcoded values and default configuration
constants used across the library. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Gemtext Output - Markers and prefixes written into rendered output
3. Citation Defaults - Link accumulation and flushing behavior
4. Table Defaults - Pretty table grid layout
5. Parsing and Input - Parser choice and encoding fallbacks
6. Configuration Files - Discovery names for the CLI
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
TableAlignment = Literal["default", "left", "center", "right"]

# =============================================================================
# Gemtext Output
# =============================================================================

HEADING_PREFIXES = {1: "# ", 2: "## ", 3: "### "}
LIST_ITEM_PREFIX = "* "
LINK_LINE_PREFIX = "=> "
QUOTE_MARKER = ">"
PREFORMATTED_FENCE = "```"

# Characters that never get a separating space in front of / after them
NO_SPACE_BEFORE_CHARS = frozenset(".,;!?)]>")
NO_SPACE_AFTER_CHARS = frozenset("([<")

# Private control characters bracketing verbatim buffer regions (pre blocks, table grids)
VERBATIM_START = "\x02"
VERBATIM_END = "\x03"

DEFAULT_IMAGE_MARKER_PREFIX = "‡"
DEFAULT_EMPTY_LINK_PREFIX = ">>"
DEFAULT_TABLE_MARKER = "⊞ table ⊞"
DEFAULT_EMIT_IMAGES_AS_LINKS = True
DEFAULT_SKIP_NAVIGATION = False

# =============================================================================
# Citation Defaults
# =============================================================================

DEFAULT_OMIT_LINKS = False
DEFAULT_CITATION_START = 1
DEFAULT_CITATION_MARKERS = True
DEFAULT_NUMBERED_LINKS = True
DEFAULT_LINK_EMIT_FREQUENCY = 2
DEFAULT_LIST_ITEM_LINK_WORD_THRESHOLD = 30
MAILTO_PREFIX = "mailto:"

# =============================================================================
# Table Defaults
# =============================================================================

DEFAULT_PRETTY_TABLES = False
DEFAULT_TABLE_AUTO_FORMAT_HEADER = True
DEFAULT_TABLE_AUTO_WRAP_TEXT = True
DEFAULT_TABLE_REFLOW_DURING_AUTO_WRAP = True
DEFAULT_TABLE_COL_WIDTH = 30
DEFAULT_TABLE_COLUMN_SEPARATOR = "|"
DEFAULT_TABLE_ROW_SEPARATOR = "-"
DEFAULT_TABLE_CENTER_SEPARATOR = "+"
DEFAULT_TABLE_ALIGNMENT: TableAlignment = "default"
DEFAULT_TABLE_NEWLINE = "\n"
DEFAULT_TABLE_HEADER_LINE = True
DEFAULT_TABLE_ROW_LINE = False
DEFAULT_TABLE_AUTO_MERGE_CELLS = False

# Penalty added to a wrapped line that still exceeds the width limit
TABLE_WRAP_OVERFLOW_PENALTY = 100_000

TABLE_ALIGNMENTS: tuple[str, ...] = ("default", "left", "center", "right")

# =============================================================================
# Parsing and Input
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
HTML_PARSERS: tuple[str, ...] = ("html.parser", "html5lib", "lxml")

# Byte order marks, longest first so UTF-32 wins over UTF-16
BYTE_ORDER_MARKS: tuple[tuple[bytes, str], ...] = (
    (b"\x00\x00\xfe\xff", "utf-32-be"),
    (b"\xff\xfe\x00\x00", "utf-32-le"),
    (b"\xef\xbb\xbf", "utf-8"),
    (b"\xfe\xff", "utf-16-be"),
    (b"\xff\xfe", "utf-16-le"),
)
DEFAULT_FALLBACK_ENCODINGS: tuple[str, ...] = ("utf-8", "cp1252", "latin-1")
META_CHARSET_SNIFF_BYTES = 4096
CHARDET_SAMPLE_SIZE = 8192
CHARDET_CONFIDENCE_THRESHOLD = 0.7

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_ENV_VAR = "HTML2GEMINI_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (
    ".html2gemini.toml",
    ".html2gemini.yaml",
    ".html2gemini.yml",
    ".html2gemini.json",
)
PYPROJECT_TOOL_SECTION = "html2gemini"
GEMTEXT_FILE_EXTENSION = ".gmi"
