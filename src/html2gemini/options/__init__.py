#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for html2gemini rendering.

Options are frozen dataclasses; use ``create_updated()`` to derive a modified
copy and ``from_dict()`` to build one from a parsed configuration file.
"""

from html2gemini.options.base import CloneFrozenMixin
from html2gemini.options.gemtext import GemtextOptions, PrettyTablesOptions, TableBorders, validate_options

__all__ = [
    "CloneFrozenMixin",
    "GemtextOptions",
    "PrettyTablesOptions",
    "TableBorders",
    "validate_options",
]
