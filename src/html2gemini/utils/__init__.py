#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/utils/__init__.py
"""Utility modules for the html2gemini package."""

from html2gemini.utils.encoding import (
    decode_html_bytes,
    detect_encoding,
    normalize_stream_to_text,
    sniff_meta_charset,
    strip_bom,
    strip_text_bom,
)

__all__ = [
    "decode_html_bytes",
    "detect_encoding",
    "normalize_stream_to_text",
    "sniff_meta_charset",
    "strip_bom",
    "strip_text_bom",
]
