#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/renderers/emitter.py
"""Output buffer for gemtext rendering.

The emitter appends text fragments to a buffer while keeping adjacent words
apart, tracks the length of the current line, and writes the blockquote
line prefix after every newline. Preformatted content and table grids are
written as verbatim regions, bracketed by private control characters, so
that :func:`normalize_output` leaves them untouched.
"""

from __future__ import annotations

import re

from html2gemini.constants import (
    NO_SPACE_AFTER_CHARS,
    NO_SPACE_BEFORE_CHARS,
    QUOTE_MARKER,
    VERBATIM_END,
    VERBATIM_START,
)

_WHITESPACE_RUN_RE = re.compile(r"[ \t\r\n]+")
_CONTROL_CHARS_RE = re.compile("[\x01\x02\x03]")
_VERBATIM_REGION_RE = re.compile(f"{VERBATIM_START}.*?{VERBATIM_END}", re.DOTALL)
_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_LEADING_SPACE_RE = re.compile(r"\n[ \t]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_BARE_QUOTE_LINE_RE = re.compile(f"^{re.escape(QUOTE_MARKER)}+$")

_PLACEHOLDER = "\x01{}\x01"


def collapse_whitespace(text: str) -> str:
    """Collapse runs of spaces, tabs and newlines to one space and trim."""
    return _WHITESPACE_RUN_RE.sub(" ", text).strip()


def strip_control_chars(text: str) -> str:
    """Remove the private control characters the emitter uses as markers."""
    return _CONTROL_CHARS_RE.sub("", text)


class TextEmitter:
    """Append-only text buffer with word separation and line tracking.

    Attributes
    ----------
    prefix : str
        Written after every newline (the blockquote marker, or empty)
    line_length : int
        Characters written on the current line, excluding the prefix
    ends_with_space : bool
        True when the last fragment ended in whitespace or an opening
        bracket, so the next fragment needs no separating space
    in_pre : bool
        True inside a preformatted block; text is copied verbatim

    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.prefix = ""
        self.line_length = 0
        self.ends_with_space = True
        self.in_pre = False

    def emit(self, fragment: str) -> None:
        """Append ``fragment``, inserting a separating space when needed."""
        if not fragment:
            return

        first = fragment[0]
        if (
            not self.in_pre
            and not self.ends_with_space
            and not first.isspace()
            and first not in NO_SPACE_BEFORE_CHARS
        ):
            self._parts.append(" ")
            self.line_length += 1

        self._write_lines(fragment)

        last = fragment[-1]
        self.ends_with_space = last.isspace() or last in NO_SPACE_AFTER_CHARS

    def write_raw(self, text: str) -> None:
        """Append ``text`` without separators or line prefixes."""
        if not text:
            return
        self._parts.append(text)
        newline = text.rfind("\n")
        self.line_length = len(text) - newline - 1 if newline >= 0 else self.line_length + len(text)
        self.ends_with_space = text[-1].isspace()

    def restore_prefix(self) -> None:
        """Write the line prefix if one is set and the line is empty."""
        if self.prefix and self.line_length == 0:
            self._parts.append(self.prefix)
            self.ends_with_space = True

    def ensure_line_start(self) -> None:
        """Start a new line unless the current one is empty."""
        if self.line_length > 0:
            self.emit("\n")

    def open_verbatim(self) -> None:
        """Mark the start of a region :func:`normalize_output` leaves intact."""
        self._parts.append(VERBATIM_START)

    def close_verbatim(self) -> None:
        """Mark the end of a verbatim region."""
        self._parts.append(VERBATIM_END)

    def emit_verbatim(self, text: str) -> None:
        """Append ``text`` as a verbatim region, honouring the line prefix."""
        self.open_verbatim()
        self._write_lines(text)
        self.close_verbatim()
        if text:
            self.ends_with_space = text[-1].isspace()

    def getvalue(self) -> str:
        """Return the raw buffer content, markers included."""
        return "".join(self._parts)

    def _write_lines(self, text: str) -> None:
        lines = text.split("\n")
        for i, line in enumerate(lines):
            if i > 0:
                self._parts.append("\n")
                self.line_length = 0
                if self.prefix:
                    self._parts.append(self.prefix)
            if line:
                self._parts.append(line)
                self.line_length += len(line)


def _drop_bare_quote_lines(text: str) -> str:
    """Remove runs of marker-only quote lines that border a blank line.

    A run between two non-blank lines is reduced to a single marker line.
    """
    lines = text.split("\n")
    result: list[str] = []
    i = 0
    while i < len(lines):
        if not _BARE_QUOTE_LINE_RE.match(lines[i]):
            result.append(lines[i])
            i += 1
            continue

        start = i
        while i < len(lines) and _BARE_QUOTE_LINE_RE.match(lines[i]):
            i += 1
        before_blank = start == 0 or not lines[start - 1]
        after_blank = i == len(lines) or not lines[i]
        if not (before_blank or after_blank):
            result.append(lines[start])
    return "\n".join(result)


def normalize_output(text: str) -> str:
    """Clean up a rendered buffer.

    Outside verbatim regions, spaces around newlines are removed, runs of
    three or more newlines become a single blank line and marker-only quote
    lines next to a blank line are dropped. Verbatim markers are then
    removed and the result is trimmed.

    Parameters
    ----------
    text : str
        Raw buffer content from :meth:`TextEmitter.getvalue`

    Returns
    -------
    str
        Final gemtext

    """
    regions: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        regions.append(match.group(0)[1:-1])
        return _PLACEHOLDER.format(len(regions) - 1)

    text = _VERBATIM_REGION_RE.sub(_stash, text)
    # Unbalanced markers can only come from a failed region; drop them
    text = text.replace(VERBATIM_START, "").replace(VERBATIM_END, "")

    text = _TRAILING_SPACE_RE.sub("\n", text)
    text = _LEADING_SPACE_RE.sub("\n", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = _drop_bare_quote_lines(text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = text.strip()

    for index, region in enumerate(regions):
        text = text.replace(_PLACEHOLDER.format(index), region, 1)
    return text
