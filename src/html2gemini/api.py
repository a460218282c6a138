#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/api.py
"""Public entry points for converting HTML to gemtext.

Each entry point accepts a different form of input (a parsed tree, a
string, raw bytes, a stream, or any of these through
:func:`html_to_gemtext`), turns it into a BeautifulSoup tree and renders
the tree with a fresh :class:`~html2gemini.renderers.gemtext.GemtextRenderer`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Mapping, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from bs4.exceptions import FeatureNotFound

from html2gemini.constants import DEFAULT_HTML_PARSER, HTML_PARSERS
from html2gemini.exceptions import DependencyError, FileAccessError, FileNotFoundError, ValidationError
from html2gemini.options.gemtext import GemtextOptions, validate_options
from html2gemini.renderers.gemtext import render_gemtext
from html2gemini.utils.encoding import decode_html_bytes, normalize_stream_to_text, strip_text_bom

logger = logging.getLogger(__name__)

HtmlSource = Union[str, bytes, Path, IO[bytes], IO[str], Tag]
OptionsArg = Union[GemtextOptions, Mapping[str, Any], None]


def parse_html(html: str | bytes, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse HTML with BeautifulSoup.

    Parameters
    ----------
    html : str or bytes
        Document markup
    parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    BeautifulSoup
        Parsed document tree

    Raises
    ------
    ValidationError
        If ``parser`` is not a supported tree builder name
    DependencyError
        If the tree builder's package is not installed

    """
    if parser not in HTML_PARSERS:
        raise ValidationError(
            f"Unsupported HTML parser: {parser!r}. Choose one of {', '.join(HTML_PARSERS)}",
            parameter_name="parser",
            parameter_value=parser,
        )

    logger.debug(f"Parsing HTML with {parser}")
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        missing_packages = [(parser, "")] if parser in ("html5lib", "lxml") else []
        raise DependencyError(
            f"HTML parser {parser!r} is not available: {e}.",
            missing_packages=missing_packages,
            original_error=e,
        ) from e


def _resolve_options(options: OptionsArg, overrides: Mapping[str, Any] | None = None) -> GemtextOptions:
    resolved = validate_options(options)
    if overrides:
        unknown = [key for key in overrides if key not in GemtextOptions.field_names()]
        if unknown:
            raise ValidationError(
                f"Unknown option(s): {', '.join(sorted(unknown))}",
                parameter_name=unknown[0],
                parameter_value=overrides[unknown[0]],
            )
        try:
            resolved = resolved.create_updated(**overrides)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e), original_error=e) from e
    return resolved


def from_html_node(node: Tag, options: OptionsArg = None) -> str:
    """Render an already parsed HTML tree as gemtext.

    Parameters
    ----------
    node : bs4.Tag
        Root of the tree; usually a ``BeautifulSoup`` document
    options : GemtextOptions, mapping or None
        Rendering options

    Returns
    -------
    str
        Gemtext output

    Examples
    --------
    >>> from bs4 import BeautifulSoup
    >>> from_html_node(BeautifulSoup("<h1>Test</h1>", "html.parser"))
    '# Test'

    """
    return render_gemtext(node, validate_options(options))


def from_string(html: str, options: OptionsArg = None) -> str:
    """Parse an HTML string and render it as gemtext.

    A leading byte-order mark character is ignored.
    """
    resolved = validate_options(options)
    soup = parse_html(strip_text_bom(html), resolved.html_parser)
    return render_gemtext(soup, resolved)


def from_bytes(data: bytes, options: OptionsArg = None) -> str:
    """Decode HTML bytes and render them as gemtext.

    The encoding is taken from a byte-order mark, a ``<meta charset>``
    declaration, chardet (when installed) or common fallbacks, in that order.

    Raises
    ------
    DecodingError
        If a byte-order mark is present but the data is invalid in its encoding

    """
    return from_string(decode_html_bytes(data), options)


def from_reader(stream: IO[bytes] | IO[str], options: OptionsArg = None) -> str:
    """Read HTML from a binary or text stream and render it as gemtext."""
    return from_string(normalize_stream_to_text(stream), options)


def _read_path(path: Path) -> bytes:
    if not path.exists():
        raise FileNotFoundError(str(path))
    if not path.is_file():
        raise FileAccessError(str(path), message=f"Not a regular file: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def html_to_gemtext(source: HtmlSource, options: OptionsArg = None, **kwargs: Any) -> str:
    """Convert HTML from any supported source to gemtext.

    Parameters
    ----------
    source : str, bytes, Path, file-like or bs4.Tag
        HTML markup as a string or bytes, a path to an HTML file, a binary or
        text stream, or an already parsed tree
    options : GemtextOptions, mapping or None
        Rendering options
    **kwargs
        Individual option overrides applied on top of ``options``

    Returns
    -------
    str
        Gemtext output

    Raises
    ------
    ValidationError
        If an option is unknown or invalid, or ``source`` has an unsupported type
    FileNotFoundError
        If ``source`` is a path that does not exist
    FileAccessError
        If ``source`` is a path that cannot be read

    Examples
    --------
    >>> html_to_gemtext("<ul><li>one</li><li>two</li></ul>")
    '* one\\n* two'
    >>> html_to_gemtext('<a href="/x">x</a>', omit_links=True)
    'x'

    """
    resolved = _resolve_options(options, kwargs)

    if isinstance(source, Tag):
        return from_html_node(source, resolved)
    if isinstance(source, str):
        return from_string(source, resolved)
    if isinstance(source, (bytes, bytearray)):
        return from_bytes(bytes(source), resolved)
    if isinstance(source, Path):
        logger.debug(f"Reading HTML from {source}")
        return from_bytes(_read_path(source), resolved)
    if hasattr(source, "read"):
        return from_reader(source, resolved)

    raise ValidationError(
        f"Unsupported source type: {type(source).__name__}",
        parameter_name="source",
        parameter_value=source,
    )
