#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the public conversion entry points.

Tests cover:
- Source type dispatch in html_to_gemtext
- Option resolution from objects, mappings and keyword overrides
- Parser selection and missing parser packages
- File and decoding errors

"""

import io

import pytest
from bs4 import BeautifulSoup
from bs4.exceptions import FeatureNotFound

import html2gemini.api as api
from html2gemini import (
    DecodingError,
    DependencyError,
    FileAccessError,
    FileNotFoundError,
    GemtextOptions,
    ValidationError,
    from_bytes,
    from_html_node,
    from_reader,
    from_string,
    html_to_gemtext,
    parse_html,
)

LINKED = '<p>Go <a href="/a">here</a> and <a href="/b">there</a></p>'


@pytest.mark.unit
class TestSources:
    """Tests for each accepted source type."""

    def test_string(self) -> None:
        """Test a markup string."""
        assert html_to_gemtext("<h1>Test</h1>") == "# Test"

    def test_string_with_bom_character(self) -> None:
        """Test that a leading U+FEFF is ignored."""
        assert from_string("\ufeff<h2>Test</h2>") == "## Test"

    def test_bytes_with_bom(self) -> None:
        """Test UTF-8 bytes with a byte-order mark."""
        data = b"\xef\xbb\xbf" + "<p>café</p>".encode("utf-8")
        assert html_to_gemtext(data) == "café"
        assert from_bytes(data) == "café"

    def test_bytes_with_meta_charset(self) -> None:
        """Test bytes decoded by their declared charset."""
        data = b'<meta charset="iso-8859-1"><p>caf\xe9</p>'
        assert html_to_gemtext(data) == "caf\u00e9"

    def test_path(self, tmp_path) -> None:
        """Test reading a file."""
        path = tmp_path / "page.html"
        path.write_bytes(b"<ul><li>one</li><li>two</li></ul>")
        assert html_to_gemtext(path) == "* one\n* two"

    def test_binary_stream(self) -> None:
        """Test a binary file-like object."""
        assert html_to_gemtext(io.BytesIO(b"<p>x</p>")) == "x"
        assert from_reader(io.BytesIO(b"<p>y</p>")) == "y"

    def test_text_stream(self) -> None:
        """Test a text file-like object."""
        assert html_to_gemtext(io.StringIO("<p>x</p>")) == "x"

    def test_parsed_tree(self) -> None:
        """Test an already parsed tree."""
        soup = BeautifulSoup("<h3>Tree</h3>", "html.parser")
        assert html_to_gemtext(soup) == "### Tree"
        assert from_html_node(soup) == "### Tree"

    def test_unsupported_source(self) -> None:
        """Test that other types raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            html_to_gemtext(42)  # type: ignore[arg-type]
        assert exc_info.value.parameter_name == "source"


@pytest.mark.unit
class TestOptionResolution:
    """Tests for options and keyword overrides."""

    def test_options_object(self) -> None:
        """Test passing GemtextOptions."""
        assert html_to_gemtext(LINKED, GemtextOptions(omit_links=True)) == "Go here and there"

    def test_options_mapping(self) -> None:
        """Test passing a plain mapping."""
        assert html_to_gemtext(LINKED, {"citation_start": 7}) == (
            "Go here [7] and there [8]\n\n=> /a [7] here\n=> /b [8] there"
        )

    def test_keyword_overrides(self) -> None:
        """Test keyword overrides on top of options."""
        options = GemtextOptions(citation_start=7)
        assert html_to_gemtext(LINKED, options, omit_links=True) == "Go here and there"

    def test_unknown_keyword(self) -> None:
        """Test that an unknown override is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            html_to_gemtext("<p>x</p>", bogus=True)
        assert exc_info.value.parameter_name == "bogus"

    def test_invalid_keyword_value(self) -> None:
        """Test that an invalid override value is rejected."""
        with pytest.raises(ValidationError):
            html_to_gemtext("<p>x</p>", citation_start=-1)


@pytest.mark.unit
class TestParsing:
    """Tests for parse_html()."""

    def test_default_parser(self) -> None:
        """Test parsing with html.parser."""
        soup = parse_html("<p>x</p>")
        assert soup.p is not None

    def test_unknown_parser(self) -> None:
        """Test that unsupported builder names are rejected."""
        with pytest.raises(ValidationError):
            parse_html("<p>x</p>", parser="regex")

    def test_missing_parser_package(self, monkeypatch) -> None:
        """Test that a missing tree builder becomes a DependencyError."""

        def _raise(*args, **kwargs):
            raise FeatureNotFound("lxml")

        monkeypatch.setattr(api, "BeautifulSoup", _raise)
        with pytest.raises(DependencyError) as exc_info:
            parse_html("<p>x</p>", parser="lxml")
        assert exc_info.value.missing_packages == [("lxml", "")]
        assert "pip install lxml" in str(exc_info.value)


@pytest.mark.unit
class TestErrors:
    """Tests for file and decoding failures."""

    def test_missing_file(self, tmp_path) -> None:
        """Test a path that does not exist."""
        with pytest.raises(FileNotFoundError) as exc_info:
            html_to_gemtext(tmp_path / "missing.html")
        assert exc_info.value.file_path.endswith("missing.html")

    def test_directory(self, tmp_path) -> None:
        """Test a path that is not a regular file."""
        with pytest.raises(FileAccessError):
            html_to_gemtext(tmp_path)

    def test_bad_bytes_after_bom(self) -> None:
        """Test that undecodable BOM-marked input raises DecodingError."""
        with pytest.raises(DecodingError):
            html_to_gemtext(b"\xef\xbb\xbf<p>\xff</p>")
