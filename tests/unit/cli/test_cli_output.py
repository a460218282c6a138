"""Unit tests for CLI summary output."""

import argparse
import io

import pytest

from html2gemini.cli.output import SummaryRenderer, should_use_rich_output

ROWS = [("a.html", "capsule/a.gmi"), ("b.html", "failed: File not found: b.html")]


@pytest.mark.unit
@pytest.mark.cli
class TestShouldUseRichOutput:
    """Test the rich output decision."""

    def test_disabled_without_flag(self):
        """Test that rich output is opt-in."""
        assert should_use_rich_output(argparse.Namespace(rich=False, force_rich=True)) is False

    def test_not_a_terminal(self):
        """Test that a non-TTY stream disables rich output."""
        pytest.importorskip("rich")
        args = argparse.Namespace(rich=True, force_rich=False)
        assert should_use_rich_output(args, stream=io.StringIO()) is False

    def test_forced(self):
        """Test --force-rich."""
        pytest.importorskip("rich")
        assert should_use_rich_output(argparse.Namespace(rich=True, force_rich=True)) is True


@pytest.mark.unit
@pytest.mark.cli
class TestSummaryRenderer:
    """Test the conversion summary table."""

    def test_plain(self, capsys):
        """Test the plain text summary."""
        SummaryRenderer(use_rich=False).render_conversion_summary(ROWS, failed=1)
        err = capsys.readouterr().err
        assert "Conversion Summary" in err
        assert "capsule/a.gmi" in err
        assert "Successful: 1" in err
        assert "Failed:     1" in err

    def test_rich(self, capsys):
        """Test the rich table summary."""
        pytest.importorskip("rich")
        SummaryRenderer(use_rich=True).render_conversion_summary(ROWS, failed=1)
        err = capsys.readouterr().err
        assert "Conversion Summary" in err
        assert "a.html" in err
        assert "Successful" in err
