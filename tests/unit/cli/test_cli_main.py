"""Unit tests for the html2gemini command line entry point."""

import io
import sys

import pytest

from html2gemini.cli import main

PAGE = '<h1>Title</h1><p>Read <a href="/a">this</a> and <a href="/b">that</a></p>'
PAGE_OUTPUT = "# Title\n\nRead this [1] and that [2]\n\n=> /a [1] this\n=> /b [2] that\n"


@pytest.fixture
def page(isolated_config_env):
    path = isolated_config_env / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test conversions through main()."""

    def test_stdout(self, page, capsys):
        """Test converting one file to standard output."""
        assert main([str(page)]) == 0
        assert capsys.readouterr().out == PAGE_OUTPUT

    def test_stdin(self, isolated_config_env, monkeypatch, capsys):
        """Test reading standard input when no file is given."""
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"<h2>Piped</h2>")))
        assert main([]) == 0
        assert capsys.readouterr().out == "## Piped\n"

    def test_out_file(self, page, isolated_config_env):
        """Test -o/--out."""
        out = isolated_config_env / "page.gmi"
        assert main([str(page), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == PAGE_OUTPUT

    def test_output_dir(self, page, isolated_config_env, capsys):
        """Test converting several files into a directory."""
        second = isolated_config_env / "other.html"
        second.write_text("<p>other</p>", encoding="utf-8")
        out_dir = isolated_config_env / "capsule"

        assert main([str(page), str(second), "--output-dir", str(out_dir)]) == 0
        assert (out_dir / "page.gmi").read_text(encoding="utf-8") == PAGE_OUTPUT
        assert (out_dir / "other.gmi").read_text(encoding="utf-8") == "other\n"
        assert "Conversion Summary" in capsys.readouterr().err

    def test_out_with_several_inputs(self, page, capsys):
        """Test that --out refuses more than one input."""
        assert main([str(page), str(page), "-o", "x.gmi"]) == 3
        assert "--out accepts a single input" in capsys.readouterr().err

    def test_option_flags(self, page, capsys):
        """Test that option flags reach the renderer."""
        assert main([str(page), "--omit-links"]) == 0
        assert capsys.readouterr().out == "# Title\n\nRead this and that\n"

    def test_missing_file(self, isolated_config_env, capsys):
        """Test the file error exit code."""
        assert main(["missing.html"]) == 4
        assert "missing.html" in capsys.readouterr().err

    def test_first_error_code_is_kept(self, page, isolated_config_env, capsys):
        """Test that later inputs still convert after a failure."""
        bad = isolated_config_env / "bad.html"
        bad.write_bytes(b"\xef\xbb\xbf\xff")
        assert main(["missing.html", str(bad), str(page)]) == 4
        assert capsys.readouterr().out == PAGE_OUTPUT

    def test_decoding_error(self, isolated_config_env, capsys):
        """Test the parsing error exit code."""
        bad = isolated_config_env / "bad.html"
        bad.write_bytes(b"\xef\xbb\xbf\xff")
        assert main([str(bad)]) == 6

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "html2gemini" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestMainConfig:
    """Test configuration handling in main()."""

    def test_discovered_config(self, page, isolated_config_env, capsys):
        """Test that a config file in the working directory is applied."""
        (isolated_config_env / ".html2gemini.toml").write_text("omit_links = true\n")
        assert main([str(page)]) == 0
        assert capsys.readouterr().out == "# Title\n\nRead this and that\n"

    def test_no_config(self, page, isolated_config_env, capsys):
        """Test that --no-config ignores discovered files."""
        (isolated_config_env / ".html2gemini.toml").write_text("omit_links = true\n")
        assert main([str(page), "--no-config"]) == 0
        assert capsys.readouterr().out == PAGE_OUTPUT

    def test_flags_override_config(self, page, isolated_config_env, capsys):
        """Test that command line flags beat config values."""
        config = isolated_config_env / "settings.yaml"
        config.write_text("citation_start: 10\n")
        assert main([str(page), "--config", str(config), "--citation-start", "20"]) == 0
        assert "=> /a [20] this" in capsys.readouterr().out

    def test_invalid_config_value(self, page, isolated_config_env, capsys):
        """Test that a bad value in a config file is a validation error."""
        (isolated_config_env / ".html2gemini.json").write_text('{"citation_start": -5}')
        assert main([str(page)]) == 3
        assert "citation_start" in capsys.readouterr().err

    def test_unreadable_config(self, page, isolated_config_env, capsys):
        """Test an explicit config path that does not exist."""
        assert main([str(page), "--config", "absent.toml"]) == 3
        assert "does not exist" in capsys.readouterr().err

    def test_log_file(self, page, isolated_config_env):
        """Test that --log-file receives log records."""
        log_file = isolated_config_env / "run.log"
        out = isolated_config_env / "page.gmi"
        assert main([str(page), "-o", str(out), "--log-level", "INFO", "--log-file", str(log_file)]) == 0
        assert "Wrote" in log_file.read_text(encoding="utf-8")
