"""Unit tests for html2gemini CLI configuration management.

This module tests configuration file discovery, loading and priority
handling.
"""

import argparse
import json

import pytest

from html2gemini.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    merge_configs,
)


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading individual configuration files."""

    def test_toml(self, tmp_path):
        """Test loading a TOML file with a nested table."""
        path = tmp_path / "config.toml"
        path.write_text("pretty_tables = true\n\n[pretty_tables_options]\ncol_width = 20\n")
        assert load_config_file(path) == {"pretty_tables": True, "pretty_tables_options": {"col_width": 20}}

    def test_yaml(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / "config.yml"
        path.write_text("omit_links: true\nlink_emit_frequency: 4\n")
        assert load_config_file(str(path)) == {"omit_links": True, "link_emit_frequency": 4}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"citation_start": 3}))
        assert load_config_file(path) == {"citation_start": 3}

    def test_pyproject_section(self, tmp_path):
        """Test reading the [tool.html2gemini] table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.html2gemini]\nskip_navigation = true\n')
        assert load_config_file(path) == {"skip_navigation": True}

    def test_pyproject_without_section(self, tmp_path):
        """Test a pyproject.toml with no html2gemini table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path) == {}

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "pretty_tables = \n"),
            ("bad.yaml", "key: [unclosed\n"),
            ("bad.json", "{not json}"),
            ("list.yaml", "- a\n- b\n"),
            ("config.ini", "[section]\n"),
        ],
    )
    def test_invalid_files(self, tmp_path, filename, content):
        """Test malformed, non-mapping and unsupported files."""
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory(self, tmp_path):
        """Test a path that is a directory."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_found_in_parent(self, tmp_path):
        """Test that the search walks up from a nested directory."""
        config = tmp_path / ".html2gemini.toml"
        config.write_text("omit_links = true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_dotfile_preferred_over_pyproject(self, tmp_path):
        """Test the order of candidates within one directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.html2gemini]\nomit_links = true\n")
        dotfile = tmp_path / ".html2gemini.json"
        dotfile.write_text("{}")
        assert find_config_in_parents(tmp_path) == dotfile.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        """Test that an unrelated pyproject.toml does not stop the search."""
        config = tmp_path / ".html2gemini.yaml"
        config.write_text("omit_links: true\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config_in_parents(project) == config.resolve()

    def test_home_fallback(self, isolated_config_env, tmp_path):
        """Test that the home directory is checked last."""
        home_config = tmp_path / "home" / ".html2gemini.toml"
        home_config.write_text("omit_links = true\n")
        assert discover_config_file() == home_config

    def test_nothing_found(self, isolated_config_env):
        """Test discovery without any config file."""
        assert discover_config_file() is None


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test configuration priority handling."""

    def test_explicit_path_wins(self, isolated_config_env, monkeypatch, tmp_path):
        """Test that --config beats the environment and discovery."""
        (isolated_config_env / ".html2gemini.toml").write_text("citation_start = 1\n")
        env_config = tmp_path / "env.toml"
        env_config.write_text("citation_start = 2\n")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("citation_start = 3\n")
        monkeypatch.setenv("HTML2GEMINI_CONFIG", str(env_config))

        assert load_config_with_priority(explicit_path=str(explicit)) == {"citation_start": 3}
        assert load_config_with_priority() == {"citation_start": 2}

    def test_discovered_config(self, isolated_config_env):
        """Test loading the config found in the working directory."""
        (isolated_config_env / ".html2gemini.toml").write_text("citation_start = 1\n")
        assert load_config_with_priority() == {"citation_start": 1}

    def test_no_config(self, isolated_config_env):
        """Test the empty default."""
        assert load_config_with_priority() == {}


@pytest.mark.unit
@pytest.mark.cli
class TestMergeConfigs:
    """Test merging configuration dictionaries."""

    def test_nested_merge(self):
        """Test that nested tables merge key by key."""
        base = {"omit_links": False, "pretty_tables_options": {"col_width": 20, "row_line": False}}
        override = {"omit_links": True, "pretty_tables_options": {"row_line": True}}
        assert merge_configs(base, override) == {
            "omit_links": True,
            "pretty_tables_options": {"col_width": 20, "row_line": True},
        }

    def test_base_is_not_modified(self):
        """Test that merging returns a new dictionary."""
        base = {"omit_links": False}
        merge_configs(base, {"omit_links": True})
        assert base == {"omit_links": False}
