"""Pytest configuration and shared fixtures for the html2gemini test suite."""

from typing import Callable

import pytest
from bs4 import BeautifulSoup

from html2gemini.options import GemtextOptions
from html2gemini.renderers.gemtext import GemtextRenderer


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def render() -> Callable[..., str]:
    """Render an HTML string with html.parser and the given option overrides."""

    def _render(html: str, **overrides) -> str:
        options = GemtextOptions(**overrides)
        return GemtextRenderer(options).render_to_string(BeautifulSoup(html, "html.parser"))

    return _render


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch):
    """Run with an empty working directory and home, and no config env var."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("pathlib.Path.home", classmethod(lambda cls: home))
    monkeypatch.delenv("HTML2GEMINI_CONFIG", raising=False)
    monkeypatch.chdir(work)
    return work
