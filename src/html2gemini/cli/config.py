#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the html2gemini CLI.

A configuration file holds :class:`~html2gemini.options.GemtextOptions`
field names as keys. TOML, YAML and JSON files are supported, as is a
``[tool.html2gemini]`` table in ``pyproject.toml``.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from html2gemini.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

logger = logging.getLogger(__name__)


def _require_mapping(config: Any, config_path: Path, kind: str) -> Dict[str, Any]:
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"{kind} config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return _require_mapping(tomllib.load(f), config_path, "TOML")
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return _require_mapping(yaml.safe_load(f), config_path, "YAML")
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return _require_mapping(json.load(f), config_path, "JSON")
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.html2gemini]`` table of a pyproject.toml, or an empty dict."""
    data = _load_toml_config(pyproject_path)
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(section).__name__}"
        )
    return section


_LOADERS: Dict[str, Callable[[Path], Dict[str, Any]]] = {
    ".toml": _load_toml_config,
    ".yaml": _load_yaml_config,
    ".yml": _load_yaml_config,
    ".json": _load_json_config,
}


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".html2gemini.toml")
    >>> config.get("pretty_tables")
    True

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        loader = _load_pyproject_section
    else:
        ext = config_path.suffix.lower()
        if ext not in _LOADERS:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")
        loader = _LOADERS[ext]

    try:
        config = loader(config_path)
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _dotfile_in(directory: Path) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Each directory is checked for the dedicated dotfiles first, then for a
    pyproject.toml carrying a ``[tool.html2gemini]`` table. A pyproject.toml
    that cannot be parsed is ignored.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        dotfile = _dotfile_in(current)
        if dotfile:
            return dotfile

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (argparse.ArgumentTypeError, OSError) as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The directory tree is searched upward from ``start_dir`` (default: the
    current directory), then the user's home directory is checked for the
    dedicated dotfiles.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    return find_config_in_parents(start_dir) or _dotfile_in(Path.home())


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, recursing into nested tables.

    Examples
    --------
    >>> merge_configs({"pretty_tables_options": {"col_width": 20}}, {"pretty_tables_options": {"row_line": True}})
    {'pretty_tables_options': {'col_width': 20, 'row_line': True}}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. ``$HTML2GEMINI_CONFIG``
    3. Auto-discovered file (parent directories, then home)

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the environment; read from
        ``$HTML2GEMINI_CONFIG`` when None
    start_dir : Path, optional
        Directory where discovery starts

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path is None:
        env_var_path = os.environ.get(CONFIG_ENV_VAR)
    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file(start_dir)
    if discovered_path:
        return load_config_file(discovered_path)

    return {}
