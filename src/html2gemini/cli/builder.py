#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction for the html2gemini CLI.

Option flags are generated from the field metadata of the option
dataclasses: ``help`` becomes the help text, ``type`` and ``choices`` are
passed to argparse, and ``cli_name`` overrides the flag name. Boolean
fields defaulting to True get a ``--no-*`` flag.

Every generated flag defaults to ``argparse.SUPPRESS`` so that only the
options given on the command line override configuration file values.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Type

from html2gemini import __version__
from html2gemini.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from html2gemini.options.gemtext import GemtextOptions, PrettyTablesOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

# Prefix for argparse dest names of PrettyTablesOptions fields
TABLE_DEST_PREFIX = "table__"


class DynamicCLIBuilder:
    """Build argparse arguments from option dataclass field metadata."""

    def __init__(self) -> None:
        self.dest_to_cli_flag: Dict[str, str] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    def infer_cli_name(self, field: Field, negate: bool) -> str:
        """Return the ``--flag`` for ``field``, preferring its ``cli_name`` metadata."""
        if "cli_name" in field.metadata:
            return f"--{field.metadata['cli_name']}"
        kebab_name = self.snake_to_kebab(field.name)
        if negate and not kebab_name.startswith("no-"):
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    def get_argument_kwargs(self, field: Field, dest: str) -> tuple[str, Dict[str, Any]]:
        """Return the flag name and argparse kwargs for one field."""
        metadata = field.metadata
        kwargs: Dict[str, Any] = {"dest": dest, "default": argparse.SUPPRESS, "help": metadata.get("help")}

        default = field.default
        if isinstance(default, bool):
            kwargs["action"] = "store_false" if default else "store_true"
            return self.infer_cli_name(field, negate=default), kwargs

        if "choices" in metadata:
            kwargs["choices"] = metadata["choices"]
        kwargs["type"] = metadata.get("type", str)
        if default is not MISSING:
            kwargs["help"] = f"{kwargs['help']} (default: {default})"
        return self.infer_cli_name(field, negate=False), kwargs

    def add_options_arguments(
        self,
        group: argparse._ArgumentGroup,
        options_class: Type[Any],
        dest_prefix: str = "",
        require_cli_name: bool = False,
    ) -> None:
        """Add one argument per scalar field of ``options_class``.

        Parameters
        ----------
        group : argparse._ArgumentGroup
            Group receiving the arguments
        options_class : type
            Options dataclass to introspect
        dest_prefix : str, default ""
            Prefix for the argparse dest names
        require_cli_name : bool, default False
            Only expose fields that declare a ``cli_name``

        """
        for field in fields(options_class):
            if field.default is MISSING:
                # Nested option groups use default_factory
                continue
            if require_cli_name and "cli_name" not in field.metadata:
                continue

            dest = f"{dest_prefix}{field.name}"
            cli_name, kwargs = self.get_argument_kwargs(field, dest)
            group.add_argument(cli_name, **kwargs)
            self.dest_to_cli_flag[dest] = cli_name

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the parser with input/output, option and logging arguments."""
        parser = argparse.ArgumentParser(
            prog="html2gemini",
            description="Convert HTML documents to gemtext.",
        )
        parser.add_argument(
            "input",
            nargs="*",
            default=["-"],
            help="HTML files to convert; '-' or nothing reads standard input",
        )

        output = parser.add_mutually_exclusive_group()
        output.add_argument("-o", "--out", dest="out", help="Write output to this file instead of standard output")
        output.add_argument("--output-dir", help="Write each input to <output-dir>/<stem>.gmi")

        display = parser.add_argument_group("summary display")
        display.add_argument(
            "--rich",
            action="store_true",
            help="Print the --output-dir summary with rich formatting (disabled when stderr is not a terminal)",
        )
        display.add_argument("--force-rich", action="store_true", help="Use rich formatting even without a terminal")

        rendering = parser.add_argument_group("rendering options")
        self.add_options_arguments(rendering, GemtextOptions)

        tables = parser.add_argument_group("pretty table options")
        self.add_options_arguments(tables, PrettyTablesOptions, TABLE_DEST_PREFIX, require_cli_name=True)

        config = parser.add_argument_group("configuration")
        config.add_argument("--config", help="Path to a TOML, YAML or JSON configuration file")
        config.add_argument(
            "--no-config",
            action="store_true",
            help="Ignore configuration files, including $HTML2GEMINI_CONFIG",
        )

        logging_group = parser.add_argument_group("logging")
        logging_group.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            default="WARNING",
            help="Logging level (default: WARNING)",
        )
        logging_group.add_argument("--log-file", help="Also write log records to this file")
        logging_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
        logging_group.add_argument(
            "--trace", action="store_true", help="Debug logging with timestamps and logger names"
        )

        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
        return parser


def collect_option_overrides(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Return the options given on the command line as a config-shaped dict.

    Pretty table options are nested under ``pretty_tables_options``.
    """
    overrides: Dict[str, Any] = {}
    table_overrides: Dict[str, Any] = {}
    gemtext_fields = GemtextOptions.field_names()

    for dest, value in vars(parsed_args).items():
        if dest.startswith(TABLE_DEST_PREFIX):
            table_overrides[dest[len(TABLE_DEST_PREFIX) :]] = value
        elif dest in gemtext_fields:
            overrides[dest] = value

    if table_overrides:
        overrides["pretty_tables_options"] = table_overrides
    return overrides


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    return DynamicCLIBuilder().build_parser()


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
