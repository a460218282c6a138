"""Command-line interface for the html2gemini library.

Examples
--------
Convert a file to standard output::

    $ html2gemini page.html

Convert from standard input with ASCII grid tables::

    $ curl -s https://example.org/ | html2gemini --pretty-tables

Convert several files into a directory of ``.gmi`` files::

    $ html2gemini *.html --output-dir ./capsule

Options may also come from ``.html2gemini.toml`` (or ``.yaml``/``.json``),
a ``[tool.html2gemini]`` table in ``pyproject.toml``, or the file named by
``$HTML2GEMINI_CONFIG``. Command line flags override file values.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from html2gemini.api import html_to_gemtext
from html2gemini.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    DynamicCLIBuilder,
    collect_option_overrides,
    create_parser,
    get_exit_code_for_exception,
)
from html2gemini.cli.config import load_config_with_priority, merge_configs
from html2gemini.cli.output import SummaryRenderer, should_use_rich_output
from html2gemini.constants import GEMTEXT_FILE_EXTENSION
from html2gemini.exceptions import Html2GeminiError, OutputWriteError
from html2gemini.logging_utils import configure_logging, resolve_log_level
from html2gemini.options.gemtext import GemtextOptions

logger = logging.getLogger(__name__)

__all__ = [
    "main",
    "DynamicCLIBuilder",
    "create_parser",
    "build_options",
]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    configure_logging(resolve_log_level(parsed_args), log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace) -> GemtextOptions:
    """Combine configuration file values with command line overrides.

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration file cannot be loaded
    ValidationError
        If the combined options are invalid

    """
    config: Dict[str, Any] = {}
    if parsed_args.config or not parsed_args.no_config:
        config = load_config_with_priority(explicit_path=parsed_args.config)

    merged = merge_configs(config, collect_option_overrides(parsed_args))
    return GemtextOptions.from_dict(merged)


def _read_input(source: str, options: GemtextOptions) -> str:
    if source == "-":
        return html_to_gemtext(sys.stdin.buffer, options)
    return html_to_gemtext(Path(source), options)


def _write_output(text: str, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), original_error=e) from e
    logger.info(f"Wrote {path}")


def _output_path(source: str, parsed_args: argparse.Namespace) -> Path | None:
    if parsed_args.output_dir:
        stem = "stdin" if source == "-" else Path(source).stem
        return Path(parsed_args.output_dir) / f"{stem}{GEMTEXT_FILE_EXTENSION}"
    if parsed_args.out:
        return Path(parsed_args.out)
    return None


def main(args: list[str] | None = None) -> int:
    """Execute the html2gemini command line.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    if parsed_args.out and len(parsed_args.input) > 1:
        print("Error: --out accepts a single input; use --output-dir for several", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        options = build_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Html2GeminiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    exit_code = EXIT_SUCCESS
    summary_rows: list[tuple[str, str]] = []
    failed = 0
    for source in parsed_args.input:
        try:
            text = _read_input(source, options)
            output_path = _output_path(source, parsed_args)
            if output_path is None:
                sys.stdout.write(text + "\n")
            else:
                _write_output(text, output_path)
                summary_rows.append((source, str(output_path)))
        except Html2GeminiError as e:
            logger.debug("Conversion failed", exc_info=True)
            print(f"Error: {source}: {e}", file=sys.stderr)
            exit_code = exit_code or get_exit_code_for_exception(e)
            summary_rows.append((source, f"failed: {e}"))
            failed += 1
        except Exception as e:
            logger.exception(f"Unexpected error converting {source}")
            print(f"Error: {source}: {e}", file=sys.stderr)
            exit_code = exit_code or EXIT_ERROR
            summary_rows.append((source, f"failed: {e}"))
            failed += 1

    if parsed_args.output_dir:
        use_rich = should_use_rich_output(parsed_args, stream=sys.stderr)
        SummaryRenderer(use_rich).render_conversion_summary(summary_rows, failed)

    return exit_code
