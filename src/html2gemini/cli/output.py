"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/html2gemini/cli/output.py
from __future__ import annotations

import argparse
import sys
from typing import IO, Any

from html2gemini.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: IO[str] | None = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Stream the summary goes to; sys.stderr unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                "Rich output requires the optional 'rich' dependency.",
                missing_packages=[("rich", "")],
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


class SummaryRenderer:
    """Render the per-file result table printed after a multi-file conversion.

    Parameters
    ----------
    use_rich : bool
        Whether to use Rich library for table rendering

    Examples
    --------
    >>> renderer = SummaryRenderer(use_rich=False)
    >>> renderer.render_conversion_summary([("a.html", "capsule/a.gmi")], failed=0)

    """

    def __init__(self, use_rich: bool):
        """Initialize summary renderer."""
        self.use_rich = use_rich
        self._console: Any = None

        if self.use_rich:
            try:
                from rich.console import Console

                self._console = Console(stderr=True)
            except ImportError:
                self.use_rich = False

    def render_conversion_summary(
        self, rows: list[tuple[str, str]], failed: int, title: str = "Conversion Summary"
    ) -> None:
        """Render one row per input followed by success and failure counts.

        Parameters
        ----------
        rows : list[tuple[str, str]]
            (input, result) pairs; the result is the output path or an error
        failed : int
            Number of failed conversions
        title : str, default="Conversion Summary"
            Table title

        """
        successful = len(rows) - failed

        if self.use_rich and self._console:
            from rich.table import Table

            table = Table(title=title)
            table.add_column("Input", style="cyan")
            table.add_column("Result", style="white")
            for source, result in rows:
                table.add_row(source, result)
            table.add_section()
            table.add_row("+ Successful", str(successful), style="green")
            table.add_row("- Failed", str(failed), style="red" if failed else None)

            self._console.print(table)
        else:
            print(f"\n{title}", file=sys.stderr)
            print("=" * 60, file=sys.stderr)
            for source, result in rows:
                print(f"{source:30} {result}", file=sys.stderr)
            print("-" * 60, file=sys.stderr)
            print(f"  Successful: {successful}", file=sys.stderr)
            print(f"  Failed:     {failed}", file=sys.stderr)
