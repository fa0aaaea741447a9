"""Where ramlflat's output goes and how it looks.

Simplified documents are data: they go to stdout (or the ``-o`` file) as
JSON, compact tab-separated lines, or highlighted JSON on a colour
terminal. Everything else is a diagnostic and goes to stderr, including
the warnings the simplifier logs while walking a document, which reach
the terminal through :class:`OutputLogHandler`.

One :class:`OutputManager` is installed per CLI invocation by
:func:`~ramlflat.app.main_callback`; the module-level helpers forward to
it. Colour is dropped for ``--no-color``, ``NO_COLOR`` and ``TERM=dumb``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Data formats. ``AUTO`` means ``RICH`` on a colour TTY and ``PLAIN`` elsewhere."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders data on stdout and diagnostics on stderr.

    Args:
        format: Data format; ``AUTO`` is resolved immediately.
        no_color: Never emit colour or styles.
        quiet: Drop informational and success messages.
        verbose: Show debug messages.
        output_file: Write data to this file (always as JSON) instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self.no_color = no_color or _should_disable_color()
        self.quiet = quiet
        self.verbose = verbose
        self.output_file = output_file
        self.format = OutputFormat(format)
        if self.format is OutputFormat.AUTO:
            colourful = _is_tty() and not self.no_color
            self.format = OutputFormat.RICH if colourful else OutputFormat.PLAIN

        self._console = Console(
            file=sys.stdout,
            no_color=self.no_color,
            force_terminal=self.format is OutputFormat.RICH,
        )
        self._diagnostics = Console(file=sys.stderr, no_color=self.no_color, stderr=True)

    # --- data ---

    def format_response(self, data: Any) -> None:
        """Write one simplified view (tree, error index, traits...) as primary output."""
        if self.output_file:
            self._write(_to_json(data), mode="w")
        elif self.format is OutputFormat.JSON:
            self._write(_to_json(data))
        elif self.format is OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self._write(line)
        else:
            self._console.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Rows as a Rich table, a JSON list of records, or TSV with a header line."""
        if self.format is OutputFormat.JSON:
            self._write(_to_json([dict(zip(headers, row)) for row in rows]))
        elif self.format is OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self._write("\t".join(row))
        else:
            table = Table(*headers, title=title, header_style="bold cyan")
            for row in rows:
                table.add_row(*row)
            self._console.print(table)

    def _write(self, text: str, mode: str = "a") -> None:
        if not self.output_file:
            print(text, file=sys.stdout, flush=True)
            return
        with open(self.output_file, mode, encoding="utf-8") as f:
            f.write(text if text.endswith("\n") else text + "\n")

    # --- diagnostics ---

    def info(self, message: str) -> None:
        if not self.quiet:
            self._diagnose(message)

    def success(self, message: str) -> None:
        if not self.quiet:
            self._diagnose(message, style="green")

    def warning(self, message: str) -> None:
        self._diagnose(message, prefix="Warning: ", style="yellow")

    def error(self, message: str) -> None:
        self._diagnose(message, prefix="Error: ", style="bold red")

    def debug(self, message: str) -> None:
        if self.verbose:
            self._diagnose(message, prefix="[debug] ", style="dim")

    def _diagnose(self, message: str, prefix: str = "", style: Optional[str] = None) -> None:
        text = prefix + message
        if self.no_color:
            print(text, file=sys.stderr, flush=True)
            return
        # Resource URIs and schema text may contain square brackets.
        markup = escape(text)
        if style:
            markup = f"[{style}]{markup}[/{style}]"
        self._diagnostics.print(markup, highlight=False)


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> Iterator[str]:
    """Mapping entries as ``key<TAB>value`` and list items one per line.

    Nested values are written as single-line JSON.
    """
    if isinstance(data, dict):
        for key, value in data.items():
            yield f"{key}\t{_compact(value)}"
    elif isinstance(data, list):
        for item in data:
            yield _compact(item)
    else:
        yield str(data)


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


class OutputLogHandler(logging.Handler):
    """Send ``ramlflat`` log records to the active :class:`OutputManager`.

    The record level picks the diagnostic: ``WARNING`` and above keep their
    prefix even with ``--quiet``, ``DEBUG`` needs ``--verbose``.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            output = get_output()
            if record.levelno >= logging.ERROR:
                output.error(message)
            elif record.levelno >= logging.WARNING:
                output.warning(message)
            elif record.levelno >= logging.INFO:
                output.info(message)
            else:
                output.debug(message)
        except Exception:
            self.handleError(record)


def install_log_handler(verbose: bool = False) -> OutputLogHandler:
    """Route the ``ramlflat`` logger through :class:`OutputLogHandler`.

    Replaces a handler installed by an earlier call, so running several
    commands in one process does not repeat messages.
    """
    package_logger = logging.getLogger("ramlflat")
    for existing in list(package_logger.handlers):
        if isinstance(existing, OutputLogHandler):
            package_logger.removeHandler(existing)

    handler = OutputLogHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """``NO_COLOR`` with any value, even empty, or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The installed :class:`OutputManager`; a default one is created on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
