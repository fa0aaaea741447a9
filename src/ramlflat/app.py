"""The ``ramlflat`` command line.

Builds the root Typer app out of ``flatten``, ``inspect`` and ``config``.
The root callback sets up output and logging for whichever command runs;
:func:`main`, the console-script entry point, turns uncaught errors into
exit codes and leaves a crash log for anything unexpected.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from ramlflat import __version__
from ramlflat.commands.config import config_app
from ramlflat.commands.flatten import flatten_command
from ramlflat.commands.inspect import inspect_app
from ramlflat.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="ramlflat",
    help="Flatten RAML API descriptions into simplified JSON.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("flatten")(flatten_command)
app.add_typer(inspect_app, name="inspect", help="Show one part of a simplified document.")
app.add_typer(config_app, name="config", help="Show and change settings.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"ramlflat {__version__}")
        raise typer.Exit()


def _choose_format(json_output: bool, plain_output: bool) -> tuple[Any, Optional[str]]:
    """Output format from the flags, else from the user config.

    Returns the format and, when the user config could not be read, the
    problem to report once output is set up.
    """
    from ramlflat.config import load_global_config
    from ramlflat.exceptions import ConfigError
    from ramlflat.output import OutputFormat

    if json_output:
        return OutputFormat.JSON, None
    if plain_output:
        return OutputFormat.PLAIN, None
    try:
        return OutputFormat(load_global_config().output.format), None
    except ConfigError as exc:
        return OutputFormat.AUTO, str(exc)
    except ValueError:
        return OutputFormat.AUTO, None


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print data as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print data as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data, warnings and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug messages."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write data to this file as JSON."
    ),
) -> None:
    """Install the output manager and route library log records through it."""
    from ramlflat.output import OutputManager, install_log_handler, set_output, warning

    fmt, config_problem = _choose_format(json_output, plain_output)
    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    install_log_handler(verbose=verbose)
    if config_problem:
        warning(f"{config_problem} -- using default output format")

    ctx.ensure_object(dict)
    ctx.obj.update(force=force, verbose=verbose)


def _on_sigint(signum: int, frame: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(130)


def _write_crash_log(exc: Exception) -> str:
    """Save the traceback of *exc* under the data directory; return the file path."""
    from ramlflat.config import get_data_dir

    crash_dir = get_data_dir() / "logs"
    crash_dir.mkdir(parents=True, exist_ok=True)
    path = crash_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    path.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}")
    return str(path)


def main() -> None:
    """Console-script entry point.

    A :class:`~ramlflat.exceptions.RamlFlatError` that escapes a command
    exits with its ``exit_code``; anything else writes a crash log and
    exits 1.
    """
    from ramlflat.exceptions import RamlFlatError
    from ramlflat.output import error

    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except RamlFlatError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
