"""Inspect commands -- examine one part of a simplified RAML document.

Provides the ``ramlflat inspect`` sub-command group. Every sub-command
loads the document named on the command line, simplifies it with the
resolved configuration and prints a single view of the result.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

import typer

from ramlflat.exceptions import RamlFlatError
from ramlflat.output import debug, error, format_response, info, print_table

inspect_app = typer.Typer(no_args_is_help=True)

T = TypeVar("T")

SOURCE_ARGUMENT = typer.Argument(help="RAML file path, URL, or '-' for stdin.")
PARAMETER_SCOPE_OPTION = typer.Option(
    None,
    "--parameter-scope",
    help="URI parameter accumulation: 'traversal' (shared per top-level "
    "resource) or 'branch' (per root-to-node path).",
)
NAME_PARAMETER_SEGMENTS_OPTION = typer.Option(
    None,
    "--name-parameter-segments/--strict-names",
    help="Name '/{id}'-style resources after their variable instead of failing.",
)
ABSOLUTE_OPTION = typer.Option(
    False, "--absolute", help="Resolve a file path to an absolute path first."
)


def load_parser(
    source: str,
    parameter_scope: Optional[str] = None,
    name_parameter_segments: Optional[bool] = None,
    absolute: bool = False,
):  # noqa: ANN201
    """Resolve configuration and load *source* into a :class:`~ramlflat.RamlParser`.

    Raises:
        typer.Exit: With the error's exit code when the configuration is
            invalid or the document cannot be loaded.
    """
    from ramlflat.config import resolve_config
    from ramlflat.document import RamlParser

    try:
        config = resolve_config(
            cli_parameter_scope=parameter_scope,
            cli_name_parameter_segments=name_parameter_segments,
        )
        debug(
            f"Parameter scope: {config.simplify.parameter_scope.value}, "
            f"name parameter segments: {config.simplify.name_parameter_segments}"
        )
        return RamlParser.from_source(
            source,
            absolute=absolute,
            parameter_scope=config.simplify.parameter_scope,
            name_parameter_segments=config.simplify.name_parameter_segments,
        )
    except RamlFlatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def run_or_exit(step: Callable[[], T]) -> T:
    """Run one simplification step, turning a ramlflat error into an exit."""
    try:
        return step()
    except RamlFlatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("resources")
def inspect_resources(
    source: str = SOURCE_ARGUMENT,
    parameter_scope: Optional[str] = PARAMETER_SCOPE_OPTION,
    name_parameter_segments: Optional[bool] = NAME_PARAMETER_SEGMENTS_OPTION,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Print the simplified resource tree.

    Example::

        ramlflat inspect resources api.raml --json
    """
    parser = load_parser(source, parameter_scope, name_parameter_segments, absolute)
    nodes = run_or_exit(parser.resources)
    format_response([node.to_dict() for node in nodes])


@inspect_app.command("errors")
def inspect_errors(
    source: str = SOURCE_ARGUMENT,
    parameter_scope: Optional[str] = PARAMETER_SCOPE_OPTION,
    name_parameter_segments: Optional[bool] = NAME_PARAMETER_SEGMENTS_OPTION,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Print the error responses (status >= 400) of the whole document, by verb."""
    parser = load_parser(source, parameter_scope, name_parameter_segments, absolute)
    run_or_exit(parser.resources)
    errors = parser.all_status_errors()
    if not any(errors.values()):
        info("No error responses declared in this document.")
    format_response(errors)


@inspect_app.command("traits")
def inspect_traits(
    source: str = SOURCE_ARGUMENT,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Print the trait dictionary (trait name to definition)."""
    parser = load_parser(source, absolute=absolute)
    traits = run_or_exit(parser.get_traits)
    if not traits:
        info("No traits declared in this document.")
    format_response(traits)


@inspect_app.command("schemas")
def inspect_schemas(
    source: str = SOURCE_ARGUMENT,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Print the document's schema declarations as they were given."""
    parser = load_parser(source, absolute=absolute)
    schemas = parser.schemas()
    if not schemas:
        info("No schemas declared in this document.")
    format_response(schemas)


@inspect_app.command("tree")
def inspect_tree(
    source: str = SOURCE_ARGUMENT,
    parameter_scope: Optional[str] = PARAMETER_SCOPE_OPTION,
    name_parameter_segments: Optional[bool] = NAME_PARAMETER_SEGMENTS_OPTION,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Show every resource as a table row: complete URI, name, verbs, URI parameters.

    Example::

        ramlflat inspect tree api.raml
        ramlflat inspect tree api.raml --plain
    """
    parser = load_parser(source, parameter_scope, name_parameter_segments, absolute)
    nodes = run_or_exit(parser.resources)

    rows: list[list[str]] = []
    pending: list[Any] = list(reversed(nodes))
    while pending:
        node = pending.pop()
        rows.append([
            node.complete_uri,
            node.name,
            ", ".join(m.method.upper() for m in node.methods) or "-",
            ", ".join(node.uri_parameters) or "-",
        ])
        pending.extend(reversed(node.children))

    title = parser.get_api().title or "API"
    print_table(
        ["Complete URI", "Name", "Methods", "URI Parameters"],
        rows,
        title=f"{title} -- Resources ({len(rows)})",
    )
