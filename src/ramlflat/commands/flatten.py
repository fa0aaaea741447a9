"""Flatten command -- simplify a whole RAML document.

Implements the ``ramlflat flatten`` top-level command, which prints the
simplified resource tree together with the document-wide error index, the
trait dictionary and the declared schemas as one JSON object.
"""

from __future__ import annotations

from typing import Optional

import typer

from ramlflat.commands.inspect import (
    ABSOLUTE_OPTION,
    NAME_PARAMETER_SEGMENTS_OPTION,
    PARAMETER_SCOPE_OPTION,
    SOURCE_ARGUMENT,
    load_parser,
    run_or_exit,
)
from ramlflat.output import debug, format_response


def flatten_command(
    source: str = SOURCE_ARGUMENT,
    parameter_scope: Optional[str] = PARAMETER_SCOPE_OPTION,
    name_parameter_segments: Optional[bool] = NAME_PARAMETER_SEGMENTS_OPTION,
    absolute: bool = ABSOLUTE_OPTION,
) -> None:
    """Simplify a RAML document into resources, errors, traits and schemas.

    Raises:
        typer.Exit: With code 3 when the document cannot be loaded and
            code 4 when its resource tree or traits are malformed.

    Example::

        ramlflat flatten api.raml -o api.json
        cat api.raml | ramlflat flatten - --parameter-scope branch
    """
    parser = load_parser(source, parameter_scope, name_parameter_segments, absolute)
    data = run_or_exit(parser.to_dict)
    debug(f"Simplified {len(data['resources'])} top-level resource(s)")
    format_response(data)
