"""``ramlflat config`` -- show, change and reset the user settings.

Keys use dot notation over :class:`~ramlflat.models.GlobalConfig`::

    ramlflat config set simplify.parameter_scope branch
    ramlflat config set simplify.name_parameter_segments true
    ramlflat config set output.format json
"""

from __future__ import annotations

from typing import Any

import typer

from ramlflat.exceptions import InvalidUsageError, RamlFlatError
from ramlflat.output import error, format_response, info, success

config_app = typer.Typer(no_args_is_help=True)


def _assign(data: dict[str, Any], key: str, value: str) -> Any:
    """Set the leaf *key* of *data* to *value*, coerced to the leaf's current type.

    Raises:
        InvalidUsageError: If *key* does not name an existing leaf setting.
    """
    *sections, leaf = key.split(".")
    target = data
    for section in sections:
        target = target.get(section)
        if not isinstance(target, dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
    if leaf not in target or isinstance(target[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")

    coerced: Any = value
    if isinstance(target[leaf], bool):
        coerced = value.strip().lower() in ("true", "1", "yes", "on")
    target[leaf] = coerced
    return coerced


@config_app.command("show")
def config_show() -> None:
    """Print the settings in effect here: user file, ``./ramlflat.json`` and environment."""
    from ramlflat.config import get_config_dir, resolve_config

    try:
        config = resolve_config()
    except RamlFlatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dot-separated key, e.g. 'simplify.parameter_scope'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one user setting. The result is validated before it is saved."""
    from ramlflat.config import load_global_config, save_global_config
    from ramlflat.models import GlobalConfig

    try:
        data = load_global_config().model_dump(mode="json")
        coerced = _assign(data, key, value)
    except RamlFlatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        updated = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Invalid value for {key}: {exc}")
        raise typer.Exit(code=InvalidUsageError.exit_code) from None

    save_global_config(updated)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default settings. Asks first unless ``--force`` is given."""
    from ramlflat.config import save_global_config
    from ramlflat.models import GlobalConfig

    force = bool(ctx.obj and ctx.obj.get("force"))
    if not force and not typer.confirm("Reset all settings to their defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Settings reset to defaults.")
