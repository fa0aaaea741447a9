"""Settings for how ramlflat simplifies documents and prints results.

Settings come from four layers, highest first:

1. command-line flags (``--parameter-scope``, ``--name-parameter-segments``);
2. ``RAMLFLAT_PARAMETER_SCOPE`` and ``RAMLFLAT_NAME_PARAMETER_SEGMENTS``;
3. ``./ramlflat.json`` in the working directory, any subset of the keys;
4. the user file, ``$XDG_CONFIG_HOME/ramlflat/config.json`` on Linux/BSD
   and ``~/.ramlflat/config.json`` elsewhere.

:func:`resolve_config` merges them into one
:class:`~ramlflat.models.GlobalConfig`. Only the user file is ever written,
and always atomically.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ramlflat.exceptions import ConfigError
from ramlflat.models import GlobalConfig, ParameterScope

_APP_NAME = "ramlflat"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "ramlflat.json"

ENV_PARAMETER_SCOPE = "RAMLFLAT_PARAMETER_SCOPE"
ENV_NAME_PARAMETER_SEGMENTS = "RAMLFLAT_NAME_PARAMETER_SEGMENTS"

_BOOLEAN_WORDS = {
    "1": True, "true": True, "yes": True, "on": True,
    "0": False, "false": False, "no": False, "off": False, "": False,
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    """Linux and the BSDs follow the XDG Base Directory layout."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: str, fallback: str = "") -> Path:
    if _is_xdg_platform():
        root = Path(os.environ.get(xdg_var) or Path.home() / xdg_default)
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory of the user config file; created on first use."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Directory for crash logs; created on first use."""
    return _app_dir("XDG_DATA_HOME", ".local/share", fallback="logs")


# --- Files ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a half-written file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            os.unlink(tmp.name)
            raise
    os.replace(tmp.name, path)


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """The user config, or defaults when the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, text)


def load_project_config() -> Optional[dict[str, Any]]:
    """The raw ``./ramlflat.json`` mapping, or ``None`` if there is none.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Resolution ---


def _overlay(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursive dict update that returns a new mapping."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            value = _overlay(merged[key], value)
        merged[key] = value
    return merged


def _parse_bool(name: str, value: str) -> bool:
    try:
        return _BOOLEAN_WORDS[value.strip().lower()]
    except KeyError:
        raise ConfigError(f"Expected a boolean for {name}, got: {value}") from None


def _parse_scope(name: str, value: str) -> ParameterScope:
    try:
        return ParameterScope(value.strip().lower())
    except ValueError:
        choices = ", ".join(scope.value for scope in ParameterScope)
        raise ConfigError(f"Invalid {name} '{value}'. Choose one of: {choices}") from None


def resolve_config(
    cli_parameter_scope: Optional[str] = None,
    cli_name_parameter_segments: Optional[bool] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Merge every configuration layer into the settings for this run.

    ``None`` arguments mean the flag was not given.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    config = load_global_config()

    project = load_project_config()
    if project:
        try:
            config = GlobalConfig.model_validate(
                _overlay(config.model_dump(mode="json"), project)
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid project config: {exc}") from exc

    simplify = config.simplify
    scope = os.environ.get(ENV_PARAMETER_SCOPE)
    if scope:
        simplify.parameter_scope = _parse_scope(ENV_PARAMETER_SCOPE, scope)
    naming = os.environ.get(ENV_NAME_PARAMETER_SEGMENTS)
    if naming is not None:
        simplify.name_parameter_segments = _parse_bool(ENV_NAME_PARAMETER_SEGMENTS, naming)

    if cli_parameter_scope is not None:
        simplify.parameter_scope = _parse_scope("--parameter-scope", cli_parameter_scope)
    if cli_name_parameter_segments is not None:
        simplify.name_parameter_segments = cli_name_parameter_segments
    if cli_format is not None:
        config.output.format = cli_format

    return config
