"""Shared test fixtures for ramlflat.

Provides sample documents, isolated config environments, output state
management and a CLI runner. Fixtures are discovered by pytest and are
available to every test module without imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from ramlflat.document import RamlParser
from ramlflat.models import ApiDocument
from ramlflat.output import OutputLogHandler, reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and drop CLI log handlers after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time, which
    CliRunner swaps out per invocation, and the CLI callback attaches an
    OutputLogHandler to the ``ramlflat`` logger.
    """
    yield
    reset_output()
    package_logger = logging.getLogger("ramlflat")
    for handler in list(package_logger.handlers):
        if isinstance(handler, OutputLogHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def library_raml_path() -> Path:
    """Path to the raw RAML 0.8 library document (uses ``!include``)."""
    return FIXTURES_DIR / "library.raml"


@pytest.fixture
def parsed_tree_raw() -> dict[str, Any]:
    """An already-parsed resource tree, as a RAML parser would emit it."""
    with open(FIXTURES_DIR / "parsed_tree.json") as f:
        return json.load(f)


@pytest.fixture
def parsed_tree(parsed_tree_raw: dict[str, Any]) -> ApiDocument:
    return ApiDocument.model_validate(parsed_tree_raw)


@pytest.fixture
def library_parser(library_raml_path: Path) -> RamlParser:
    """RamlParser loaded from the library RAML fixture."""
    return RamlParser.from_source(str(library_raml_path))


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/data directories at tmp_path and chdir there.

    Also clears the RAMLFLAT_* environment variables so that a developer's
    own settings never leak into tests.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("ramlflat.config._is_xdg_platform", lambda: True)

    for var in ["RAMLFLAT_PARAMETER_SCOPE", "RAMLFLAT_NAME_PARAMETER_SEGMENTS"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
