"""Load RAML documents from a URL, local file, or stdin.

This module handles all I/O for fetching a source document and turning it
into a Python dictionary. It accepts RAML (YAML with a ``#%RAML`` header)
as well as JSON, which is how an already-parsed resource tree is usually
saved.

RAML documents frequently pull schemas and examples in with ``!include``.
Includes are resolved relative to the including file: RAML/YAML fragments
are parsed, anything else (JSON schemas, examples) is inlined as text.

Loading is a blocking call with a single outcome: it either returns the
document or raises :class:`~ramlflat.exceptions.DocumentLoadError`. There
are no retries.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from ramlflat.exceptions import DocumentLoadError

SUPPORTED_RAML_VERSIONS = ("0.8", "1.0")

_YAML_SUFFIXES = (".raml", ".yaml", ".yml")
_RAML_HEADER = "#%RAML"


def load_document(source: str) -> dict[str, Any]:
    """Load a document from URL, file path, or stdin (``'-'``).

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        DocumentLoadError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError("No input received from stdin")

    return parse_content(content, base_dir=Path.cwd())


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S).

    Includes in a fetched document are resolved against the current
    directory, since there is no local file to anchor them to.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "raml" in content_type:
        hint = "yaml"
    elif url.lower().endswith(_YAML_SUFFIXES):
        hint = "yaml"

    return parse_content(response.text, hint=hint, base_dir=Path.cwd())


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise DocumentLoadError(f"Document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in _YAML_SUFFIXES:
        hint = "yaml"

    return parse_content(content, hint=hint, base_dir=file_path.parent)


def parse_content(content: str, hint: str = "", base_dir: Path | None = None) -> dict[str, Any]:
    """Parse *content* as JSON or RAML/YAML.

    JSON is tried first unless the hint says YAML or the content starts with
    a ``#%RAML`` header; YAML is the fallback.

    Args:
        content: The raw document text.
        hint: Optional format hint (``'json'`` or ``'yaml'``).
        base_dir: Directory ``!include`` paths are relative to. Defaults to
            the current directory.

    Returns:
        The parsed dictionary.

    Raises:
        DocumentLoadError: If the content cannot be parsed as either format,
            declares an unsupported RAML version, or is not a mapping.
    """
    base_dir = base_dir or Path.cwd()
    json_error: Exception | None = None

    if content.lstrip().startswith(_RAML_HEADER):
        check_raml_header(content)
        hint = "yaml"

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.load(content, Loader=_include_loader(base_dir))  # noqa: S506
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc

    return _require_mapping(result)


def check_raml_header(content: str) -> str:
    """Return the RAML version declared on the first line of *content*.

    Raises:
        DocumentLoadError: If the header names an unsupported version.
    """
    first_line = content.lstrip().splitlines()[0]
    parts = first_line[len(_RAML_HEADER):].split()
    version = parts[0] if parts else ""
    if version not in SUPPORTED_RAML_VERSIONS:
        raise DocumentLoadError(
            f"Unsupported RAML version: '{version or first_line}'. "
            f"Supported versions: {', '.join(SUPPORTED_RAML_VERSIONS)}"
        )
    return version


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Document must be a mapping (got {kind})")
    return result


def _include_loader(base_dir: Path) -> type[yaml.SafeLoader]:
    """Build a SafeLoader subclass that resolves ``!include`` against *base_dir*."""

    class _IncludeLoader(yaml.SafeLoader):
        pass

    def _include(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
        target = base_dir / loader.construct_scalar(node)
        try:
            text = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentLoadError(f"Cannot read included file {target}: {exc}") from exc

        if target.suffix.lower() not in _YAML_SUFFIXES:
            return text
        try:
            return yaml.load(text, Loader=_include_loader(target.parent))  # noqa: S506
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Invalid YAML in included file {target}: {exc}") from exc

    _IncludeLoader.add_constructor("!include", _include)
    return _IncludeLoader
