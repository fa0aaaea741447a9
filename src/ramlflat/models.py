"""Canonical Pydantic models shared across all ramlflat modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ParameterScope`, :class:`SimplifyConfig`, :class:`OutputConfig`
    and :class:`GlobalConfig`.

**Document models** -- the parsed RAML tree consumed by the simplifier:
    :class:`HTTPMethod`, :class:`BodyEntry`, :class:`MethodDefinition`,
    :class:`ResourceNode` and :class:`ApiDocument`. The simplifier never
    mutates them.

**Simplified models** -- produced by the tree walker:
    :class:`MethodSummary` and :class:`SimplifiedNode`.

Document and simplified models use the camelCase keys of the RAML tree as
aliases (``relativeUri``, ``queryParameters``...) and accept either spelling
on input. :meth:`SimplifiedNode.to_dict` emits the aliased form.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Config ---


class ParameterScope(str, enum.Enum):
    """How URI parameters are accumulated during a walk.

    ``TRAVERSAL`` keeps a single accumulator per top-level resource, shared by
    every subtree below it. ``BRANCH`` gives each recursive call its own copy,
    so a node only sees parameters declared on its root-to-node path.
    """

    TRAVERSAL = "traversal"
    BRANCH = "branch"


class SimplifyConfig(BaseModel):
    """Settings that change how a document is simplified."""

    parameter_scope: ParameterScope = Field(
        default=ParameterScope.TRAVERSAL,
        description="URI parameter accumulation: traversal or branch",
    )
    name_parameter_segments: bool = Field(
        default=False,
        description="Name parameter-only segments after their variable "
        "instead of failing",
    )


class OutputConfig(BaseModel):
    """Default output format preferences."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/ramlflat/config.json``.

    See :func:`~ramlflat.config.resolve_config` for how it is layered with
    project config, environment variables and CLI flags.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)


# --- Document models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as method keys on a RAML resource."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"
    CONNECT = "connect"


class BodyEntry(BaseModel):
    """One media-type entry of a request body.

    ``schema`` is normally JSON (or XML) text; it is kept as-is and only
    decoded by the method summarizer.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_: Optional[Any] = Field(default=None, alias="schema")
    example: Optional[Any] = None

    @property
    def has_schema(self) -> bool:
        """Whether the entry declared a ``schema`` key at all."""
        return "schema_" in self.model_fields_set


class MethodDefinition(BaseModel):
    """A single HTTP method declared on a resource.

    ``is`` and ``body`` are loosely typed: an entry the summarizer cannot use
    is reported there as a warning instead of failing the whole document.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    method: str
    description: Optional[str] = None
    query_parameters: Optional[dict[str, Any]] = Field(
        default=None, alias="queryParameters"
    )
    is_: Optional[list[Any]] = Field(default=None, alias="is")
    body: Optional[Any] = None
    responses: Optional[dict[str, Any]] = None

    @field_validator("is_", mode="before")
    @classmethod
    def _wrap_single_trait(cls, value: Any) -> Any:
        # ``is: secured`` is shorthand for a one-element list.
        if value is not None and not isinstance(value, list):
            return [value]
        return value

    @field_validator("body", mode="before")
    @classmethod
    def _parse_body_entries(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            media_type: BodyEntry.model_validate(entry) if isinstance(entry, dict) else entry
            for media_type, entry in value.items()
        }

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        # YAML reads unquoted status codes as integers.
        if isinstance(value, dict):
            return {str(status): spec for status, spec in value.items()}
        return value


class ResourceNode(BaseModel):
    """One entry of the RAML resource tree.

    Keys the walker does not read (``displayName``, ``relativeUriPathSegments``,
    ``securedBy``...) are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    relative_uri: str = Field(alias="relativeUri")
    description: Optional[str] = None
    uri_parameters: Optional[dict[str, Any]] = Field(
        default=None, alias="uriParameters"
    )
    methods: list[MethodDefinition] = Field(default_factory=list)
    resources: list[ResourceNode] = Field(default_factory=list)


class ApiDocument(BaseModel):
    """Root of a parsed RAML document.

    ``traits`` and ``schemas`` are kept as the ordered lists of single-key
    mappings a RAML parser produces. Trait entries are not validated here;
    :func:`~ramlflat.simplifier.traits.build_trait_dictionary` checks their
    shape when it flattens them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    version: Optional[str] = None
    base_uri: Optional[str] = Field(default=None, alias="baseUri")
    resources: list[ResourceNode] = Field(default_factory=list)
    traits: list[Any] = Field(default_factory=list)
    schemas: list[Any] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # ``version: 1`` in YAML is an integer.
        if value is not None and not isinstance(value, str):
            return str(value)
        return value


# --- Simplified models ---


class MethodSummary(BaseModel):
    """The simplified view of one method on one resource.

    ``schema`` is only set for a POST with an ``application/json`` body.
    """

    model_config = ConfigDict(populate_by_name=True)

    method: str
    query_parameters: Optional[dict[str, Any]] = Field(
        default=None, alias="queryParameters"
    )
    description: Optional[str] = None
    schema_: Optional[Any] = Field(default=None, alias="schema")
    traits: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out optional fields that are unset."""
        data: dict[str, Any] = {"method": self.method}
        if self.query_parameters is not None:
            data["queryParameters"] = self.query_parameters
        if self.description is not None:
            data["description"] = self.description
        if "schema_" in self.model_fields_set:
            data["schema"] = self.schema_
        data["traits"] = list(self.traits)
        return data


class SimplifiedNode(BaseModel):
    """The simplified view of one resource and, recursively, its children."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    relative_uri: str = Field(alias="relativeUri")
    complete_uri: str = Field(alias="completeUri")
    uri_parameters: dict[str, Any] = Field(
        default_factory=dict, alias="uriParameters"
    )
    methods: list[MethodSummary] = Field(default_factory=list)
    responses: dict[str, Any] = Field(default_factory=dict)
    children: list[SimplifiedNode] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form with camelCase keys, children included."""
        return {
            "name": self.name,
            "relativeUri": self.relative_uri,
            "completeUri": self.complete_uri,
            "uriParameters": dict(self.uri_parameters),
            "methods": [method.to_dict() for method in self.methods],
            "responses": dict(self.responses),
            "children": [child.to_dict() for child in self.children],
        }
