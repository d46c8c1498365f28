"""Canonical Pydantic models shared across all easyswagger modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config and data
directories:
    :class:`FetchConfig`, :class:`OutputConfig`, :class:`CacheConfig`,
    :class:`GlobalConfig`, and :class:`SessionState`.

**Extractor output models** -- produced by
:mod:`easyswagger.parser.extractor` and consumed by the explorer and the CLI:
    :class:`MethodInfo`, :class:`EndpointInfo`, and :class:`EndpointGroup`.

Schemas, parameters, and responses inside the extractor models stay plain
JSON-like values (:data:`JSONValue`): an OpenAPI document is an open tree and
unknown keys must pass through untouched.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

JSONValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
"""A parsed JSON/YAML value: null, boolean, number, string, array, or object."""


# --- Configuration ---


class FetchConfig(BaseModel):
    """HTTP settings used when a document is fetched from a URL."""

    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every fetch"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class CacheConfig(BaseModel):
    """Fetched-document cache settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Cache fetched documents")
    ttl_seconds: int = Field(default=300, description="Cache TTL in seconds")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/easyswagger/config.json``.

    Loaded and saved by :func:`~easyswagger.config.load_global_config` and
    :func:`~easyswagger.config.save_global_config`.
    """

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)


class SessionState(BaseModel):
    """State remembered between invocations (``state.json`` in the data dir).

    ``last_source`` is the URL or file path of the most recently loaded
    document; commands fall back to it when no ``--spec`` is given.
    """

    last_source: Optional[str] = None


# --- Extractor output ---


class MethodInfo(BaseModel):
    """One HTTP method of an endpoint, with references resolved.

    ``request_body`` is ``None`` when the source operation declares no
    request body; it serialises as ``requestBody`` and is omitted entirely
    when absent (see :meth:`to_dict`).
    """

    model_config = ConfigDict(populate_by_name=True)

    tags: list[str] = Field(default_factory=list)
    parameters: list[Any] = Field(default_factory=list)
    responses: dict[str, Any] = Field(default_factory=dict)
    request_body: Optional[Any] = Field(default=None, alias="requestBody")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, keyed like the OpenAPI operation."""
        exclude = {"request_body"} if self.request_body is None else None
        return self.model_dump(by_alias=True, exclude=exclude)


class EndpointInfo(BaseModel):
    """Normalized view of one path of the document.

    ``methods`` is keyed by the uppercased HTTP method (``"GET"``). When the
    path is missing from the document, ``methods`` is empty and ``error``
    describes the problem; callers must check ``error``.
    """

    path: str
    methods: dict[str, MethodInfo] = Field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the endpoint."""
        data: dict[str, Any] = {
            "endpoint": self.path,
            "methods": {name: m.to_dict() for name, m in self.methods.items()},
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class EndpointGroup(BaseModel):
    """A named group of endpoint paths, as listed by ``easyswagger paths``."""

    name: str
    paths: list[str] = Field(default_factory=list)
