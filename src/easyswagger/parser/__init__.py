"""OpenAPI document parser -- load, resolve ``$ref`` pointers, extract endpoints.

This sub-package turns a raw OpenAPI/Swagger document (JSON or YAML, local
file, remote URL, or stdin) into per-endpoint records with every schema
reference resolved.

Typical usage::

    from easyswagger.parser import load_spec, validate_document, get_all_endpoints_info

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    validate_document(raw)
    endpoints = get_all_endpoints_info(raw)

Sub-modules:

* :mod:`~easyswagger.parser.loader` -- I/O layer (URL, file, stdin) with
  format and authentication-wall detection.
* :mod:`~easyswagger.parser.resolver` -- Recursive ``$ref`` resolution with
  sibling-key overlay and cycle detection.
* :mod:`~easyswagger.parser.extractor` -- Per-path, per-method
  :class:`~easyswagger.models.EndpointInfo` records.
* :mod:`~easyswagger.parser.simplifier` -- Placeholder templates for the
  copy action.
"""

from easyswagger.parser.extractor import (
    extract_all_endpoints,
    extract_endpoint_info,
    get_all_endpoints_info,
)
from easyswagger.parser.loader import load_spec, validate_document
from easyswagger.parser.resolver import resolve_references, resolve_schema_ref
from easyswagger.parser.simplifier import simplify_method_info_for_copy

__all__ = [
    "extract_all_endpoints",
    "extract_endpoint_info",
    "get_all_endpoints_info",
    "load_spec",
    "resolve_references",
    "resolve_schema_ref",
    "simplify_method_info_for_copy",
    "validate_document",
]
