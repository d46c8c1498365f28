"""Extract normalized per-method endpoint records from OpenAPI documents.

For a single path, :func:`extract_endpoint_info` builds an
:class:`~easyswagger.models.EndpointInfo` whose ``methods`` map is keyed by
the uppercased HTTP method. Each :class:`~easyswagger.models.MethodInfo`
carries:

* ``tags`` -- the operation's tags, or an empty list.
* ``parameters`` -- copied from the operation. A parameter whose ``schema``
  is a ``$ref`` gets the fully resolved target schema in its place, with
  the ``$ref`` key removed.
* ``responses`` -- copied as-is, without deep resolution.
* ``request_body`` -- present only when the operation has one, resolved
  with :func:`~easyswagger.parser.resolver.resolve_references`.

:func:`get_all_endpoints_info` applies the same extraction to every path of
the document, in document order.

Every key of a path item whose value is a mapping is treated as a method.
Path-level ``parameters`` (a list) and ``summary`` (a string) are skipped
by that rule.
"""

from __future__ import annotations

import copy
from typing import Any

from easyswagger.exceptions import CyclicReferenceError
from easyswagger.models import EndpointInfo, MethodInfo
from easyswagger.parser.resolver import resolve_references, resolve_schema_ref


def extract_all_endpoints(document: dict[str, Any]) -> list[str]:
    """Return the path keys of the document in document order.

    Args:
        document: A parsed OpenAPI/Swagger document.

    Returns:
        The list of paths, or an empty list when ``paths`` is absent.
    """
    paths = document.get("paths")
    if not isinstance(paths, dict):
        return []
    return list(paths.keys())


def extract_endpoint_info(document: dict[str, Any], path: str) -> EndpointInfo:
    """Build the normalized record for one path of the document.

    A path that is not in the document is not an exception: the returned
    record has no methods and a populated ``error``.

    Args:
        document: A parsed OpenAPI/Swagger document. It is not modified.
        path: The path key to extract (e.g. ``"/pets/{petId}"``).

    Returns:
        The :class:`~easyswagger.models.EndpointInfo` for *path*.

    Raises:
        CyclicReferenceError: If resolving a request body or parameter
            schema runs into a reference cycle.

    Example::

        info = extract_endpoint_info(doc, "/pets")
        if info.error:
            print(info.error)
        for method, record in info.methods.items():
            print(method, record.tags)
    """
    paths = document.get("paths")
    if not isinstance(paths, dict) or paths.get(path) is None:
        return EndpointInfo(
            path=path,
            error=f"Endpoint {path} not found in the OpenAPI specification",
        )

    path_item = paths[path]
    methods: dict[str, MethodInfo] = {}
    if isinstance(path_item, dict):
        for method, operation in path_item.items():
            if not isinstance(operation, dict):
                continue
            methods[str(method).upper()] = _extract_method(document, operation)

    return EndpointInfo(path=path, methods=methods)


def get_all_endpoints_info(document: dict[str, Any]) -> dict[str, EndpointInfo]:
    """Extract every path of the document.

    A path whose schemas form a reference cycle does not abort the whole
    extraction: it is recorded with no methods and the cycle as its
    ``error``.

    Args:
        document: A parsed OpenAPI/Swagger document.

    Returns:
        A dict mapping each path to its :class:`~easyswagger.models.EndpointInfo`,
        in document order. Empty when the document has no paths.
    """
    result: dict[str, EndpointInfo] = {}
    for path in extract_all_endpoints(document):
        try:
            result[path] = extract_endpoint_info(document, path)
        except CyclicReferenceError as exc:
            result[path] = EndpointInfo(path=path, error=str(exc))
    return result


def _extract_method(document: dict[str, Any], operation: dict[str, Any]) -> MethodInfo:
    """Normalize a single operation object."""
    tags = operation.get("tags") or []
    responses = operation.get("responses") or {}
    request_body = operation.get("requestBody")
    parameters = operation.get("parameters") or []

    return MethodInfo(
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        parameters=(
            [_extract_parameter(document, param) for param in parameters]
            if isinstance(parameters, list)
            else []
        ),
        # YAML turns bare status codes into ints
        responses=(
            {str(status): copy.deepcopy(resp) for status, resp in responses.items()}
            if isinstance(responses, dict)
            else {}
        ),
        request_body=(
            resolve_references(document, request_body) if request_body else None
        ),
    )


def _extract_parameter(document: dict[str, Any], param: Any) -> Any:
    """Copy a parameter, resolving its schema when the schema is a ``$ref``.

    The resolved target replaces the whole schema and the ``$ref`` key is
    dropped from it, whatever the target contained. Parameters without a
    schema reference are copied unchanged.
    """
    param_info = copy.deepcopy(param)
    if not isinstance(param_info, dict):
        return param_info

    schema = param_info.get("schema")
    if isinstance(schema, dict) and schema.get("$ref"):
        target = resolve_schema_ref(document, schema["$ref"])
        resolved = resolve_references(document, target)
        if not isinstance(resolved, dict):
            resolved = {}
        resolved.pop("$ref", None)
        param_info["schema"] = resolved

    return param_info
