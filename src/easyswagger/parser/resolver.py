"""Resolve ``$ref`` schema references in OpenAPI documents.

OpenAPI documents use ``{"$ref": "#/components/schemas/Pet"}`` pointers to
share schema definitions. :func:`resolve_references` walks an arbitrary
JSON-like value and replaces each such pointer with the structure it names,
returning new containers and never touching its inputs.

Resolution rules, in the order they are checked for a mapping:

1. A mapping with a string ``$ref`` is replaced by the (recursively
   resolved) target schema, with every sibling key of the reference
   (themselves resolved) overlaid on top. Siblings win on conflict, so a
   local ``description`` next to a ``$ref`` survives.
2. A mapping with a ``content`` mapping (request bodies, single responses)
   has the ``schema`` of every media-type entry resolved. Nothing else in
   the container is walked.
3. A mapping with a ``responses`` mapping has each response entry resolved
   as a whole.
4. Any other mapping has each of its values resolved.

Only ``#/components/schemas/<Name>`` references are understood. Anything
else, or a name missing from the registry, resolves to an empty mapping:
a broken reference degrades to "no additional fields" rather than aborting.

Reference cycles are detected. The names being resolved on the current
call stack are tracked, and re-entering one raises
:class:`~easyswagger.exceptions.CyclicReferenceError`.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from easyswagger.exceptions import CyclicReferenceError
from easyswagger.models import JSONValue

SCHEMA_REF_PREFIX = "#/components/schemas/"


def resolve_schema_ref(document: dict[str, Any], ref: str) -> JSONValue:
    """Look up the schema a ``$ref`` string points to.

    The schema name is the final segment of the reference. No recursive
    resolution happens here.

    Args:
        document: The root OpenAPI document.
        ref: A reference string such as ``"#/components/schemas/Pet"``.

    Returns:
        The registered schema, or an empty dict when *ref* does not point
        into ``components.schemas`` or names a schema that does not exist.
    """
    if not isinstance(ref, str) or not ref.startswith(SCHEMA_REF_PREFIX):
        return {}

    name = ref.split("/")[-1]
    components = document.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if not isinstance(schemas, dict):
        return {}
    target = schemas.get(name)
    return target if target else {}


def resolve_references(document: dict[str, Any], value: JSONValue) -> JSONValue:
    """Return *value* with every schema reference replaced by its target.

    Neither *document* nor *value* is modified, and the result shares no
    containers with either of them. Resolving an already resolved value
    returns an equal value.

    Args:
        document: The root OpenAPI document (source of ``components.schemas``).
        value: Any JSON-like value taken from the document.

    Returns:
        The resolved value.

    Raises:
        CyclicReferenceError: If schema references form a cycle.

    Example::

        resolve_references(doc, {"$ref": "#/components/schemas/Widget", "description": "x"})
        # {"type": "object", "properties": {...}, "description": "x"}
    """
    return copy.deepcopy(_resolve(document, value, ()))


def _resolve(
    document: dict[str, Any],
    value: JSONValue,
    in_progress: tuple[str, ...],
) -> JSONValue:
    """Recursive worker for :func:`resolve_references`.

    *in_progress* holds the schema names being resolved further up the
    stack, in order. It is passed down by value so sibling branches never
    see each other's names.
    """
    if isinstance(value, list):
        return [_resolve(document, item, in_progress) for item in value]

    if not isinstance(value, dict):
        return value

    ref = value.get("$ref")
    if ref and isinstance(ref, str):
        return _resolve_ref_object(document, value, ref, in_progress)

    content = value.get("content")
    if content and isinstance(content, dict):
        result = dict(value)
        result["content"] = {
            media_type: _resolve_media_type(document, entry, in_progress)
            for media_type, entry in content.items()
        }
        return result

    responses = value.get("responses")
    if responses and isinstance(responses, dict):
        result = dict(value)
        result["responses"] = {
            status: (
                _resolve(document, response, in_progress)
                if isinstance(response, dict)
                else response
            )
            for status, response in responses.items()
        }
        return result

    return {key: _resolve(document, item, in_progress) for key, item in value.items()}


def _resolve_ref_object(
    document: dict[str, Any],
    value: dict[str, Any],
    ref: str,
    in_progress: tuple[str, ...],
) -> dict[str, Any]:
    """Resolve a mapping carrying ``$ref`` and overlay its sibling keys."""
    name = _schema_name(ref)
    chain = in_progress
    if name is not None:
        if name in in_progress:
            raise CyclicReferenceError([*in_progress, name])
        chain = (*in_progress, name)

    target = _resolve(document, resolve_schema_ref(document, ref), chain)

    result: dict[str, Any] = dict(target) if isinstance(target, dict) else {}
    for key, item in value.items():
        if key != "$ref":
            result[key] = _resolve(document, item, in_progress)
    return result


def _resolve_media_type(
    document: dict[str, Any],
    entry: Any,
    in_progress: tuple[str, ...],
) -> Any:
    """Resolve the ``schema`` of one media-type entry, copying the entry."""
    if not isinstance(entry, dict) or not entry.get("schema"):
        return entry
    resolved = dict(entry)
    resolved["schema"] = _resolve(document, entry["schema"], in_progress)
    return resolved


def _schema_name(ref: str) -> Optional[str]:
    """Return the registry name a reference points to, or ``None`` for foreign refs."""
    if not ref.startswith(SCHEMA_REF_PREFIX):
        return None
    return ref.split("/")[-1]
