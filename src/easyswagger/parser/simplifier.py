"""Reduce a method record to a fill-in-the-blanks template for copying.

:func:`simplify_method_info_for_copy` replaces a request body with a flat
mapping of property name to a placeholder value picked from the property's
declared type. Only the first media type of the body and only its top-level
properties are considered; nested objects collapse to ``{}`` and arrays to
``[]``. The result is meant to be pasted into a chat with an AI assistant,
not to be a faithful example generator.
"""

from __future__ import annotations

from typing import Any, Optional

from easyswagger.models import MethodInfo

_PLACEHOLDERS: dict[str, Any] = {
    "integer": 0,
    "number": 0,
    "boolean": False,
}


def simplify_method_info_for_copy(method: MethodInfo) -> MethodInfo:
    """Return a copy of *method* with its request body simplified.

    ``tags``, ``parameters``, and ``responses`` are carried over unchanged.
    When the request body has no ``content``, or its first media type has no
    ``schema.properties``, the request body is carried over unchanged too.
    *method* itself is never modified.

    Args:
        method: A record produced by
            :func:`~easyswagger.parser.extractor.extract_endpoint_info`.

    Returns:
        A new :class:`~easyswagger.models.MethodInfo`.

    Example::

        simplified = simplify_method_info_for_copy(info.methods["POST"])
        simplified.request_body
        # {"name": "string", "age": 0, "active": False, "tags": []}
    """
    template = _request_body_template(method.request_body)
    if template is None:
        return method.model_copy()
    return method.model_copy(update={"request_body": template})


def placeholder_for(schema: Any) -> Any:
    """Return the placeholder value for one property schema.

    ``integer`` and ``number`` map to ``0``, ``boolean`` to ``False``,
    ``array`` to ``[]``, ``object`` to ``{}``, and anything else (including
    a missing type) to the string ``"string"``. An OpenAPI 3.1 type list
    such as ``["integer", "null"]`` uses its first non-null entry.
    """
    type_value = schema.get("type") if isinstance(schema, dict) else None
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None

    if type_value == "array":
        return []
    if type_value == "object":
        return {}
    return _PLACEHOLDERS.get(type_value, "string") if isinstance(type_value, str) else "string"


def _request_body_template(request_body: Any) -> Optional[dict[str, Any]]:
    """Build the flat placeholder mapping, or ``None`` when there is nothing to simplify."""
    if not isinstance(request_body, dict):
        return None
    content = request_body.get("content")
    if not content or not isinstance(content, dict):
        return None

    first_media_type = next(iter(content.values()))
    schema = first_media_type.get("schema") if isinstance(first_media_type, dict) else None
    properties = schema.get("properties") if isinstance(schema, dict) else None
    if not isinstance(properties, dict):
        return None

    return {name: placeholder_for(prop) for name, prop in properties.items()}
