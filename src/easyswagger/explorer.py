"""Search, grouping, and copy payloads over an extracted endpoint map.

These helpers sit between :func:`~easyswagger.parser.extractor.get_all_endpoints_info`
and the CLI: they decide which endpoints a listing shows, how they are
grouped, and what text the ``copy`` command emits.
"""

from __future__ import annotations

import json

from easyswagger.models import EndpointGroup, EndpointInfo
from easyswagger.parser.simplifier import simplify_method_info_for_copy


def filter_endpoints(
    endpoints: dict[str, EndpointInfo], term: str | None
) -> dict[str, EndpointInfo]:
    """Keep the endpoints whose path contains *term*, ignoring case.

    An empty or ``None`` term keeps everything. Order is preserved.
    """
    if not term:
        return dict(endpoints)
    needle = term.lower()
    return {path: info for path, info in endpoints.items() if needle in path.lower()}


def group_name(path: str, info: EndpointInfo) -> str:
    """Return the group an endpoint belongs to.

    The first tag of the endpoint's first method wins. Untagged endpoints
    are grouped by their first path segment (``/v1/users`` -> ``/v1``), or
    ``/`` when the path has none.
    """
    first_method = next(iter(info.methods.values()), None)
    if first_method is not None and first_method.tags:
        return first_method.tags[0]

    segments = path.split("/")
    if len(segments) > 1 and segments[1]:
        return "/" + segments[1]
    return "/"


def group_endpoints(endpoints: dict[str, EndpointInfo]) -> list[EndpointGroup]:
    """Group endpoints by tag or leading path segment, sorted by group name.

    Within a group, paths keep their document order.
    """
    groups: dict[str, EndpointGroup] = {}
    for path, info in endpoints.items():
        name = group_name(path, info)
        groups.setdefault(name, EndpointGroup(name=name)).paths.append(path)
    return sorted(groups.values(), key=lambda g: g.name.lower())


def copy_endpoint_json(info: EndpointInfo) -> str:
    """Return the copy payload for an endpoint as indented JSON text.

    Every method is passed through
    :func:`~easyswagger.parser.simplifier.simplify_method_info_for_copy`
    and the result is laid out as
    ``{"endpoint": <path>, "methods": {<METHOD>: ...}}``.
    """
    payload = {
        "endpoint": info.path,
        "methods": {
            name: simplify_method_info_for_copy(method).to_dict()
            for name, method in info.methods.items()
        },
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
