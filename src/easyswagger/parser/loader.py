"""Load OpenAPI/Swagger documents from a URL, local file, or stdin.

This module handles all I/O for obtaining a raw document and converting it
into a Python dictionary. JSON and YAML are both accepted, with format
detection from the file extension, the response content type, or the
content itself.

Fetching a URL can land on a sign-in page instead of a document, most
commonly Cloudflare Access in front of internal API docs. Such responses
raise :class:`~easyswagger.exceptions.AuthWallError` carrying the page, so
the CLI can send the user to their browser and retry with a session cookie.
Any other HTML page raises :class:`~easyswagger.exceptions.SpecParseError`.

The public functions are:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`validate_document` -- Reject values that are not OpenAPI/Swagger
  documents and return the version marker.
"""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlparse

import httpx
import yaml

from easyswagger.exceptions import AuthWallError, ConnectionError_, SpecParseError
from easyswagger.models import FetchConfig

if TYPE_CHECKING:
    from easyswagger.cache import SpecCache

# Hosts that only ever serve sign-in pages
_AUTH_HOST_SUFFIXES = (".cloudflareaccess.com",)

# Cloudflare Access hosts and cookie names in an HTML body
_AUTH_MARKERS = (
    "cloudflareaccess.com",
    "cf_authorization",
    "cf-access",
    "cloudflare access",
)

_PASSWORD_FORM = re.compile(
    r"<form\b.*?<input\b[^>]*\btype\s*=\s*['\"]?password\b", re.IGNORECASE | re.DOTALL
)

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_HTML_START = re.compile(r"^\s*(<!doctype html|<html|<head|<body)", re.IGNORECASE)


def load_spec(
    source: str,
    fetch_config: Optional[FetchConfig] = None,
    cache: Optional["SpecCache"] = None,
    cookies: Optional[dict[str, str]] = None,
    refresh: bool = False,
) -> dict[str, Any]:
    """Load a document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        fetch_config: HTTP settings for URL sources. Defaults apply when
            ``None``.
        cache: Optional cache of fetched documents, consulted for URLs only.
        cookies: Extra cookies sent with URL fetches, typically a session
            cookie obtained after passing an authentication wall.
        refresh: Ignore a cached copy and fetch again.

    Returns:
        The parsed document as a dictionary.

    Raises:
        AuthWallError: If the URL answers with a sign-in page.
        ConnectionError_: If the URL cannot be reached.
        SpecParseError: If the source cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if not source.startswith(("http://", "https://")):
        return _load_from_file(source)
    return _load_from_url(
        source,
        fetch_config or FetchConfig(),
        cache=cache,
        cookies=cookies,
        refresh=refresh,
    )


def validate_document(value: Any) -> str:
    """Check that *value* looks like an OpenAPI/Swagger document.

    Only the top-level shape is checked: a mapping with ``paths``, an
    ``openapi`` marker, or a ``swagger`` marker. The document is not
    validated against the OpenAPI schema.

    Args:
        value: The parsed document.

    Returns:
        The ``openapi`` or ``swagger`` version string, or ``"unknown"``
        when the document only has ``paths``.

    Raises:
        SpecParseError: If *value* is not a recognisable document.
    """
    if not isinstance(value, dict) or not (
        "paths" in value or "openapi" in value or "swagger" in value
    ):
        raise SpecParseError("Invalid OpenAPI specification format")

    version = value.get("openapi") or value.get("swagger")
    return str(version) if version else "unknown"


def _load_from_stdin() -> dict[str, Any]:
    try:
        text = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Could not read stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input on stdin; pipe a JSON or YAML document in")
    return _parse_content(text)


def _load_from_url(
    url: str,
    fetch_config: FetchConfig,
    cache: Optional["SpecCache"] = None,
    cookies: Optional[dict[str, str]] = None,
    refresh: bool = False,
) -> dict[str, Any]:
    """Fetch a document from a URL.

    Cached text is used when available and *refresh* is not set. Only
    successfully parsed documents are written to the cache.

    Raises:
        AuthWallError: On 401/403, a redirect to a sign-in host, or an
            HTML sign-in page.
        ConnectionError_: On timeouts and other transport failures.
        SpecParseError: On other HTTP errors, HTML pages, or unparseable
            content.
    """
    if cache is not None and not refresh:
        cached = cache.get(url)
        if cached is not None:
            return _parse_content(cached["text"], hint=cached.get("hint", ""))

    headers = {
        "Accept": "application/json, application/yaml;q=0.9, */*;q=0.5",
        **fetch_config.headers,
    }
    try:
        response = httpx.get(
            url,
            headers=headers,
            cookies=cookies,
            timeout=fetch_config.timeout,
            verify=fetch_config.verify_ssl,
            follow_redirects=True,
        )
    except httpx.TimeoutException as exc:
        raise ConnectionError_(
            f"Timed out after {fetch_config.timeout}s fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch spec from {url}: {exc}") from exc

    content = response.text
    content_type = response.headers.get("content-type", "")
    final_host = urlparse(str(response.url)).hostname or ""

    if response.status_code in (401, 403) or final_host.endswith(_AUTH_HOST_SUFFIXES):
        raise AuthWallError(url, content if _looks_like_html(content, content_type) else "")

    if response.is_error:
        raise SpecParseError(
            f"Failed to fetch OpenAPI specification: HTTP {response.status_code} "
            f"{response.reason_phrase} from {url}"
        )

    if _looks_like_html(content, content_type):
        if _looks_like_auth_page(content):
            raise AuthWallError(url, content)
        raise SpecParseError(
            f"{url} returned an HTML page, not an OpenAPI document"
        )

    hint = _media_hint(content_type)

    result = _parse_content(content, hint=hint)
    if cache is not None:
        cache.set(url, {"text": content, "hint": hint})
    return result


def _load_from_file(path: str) -> dict[str, Any]:
    """Read a local document; the suffix decides JSON-only or YAML-first."""
    file_path = Path(path).expanduser()
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SpecParseError(f"Document not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Could not read {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"Document is empty: {path}")
    return _parse_content(text, hint=_SUFFIX_HINTS.get(file_path.suffix.lower(), ""))


def _as_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    kind = "an empty document" if value is None else type(value).__name__
    raise SpecParseError(f"Document must be a JSON/YAML object, got {kind}")


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* as JSON, then YAML.

    ``hint="json"`` makes a JSON syntax error final; ``hint="yaml"`` skips
    the JSON attempt.
    """
    problems: list[str] = []
    if hint != "yaml":
        try:
            return _as_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            problems.append(f"as JSON: {exc}")
    try:
        return _as_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        problems.append(f"as YAML: {exc}")
    raise SpecParseError("Could not parse document\n  " + "\n  ".join(problems))


def _media_hint(content_type: str) -> str:
    media_type = content_type.split(";")[0].strip().lower()
    if media_type.endswith("json"):
        return "json"
    if "yaml" in media_type or "yml" in media_type:
        return "yaml"
    return ""


def _looks_like_html(content: str, content_type: str) -> bool:
    """Return True when the response is an HTML page rather than a document."""
    return "text/html" in content_type.lower() or bool(_HTML_START.match(content))


def _looks_like_auth_page(html: str) -> bool:
    """A Cloudflare Access page, or any page with a password field in a form."""
    lowered = html.lower()
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return True
    return bool(_PASSWORD_FORM.search(html))
