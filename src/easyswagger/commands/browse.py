"""Browse commands -- list endpoints, show one, copy one as simplified JSON.

All three commands share :func:`load_document`, which resolves the document
source (``--spec``, ``EASYSWAGGER_SPEC``, or the last used source), loads
and validates the document, and remembers the source for next time.

When a URL turns out to be behind a sign-in page (Cloudflare Access and
similar), an interactive session opens the URL in the browser, asks for
the resulting session cookie, and retries once. Non-interactive sessions
fail with exit code 3 and a hint to pass ``--cookie``.
"""

from __future__ import annotations

import difflib
import sys
import webbrowser
from typing import Any, Optional

import typer

from easyswagger.exceptions import AuthWallError, EasySwaggerError, EndpointNotFoundError
from easyswagger.output import (
    debug,
    error,
    get_output,
    info,
    print_data,
    print_json,
    success,
    suggest,
    warning,
)

_DEFAULT_COOKIE_NAME = "CF_Authorization"


def load_document(
    source: Optional[str],
    cookies: Optional[list[str]] = None,
    refresh: bool = False,
    interactive: bool = False,
) -> tuple[str, dict[str, Any]]:
    """Resolve, load, and validate the document for a command.

    Args:
        source: The ``--spec`` value, or ``None`` to fall back to the
            environment and the remembered source.
        cookies: ``NAME=VALUE`` strings from ``--cookie``.
        refresh: Bypass the document cache.
        interactive: Allow the browser sign-in flow on an authentication wall.

    Returns:
        A ``(source, document)`` tuple.

    Raises:
        EasySwaggerError: Any loading, validation, or authentication failure.
    """
    from easyswagger.cache import SpecCache
    from easyswagger.config import (
        get_cache_dir,
        load_global_config,
        parse_cookies,
        remember_source,
        resolve_fetch_config,
        resolve_source,
    )
    from easyswagger.parser import load_spec, validate_document

    resolved = resolve_source(source)
    cookie_jar = parse_cookies(cookies or [])
    config = load_global_config()
    fetch_config = resolve_fetch_config(config)

    debug(f"Loading document from {resolved}")
    cache = SpecCache(get_cache_dir(), config.cache)
    try:
        try:
            raw = load_spec(
                resolved, fetch_config, cache=cache, cookies=cookie_jar or None, refresh=refresh
            )
        except AuthWallError as exc:
            if not interactive:
                raise
            cookie_jar.update(_authenticate_in_browser(exc))
            raw = load_spec(
                resolved, fetch_config, cache=cache, cookies=cookie_jar, refresh=True
            )
    finally:
        cache.close()

    version = validate_document(raw)
    debug(f"Document version: {version}")
    remember_source(resolved)
    return resolved, raw


def _authenticate_in_browser(exc: AuthWallError) -> dict[str, str]:
    """Send the user to their browser to sign in and ask for the session cookie."""
    info(f"Authentication required for {exc.url}")
    if exc.html:
        debug(f"Sign-in page received ({len(exc.html)} bytes)")
    info("Opening the URL in your browser. Sign in there, then copy the session cookie")
    info(f"(for Cloudflare Access it is named {_DEFAULT_COOKIE_NAME}).")
    webbrowser.open(exc.url)

    answer = typer.prompt(
        f"Cookie (NAME=VALUE, or just the {_DEFAULT_COOKIE_NAME} value)",
        hide_input=True,
    ).strip()
    name, sep, value = answer.partition("=")
    if sep and name and " " not in name:
        return {name.strip(): value.strip()}
    return {_DEFAULT_COOKIE_NAME: answer}


def _is_interactive(ctx: typer.Context) -> bool:
    no_input = ctx.obj.get("no_input", False) if ctx.obj else False
    return not no_input and sys.stdin.isatty()


def _fail(exc: EasySwaggerError) -> typer.Exit:
    """Report *exc* on stderr and build the matching ``typer.Exit``."""
    error(str(exc))
    if isinstance(exc, AuthWallError):
        suggest(
            f"Sign in at {exc.url} in your browser, then retry with "
            f"--cookie {_DEFAULT_COOKIE_NAME}=<value>"
        )
    return typer.Exit(code=exc.exit_code)


def _not_found(path: str, known: list[str]) -> EndpointNotFoundError:
    message = f"Endpoint {path} not found in the OpenAPI specification"
    matches = difflib.get_close_matches(path, known, n=3)
    if matches:
        message += ". Did you mean: " + ", ".join(matches) + "?"
    return EndpointNotFoundError(message)


_SPEC_OPTION = typer.Option(
    None, "--spec", "-s", help="URL or file of the OpenAPI document ('-' for stdin)."
)
_COOKIE_OPTION = typer.Option(
    None, "--cookie", "-c", help="Cookie sent with URL fetches, as NAME=VALUE. Repeatable."
)
_REFRESH_OPTION = typer.Option(
    False, "--refresh", help="Fetch the document again instead of using the cache."
)


def paths_command(
    ctx: typer.Context,
    spec: Optional[str] = _SPEC_OPTION,
    search: Optional[str] = typer.Option(
        None, "--search", help="Only show paths containing this text (case-insensitive)."
    ),
    cookie: Optional[list[str]] = _COOKIE_OPTION,
    refresh: bool = _REFRESH_OPTION,
) -> None:
    """List the endpoints of a document, grouped by tag or path segment.

    Example::

        easyswagger paths --spec https://petstore3.swagger.io/api/v3/openapi.json
        easyswagger paths --search pet
    """
    from easyswagger.explorer import filter_endpoints, group_endpoints
    from easyswagger.parser import get_all_endpoints_info

    try:
        source, raw = load_document(spec, cookie, refresh, _is_interactive(ctx))
    except EasySwaggerError as exc:
        raise _fail(exc) from None

    endpoints = get_all_endpoints_info(raw)
    for path, endpoint in endpoints.items():
        if endpoint.error:
            warning(f"{path}: {endpoint.error}")

    visible = filter_endpoints(endpoints, search)
    if not visible:
        info("No endpoints found." if not search else f"No endpoints match '{search}'.")
        return

    api_info = raw.get("info")
    title = api_info.get("title") if isinstance(api_info, dict) else None
    get_output().print_endpoint_groups(
        group_endpoints(visible),
        visible,
        title=f"{title or source} -- {len(visible)} endpoints",
    )


def show_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Endpoint path, e.g. '/pets/{petId}'."),
    spec: Optional[str] = _SPEC_OPTION,
    cookie: Optional[list[str]] = _COOKIE_OPTION,
    refresh: bool = _REFRESH_OPTION,
) -> None:
    """Show one endpoint with all references resolved.

    Example::

        easyswagger show /pets/{petId}
        easyswagger --json show /pets > pets.json
    """
    from easyswagger.parser import extract_all_endpoints, extract_endpoint_info

    try:
        _, raw = load_document(spec, cookie, refresh, _is_interactive(ctx))
        endpoint = extract_endpoint_info(raw, path)
        if endpoint.error:
            raise _not_found(path, extract_all_endpoints(raw))
    except EasySwaggerError as exc:
        raise _fail(exc) from None

    print_json(endpoint.to_dict())


def copy_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Endpoint path, e.g. '/pets'."),
    spec: Optional[str] = _SPEC_OPTION,
    cookie: Optional[list[str]] = _COOKIE_OPTION,
    refresh: bool = _REFRESH_OPTION,
) -> None:
    """Print an endpoint as simplified JSON, ready to paste into an AI chat.

    Request bodies are reduced to a property -> placeholder template. The
    JSON goes to stdout as plain text in every output mode, so it can be
    piped straight into a clipboard tool.

    Example::

        easyswagger copy /pets | pbcopy
        easyswagger -o pets.json copy /pets
    """
    from easyswagger.explorer import copy_endpoint_json
    from easyswagger.parser import extract_all_endpoints, extract_endpoint_info

    try:
        _, raw = load_document(spec, cookie, refresh, _is_interactive(ctx))
        endpoint = extract_endpoint_info(raw, path)
        if endpoint.error:
            raise _not_found(path, extract_all_endpoints(raw))
    except EasySwaggerError as exc:
        raise _fail(exc) from None

    print_data(copy_endpoint_json(endpoint))
    output_file = ctx.obj.get("output_file") if ctx.obj else None
    if output_file:
        success(f"Endpoint information for {path} written to {output_file}")


def forget_command() -> None:
    """Forget the remembered document source.

    Example::

        easyswagger forget
    """
    from easyswagger.config import forget_source

    previous = forget_source()
    if previous is None:
        info("No document source was remembered.")
    else:
        success(f"Forgot {previous}")
