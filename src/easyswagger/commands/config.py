"""``easyswagger config`` and ``easyswagger cache``.

Settings live in one :class:`~easyswagger.models.GlobalConfig` file and are
addressed with dotted keys (``fetch.timeout``, ``cache.enabled``). The cache
commands work on the store of fetched documents.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from pydantic import ValidationError

from easyswagger.exceptions import EasySwaggerError, InvalidUsageError
from easyswagger.output import error, info, print_json, success

config_app = typer.Typer(no_args_is_help=True)
cache_app = typer.Typer(no_args_is_help=True)

_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


def _coerce(current: Any, raw: str) -> Any:
    """Parse *raw* as the same kind of value the field holds today."""
    if isinstance(current, bool):
        flag = raw.strip().lower()
        if flag in _TRUE_WORDS:
            return True
        if flag in _FALSE_WORDS:
            return False
        raise ValueError("expected true/false, yes/no, on/off or 1/0")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    if isinstance(current, dict):
        parsed = json.loads(raw)
        if not isinstance(parsed, dict):
            raise ValueError("expected a JSON object")
        return parsed
    return raw


def _assign(data: dict[str, Any], key: str, raw: str) -> Any:
    """Set dotted *key* inside *data* in place and return the stored value."""
    *parents, leaf = key.split(".")
    section = data
    for name in parents:
        section = section.get(name)
        if not isinstance(section, dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
    if leaf not in section:
        raise InvalidUsageError(f"Unknown config key: {key}")
    try:
        section[leaf] = _coerce(section[leaf], raw)
    except ValueError as exc:
        raise InvalidUsageError(f"Invalid value for {key}: {raw} ({exc})") from exc
    return section[leaf]


@config_app.command("show")
def config_show() -> None:
    """Print the configuration as JSON; its directory goes to stderr.

    Example::

        easyswagger --json config show
    """
    from easyswagger.config import get_config_dir, load_global_config

    try:
        config = load_global_config()
    except EasySwaggerError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    print_json(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'fetch.timeout'."),
    value: str = typer.Argument(help="New value; JSON object for mappings."),
) -> None:
    """Change one setting.

    Example::

        easyswagger config set fetch.timeout 30
        easyswagger config set fetch.verify_ssl false
        easyswagger config set fetch.headers '{"X-Team": "docs"}'
    """
    from easyswagger.config import load_global_config, save_global_config
    from easyswagger.models import GlobalConfig

    try:
        data = load_global_config().model_dump(mode="json")
        stored = _assign(data, key, value)
        updated = GlobalConfig.model_validate(data)
    except EasySwaggerError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except ValidationError as exc:
        error(f"Invalid value for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=InvalidUsageError.exit_code) from None

    save_global_config(updated)
    success(f"Set {key} = {stored}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default configuration (asks first unless ``--force``)."""
    from easyswagger.config import save_global_config
    from easyswagger.models import GlobalConfig

    forced = bool(ctx.obj and ctx.obj.get("force"))
    if not forced and not typer.confirm("Restore default configuration?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration restored to defaults.")


@cache_app.command("stats")
def cache_stats() -> None:
    """Show how many documents are cached and where."""
    from easyswagger.cache import SpecCache
    from easyswagger.config import get_cache_dir, load_global_config

    cache = SpecCache(get_cache_dir(), load_global_config().cache)
    try:
        print_json(cache.stats())
    finally:
        cache.close()


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every cached document, even when caching is disabled."""
    from easyswagger.cache import SpecCache
    from easyswagger.config import get_cache_dir, load_global_config

    cache_config = load_global_config().cache.model_copy(update={"enabled": True})
    cache = SpecCache(get_cache_dir(), cache_config)
    try:
        removed = cache.clear()
    finally:
        cache.close()
    success(f"Removed {removed} cached document(s).")
