"""Where easyswagger keeps its files, and how a document source is chosen.

``config.json`` (fetch, output and cache settings) lives in the config
directory. ``state.json`` lives in the data directory and holds the last
document source, which lets ``easyswagger show /pets`` work without
``--spec`` after a first ``easyswagger paths --spec URL``. Both files are
written through :func:`_atomic_write`, so a crash never leaves half a file.

A source comes from ``--spec`` first, then ``EASYSWAGGER_SPEC``, then the
remembered state; see :func:`resolve_source`.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from easyswagger.exceptions import ConfigError, InvalidUsageError
from easyswagger.models import FetchConfig, GlobalConfig, SessionState

_APP_NAME = "easyswagger"
_CONFIG_FILENAME = "config.json"
_STATE_FILENAME = "state.json"

ENV_SPEC = "EASYSWAGGER_SPEC"
ENV_TIMEOUT = "EASYSWAGGER_TIMEOUT"


# --- Directories ---

# kind -> (XDG variable, default below $HOME, subdirectory of ~/.easyswagger)
_DIR_LAYOUT: dict[str, tuple[str, tuple[str, ...], Optional[str]]] = {
    "config": ("XDG_CONFIG_HOME", (".config",), None),
    "cache": ("XDG_CACHE_HOME", (".cache",), "cache"),
    "data": ("XDG_DATA_HOME", (".local", "share"), "data"),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, home_default, fallback_sub = _DIR_LAYOUT[kind]
    if _is_xdg_platform():
        root = os.environ.get(env_var) or str(Path.home().joinpath(*home_default))
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if fallback_sub:
            path = path / fallback_sub
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/easyswagger`` on Linux/BSD, ``~/.easyswagger`` elsewhere."""
    return _app_dir("config")


def get_cache_dir() -> Path:
    """Where fetched documents are cached; safe to delete at any time."""
    return _app_dir("cache")


def get_data_dir() -> Path:
    """Session state and crash logs."""
    return _app_dir("data")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a fsynced sibling temp file.

    The temp file is removed if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


# --- Global config and session state ---


def _write_model(path: Path, model: BaseModel) -> None:
    _atomic_write(path, json.dumps(model.model_dump(mode="json"), indent=2) + "\n")


def _config_file() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def _state_file() -> Path:
    return get_data_dir() / _STATE_FILENAME


def load_global_config() -> GlobalConfig:
    """Read ``config.json``; defaults when it does not exist.

    Raises:
        ConfigError: If the file is not JSON or does not validate.
    """
    path = _config_file()
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    _write_model(_config_file(), config)


def load_state() -> SessionState:
    """Read ``state.json``. A missing or corrupt file is an empty state."""
    path = _state_file()
    if not path.is_file():
        return SessionState()
    try:
        return SessionState.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError:
        return SessionState()


def save_state(state: SessionState) -> None:
    _write_model(_state_file(), state)


def remember_source(source: str) -> None:
    """Record *source* as the last used document source.

    Stdin (``-``) cannot be replayed and is never remembered. Relative file
    paths are stored as absolute paths.
    """
    if source == "-":
        return
    if not source.startswith(("http://", "https://")):
        source = str(Path(source).expanduser().resolve())
    state = load_state()
    state.last_source = source
    save_state(state)


def forget_source() -> Optional[str]:
    """Clear the remembered source and return what it was."""
    state = load_state()
    previous = state.last_source
    if previous is not None:
        state.last_source = None
        save_state(state)
    return previous


# --- Precedence resolution ---


def resolve_source(cli_source: Optional[str] = None) -> str:
    """Determine which document to load.

    Precedence (high to low):
        1. The ``--spec`` CLI option
        2. The ``EASYSWAGGER_SPEC`` environment variable
        3. The last used source from the session state

    Raises:
        InvalidUsageError: If none of the above yields a source.
    """
    if cli_source:
        return cli_source
    env_source = os.environ.get(ENV_SPEC)
    if env_source:
        return env_source
    last = load_state().last_source
    if last:
        return last
    raise InvalidUsageError(
        "No OpenAPI document given. Pass --spec <url-or-file> "
        f"or set {ENV_SPEC}."
    )


def resolve_fetch_config(config: GlobalConfig) -> FetchConfig:
    """Return the fetch settings with the ``EASYSWAGGER_TIMEOUT`` override applied.

    Raises:
        ConfigError: If ``EASYSWAGGER_TIMEOUT`` is not a number.
    """
    fetch = config.fetch.model_copy()
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            fetch.timeout = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got: {env_timeout}"
            ) from exc
    return fetch


def parse_cookies(values: list[str]) -> dict[str, str]:
    """Parse ``NAME=VALUE`` strings from ``--cookie`` options.

    Raises:
        InvalidUsageError: If an entry has no ``=`` or an empty name.
    """
    cookies: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise InvalidUsageError(f"Invalid cookie '{item}'. Expected NAME=VALUE.")
        cookies[name] = value.strip()
    return cookies
