"""Fixtures shared by the easyswagger test suites.

OpenAPI documents used across suites live in ``tests/fixtures``; the
loaders below hand out fresh dicts so tests may mutate them freely.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from easyswagger.output import reset_output

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def _fresh_output_manager() -> None:
    # A manager built inside CliRunner keeps the runner's (closed) streams.
    yield
    reset_output()


# -- documents ------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Pets, owners and a health check, with nested schema references."""
    return _load_fixture("petstore.json")


@pytest.fixture
def cyclic_raw() -> dict[str, Any]:
    """Self-referencing and mutually referencing schemas."""
    return _load_fixture("cyclic.json")


@pytest.fixture
def widget_doc() -> dict[str, Any]:
    return {
        "openapi": "3.0.3",
        "paths": {},
        "components": {
            "schemas": {
                "Widget": {
                    "type": "object",
                    "properties": {"id": {"type": "string"}},
                }
            }
        },
    }


# -- filesystem isolation -------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every XDG directory below *tmp_path* and ``cd`` into it.

    The ``EASYSWAGGER_*`` variables are cleared so a developer's own shell
    settings cannot leak into source or timeout resolution.
    """
    for var, sub in (
        ("XDG_CONFIG_HOME", "config"),
        ("XDG_CACHE_HOME", "cache"),
        ("XDG_DATA_HOME", "data"),
    ):
        monkeypatch.setenv(var, str(tmp_path / sub))
    monkeypatch.setattr("easyswagger.config._is_xdg_platform", lambda: True)
    monkeypatch.delenv("EASYSWAGGER_SPEC", raising=False)
    monkeypatch.delenv("EASYSWAGGER_TIMEOUT", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def petstore_file(isolated_config: Path) -> Path:
    """The petstore document written into the isolated working directory."""
    target = isolated_config / "petstore.json"
    target.write_text((FIXTURES_DIR / "petstore.json").read_text(encoding="utf-8"))
    return target
