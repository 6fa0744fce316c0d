"""Shared test fixtures for sly.

Provides JSON fixture loading, isolated XDG directories, a connector
double carrying a configured email, and a ready-made
:class:`~sly.interface.Interface` whose cache lives under ``tmp_path``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from sly.cache import ResponseCache
from sly.client.connector import Connector
from sly.interface import Interface
from sly.models import SlyConfig
from sly.output import reset_output
from sly.terms import reset_dictionary


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> Any:
    """Decode ``tests/fixtures/<name>.json``."""
    with open(FIXTURES_DIR / f"{name}.json", encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals():
    """Reset the global OutputManager and term dictionary after every test."""
    yield
    reset_output()
    reset_dictionary()


@pytest.fixture
def json_fixture() -> Callable[[str], Any]:
    return load_fixture


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the XDG directories at ``tmp_path`` and clear ``SLY_*`` variables."""
    monkeypatch.setattr("sly.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["SLY_EMAIL", "SLY_API_KEY", "SLY_PRODUCT_ID", "SLY_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Interface fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sly_config() -> SlyConfig:
    return SlyConfig(email="someone@example.com", api_key="secret", product_id=1111)


@pytest.fixture
def connector(sly_config: SlyConfig) -> MagicMock:
    """A :class:`Connector` double; its ``config`` is a real :class:`SlyConfig`."""
    mock = MagicMock(spec=Connector)
    mock.config = sly_config
    return mock


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "sly-cache"


@pytest.fixture
def api(connector: MagicMock, cache_dir: Path) -> Interface:
    return Interface(connector, ResponseCache(cache_dir))
