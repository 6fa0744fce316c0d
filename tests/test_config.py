"""Tests for sly.config: XDG paths, atomic writes, config file and env overrides."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from sly.config import (
    atomic_write,
    config_exists,
    config_path,
    get_cache_dir,
    get_config_dir,
    get_data_dir,
    load_config,
    resolve_cache_dir,
    save_config,
)
from sly.exceptions import ConfigError, ConfigMissingError
from sly.models import DEFAULT_BASE_URL, SlyConfig
from sly.output import OutputFormat
from sly.terms import DEFAULT_TERMS


def _write_config(data: object) -> Path:
    path = config_path()
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sly.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "sly"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sly.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))
        assert get_config_dir() == tmp_path / "custom" / "sly"

    def test_cache_dir_not_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sly.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_cache_dir()
        assert result == tmp_path / ".cache" / "sly"
        assert not result.exists()

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sly.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".local" / "share" / "sly"


class TestXDGPathsFallback:
    @pytest.fixture(autouse=True)
    def _non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sly.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    def test_config_dir(self, tmp_path: Path) -> None:
        assert get_config_dir() == tmp_path / ".sly"

    def test_cache_dir(self, tmp_path: Path) -> None:
        assert get_cache_dir() == tmp_path / ".sly" / "cache"

    def test_data_dir(self, tmp_path: Path) -> None:
        assert get_data_dir() == tmp_path / ".sly"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "test.json"
        atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.json"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        target = tmp_path / "test.json"
        atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.json"
        target.write_text("old", encoding="utf-8")
        with patch("sly.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == [target]
        assert target.read_text(encoding="utf-8") == "old"

    def test_mode_applied(self, tmp_path: Path) -> None:
        target = tmp_path / "secret.json"
        atomic_write(target, "{}", mode=0o600)
        assert stat.S_IMODE(os.stat(target).st_mode) == 0o600

    def test_unicode_content(self, tmp_path: Path) -> None:
        target = tmp_path / "u.json"
        atomic_write(target, "Wróblewski")
        assert target.read_text(encoding="utf-8") == "Wróblewski"


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_missing_raises(self, isolated_config: Path) -> None:
        assert not config_exists()
        with pytest.raises(ConfigMissingError, match="Config File Missing"):
            load_config()

    def test_missing_is_a_config_error(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError):
            load_config()

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        save_config(SlyConfig(email="a@example.com", api_key="k", product_id=7))
        config = load_config()
        assert config.email == "a@example.com"
        assert config.product_id == 7
        assert config.base_url == DEFAULT_BASE_URL
        assert config.terms == dict(DEFAULT_TERMS)

    def test_saved_file_is_owner_only(self, isolated_config: Path) -> None:
        path = save_config(SlyConfig(email="a@example.com", api_key="k"))
        assert path == config_path()
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_invalid_json(self, isolated_config: Path) -> None:
        config_path().write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config()

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_config(["email"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_config()

    def test_schema_error(self, isolated_config: Path) -> None:
        _write_config({"email": "a@example.com"})
        with pytest.raises(ConfigError):
            load_config()

    def test_output_format(self, isolated_config: Path) -> None:
        _write_config({"email": "a@example.com", "api_key": "k", "output": {"format": "plain"}})
        assert load_config().output.format == OutputFormat.PLAIN

    def test_unknown_output_format(self, isolated_config: Path) -> None:
        _write_config({"email": "a@example.com", "api_key": "k", "output": {"format": "xml"}})
        with pytest.raises(ConfigError):
            load_config()

    def test_custom_terms(self, isolated_config: Path) -> None:
        _write_config({"email": "a@example.com", "api_key": "k", "terms": {"foo": "bar"}})
        assert load_config().terms == {"foo": "bar"}


class TestEnvOverrides:
    def test_env_overrides_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config({"email": "a@example.com", "api_key": "k", "product_id": 1})
        monkeypatch.setenv("SLY_PRODUCT_ID", "42")
        monkeypatch.setenv("SLY_BASE_URL", "http://localhost:8000/api")
        config = load_config()
        assert config.product_id == 42
        assert config.base_url == "http://localhost:8000/api"
        assert config.email == "a@example.com"

    def test_env_alone_is_enough(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLY_EMAIL", "env@example.com")
        monkeypatch.setenv("SLY_API_KEY", "envkey")
        config = load_config()
        assert config.email == "env@example.com"
        assert config.product_id is None

    def test_env_email_without_key_still_missing(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLY_EMAIL", "env@example.com")
        with pytest.raises(ConfigMissingError):
            load_config()


class TestResolveCacheDir:
    def test_configured_directory(self, tmp_path: Path) -> None:
        config = SlyConfig(email="a", api_key="k", cache={"directory": str(tmp_path / "c")})
        assert resolve_cache_dir(config) == tmp_path / "c"

    def test_default_directory(self, isolated_config: Path) -> None:
        config = SlyConfig(email="a", api_key="k")
        assert resolve_cache_dir(config) == isolated_config / "cache" / "sly"
