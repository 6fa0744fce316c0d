"""Configuration management with XDG paths, atomic writes, and env overrides.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sly/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Config file** -- a single :class:`~sly.models.SlyConfig` JSON file.
  Because it holds the API key it is written with ``0600`` permissions.
* **Environment overrides** -- ``SLY_EMAIL``, ``SLY_API_KEY``,
  ``SLY_PRODUCT_ID`` and ``SLY_BASE_URL`` take precedence over the file.
  When no file exists, the environment alone may supply the credentials.

All file writes go through :func:`atomic_write` (temp file then rename) so
a crash never leaves a half-written file behind. The response cache uses
the same helper.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from sly.exceptions import ConfigError, ConfigMissingError
from sly.models import SlyConfig

_APP_NAME = "sly"
_CONFIG_FILENAME = "config.json"

_ENV_OVERRIDES = {
    "SLY_EMAIL": "email",
    "SLY_API_KEY": "api_key",
    "SLY_PRODUCT_ID": "product_id",
    "SLY_BASE_URL": "base_url",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/sly/`` (default ``~/.config/sly/``).
    On macOS/Windows: ``~/.sly/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the default response cache directory.

    Unlike the other directories this one is *not* created here:
    :class:`~sly.cache.ResponseCache` creates it on the first cache miss.

    On Linux/BSD: ``$XDG_CACHE_HOME/sly/`` (default ``~/.cache/sly/``).
    On macOS/Windows: ``~/.sly/cache/``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    return _fallback_base_dir() / "cache"


def get_data_dir() -> Path:
    """Return the data directory, creating it if necessary.

    Crash logs go to its ``logs/`` subdirectory.

    On Linux/BSD: ``$XDG_DATA_HOME/sly/`` (default ``~/.local/share/sly/``).
    On macOS/Windows: ``~/.sly/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write *data* to *path* atomically using a temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX. On any failure the temp
    file is removed and the exception re-raised; *path* is either the old
    content or the new content, never a partial write.

    Args:
        path: Destination file. Its parent directory must exist.
        data: Text to write (UTF-8).
        mode: Optional permission bits applied to the temp file before the
            rename.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


def config_exists() -> bool:
    return config_path().is_file()


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var, field in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value:
            overrides[field] = value
    return overrides


def load_config() -> SlyConfig:
    """Load the config file and layer environment overrides on top.

    Returns:
        The validated :class:`~sly.models.SlyConfig`.

    Raises:
        ConfigMissingError: If there is no config file and the environment
            does not provide both ``SLY_EMAIL`` and ``SLY_API_KEY``.
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = config_path()
    data: dict[str, Any] = {}
    if path.is_file():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, ValueError) as exc:
            raise ConfigError(f"Invalid config at {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config at {path}: expected a JSON object")

    overrides = _env_overrides()
    if not data and not {"email", "api_key"} <= overrides.keys():
        raise ConfigMissingError()

    data.update(overrides)
    try:
        return SlyConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: SlyConfig) -> Path:
    """Persist *config* atomically with owner-only permissions.

    Returns:
        The path that was written.
    """
    path = config_path()
    data = config.model_dump(mode="json")
    atomic_write(path, json.dumps(data, indent=2) + "\n", mode=0o600)
    return path


def resolve_cache_dir(config: SlyConfig) -> Path:
    """Return the cache directory configured in *config*, or the XDG default."""
    if config.cache.directory:
        return Path(config.cache.directory).expanduser()
    return get_cache_dir()
