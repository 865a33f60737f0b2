"""Configuration management with XDG paths and precedence resolution.

specout keeps no state between runs; configuration only supplies default
values for the common export options:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specout/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global defaults** -- ``<config_dir>/config.json``, deserialised into
  :class:`~specout.models.ExportDefaults`.
* **Project defaults** -- ``./specout.json`` in the working directory.
* **Environment** -- ``SPECOUT_FORMAT``, ``SPECOUT_LEVEL``,
  ``SPECOUT_TIMEOUT``.
* **Precedence resolution** -- :func:`resolve_defaults` merges CLI flags,
  environment variables, project and global config.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specout.exceptions import ConfigError
from specout.models import ExportDefaults

_APP_NAME = "specout"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specout.json"

ENV_FORMAT = "SPECOUT_FORMAT"
ENV_LEVEL = "SPECOUT_LEVEL"
ENV_TIMEOUT = "SPECOUT_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/specout/`` (default ``~/.config/specout/``).
    On macOS/Windows: ``~/.specout/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specout/`` (default ``~/.local/share/specout/``).
    On macOS/Windows: ``~/.specout/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config files ---


def global_config_path() -> Path:
    """Path to the global defaults file."""
    return get_config_dir() / _CONFIG_FILENAME


def project_config_path() -> Path:
    """Path to the project defaults file in the working directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_global_config() -> ExportDefaults:
    """Load the global defaults from the XDG config directory.

    Returns:
        The stored :class:`~specout.models.ExportDefaults`, or the built-in
        defaults when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or values.
    """
    return _global_defaults(_read_json_object(global_config_path(), "global config"))


def _global_defaults(data: Optional[dict[str, Any]]) -> ExportDefaults:
    if data is None:
        return ExportDefaults()
    try:
        return ExportDefaults.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {global_config_path()}: {exc}") from exc


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local defaults from ``./specout.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json_object(project_config_path(), "project config")


# --- Precedence resolution ---


def resolve_defaults(
    cli_format: Optional[str] = None,
    cli_level: Optional[int] = None,
    cli_timeout: Optional[float] = None,
) -> tuple[ExportDefaults, dict[str, str]]:
    """Resolve the effective option defaults.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``SPECOUT_FORMAT``, ``SPECOUT_LEVEL``,
           ``SPECOUT_TIMEOUT``)
        3. Project config (``./specout.json``)
        4. Global config (``~/.config/specout/config.json``)
        5. Built-in defaults

    Values are not range-checked here; that is the job of
    :mod:`specout.options`.

    Returns:
        A tuple of ``(defaults, sources)`` where *sources* maps each field to
        the layer that supplied it (``default``, ``global``, ``project``,
        ``env`` or ``cli``).

    Raises:
        ConfigError: If a config file or environment variable is invalid.
    """
    stored = _read_json_object(global_config_path(), "global config")
    merged = _global_defaults(stored).model_dump()
    sources = {key: ("global" if key in (stored or {}) else "default") for key in merged}

    project = load_project_config()
    if project is not None:
        for key in merged:
            if key in project:
                merged[key] = project[key]
                sources[key] = "project"

    for key, env_var in (("format", ENV_FORMAT), ("level", ENV_LEVEL), ("timeout", ENV_TIMEOUT)):
        env_value = os.environ.get(env_var)
        if env_value:
            merged[key] = env_value
            sources[key] = "env"

    for key, value in (("format", cli_format), ("level", cli_level), ("timeout", cli_timeout)):
        if value is not None:
            merged[key] = value
            sources[key] = "cli"

    try:
        return ExportDefaults.model_validate(merged), sources
    except ValidationError as exc:
        raise ConfigError(f"Invalid option defaults: {exc}") from exc
