"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for consolegen:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.consolegen/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- A single :class:`~consolegen.models.GeneratorConfig`
  JSON file storing the enabled documentation files and the default
  assembly mode.
* **Project config** -- An optional ``./consolegen.json`` in the working
  directory, holding any subset of the same keys.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and user config into the final
  effective configuration.

All file writes, including every generated example file, use an atomic
temp-file-then-rename strategy (:func:`atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from consolegen.exceptions import ConfigError
from consolegen.models import AssemblyMode, GeneratorConfig

_APP_NAME = "consolegen"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "consolegen.json"

ENV_MODE = "CONSOLEGEN_MODE"
ENV_ENABLED_FILES = "CONSOLEGEN_ENABLED_FILES"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports the XDG Base Directory layout (Linux/FreeBSD)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/consolegen/`` (default
    ``~/.config/consolegen/``). On macOS/Windows: ``~/.consolegen/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/consolegen/`` (default
    ``~/.local/share/consolegen/``). On macOS/Windows: ``~/.consolegen/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. Missing parent
    directories are created. On any failure the temp file is removed and
    the original exception propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

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
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
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


# --- User config ---


def global_config_path() -> Path:
    """Path to the user config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json_object(path: Path, kind: str) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {kind} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {kind} config at {path}: expected a JSON object")
    return data


def load_global_config() -> GeneratorConfig:
    """Load the user configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~consolegen.models.GeneratorConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GeneratorConfig()
    data = _read_json_object(path, "user")
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid user config at {path}: {exc}") from exc


def save_global_config(config: GeneratorConfig) -> None:
    """Persist the user configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./consolegen.json``.

    Project config sits between the user config and environment variables in
    the precedence chain. It is typically committed next to the generated
    examples to pin the list of enabled documentation files.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json_object(path, "project")


# --- Precedence resolution ---


def _split_files(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def resolve_config(
    cli_mode: Optional[str] = None,
    cli_enabled_files: Optional[Sequence[str]] = None,
    cli_keep_going: Optional[bool] = None,
) -> GeneratorConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_mode``, ``cli_enabled_files``, ``cli_keep_going``)
        2. Environment variables (``CONSOLEGEN_MODE``,
           ``CONSOLEGEN_ENABLED_FILES`` as a comma-separated list)
        3. Project config (``./consolegen.json``)
        4. User config (``~/.config/consolegen/config.json``)
        5. Defaults

    Returns:
        The effective :class:`~consolegen.models.GeneratorConfig`.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    # 5 + 4. User config fills in defaults automatically
    merged = load_global_config().model_dump(mode="json")

    # 3. Project config
    project = load_project_config()
    if project is not None:
        merged.update(project)

    # 2. Environment
    env_mode = os.environ.get(ENV_MODE)
    if env_mode:
        merged["mode"] = env_mode
    env_files = os.environ.get(ENV_ENABLED_FILES)
    if env_files:
        merged["enabled_files"] = _split_files(env_files)

    # 1. CLI flags
    if cli_mode is not None:
        merged["mode"] = cli_mode
    if cli_enabled_files:
        merged["enabled_files"] = list(cli_enabled_files)
    if cli_keep_going is not None:
        merged["keep_going"] = cli_keep_going

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        valid = ", ".join(m.value for m in AssemblyMode)
        raise ConfigError(f"Invalid configuration (modes: {valid}): {exc}") from exc
