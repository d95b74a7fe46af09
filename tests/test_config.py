"""Tests for consolegen.config: XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from consolegen.config import (
    atomic_write,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from consolegen.exceptions import ConfigError
from consolegen.models import DEFAULT_ENABLED_FILES, AssemblyMode, GeneratorConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG paths on Linux (the default XDG platform)."""

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("consolegen.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "consolegen"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("consolegen.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "consolegen"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("consolegen.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "consolegen"
        assert result.is_dir()


class TestXDGPathsFallback:
    """Non-XDG platforms (macOS, Windows) use ~/.consolegen."""

    def test_config_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("consolegen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".consolegen"

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("consolegen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".consolegen" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "test.go"
        atomic_write(target, "package elasticsearch_test\n")
        assert target.read_text(encoding="utf-8") == "package elasticsearch_test\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        target.write_text("old content", encoding="utf-8")
        atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "src" / "test.go"
        atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        with patch("consolegen.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []

    def test_tabs_and_newlines_preserved(self, tmp_path: Path) -> None:
        target = tmp_path / "test.go"
        content = "\tres, err := es.Info()\r\n\t)\n"
        atomic_write(target, content)
        assert target.read_bytes() == content.encode("utf-8")


# ---------------------------------------------------------------------------
# User config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == GeneratorConfig()

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        config = GeneratorConfig(enabled_files=["docs/get.asciidoc"], mode=AssemblyMode.TEST)
        save_global_config(config)
        assert load_global_config() == config

    def test_saved_config_is_valid_json(self, isolated_config: Path) -> None:
        save_global_config(GeneratorConfig())
        data = json.loads(global_config_path().read_text(encoding="utf-8"))
        assert data["mode"] == "run"
        assert data["enabled_files"] == DEFAULT_ENABLED_FILES

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        global_config_path().write_text("broken{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid user config"):
            load_global_config()

    def test_load_invalid_schema_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), {"mode": "sometimes"})
        with pytest.raises(ConfigError, match="Invalid user config"):
            load_global_config()

    def test_load_non_object_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), ["docs/get.asciidoc"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_load_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_load_valid_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "consolegen.json", {"mode": "test"})
        assert load_project_config() == {"mode": "test"}

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        (isolated_config / "consolegen.json").write_text("broken{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """Test the full precedence chain: CLI > env > project > user > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == GeneratorConfig()

    def test_user_config(self, isolated_config: Path) -> None:
        save_global_config(GeneratorConfig(mode=AssemblyMode.TEST))
        assert resolve_config().mode is AssemblyMode.TEST

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        save_global_config(GeneratorConfig(mode=AssemblyMode.TEST))
        _write_json(isolated_config / "consolegen.json", {"mode": "run"})
        assert resolve_config().mode is AssemblyMode.RUN

    def test_project_keeps_unset_keys(self, isolated_config: Path) -> None:
        save_global_config(GeneratorConfig(enabled_files=["a.asciidoc"]))
        _write_json(isolated_config / "consolegen.json", {"mode": "test"})
        config = resolve_config()
        assert config.enabled_files == ["a.asciidoc"]
        assert config.mode is AssemblyMode.TEST

    def test_env_overrides_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "consolegen.json", {"mode": "run"})
        monkeypatch.setenv("CONSOLEGEN_MODE", "test")
        assert resolve_config().mode is AssemblyMode.TEST

    def test_env_enabled_files(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLEGEN_ENABLED_FILES", "b.asciidoc, a.asciidoc,,")
        assert resolve_config().enabled_files == ["a.asciidoc", "b.asciidoc"]

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLEGEN_MODE", "test")
        monkeypatch.setenv("CONSOLEGEN_ENABLED_FILES", "a.asciidoc")
        config = resolve_config(cli_mode="run", cli_enabled_files=["c.asciidoc"], cli_keep_going=True)
        assert config.mode is AssemblyMode.RUN
        assert config.enabled_files == ["c.asciidoc"]
        assert config.keep_going is True

    def test_empty_cli_list_does_not_override(self, isolated_config: Path) -> None:
        assert resolve_config(cli_enabled_files=[]).enabled_files == DEFAULT_ENABLED_FILES

    def test_invalid_env_mode(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLEGEN_MODE", "sometimes")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
