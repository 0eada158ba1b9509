"""Tests for speechlauncher.apps.settings — YAML load/save."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from speechlauncher.apps.settings import (
    load_settings,
    resolve_settings_path,
    save_settings,
)
from speechlauncher.core.config import LauncherConfig
from speechlauncher.core.errors import ConfigurationError


class TestResolveSettingsPath:
    def test_explicit_path(self, tmp_path: Path) -> None:
        target = tmp_path / "mine.yml"
        assert resolve_settings_path(str(target)) == target

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPEECHLAUNCHER_CONFIG_DIR", str(tmp_path))
        assert resolve_settings_path() == tmp_path / "settings.yml"


class TestLoadSettings:
    def test_missing_file_writes_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.yml"
        config = load_settings(str(path))
        assert path.exists()
        assert [t.name for t in config.topics] == ["Test", "Question"]
        written = yaml.safe_load(path.read_text())
        assert written["wake_word"] == "okay computer"
        assert written["objects"][0]["actions"][0]["cmd"] == "cmd"

    def test_empty_file_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text("")
        config = load_settings(str(path))
        assert config.confidence == 40
        assert "objects" in path.read_text()

    def test_unparseable_file_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text("objects: [unclosed\n")
        assert load_settings(str(path)).wake_word == "okay computer"

    def test_reads_user_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text(
            "wake_word: hey launcher\n"
            "confidence: 60\n"
            "objects:\n"
            "  - name: Editor\n"
            "    words: [editor, code]\n"
            "    actions:\n"
            "      - name: Open\n"
            "        words: [open]\n"
            "        cmd: code\n"
            "        dir: ~/src\n"
        )
        config = load_settings(str(path))
        assert config.wake_word == "hey launcher"
        assert config.confidence == 60
        assert config.topics[0].words == ("editor", "code")
        assert config.topics[0].actions[0].working_directory == "~/src"

    def test_invalid_structure_is_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text("wake_word: hi\nobjects: []\n")
        with pytest.raises(ConfigurationError):
            load_settings(str(path))
        assert path.read_text() == "wake_word: hi\nobjects: []\n"


class TestSaveSettings:
    def test_round_trip(self, tmp_path: Path, sample_config: LauncherConfig) -> None:
        path = save_settings(sample_config, tmp_path / "out.yml")
        assert load_settings(str(path)) == sample_config

    def test_uses_underscored_keys(
        self, tmp_path: Path, sample_config: LauncherConfig
    ) -> None:
        path = save_settings(sample_config, tmp_path / "out.yml")
        raw = yaml.safe_load(path.read_text())
        action = raw["objects"][1]["actions"][0]
        assert set(action) == {"name", "words", "cmd", "arguments", "dir", "visible"}
