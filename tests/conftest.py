"""Shared test fixtures — no microphone or Vosk model needed."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from speechlauncher.core.config import (
    DEFAULT_SETTINGS,
    LauncherConfig,
    make_launcher_config,
)
from speechlauncher.core.dispatch import Dispatcher
from speechlauncher.core.grammar import GrammarSpec, compile_grammar


class RecordingLauncher:
    """ProcessLauncher stub that records every launch."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, str, str, bool]] = []
        self._error = error

    def launch(
        self,
        command: str,
        arguments: str,
        working_directory: str,
        visible: bool,
    ) -> None:
        self.calls.append((command, arguments, working_directory, visible))
        if self._error is not None:
            raise self._error


class RecordingNotifier:
    """Notifier stub that records every notification."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.calls.append((title, body))


def make_settings(**overrides: Any) -> dict[str, Any]:
    """Sample settings with top-level keys replaced."""
    raw = copy.deepcopy(DEFAULT_SETTINGS)
    raw.update(overrides)
    return raw


@pytest.fixture
def sample_config() -> LauncherConfig:
    return make_launcher_config(make_settings())


@pytest.fixture
def sample_grammar(sample_config: LauncherConfig) -> GrammarSpec:
    return compile_grammar(sample_config)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(
    sample_config: LauncherConfig,
    launcher: RecordingLauncher,
    notifier: RecordingNotifier,
) -> Dispatcher:
    return Dispatcher(sample_config, launcher, notifier)
