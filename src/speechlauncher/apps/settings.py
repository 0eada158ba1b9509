"""Settings file loading and persistence.

Settings live in ``~/.config/speechlauncher/settings.yml`` as YAML with
underscored keys. A missing or unreadable file is replaced by the sample
settings, which are written back to disk so the user has something to edit.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from speechlauncher.core.config import (
    DEFAULT_SETTINGS,
    LauncherConfig,
    config_to_dict,
    make_launcher_config,
)
from speechlauncher.core.constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_DIR_ENV,
    DEFAULT_CONFIG_FILE,
)
from speechlauncher.core.env import LOGGER


def resolve_settings_path(path: str | None = None) -> Path:
    """Settings file location: *path*, else the config dir + settings.yml.

    The directory honours the ``SPEECHLAUNCHER_CONFIG_DIR`` environment
    variable.
    """
    if path:
        return Path(path).expanduser()
    config_dir = Path(
        os.environ.get(DEFAULT_CONFIG_DIR_ENV, "") or DEFAULT_CONFIG_DIR,
    ).expanduser()
    return config_dir / DEFAULT_CONFIG_FILE


def _read_raw(path: Path) -> dict[str, Any] | None:
    """Parse *path*, returning None when it is absent or not a mapping."""
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Could not read settings %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        LOGGER.warning("Settings %s are empty or not a mapping", path)
        return None
    return data


def write_settings(raw: dict[str, Any], path: Path) -> None:
    """Dump a raw settings mapping to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(raw, f, sort_keys=False, allow_unicode=True)


def save_settings(config: LauncherConfig, path: str | Path | None = None) -> Path:
    """Persist *config* using the settings-file key names."""
    target = Path(path) if path else resolve_settings_path()
    write_settings(config_to_dict(config), target)
    return target


def load_settings(path: str | None = None) -> LauncherConfig:
    """Load the launcher configuration from YAML.

    Falls back to the sample settings (and saves them) when the file is
    missing or unreadable. A readable file with invalid structure raises
    ConfigurationError; that is fatal at startup.
    """
    settings_path = resolve_settings_path(path)
    raw = _read_raw(settings_path)
    if raw is None:
        raw = copy.deepcopy(DEFAULT_SETTINGS)
        LOGGER.info("Writing default settings to %s", settings_path)
        write_settings(raw, settings_path)
    return make_launcher_config(raw)
