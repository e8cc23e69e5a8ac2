# SPDX-License-Identifier: MIT

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "zenbullet"

CONFIG_DIR_ENV_VAR = "ZENBULLET_CONFIG_DIR"
CONFIG_FILE_NAME = "config.yaml"

DEFAULT_CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
DEFAULT_DATA_PATH = platformdirs.user_data_path(APP_NAME)


class Configuration(TypedDict):
    data_path: Optional[str]
    start_week_on_monday: bool
    undo_window_seconds: float
    show_header: bool
    log_level: str


@dataclass(frozen=True)
class DataPaths:
    root: Path

    @property
    def entries(self) -> Path:
        return self.root / "entries.yaml"

    @property
    def tags(self) -> Path:
        return self.root / "tags.yaml"

    @property
    def sync(self) -> Path:
        return self.root / "sync.yaml"

    @property
    def undo(self) -> Path:
        return self.root / "undo.yaml"


def resolve_config_path(config_dir: Optional[Path] = None) -> Path:
    """
    Pick the configuration directory.

    An explicit directory wins, then the ZENBULLET_CONFIG_DIR environment
    variable, then the platform default.
    """
    if config_dir is not None:
        return config_dir
    env_value = os.environ.get(CONFIG_DIR_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def resolve_data_paths(config: Configuration, config_dir: Path) -> DataPaths:
    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        return DataPaths(Path(data_path_setting).expanduser())
    if config_dir != DEFAULT_CONFIG_PATH:
        # Relocated configuration keeps its data alongside it.
        return DataPaths(config_dir / "data")
    return DataPaths(DEFAULT_DATA_PATH)
