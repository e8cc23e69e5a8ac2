# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from zenbullet.configuration import Configuration
from zenbullet.template.configuration import get_configuration_template


class ConfigurationRepository:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._config: Optional[Configuration] = None

    @property
    def config(self) -> Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not self.path.is_file():
            self._config = get_configuration_template()
            self.__save_data(self._config)
            return

        self._config = load(self.path.read_text(), Loader=Loader)
        if self._config is None:
            self._config = get_configuration_template()

        # Back-fill keys added after the file was first written
        for key, value in get_configuration_template().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(config), Dumper=Dumper, sort_keys=False))

    def get_config(self) -> Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        start_week_on_monday: Optional[bool] = None,
        undo_window_seconds: Optional[float] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if start_week_on_monday is not None:
            self.config["start_week_on_monday"] = start_week_on_monday
        if undo_window_seconds is not None:
            self.config["undo_window_seconds"] = undo_window_seconds
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level
        self.__save_data(self.config)
