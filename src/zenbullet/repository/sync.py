# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from zenbullet import time
from zenbullet.model.sync import SyncSettings
from zenbullet.template.configuration import get_sync_settings_template


class SyncSettingsRepository:
    """WebDAV connection settings plus the time of the last successful sync."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._settings: Optional[SyncSettings] = None

    @property
    def settings(self) -> SyncSettings:
        if self._settings is None:
            self.__load_data()
        if self._settings is None:
            raise ValueError()
        return self._settings

    def __load_data(self) -> None:
        settings = get_sync_settings_template()
        if self.path.is_file():
            stored = load(self.path.read_text(), Loader=Loader)
            if stored is not None:
                settings.update(stored)
        self._settings = settings

    def __save_data(self, settings: SyncSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(settings), Dumper=Dumper, sort_keys=False))

    def get_settings(self) -> SyncSettings:
        return deepcopy(self.settings)

    def is_configured(self) -> bool:
        return bool(self.settings["url"])

    def update_settings(
        self,
        url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        filename: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if url is not None:
            self.settings["url"] = url
        if username is not None:
            self.settings["username"] = username
        if password is not None:
            self.settings["password"] = password
        if filename is not None:
            self.settings["filename"] = filename
        if timeout is not None:
            self.settings["timeout"] = timeout
        self.__save_data(self.settings)

    def get_last_sync(self) -> Optional[pendulum.DateTime]:
        return time.datetime_from_str_optional(self.settings["last_sync"])

    def set_last_sync(self, synced_at: pendulum.DateTime) -> None:
        self.settings["last_sync"] = time.datetime_to_iso_str(synced_at)
        self.__save_data(self.settings)
