# SPDX-License-Identifier: MIT

from zenbullet.configuration import Configuration
from zenbullet.model.sync import DEFAULT_SYNC_FILENAME, SyncSettings


def get_configuration_template() -> Configuration:
    return {
        "data_path": None,
        "start_week_on_monday": False,
        "undo_window_seconds": 5.0,
        "show_header": True,
        "log_level": "WARNING",
    }


def get_sync_settings_template() -> SyncSettings:
    return {
        "url": None,
        "username": None,
        "password": None,
        "filename": DEFAULT_SYNC_FILENAME,
        "timeout": 30.0,
        "last_sync": None,
    }
