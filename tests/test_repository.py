# SPDX-License-Identifier: MIT

import tempfile
import unittest
from pathlib import Path
from unittest import mock

import pendulum
from yaml import safe_load

from zenbullet.configuration import (
    CONFIG_DIR_ENV_VAR,
    DEFAULT_DATA_PATH,
    resolve_config_path,
    resolve_data_paths,
)
from zenbullet.repository.configuration import ConfigurationRepository
from zenbullet.repository.sync import SyncSettingsRepository
from zenbullet.repository.tag import TagRepository
from zenbullet.template.configuration import get_configuration_template


class TestConfigurationRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = Path(self.tmp.name) / "config.yaml"

    def test_first_read_writes_template(self) -> None:
        config = ConfigurationRepository(self.path).get_config()
        self.assertEqual(config, get_configuration_template())
        self.assertTrue(self.path.is_file())

    def test_missing_keys_are_back_filled(self) -> None:
        self.path.write_text("start_week_on_monday: true\n")
        config = ConfigurationRepository(self.path).get_config()
        self.assertTrue(config["start_week_on_monday"])
        self.assertEqual(config["undo_window_seconds"], 5.0)

    def test_update_persists(self) -> None:
        ConfigurationRepository(self.path).update_config(
            start_week_on_monday=True, log_level="DEBUG", data_path="/tmp/zen"
        )
        config = ConfigurationRepository(self.path).get_config()
        self.assertTrue(config["start_week_on_monday"])
        self.assertEqual(config["log_level"], "DEBUG")
        self.assertEqual(config["data_path"], "/tmp/zen")

        ConfigurationRepository(self.path).update_config(remove_data_path=True)
        self.assertIsNone(ConfigurationRepository(self.path).get_config()["data_path"])


class TestPathResolution(unittest.TestCase):
    def test_explicit_dir_wins_over_environment(self) -> None:
        with mock.patch.dict("os.environ", {CONFIG_DIR_ENV_VAR: "/from/env"}):
            self.assertEqual(resolve_config_path(Path("/explicit")), Path("/explicit"))
            self.assertEqual(resolve_config_path(), Path("/from/env"))

    def test_data_path_resolution(self) -> None:
        config = get_configuration_template()
        self.assertEqual(
            resolve_data_paths(config, Path("/custom")).root, Path("/custom/data")
        )
        config["data_path"] = "/elsewhere"
        self.assertEqual(
            resolve_data_paths(config, Path("/custom")).entries,
            Path("/elsewhere/entries.yaml"),
        )

    def test_default_data_path(self) -> None:
        from zenbullet.configuration import DEFAULT_CONFIG_PATH

        config = get_configuration_template()
        self.assertEqual(
            resolve_data_paths(config, DEFAULT_CONFIG_PATH).root, DEFAULT_DATA_PATH
        )


class TestTagRepository(unittest.TestCase):
    def test_load_without_file_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(TagRepository(Path(tmp) / "tags.yaml").load())

    def test_saved_document_is_camel_case_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tags.yaml"
            TagRepository(path).save([{"name": "Work", "color": "blue", "icon": None}])
            self.assertEqual(
                safe_load(path.read_text()), {"tags": [{"name": "Work", "color": "blue"}]}
            )


class TestSyncSettingsRepository(unittest.TestCase):
    def test_settings_and_last_sync(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sync.yaml"
            repository = SyncSettingsRepository(path)
            self.assertFalse(repository.is_configured())
            self.assertIsNone(repository.get_last_sync())

            repository.update_settings(url="https://dav.example.com", username="alice")
            synced_at = pendulum.datetime(2024, 3, 1, 12, tz="UTC")
            repository.set_last_sync(synced_at)

            reopened = SyncSettingsRepository(path)
            self.assertTrue(reopened.is_configured())
            self.assertEqual(reopened.get_settings()["username"], "alice")
            self.assertEqual(reopened.get_settings()["filename"], "zenbullet_backup.json")
            self.assertEqual(reopened.get_last_sync(), synced_at)
