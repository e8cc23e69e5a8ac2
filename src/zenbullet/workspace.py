# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import pendulum

from zenbullet.configuration import (
    CONFIG_FILE_NAME,
    DataPaths,
    resolve_config_path,
    resolve_data_paths,
)
from zenbullet.errors import SyncError
from zenbullet.remote.blob_store import BlobStore
from zenbullet.remote.webdav import WebDavBlobStore
from zenbullet.repository.configuration import ConfigurationRepository
from zenbullet.repository.entry import EntryRepository, UndoRepository
from zenbullet.repository.sync import SyncSettingsRepository
from zenbullet.repository.tag import TagRepository
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.sync import SyncReconciler
from zenbullet.service.tag import TagStore
from zenbullet.time import now_utc

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """Everything one session works with, wired together once."""

    config_path: Path
    configuration: ConfigurationRepository
    data_paths: DataPaths
    feedback: FeedbackChannel
    entries: EntryStore
    tags: TagStore
    sync_settings: SyncSettingsRepository
    clock: Callable[[], pendulum.DateTime] = now_utc

    @property
    def starts_monday(self) -> bool:
        return self.configuration.get_config()["start_week_on_monday"]

    def reconciler(self, blob_store: Optional[BlobStore] = None) -> SyncReconciler:
        settings = self.sync_settings.get_settings()
        if blob_store is None:
            if not settings["url"]:
                raise SyncError("WebDAV not configured")
            blob_store = WebDavBlobStore(
                settings["url"],
                settings["username"] or "",
                settings["password"] or "",
                timeout=settings["timeout"],
            )
        return SyncReconciler(
            self.entries,
            self.tags,
            blob_store,
            filename=settings["filename"],
            feedback=self.feedback,
            settings_repository=self.sync_settings,
            clock=self.clock,
        )


def open_workspace(
    config_dir: Optional[Path] = None,
    clock: Callable[[], pendulum.DateTime] = now_utc,
) -> Workspace:
    config_path = resolve_config_path(config_dir)
    configuration = ConfigurationRepository(config_path / CONFIG_FILE_NAME)
    config = configuration.get_config()

    data_paths = resolve_data_paths(config, config_path)
    data_paths.root.mkdir(parents=True, exist_ok=True)
    logger.debug("using data directory %s", data_paths.root)

    feedback = FeedbackChannel(clock, window_seconds=config["undo_window_seconds"])
    entry_repository = EntryRepository(data_paths.entries)
    entries = EntryStore(
        repository=entry_repository,
        undo_repository=UndoRepository(data_paths.undo),
        feedback=feedback,
        clock=clock,
        undo_window_seconds=config["undo_window_seconds"],
    )
    tag_repository = TagRepository(data_paths.tags)
    tags = TagStore(entries, repository=tag_repository, feedback=feedback)

    # First run: write the starting documents so the data folder is complete
    if not entry_repository.exists():
        entries.replace_all([])
    if tag_repository.load() is None:
        tags.replace_all(tags.all())

    return Workspace(
        config_path=config_path,
        configuration=configuration,
        data_paths=data_paths,
        feedback=feedback,
        entries=entries,
        tags=tags,
        sync_settings=SyncSettingsRepository(data_paths.sync),
        clock=clock,
    )
