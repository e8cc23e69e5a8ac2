# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Any, Optional

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from zenbullet import serialization, time
from zenbullet.model.entry import Entry

logger = logging.getLogger(__name__)


class EntryRepository:
    """Whole-document storage of the entry list; rewritten on every save."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[Entry]:
        if not self.exists():
            return []
        entries_data = load(self.path.read_text(), Loader=Loader)
        if entries_data is None:
            return []
        entries = serialization.entries_from_list(entries_data["entries"])
        logger.debug("loaded %d entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: list[Entry]) -> None:
        entries_data: dict[str, Any] = {
            "entries": serialization.entries_to_list(entries)
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(entries_data, Dumper=Dumper, sort_keys=False))


class UndoRepository:
    """Single slot holding the entries removed by the last delete."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> tuple[Optional[pendulum.DateTime], list[Entry]]:
        if not self.path.is_file():
            return None, []
        undo_data = load(self.path.read_text(), Loader=Loader)
        if undo_data is None:
            return None, []
        deleted_at = time.datetime_from_str_optional(undo_data.get("deleted_at"))
        entries = serialization.entries_from_list(undo_data.get("entries") or [])
        return deleted_at, entries

    def save(self, deleted_at: pendulum.DateTime, entries: list[Entry]) -> None:
        undo_data: dict[str, Any] = {
            "deleted_at": time.datetime_to_iso_str(deleted_at),
            "entries": serialization.entries_to_list(entries),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(undo_data, Dumper=Dumper, sort_keys=False))

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
