# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Callable, Optional, cast

import pendulum

from zenbullet.model.entity_id import EntityId, generate_entity_id, is_ghost_entity_id
from zenbullet.model.entry import (
    DEFAULT_PRIORITY,
    DeleteMode,
    Entry,
    EntryFields,
)
from zenbullet.model.tag import INBOX_TAG
from zenbullet.repository.entry import EntryRepository, UndoRepository
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.template.entry import get_entry_template
from zenbullet.time import next_occurrence, now_utc

logger = logging.getLogger(__name__)

DEFAULT_UNDO_WINDOW_SECONDS = 5.0

# Fields a caller may never overwrite through update()
_PROTECTED_FIELDS = ("id", "created_at", "updated_at", "is_ghost")


class EntryStore:
    """
    Authoritative in-memory collection of entries.

    Every state-changing operation writes the whole collection through the
    repository (when one is attached) before returning.
    """

    def __init__(
        self,
        entries: Optional[list[Entry]] = None,
        repository: Optional[EntryRepository] = None,
        undo_repository: Optional[UndoRepository] = None,
        feedback: Optional[FeedbackChannel] = None,
        clock: Callable[[], pendulum.DateTime] = now_utc,
        undo_window_seconds: float = DEFAULT_UNDO_WINDOW_SECONDS,
    ) -> None:
        self._repository = repository
        self._undo_repository = undo_repository
        self._feedback = feedback
        self._clock = clock
        self.undo_window_seconds = undo_window_seconds

        if entries is not None:
            self._entries = deepcopy(entries)
        elif repository is not None:
            self._entries = repository.load()
        else:
            self._entries = []

        self._last_deleted: list[Entry] = []
        self._deleted_at: Optional[pendulum.DateTime] = None
        if undo_repository is not None:
            self._deleted_at, self._last_deleted = undo_repository.load()

    # -- Reads --

    def all(self) -> list[Entry]:
        return deepcopy(self._entries)

    def get(self, id: EntityId) -> Optional[Entry]:
        entry = self.__find(id)
        return deepcopy(entry) if entry is not None else None

    def find(self, id_prefix: str) -> Optional[Entry]:
        """Resolve a full id or an unambiguous id prefix. Ghost ids never resolve."""
        if is_ghost_entity_id(id_prefix):
            return None
        exact = self.__find(id_prefix)
        if exact is not None:
            return deepcopy(exact)
        matches = [entry for entry in self._entries if entry["id"].startswith(id_prefix)]
        if len(matches) == 1:
            return deepcopy(matches[0])
        return None

    def on_date(self, date: pendulum.Date) -> list[Entry]:
        return [deepcopy(entry) for entry in self._entries if entry["date"] == date]

    def inbox(self) -> list[Entry]:
        return [
            deepcopy(entry)
            for entry in self._entries
            if entry["tag"] == INBOX_TAG
            and entry["status"] == "todo"
            and entry["type"] != "weekly-review"
            and entry["parent_id"] is None
        ]

    def subtasks(self, project_id: EntityId) -> list[Entry]:
        return [
            deepcopy(entry) for entry in self._entries if entry["parent_id"] == project_id
        ]

    def __len__(self) -> int:
        return len(self._entries)

    # -- Mutations --

    def add(self, fields: EntryFields) -> Entry:
        entry = self.__new_entry(fields)
        self._entries.append(entry)
        self.__persist()
        logger.debug("added entry %s", entry["id"])

        if entry["content"] and self._feedback is not None:
            self._feedback.show("Entry created")
        return deepcopy(entry)

    def batch_add(self, fields_list: list[EntryFields]) -> list[Entry]:
        """
        Append entries from an external generator.

        Status is always forced to todo. Items are appended independently: one
        bad item does not roll back the ones before it.
        """
        added: list[Entry] = []
        for fields in fields_list:
            entry = self.__new_entry({**fields, "status": "todo"})
            self._entries.append(entry)
            added.append(entry)
        self.__persist()
        logger.debug("batch added %d entries", len(added))

        if self._feedback is not None:
            self._feedback.show(f"{len(added)} entries added")
        return deepcopy(added)

    def update(self, id: EntityId, changes: EntryFields) -> None:
        """
        Apply a partial update. Unknown ids are ignored.

        Completing a recurring todo (todo -> done) spawns its successor and turns
        the completed instance into a terminal, non-recurring record.
        """
        entry = self.__find(id)
        if entry is None:
            logger.debug("update of unknown entry %s ignored", id)
            return

        final_changes = {
            key: value
            for key, value in changes.items()
            if key not in _PROTECTED_FIELDS
        }
        if final_changes.get("priority", DEFAULT_PRIORITY) is None:
            final_changes["priority"] = DEFAULT_PRIORITY

        successor: Optional[Entry] = None
        is_completing = final_changes.get("status") == "done" and entry["status"] == "todo"
        if is_completing and entry["recurrence"] is not None and entry["date"] is not None:
            successor = self.__spawn_successor(entry)
            final_changes["recurrence"] = None
            final_changes["recurrence_end"] = None

        entry.update(cast(EntryFields, final_changes))
        entry["updated_at"] = self._clock()
        if successor is not None:
            self._entries.append(successor)
        self.__persist()
        logger.debug("updated entry %s", id)

    def remove(self, id: EntityId, mode: DeleteMode = "single") -> None:
        """
        Delete an entry; a project takes its subtasks with it.

        In "single" mode, deleting a pending occurrence of a recurring entry
        skips it: the next occurrence is created in its place. "series" mode
        deletes the occurrence without a successor, ending the series.
        """
        if mode not in ("single", "series"):
            raise ValueError(f"Unknown delete mode: {mode!r}")

        target = self.__find(id)
        if target is None:
            logger.debug("remove of unknown entry %s ignored", id)
            return

        if target["type"] == "project":
            deleted = [target] + [e for e in self._entries if e["parent_id"] == id]
        else:
            deleted = [target]
        deleted_ids = {entry["id"] for entry in deleted}

        successor: Optional[Entry] = None
        if (
            mode == "single"
            and target["recurrence"] is not None
            and target["date"] is not None
            and target["status"] == "todo"
        ):
            successor = self.__spawn_successor(target)

        self._entries = [e for e in self._entries if e["id"] not in deleted_ids]
        if successor is not None:
            self._entries.append(successor)

        self._last_deleted = deepcopy(deleted)
        self._deleted_at = self._clock()
        self.__persist()
        if self._undo_repository is not None:
            self._undo_repository.save(self._deleted_at, self._last_deleted)
        logger.debug("removed %d entries (%s mode)", len(deleted), mode)

        if self._feedback is not None:
            message = (
                f"{len(deleted)} items deleted" if len(deleted) > 1 else "Entry deleted"
            )
            self._feedback.show(message, action_label="Undo", action=self.undo_remove)

    def can_undo(self) -> bool:
        if not self._last_deleted or self._deleted_at is None:
            return False
        elapsed = (self._clock() - self._deleted_at).total_seconds()
        return elapsed <= self.undo_window_seconds

    def undo_remove(self) -> list[Entry]:
        """Restore the entries removed by the last delete, once, inside the window."""
        if not self.can_undo():
            return []

        existing_ids = {entry["id"] for entry in self._entries}
        restored = [e for e in self._last_deleted if e["id"] not in existing_ids]
        self._entries.extend(restored)

        self._last_deleted = []
        self._deleted_at = None
        self.__persist()
        if self._undo_repository is not None:
            self._undo_repository.clear()
        if self._feedback is not None:
            self._feedback.hide()
        logger.debug("restored %d entries", len(restored))
        return deepcopy(restored)

    def retag(self, old_name: str, new_name: str) -> int:
        if old_name == new_name:
            return 0
        changed = 0
        now = self._clock()
        for entry in self._entries:
            if entry["tag"] == old_name:
                entry["tag"] = new_name
                entry["updated_at"] = now
                changed += 1
        if changed:
            self.__persist()
        return changed

    def replace_all(self, entries: list[Entry]) -> None:
        self._entries = deepcopy(entries)
        for entry in self._entries:
            entry.pop("is_ghost", None)
        self.__persist()

    # -- Internals --

    def __find(self, id: EntityId) -> Optional[Entry]:
        for entry in self._entries:
            if entry["id"] == id:
                return entry
        return None

    def __new_entry(self, fields: EntryFields) -> Entry:
        entry = get_entry_template(self._clock())
        entry.update(
            cast(
                EntryFields,
                {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS},
            )
        )
        if not entry["priority"]:
            entry["priority"] = DEFAULT_PRIORITY
        return entry

    def __spawn_successor(self, source: Entry) -> Optional[Entry]:
        if source["date"] is None or source["recurrence"] is None:
            return None

        next_date = next_occurrence(source["date"], source["recurrence"])
        duplicate_exists = any(
            entry["content"] == source["content"]
            and entry["date"] == next_date
            and entry["tag"] == source["tag"]
            and entry["type"] == source["type"]
            for entry in self._entries
        )
        if duplicate_exists:
            logger.info("next occurrence of %s on %s already exists", source["id"], next_date)
            return None
        if source["recurrence_end"] is not None and next_date > source["recurrence_end"]:
            logger.info("series of %s ended on %s", source["id"], source["recurrence_end"])
            return None

        now = self._clock()
        successor = deepcopy(source)
        successor.pop("is_ghost", None)
        successor["id"] = generate_entity_id()
        successor["created_at"] = now
        successor["updated_at"] = now
        successor["date"] = next_date
        successor["status"] = "todo"
        logger.info("spawned %s for %s on %s", successor["id"], source["id"], next_date)
        return successor

    def __persist(self) -> None:
        if self._repository is not None:
            self._repository.save(self._entries)
