# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Any, Optional

from zenbullet import serialization
from zenbullet.errors import ImportRejectedError
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.tag import TagStore

logger = logging.getLogger(__name__)


def export_data(entry_store: EntryStore, tag_store: TagStore) -> dict[str, Any]:
    return {
        "tags": serialization.tags_to_list(tag_store.all()),
        "entries": serialization.entries_to_list(entry_store.all()),
    }


def export_to_path(entry_store: EntryStore, tag_store: TagStore, path: Path) -> None:
    data = export_data(entry_store, tag_store)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False))
    logger.info("exported %d entries to %s", len(data["entries"]), path)


def import_data(
    entry_store: EntryStore,
    tag_store: TagStore,
    payload: Any,
    feedback: Optional[FeedbackChannel] = None,
) -> tuple[int, int]:
    """
    Replace all local entries and tags with a backup payload.

    The payload is fully decoded before anything is applied; a malformed
    payload raises ImportRejectedError and leaves local state as it was.
    Returns the number of entries and tags imported.
    """
    if not isinstance(payload, dict):
        raise ImportRejectedError("Invalid data format: expected an object")
    raw_entries = payload.get("entries")
    raw_tags = payload.get("tags")
    if not isinstance(raw_entries, list) or not isinstance(raw_tags, list):
        raise ImportRejectedError("Invalid data format: Missing entries or tags array.")

    try:
        entries = serialization.entries_from_list(raw_entries)
        tags = serialization.tags_from_list(raw_tags)
    except (ValueError, TypeError) as e:
        raise ImportRejectedError(f"Invalid data format: {e}") from e

    entry_store.replace_all(entries)
    tag_store.replace_all(tags)
    logger.info("imported %d entries and %d tags", len(entries), len(tags))
    if feedback is not None:
        feedback.show("Data imported successfully")
    return len(entries), len(tags)


def import_from_path(
    entry_store: EntryStore,
    tag_store: TagStore,
    path: Path,
    feedback: Optional[FeedbackChannel] = None,
) -> tuple[int, int]:
    try:
        payload = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        raise ImportRejectedError(f"Error parsing JSON file: {e}") from e
    return import_data(entry_store, tag_store, payload, feedback)
