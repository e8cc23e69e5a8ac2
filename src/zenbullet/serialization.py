# SPDX-License-Identifier: MIT

"""
Conversion between in-memory entries/tags and their JSON-shaped documents.

The same camelCase shape is used for the local data files, the remote sync
document and manual export, so a backup from any of them can be read by the
others.
"""

from typing import Any, Optional, cast

from zenbullet import time
from zenbullet.model.entry import (
    DEFAULT_PRIORITY,
    ENTRY_STATUSES,
    ENTRY_TYPES,
    RECURRENCES,
    Entry,
    EntryFields,
)
from zenbullet.model.tag import INBOX_TAG, TAG_COLORS, Tag


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    serializable_entry: dict[str, Any] = {
        "id": entry["id"],
        "createdAt": time.datetime_to_iso_str(entry["created_at"]),
        "updatedAt": time.datetime_to_iso_str(entry["updated_at"]),
        "date": time.to_iso_date_optional(entry["date"]),
        "type": entry["type"],
        "content": entry["content"],
        "status": entry["status"],
        "tag": entry["tag"],
        "priority": entry["priority"],
    }
    # Optional fields are omitted rather than written as null
    if entry["recurrence"] is not None:
        serializable_entry["recurrence"] = entry["recurrence"]
    if entry["recurrence_end"] is not None:
        serializable_entry["recurrenceEnd"] = time.to_iso_date(entry["recurrence_end"])
    if entry["parent_id"] is not None:
        serializable_entry["parentId"] = entry["parent_id"]
    if entry["color"] is not None:
        serializable_entry["color"] = entry["color"]
    if entry["custom_title"] is not None:
        serializable_entry["customTitle"] = entry["custom_title"]
    if entry.get("is_ghost"):
        serializable_entry["isGhost"] = True
    return serializable_entry


def entry_from_dict(raw: Any) -> Entry:
    """
    Decode one entry document.

    Raises ValueError when a required field is missing or a field holds a value
    outside its vocabulary. `updatedAt` falls back to `createdAt`.
    """
    if not isinstance(raw, dict):
        raise ValueError("entry must be an object")

    entry_id = raw.get("id")
    if not isinstance(entry_id, str) or entry_id == "":
        raise ValueError("entry is missing an id")
    created_at_str = raw.get("createdAt")
    if not isinstance(created_at_str, str):
        raise ValueError(f"entry {entry_id} is missing createdAt")

    created_at = time.datetime_from_str(created_at_str)
    updated_at = time.datetime_from_str_optional(raw.get("updatedAt")) or created_at

    entry_type = raw.get("type", "task")
    if entry_type not in ENTRY_TYPES:
        raise ValueError(f"entry {entry_id} has unknown type {entry_type!r}")
    status = raw.get("status", "todo")
    if status not in ENTRY_STATUSES:
        raise ValueError(f"entry {entry_id} has unknown status {status!r}")
    recurrence = raw.get("recurrence")
    if recurrence is not None and recurrence not in RECURRENCES:
        raise ValueError(f"entry {entry_id} has unknown recurrence {recurrence!r}")
    color = raw.get("color")
    if color is not None and color not in TAG_COLORS:
        color = None

    priority = raw.get("priority")
    if not isinstance(priority, int) or isinstance(priority, bool) or priority == 0:
        priority = DEFAULT_PRIORITY

    deserialized_entry: Entry = {
        "id": entry_id,
        "created_at": created_at,
        "updated_at": updated_at,
        "date": time.date_from_iso_str_optional(raw.get("date")),
        "type": entry_type,
        "content": str(raw.get("content") or ""),
        "status": status,
        "tag": str(raw.get("tag") or INBOX_TAG),
        "recurrence": recurrence,
        "recurrence_end": time.date_from_iso_str_optional(raw.get("recurrenceEnd")),
        "priority": priority,
        "parent_id": cast(Optional[str], raw.get("parentId")),
        "color": color,
        "custom_title": cast(Optional[str], raw.get("customTitle")),
    }
    return deserialized_entry


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    serializable_tag: dict[str, Any] = {"name": tag["name"], "color": tag["color"]}
    if tag["icon"] is not None:
        serializable_tag["icon"] = tag["icon"]
    return serializable_tag


def tag_from_dict(raw: Any) -> Tag:
    if not isinstance(raw, dict):
        raise ValueError("tag must be an object")
    name = raw.get("name")
    if not isinstance(name, str) or name == "":
        raise ValueError("tag is missing a name")
    color = raw.get("color")
    if color not in TAG_COLORS:
        color = "stone"
    icon = raw.get("icon")
    return {"name": name, "color": color, "icon": icon if isinstance(icon, str) else None}


def entries_to_list(entries: list[Entry]) -> list[dict[str, Any]]:
    return [entry_to_dict(entry) for entry in entries]


def entries_from_list(raw_entries: list[Any]) -> list[Entry]:
    return [entry_from_dict(raw_entry) for raw_entry in raw_entries]


def tags_to_list(tags: list[Tag]) -> list[dict[str, Any]]:
    return [tag_to_dict(tag) for tag in tags]


def tags_from_list(raw_tags: list[Any]) -> list[Tag]:
    return [tag_from_dict(raw_tag) for raw_tag in raw_tags]


def entry_fields_from_dict(raw: Any) -> EntryFields:
    """
    Decode a partial entry produced by an external generator.

    Identity and timestamps are ignored; the store assigns them. Unknown or
    invalid values are dropped so the store defaults apply.
    """
    if not isinstance(raw, dict):
        raise ValueError("entry must be an object")

    fields: EntryFields = {"content": str(raw.get("content") or "")}
    if raw.get("type") in ENTRY_TYPES:
        fields["type"] = raw["type"]
    if isinstance(raw.get("tag"), str) and raw["tag"]:
        fields["tag"] = raw["tag"]
    if isinstance(raw.get("date"), str):
        fields["date"] = time.date_from_iso_str(raw["date"])
    if raw.get("recurrence") in RECURRENCES:
        fields["recurrence"] = raw["recurrence"]
    if isinstance(raw.get("recurrenceEnd"), str):
        fields["recurrence_end"] = time.date_from_iso_str(raw["recurrenceEnd"])
    priority = raw.get("priority")
    if isinstance(priority, int) and not isinstance(priority, bool):
        fields["priority"] = priority
    if isinstance(raw.get("parentId"), str):
        fields["parent_id"] = raw["parentId"]
    if raw.get("color") in TAG_COLORS:
        fields["color"] = raw["color"]
    return fields
