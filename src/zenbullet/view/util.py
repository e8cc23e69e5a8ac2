# SPDX-License-Identifier: MIT

from zenbullet.color import (
    COMPLETED_ENTRY_COLOR,
    GHOST_ENTRY_COLOR,
    INBOX_COLOR,
    PRIORITY_COLORS,
    rich_color,
)
from zenbullet.model.entry import Entry
from zenbullet.model.tag import INBOX_TAG, Tag
from zenbullet.service.tag import resolve_tag
from zenbullet.time import to_iso_date

SHORT_ID_LENGTH = 8


def short_id(entry: Entry) -> str:
    if entry.get("is_ghost"):
        return "~"
    return entry["id"][:SHORT_ID_LENGTH]


def entry_title(entry: Entry) -> str:
    """First line of the content; the rest is the notes body."""
    return entry["content"].split("\n", 1)[0].strip()


def entry_notes(entry: Entry) -> str:
    parts = entry["content"].split("\n", 1)
    return parts[1].strip() if len(parts) > 1 else ""


def entry_state(entry: Entry) -> str:
    """
    Bullet-journal signifier for an entry.

    Returns:
        "X" done, "/" canceled, "o" event, "-" note, "P" project, "R" review,
        "." open task
    """
    if entry["status"] == "done":
        return "X"
    if entry["status"] == "canceled":
        return "/"
    match entry["type"]:
        case "event":
            return "o"
        case "note":
            return "-"
        case "project":
            return "P"
        case "weekly-review":
            return "R"
    return "."


def priority_label(priority: int) -> str:
    return "!" * max(1, min(priority, 4))


def format_priority(priority: int) -> str:
    color = PRIORITY_COLORS.get(priority, PRIORITY_COLORS[1])
    return f"[{color}]{priority_label(priority)}[/{color}]"


def format_tag(name: str, tags: list[Tag]) -> str:
    if name == INBOX_TAG:
        return f"[{INBOX_COLOR}]{INBOX_TAG}[/{INBOX_COLOR}]"
    tag = resolve_tag(name, tags)
    color = rich_color(tag["color"])
    # Dangling names are shown as Inbox
    return f"[{color}]{tag['name']}[/{color}]"


def format_date(entry: Entry) -> str:
    if entry["date"] is None:
        return ""
    return to_iso_date(entry["date"])


def row_style(entry: Entry) -> str:
    if entry.get("is_ghost"):
        return GHOST_ENTRY_COLOR
    if entry["status"] != "todo":
        return COMPLETED_ENTRY_COLOR
    return ""
