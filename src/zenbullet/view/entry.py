# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from zenbullet.model.entry import Entry
from zenbullet.model.tag import Tag
from zenbullet.time import datetime_to_display_local_str, to_iso_date_optional
from zenbullet.view.header import header
from zenbullet.view.util import (
    entry_notes,
    entry_state,
    entry_title,
    format_date,
    format_priority,
    format_tag,
    row_style,
    short_id,
)


def entries_view(
    report_name: str,
    entries: list[Entry],
    tags: list[Tag],
    columns: list[str] = ["id", "state", "date", "priority", "tag", "title"],
) -> None:
    header(report_name)

    entries_table = Table(box=box.SIMPLE)
    for column in columns:
        entries_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = short_id(entry)
            elif column == "state":
                column_value = entry_state(entry)
            elif column == "date":
                column_value = format_date(entry)
            elif column == "priority":
                column_value = format_priority(entry["priority"])
            elif column == "tag":
                column_value = format_tag(entry["tag"], tags)
            elif column == "title":
                column_value = entry_title(entry)
            elif column == "type":
                column_value = entry["type"]
            elif column == "recurrence":
                column_value = entry["recurrence"] or ""
            row.append(column_value)
        entries_table.add_row(*row, style=row_style(entry))

    console = Console()
    console.print(entries_table)


def single_entry_view(entry: Entry, tags: list[Tag]) -> None:
    header("entry")

    entry_table = Table(box=box.SIMPLE, show_header=False)
    entry_table.add_column("field")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("type", entry["type"])
    entry_table.add_row("state", entry_state(entry))
    entry_table.add_row("title", entry_title(entry))
    notes = entry_notes(entry)
    if notes:
        entry_table.add_row("notes", notes)
    entry_table.add_row("date", format_date(entry) or "inbox")
    entry_table.add_row("tag", format_tag(entry["tag"], tags))
    entry_table.add_row("priority", format_priority(entry["priority"]))
    if entry["recurrence"] is not None:
        until = to_iso_date_optional(entry["recurrence_end"])
        entry_table.add_row(
            "recurrence",
            entry["recurrence"] + (f" until {until}" if until else ""),
        )
    if entry["parent_id"] is not None:
        entry_table.add_row("project", entry["parent_id"])
    if entry["custom_title"] is not None:
        entry_table.add_row("custom title", entry["custom_title"])
    entry_table.add_row("created", datetime_to_display_local_str(entry["created_at"]))
    entry_table.add_row("updated", datetime_to_display_local_str(entry["updated_at"]))

    console = Console()
    console.print(entry_table)
