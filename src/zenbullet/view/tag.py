# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from zenbullet.model.entry import Entry
from zenbullet.model.tag import INBOX_TAG, Tag
from zenbullet.view.header import header
from zenbullet.view.util import format_tag


def tags_view(tags: list[Tag], entries: list[Entry]) -> None:
    header("collections")

    tags_table = Table(box=box.SIMPLE)
    tags_table.add_column("#")
    tags_table.add_column("tag")
    tags_table.add_column("icon")
    tags_table.add_column("open")

    def open_count(name: str) -> str:
        return str(
            sum(1 for e in entries if e["tag"] == name and e["status"] == "todo")
        )

    tags_table.add_row("", format_tag(INBOX_TAG, tags), "Inbox", open_count(INBOX_TAG))
    for position, tag in enumerate(tags, start=1):
        tags_table.add_row(
            str(position),
            format_tag(tag["name"], tags),
            tag["icon"] or "",
            open_count(tag["name"]),
        )

    console = Console()
    console.print(tags_table)
