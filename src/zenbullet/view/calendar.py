# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from zenbullet.model.entry import Entry
from zenbullet.model.tag import Tag
from zenbullet.service.tag import resolve_tag
from zenbullet.color import rich_color
from zenbullet.view.header import header
from zenbullet.view.util import entry_state, entry_title, row_style

# Longest title shown inside a month cell
MONTH_CELL_TITLE_WIDTH = 14


def _day_entries(entries: list[Entry], day: pendulum.Date) -> list[Entry]:
    return [entry for entry in entries if entry["date"] == day]


def _entry_line(entry: Entry, tags: list[Tag], width: Optional[int] = None) -> Text:
    title = entry_title(entry)
    if width is not None and len(title) > width:
        title = title[: width - 1] + "…"
    style = row_style(entry) or rich_color(resolve_tag(entry["tag"], tags)["color"])
    return Text(f"{entry_state(entry)} {title}", style=style)


def week_view(days: list[pendulum.Date], entries: list[Entry], tags: list[Tag]) -> None:
    header(f"week of {days[0].format('YYYY-MM-DD')}")

    week_table = Table(box=box.SIMPLE, show_header=False)
    week_table.add_column("day", no_wrap=True)
    week_table.add_column("entries")

    today = pendulum.today("local").date()
    for day in days:
        label = day.format("ddd MMM DD")
        if day == today:
            label = f"[bold]{label}[/bold]"
        lines = Text("\n").join(
            _entry_line(entry, tags) for entry in _day_entries(entries, day)
        )
        week_table.add_row(label, lines)

    console = Console()
    console.print(week_table)


def month_view(
    month: pendulum.Date,
    cells: list[Optional[pendulum.Date]],
    entries: list[Entry],
    tags: list[Tag],
    starts_monday: bool = False,
) -> None:
    header(month.format("MMMM YYYY"))

    weekday_names = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    if starts_monday:
        weekday_names = weekday_names[1:] + weekday_names[:1]

    month_table = Table(box=box.SQUARE, show_lines=True)
    for name in weekday_names:
        month_table.add_column(name, width=MONTH_CELL_TITLE_WIDTH + 2)

    for week_start in range(0, len(cells), 7):
        row = []
        for cell in cells[week_start : week_start + 7]:
            if cell is None:
                row.append(Text(""))
                continue
            text = Text(str(cell.day), style="bold")
            for entry in _day_entries(entries, cell):
                text.append("\n")
                text.append_text(_entry_line(entry, tags, MONTH_CELL_TITLE_WIDTH))
            row.append(text)
        month_table.add_row(*row)

    console = Console()
    console.print(month_table)
