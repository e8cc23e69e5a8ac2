# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from zenbullet.service.ghost import entries_with_ghosts
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.parse import parse_date
from zenbullet.terminal.session import current_workspace, require_entry
from zenbullet.time import month_days, today_local, week_days
from zenbullet.view.calendar import month_view, week_view
from zenbullet.view.entry import entries_view
from zenbullet.view.util import entry_title

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateOption = Annotated[
    Optional[pendulum.Date],
    typer.Option(
        "--date",
        "-d",
        parser=parse_date,
        help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset",
    ),
]


@app.command("day, d")
def day(date: DateOption = None) -> None:
    workspace = current_workspace()
    target = date or today_local()
    entries = entries_with_ghosts(workspace.entries.all(), target, target)
    entries = [e for e in entries if e["type"] != "weekly-review"]
    entries_view(target.format("dddd YYYY-MM-DD"), entries, workspace.tags.all())


@app.command("week, w")
def week(date: DateOption = None) -> None:
    workspace = current_workspace()
    days = week_days(date or today_local(), workspace.starts_monday)
    entries = entries_with_ghosts(workspace.entries.all(), days[0], days[-1])
    week_view(days, entries, workspace.tags.all())


@app.command("month, m")
def month(date: DateOption = None) -> None:
    workspace = current_workspace()
    target = date or today_local()
    cells = month_days(target, workspace.starts_monday)
    days = [cell for cell in cells if cell is not None]
    entries = entries_with_ghosts(workspace.entries.all(), days[0], days[-1])
    entries = [e for e in entries if e["type"] != "weekly-review"]
    month_view(target, cells, entries, workspace.tags.all(), workspace.starts_monday)


@app.command("inbox, i")
def inbox() -> None:
    workspace = current_workspace()
    entries_view("inbox", workspace.entries.inbox(), workspace.tags.all())


@app.command("project, p", no_args_is_help=True)
def project(id: str) -> None:
    workspace = current_workspace()
    project_entry = require_entry(workspace, id)
    subtasks = workspace.entries.subtasks(project_entry["id"])
    entries_view(
        f"project: {entry_title(project_entry)}", subtasks, workspace.tags.all()
    )
