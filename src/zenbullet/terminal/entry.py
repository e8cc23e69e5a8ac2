# SPDX-License-Identifier: MIT

import json
from pathlib import Path
from typing import Annotated, Optional, cast

import pendulum
import typer
from rich.console import Console

from zenbullet import serialization
from zenbullet.model.entry import EntryFields, EntryStatus, EntryType, Recurrence
from zenbullet.model.tag import INBOX_TAG, TagColor
from zenbullet.terminal.completion import complete_tag
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.parse import parse_date
from zenbullet.terminal.session import current_workspace, require_entry
from zenbullet.terminal.validate import (
    validate_color,
    validate_entry_type,
    validate_priority,
    validate_recurrence,
)
from zenbullet.view.entry import entries_view, single_entry_view
from zenbullet.view.feedback import show_notice
from zenbullet.workspace import Workspace

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _check_tag(workspace: Workspace, tag: Optional[str]) -> None:
    if tag is not None and tag != INBOX_TAG and not workspace.tags.exists(tag):
        raise typer.BadParameter(f"Unknown collection '{tag}'")


@app.command("add, a", no_args_is_help=True)
def add(
    content: str,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    entry_type: Annotated[
        str,
        typer.Option("--type", "-y", callback=validate_entry_type),
    ] = "task",
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", "-t", autocompletion=complete_tag),
    ] = None,
    priority: Annotated[
        Optional[int],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: 1-4 (1=low, 4=critical)",
        ),
    ] = None,
    recurrence: Annotated[
        Optional[str],
        typer.Option(
            "--repeat",
            "-r",
            callback=validate_recurrence,
            help="valid input: daily, weekly, monthly",
        ),
    ] = None,
    until: Annotated[
        Optional[pendulum.Date],
        typer.Option("--until", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    parent: Annotated[
        Optional[str],
        typer.Option("--project", "-j", help="id of the parent project"),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", callback=validate_color),
    ] = None,
) -> None:
    workspace = current_workspace()
    _check_tag(workspace, tag)

    fields: EntryFields = {
        "content": content.replace("\\n", "\n"),
        "type": cast(EntryType, entry_type),
        "date": date,
        "tag": tag or INBOX_TAG,
        "priority": priority,
        "recurrence": cast(Optional[Recurrence], recurrence),
        "recurrence_end": until,
        "color": cast(Optional[TagColor], color),
    }
    if parent is not None:
        project = require_entry(workspace, parent)
        if project["type"] != "project":
            raise typer.BadParameter(f"'{parent}' is not a project")
        fields["parent_id"] = project["id"]

    entry = workspace.entries.add(fields)
    single_entry_view(entry, workspace.tags.all())
    show_notice(workspace.feedback)


@app.command("list, ls")
def list_entries(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", "-t", autocompletion=complete_tag),
    ] = None,
    include_closed: Annotated[
        bool, typer.Option("--all", "-a", help="include done and canceled entries")
    ] = False,
) -> None:
    workspace = current_workspace()
    entries = workspace.entries.all()
    if date is not None:
        entries = [e for e in entries if e["date"] == date]
    if tag is not None:
        entries = [e for e in entries if e["tag"] == tag]
    if not include_closed:
        entries = [e for e in entries if e["status"] == "todo"]
    entries = [e for e in entries if e["type"] != "weekly-review"]
    entries.sort(key=lambda e: (e["date"] is None, e["date"] or 0, -e["priority"]))
    entries_view("entries", entries, workspace.tags.all())


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    workspace = current_workspace()
    entry = require_entry(workspace, id)
    single_entry_view(entry, workspace.tags.all())


def _set_status(id: str, status: EntryStatus) -> None:
    workspace = current_workspace()
    entry = require_entry(workspace, id)
    before = {e["id"] for e in workspace.entries.all()}
    workspace.entries.update(entry["id"], {"status": status})

    console = Console()
    for spawned in workspace.entries.all():
        if spawned["id"] not in before and spawned["date"] is not None:
            console.print(
                f"[green]Next occurrence on {spawned['date'].format('YYYY-MM-DD')}[/green]"
            )
    updated = workspace.entries.get(entry["id"])
    if updated is not None:
        single_entry_view(updated, workspace.tags.all())


@app.command("done, x", no_args_is_help=True)
def done(id: str) -> None:
    _set_status(id, "done")


@app.command("undone, o", no_args_is_help=True)
def undone(id: str) -> None:
    _set_status(id, "todo")


@app.command("cancel, c", no_args_is_help=True)
def cancel(id: str) -> None:
    _set_status(id, "canceled")


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    content: Annotated[Optional[str], typer.Option("--content", "-n")] = None,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    remove_date: Annotated[
        bool, typer.Option("--remove-date", "-rd", help="move back to the inbox")
    ] = False,
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", "-t", autocompletion=complete_tag),
    ] = None,
    priority: Annotated[
        Optional[int],
        typer.Option("--priority", "-p", callback=validate_priority),
    ] = None,
    recurrence: Annotated[
        Optional[str],
        typer.Option("--repeat", "-r", callback=validate_recurrence),
    ] = None,
    remove_recurrence: Annotated[
        bool, typer.Option("--remove-repeat", "-rr")
    ] = False,
    until: Annotated[
        Optional[pendulum.Date],
        typer.Option("--until", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    remove_until: Annotated[bool, typer.Option("--remove-until", "-ru")] = False,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", callback=validate_color),
    ] = None,
    custom_title: Annotated[
        Optional[str], typer.Option("--title", help="weekly review header")
    ] = None,
) -> None:
    workspace = current_workspace()
    entry = require_entry(workspace, id)
    _check_tag(workspace, tag)

    changes: EntryFields = {}
    if content is not None:
        changes["content"] = content.replace("\\n", "\n")
    if date is not None:
        changes["date"] = date
    if remove_date:
        changes["date"] = None
    if tag is not None:
        changes["tag"] = tag
    if priority is not None:
        changes["priority"] = priority
    if recurrence is not None:
        changes["recurrence"] = cast(Recurrence, recurrence)
    if remove_recurrence:
        changes["recurrence"] = None
        changes["recurrence_end"] = None
    if until is not None:
        changes["recurrence_end"] = until
    if remove_until:
        changes["recurrence_end"] = None
    if color is not None:
        changes["color"] = cast(TagColor, color)
    if custom_title is not None:
        changes["custom_title"] = custom_title

    workspace.entries.update(entry["id"], changes)
    updated = workspace.entries.get(entry["id"])
    if updated is not None:
        single_entry_view(updated, workspace.tags.all())


@app.command("delete, rm", no_args_is_help=True)
def delete(
    id: str,
    series: Annotated[
        bool,
        typer.Option(
            "--series",
            help="end a recurring series instead of skipping to the next occurrence",
        ),
    ] = False,
) -> None:
    workspace = current_workspace()
    entry = require_entry(workspace, id)
    workspace.entries.remove(entry["id"], "series" if series else "single")
    show_notice(workspace.feedback)


@app.command("undo, u")
def undo() -> None:
    workspace = current_workspace()
    console = Console()
    restored = workspace.entries.undo_remove()
    if not restored:
        console.print("[red]Nothing to undo[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Restored {len(restored)} entries[/green]")


@app.command("batch, b", no_args_is_help=True)
def batch(path: Path) -> None:
    """Add entries from a JSON array of partial entries."""
    workspace = current_workspace()
    console = Console()
    try:
        raw_entries = json.loads(path.read_text())
        if not isinstance(raw_entries, list):
            raise ValueError("expected a JSON array")
        fields_list = [serialization.entry_fields_from_dict(raw) for raw in raw_entries]
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(1)

    added = workspace.entries.batch_add(fields_list)
    entries_view("added", added, workspace.tags.all())
    show_notice(workspace.feedback)
