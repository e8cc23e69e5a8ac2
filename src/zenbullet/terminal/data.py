# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from zenbullet.errors import ImportRejectedError
from zenbullet.service.transfer import export_to_path, import_from_path
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.session import current_workspace
from zenbullet.time import to_iso_date, today_local
from zenbullet.view.feedback import show_notice

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("export, e")
def export(
    path: Annotated[Optional[Path], typer.Argument(help="output JSON file")] = None,
) -> None:
    workspace = current_workspace()
    target = path or Path(f"zenbullet-backup-{to_iso_date(today_local())}.json")
    export_to_path(workspace.entries, workspace.tags, target)
    Console().print(f"[green]Exported to {target}[/green]")


@app.command("import, i", no_args_is_help=True)
def import_(
    path: Path,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="overwrite without asking")
    ] = False,
) -> None:
    """Replace all local data with a backup file."""
    workspace = current_workspace()
    if not yes:
        typer.confirm("This will overwrite your current data. Continue?", abort=True)
    try:
        entry_count, tag_count = import_from_path(
            workspace.entries, workspace.tags, path, workspace.feedback
        )
    except ImportRejectedError as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    Console().print(f"{entry_count} entries, {tag_count} collections")
    show_notice(workspace.feedback)
