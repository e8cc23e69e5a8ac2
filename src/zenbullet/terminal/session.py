# SPDX-License-Identifier: MIT

import typer
from rich.console import Console

from zenbullet.model.entry import Entry
from zenbullet.state import get_config_dir
from zenbullet.workspace import Workspace, open_workspace


def current_workspace() -> Workspace:
    return open_workspace(get_config_dir())


def require_entry(workspace: Workspace, id: str) -> Entry:
    """Resolve an id or unique id prefix, exiting with an error if none matches."""
    entry = workspace.entries.find(id)
    if entry is None:
        Console().print(f"[red]No entry matches '{id}'[/red]")
        raise typer.Exit(1)
    return entry
