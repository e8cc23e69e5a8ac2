# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from zenbullet.errors import TagConflictError
from zenbullet.model.tag import TagColor
from zenbullet.terminal.completion import complete_tag
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.session import current_workspace
from zenbullet.terminal.validate import validate_color
from zenbullet.view.feedback import show_notice
from zenbullet.view.tag import tags_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    color: Annotated[
        str, typer.Option("--color", "-c", callback=validate_color)
    ] = "stone",
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
) -> None:
    workspace = current_workspace()
    try:
        workspace.tags.add({"name": name, "color": cast(TagColor, color), "icon": icon})
    except TagConflictError as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    show_notice(workspace.feedback)


@app.command("list, ls")
def list_tags() -> None:
    workspace = current_workspace()
    tags_view(workspace.tags.all(), workspace.entries.all())


@app.command("rename, mv", no_args_is_help=True)
def rename(
    old_name: Annotated[str, typer.Argument(autocompletion=complete_tag)],
    new_name: str,
) -> None:
    workspace = current_workspace()
    console = Console()
    try:
        moved = workspace.tags.rename(old_name, new_name)
    except TagConflictError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Renamed '{old_name}' to '{new_name}' ({moved} entries)[/green]")


@app.command("remove, rm", no_args_is_help=True)
def remove(name: Annotated[str, typer.Argument(autocompletion=complete_tag)]) -> None:
    workspace = current_workspace()
    try:
        workspace.tags.remove(name)
    except TagConflictError as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    show_notice(workspace.feedback)


@app.command("reorder, ro", no_args_is_help=True)
def reorder(names: list[str]) -> None:
    """Move the named collections to the front, in the order given."""
    workspace = current_workspace()
    tags = workspace.tags.all()
    known = {tag["name"]: tag for tag in tags}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise typer.BadParameter(f"Unknown collections: {', '.join(unknown)}")

    ordered = [known[name] for name in dict.fromkeys(names)]
    ordered += [tag for tag in tags if tag["name"] not in names]
    workspace.tags.reorder(ordered)
    tags_view(workspace.tags.all(), workspace.entries.all())
