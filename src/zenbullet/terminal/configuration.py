# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.session import current_workspace

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show() -> None:
    workspace = current_workspace()
    config = workspace.configuration.get_config()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("key")
    config_table.add_column("value")
    config_table.add_row("config path", str(workspace.config_path))
    config_table.add_row("data path", str(workspace.data_paths.root))
    for key, value in config.items():
        config_table.add_row(key, str(value))
    Console().print(config_table)


@app.command("set")
def set_config(
    start_week_on_monday: Annotated[
        Optional[bool],
        typer.Option("--monday/--sunday", help="first day of week views"),
    ] = None,
    undo_window_seconds: Annotated[
        Optional[float], typer.Option("--undo-window", min=0)
    ] = None,
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    show_header: Annotated[
        Optional[bool], typer.Option("--header/--no-header")
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level")] = None,
) -> None:
    workspace = current_workspace()
    workspace.configuration.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        start_week_on_monday=start_week_on_monday,
        undo_window_seconds=undo_window_seconds,
        show_header=show_header,
        log_level=log_level.upper() if log_level is not None else None,
    )
    Console().print("[green]Configuration saved[/green]")
