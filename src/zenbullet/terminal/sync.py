# SPDX-License-Identifier: MIT

from typing import Annotated, Callable, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from zenbullet.errors import SyncError
from zenbullet.model.sync import SyncOutcome
from zenbullet.remote.webdav import WebDavBlobStore
from zenbullet.service.sync import SyncReconciler, SyncResult
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.session import current_workspace
from zenbullet.time import datetime_to_display_local_str
from zenbullet.view.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

OUTCOME_MESSAGES = {
    SyncOutcome.CLOUD_UPDATED: "Pulled newer data from the cloud",
    SyncOutcome.LOCAL_UPDATED: "Cloud updated with local changes",
    SyncOutcome.NO_CHANGE: "Already up to date",
}


def _run(operation: Callable[[SyncReconciler], SyncResult]) -> None:
    workspace = current_workspace()
    console = Console()
    try:
        reconciler = workspace.reconciler()
    except SyncError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    result = operation(reconciler)
    if not result.ok:
        console.print(f"[red]Sync failed: {result.error}[/red]")
        raise typer.Exit(1)
    if result.outcome is not None:
        console.print(f"[green]{OUTCOME_MESSAGES[result.outcome]}[/green]")


@app.command("run, r")
def run() -> None:
    """Merge with the remote copy and upload the result."""
    _run(lambda reconciler: reconciler.reconcile())


@app.command("upload, up")
def upload() -> None:
    """Overwrite the remote copy with local data."""
    _run(lambda reconciler: reconciler.upload())


@app.command("download, down")
def download() -> None:
    """Merge the remote copy into local data without uploading."""
    _run(lambda reconciler: reconciler.download())


@app.command("configure, c")
def configure(
    url: Annotated[Optional[str], typer.Option("--url", help="WebDAV folder URL")] = None,
    username: Annotated[Optional[str], typer.Option("--username", "-u")] = None,
    password: Annotated[
        Optional[str], typer.Option("--password", "-p", hide_input=True)
    ] = None,
    filename: Annotated[Optional[str], typer.Option("--filename", "-f")] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout")] = None,
    check: Annotated[
        bool, typer.Option("--check", help="test the connection after saving")
    ] = False,
) -> None:
    workspace = current_workspace()
    workspace.sync_settings.update_settings(
        url=url, username=username, password=password, filename=filename, timeout=timeout
    )

    console = Console()
    settings = workspace.sync_settings.get_settings()
    if check:
        if not settings["url"]:
            console.print("[red]WebDAV not configured[/red]")
            raise typer.Exit(1)
        store = WebDavBlobStore(
            settings["url"],
            settings["username"] or "",
            settings["password"] or "",
            timeout=settings["timeout"],
        )
        if not store.check_connection():
            console.print("[red]Connection failed[/red]")
            raise typer.Exit(1)
        console.print("[green]Connection OK[/green]")
    else:
        console.print("[green]Sync settings saved[/green]")


@app.command("status, st")
def status() -> None:
    workspace = current_workspace()
    settings = workspace.sync_settings.get_settings()
    last_sync = workspace.sync_settings.get_last_sync()

    header("sync")
    status_table = Table(box=box.SIMPLE, show_header=False)
    status_table.add_column("field")
    status_table.add_column("value")
    status_table.add_row("url", settings["url"] or "[red]not configured[/red]")
    status_table.add_row("username", settings["username"] or "")
    status_table.add_row("password", "***" if settings["password"] else "")
    status_table.add_row("filename", settings["filename"])
    status_table.add_row(
        "last sync",
        datetime_to_display_local_str(last_sync) if last_sync is not None else "never",
    )
    Console().print(status_table)
