# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from zenbullet import state as app_state
from zenbullet.configuration import CONFIG_DIR_ENV_VAR
from zenbullet.diagnostics import configure_logging
from zenbullet.terminal import configuration, data, entry, review, sync, tag, view
from zenbullet.terminal.custom_typer import OrderedAliasedTyperGroup
from zenbullet.terminal.session import current_workspace
from zenbullet.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="zenbullet - bullet journal in the CLI",
    no_args_is_help=True,
)
app.add_typer(entry.app, name="entry, e", help="Tasks, events, notes and projects")
app.add_typer(tag.app, name="tag, t", help="Collections")
app.add_typer(view.app, name="view, v", help="Day, week, month and project views")
app.add_typer(review.app, name="review, r", help="Weekly reviews")
app.add_typer(sync.app, name="sync, s", help="WebDAV synchronization")
app.add_typer(data.app, name="data, d", help="Backup export and import")
app.add_typer(configuration.app, name="config, c", help="Preferences")


@app.callback()
def main_callback(
    config_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--config-dir",
            envvar=CONFIG_DIR_ENV_VAR,
            help="Use a different configuration directory",
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", "-nh", help="Suppress header output in reports"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")
    ] = False,
) -> None:
    """
    zenbullet - bullet journal in the CLI

    Global options that apply to all commands.
    """
    app_state.set_config_dir(config_dir)

    config = current_workspace().configuration.get_config()
    configure_logging("DEBUG" if verbose else config["log_level"])
    view_state.set_show_header(config["show_header"] and not no_header)


def run() -> None:
    app()
