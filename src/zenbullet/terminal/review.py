# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from zenbullet.service.review import create_weekly_review, review_title, weekly_reviews
from zenbullet.terminal.custom_typer import AliasedTyperGroup
from zenbullet.terminal.parse import parse_date
from zenbullet.terminal.session import current_workspace
from zenbullet.time import today_local, week_number
from zenbullet.view.header import header
from zenbullet.view.util import entry_title, short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("create, c")
def create(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help="any day of the week"),
    ] = None,
) -> None:
    workspace = current_workspace()
    review = create_weekly_review(
        workspace.entries, date or today_local(), workspace.starts_monday
    )
    Console().print(f"[green]{review_title(review)}[/green] ({short_id(review)})")


@app.command("list, ls")
def list_reviews() -> None:
    workspace = current_workspace()
    header("weekly reviews")

    reviews_table = Table(box=box.SIMPLE)
    reviews_table.add_column("id")
    reviews_table.add_column("week")
    reviews_table.add_column("title")
    reviews_table.add_column("summary")

    for review in weekly_reviews(workspace.entries.all()):
        week = str(week_number(review["date"])) if review["date"] is not None else ""
        reviews_table.add_row(
            short_id(review), week, review_title(review), entry_title(review)
        )

    Console().print(reviews_table)
