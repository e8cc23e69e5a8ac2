# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from zenbullet.time import add_days, date_from_iso_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a calendar day.

    Accepts YYYY-MM-DD, today/t, tomorrow/o, yesterday/y, or a day offset
    relative to today such as 1 or -1.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_iso_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    if re.match(r"^-?\d+$", date):
        return add_days(today_local(), int(date))

    if date in ("today", "t"):
        return today_local()
    if date in ("tomorrow", "o"):
        return add_days(today_local(), 1)
    if date in ("yesterday", "y"):
        return add_days(today_local(), -1)
    raise typer.BadParameter("Incorrect date format")
