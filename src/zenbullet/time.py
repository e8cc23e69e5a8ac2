# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum

from zenbullet.model.entry import Recurrence


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime, exact=True)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Not a timestamp: {datetime!r}")
    return parsed


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def to_iso_date(date: datetime.date) -> str:
    """Format a date as 'YYYY-MM-DD' from its own calendar fields.

    No timezone conversion happens here: a DateTime is formatted in whatever
    zone it already carries, so a local evening never turns into tomorrow.
    """
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def to_iso_date_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return to_iso_date(date)


def date_from_iso_str(date_str: str) -> pendulum.Date:
    parsed = pendulum.parse(date_str, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"Not a calendar date: {date_str!r}")


def date_from_iso_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_iso_str(date_str)


def add_days(date: pendulum.Date, days: int) -> pendulum.Date:
    return date.add(days=days)


def start_of_week(date: pendulum.Date, starts_monday: bool = False) -> pendulum.Date:
    # weekday(): Monday == 0 ... Sunday == 6
    if starts_monday:
        offset = date.weekday()
    else:
        offset = (date.weekday() + 1) % 7
    return date.subtract(days=offset)


def week_days(date: pendulum.Date, starts_monday: bool = False) -> list[pendulum.Date]:
    start = start_of_week(date, starts_monday)
    return [add_days(start, i) for i in range(7)]


def month_days(
    date: pendulum.Date, starts_monday: bool = False
) -> list[Optional[pendulum.Date]]:
    """
    Return the cells of a 7-column month grid.

    Cells before the first and after the last day of the month are None so the
    result length is always a multiple of 7.
    """
    first_day = pendulum.date(date.year, date.month, 1)
    if starts_monday:
        padding = first_day.weekday()
    else:
        padding = (first_day.weekday() + 1) % 7

    days: list[Optional[pendulum.Date]] = [None] * padding
    days += [add_days(first_day, i) for i in range(first_day.days_in_month)]

    trailing = (-len(days)) % 7
    days += [None] * trailing
    return days


def week_number(date: datetime.date) -> int:
    return date.isocalendar()[1]


def next_occurrence(date: pendulum.Date, recurrence: Recurrence) -> pendulum.Date:
    """
    Compute the next day a recurring entry falls on.

    Monthly recurrence uses pendulum's month addition, which clamps to the last
    day of a shorter month (Jan 31 -> Feb 29 in a leap year). This deliberately
    differs from roll-over arithmetic, where Jan 31 would land on Mar 2.
    """
    match recurrence:
        case "daily":
            return date.add(days=1)
        case "weekly":
            return date.add(days=7)
        case "monthly":
            return cast(pendulum.Date, date.add(months=1))
    raise ValueError(f"Unknown recurrence: {recurrence!r}")
