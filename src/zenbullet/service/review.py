# SPDX-License-Identifier: MIT

import pendulum

from zenbullet.model.entry import Entry
from zenbullet.model.tag import INBOX_TAG
from zenbullet.service.entry import EntryStore
from zenbullet.time import start_of_week, to_iso_date


def create_weekly_review(
    entry_store: EntryStore, day: pendulum.Date, starts_monday: bool = False
) -> Entry:
    """Return the review of the week containing `day`, creating it if needed."""
    week_start = start_of_week(day, starts_monday)
    for entry in entry_store.all():
        if entry["type"] == "weekly-review" and entry["date"] == week_start:
            return entry
    return entry_store.add(
        {
            "date": week_start,
            "type": "weekly-review",
            "content": "",
            "status": "todo",
            "tag": INBOX_TAG,
            "priority": 2,
        }
    )


def weekly_reviews(entries: list[Entry]) -> list[Entry]:
    reviews = [entry for entry in entries if entry["type"] == "weekly-review"]
    return sorted(
        reviews,
        key=lambda entry: to_iso_date(entry["date"]) if entry["date"] else "",
        reverse=True,
    )


def review_title(entry: Entry) -> str:
    if entry["custom_title"]:
        return entry["custom_title"]
    date = to_iso_date(entry["date"]) if entry["date"] is not None else "?"
    return f"Week of {date}"
