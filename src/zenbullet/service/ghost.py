# SPDX-License-Identifier: MIT

from copy import copy

import pendulum

from zenbullet.model.entity_id import ghost_entity_id
from zenbullet.model.entry import Entry
from zenbullet.time import next_occurrence

# Bounds the walk for long ranges (e.g. a daily series over several years).
# Occurrences past the cap are simply not shown.
GHOST_ITERATION_CAP = 50


def project_ghost_entries(
    entries: list[Entry], range_start: pendulum.Date, range_end: pendulum.Date
) -> list[Entry]:
    """
    Derive display-only future occurrences of recurring entries.

    Only pending, dated, recurring entries are projected. The walk starts at the
    occurrence after the entry's own date. Output depends only on the inputs, and
    each ghost id is 'ghost-<sourceId>-<date>', so repeated calls yield identical
    lists.
    """
    ghosts: list[Entry] = []

    for entry in entries:
        recurrence = entry["recurrence"]
        source_date = entry["date"]
        if recurrence is None or source_date is None or entry["status"] != "todo":
            continue
        if entry.get("is_ghost"):
            continue

        cursor = next_occurrence(source_date, recurrence)
        steps = 0
        while cursor <= range_end and steps < GHOST_ITERATION_CAP:
            if entry["recurrence_end"] is not None and cursor > entry["recurrence_end"]:
                break
            if cursor >= range_start:
                ghost = copy(entry)
                ghost["id"] = ghost_entity_id(entry["id"], cursor)
                ghost["date"] = cursor
                ghost["status"] = "todo"
                ghost["is_ghost"] = True
                ghosts.append(ghost)
            cursor = next_occurrence(cursor, recurrence)
            steps += 1

    return ghosts


def entries_with_ghosts(
    entries: list[Entry], range_start: pendulum.Date, range_end: pendulum.Date
) -> list[Entry]:
    """Committed entries dated inside the range plus their projections, by date."""
    committed = [
        entry
        for entry in entries
        if entry["date"] is not None and range_start <= entry["date"] <= range_end
    ]
    combined = committed + project_ghost_entries(entries, range_start, range_end)
    return sorted(combined, key=lambda entry: entry["date"] or range_start)
