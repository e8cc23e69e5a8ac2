# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from zenbullet.model.entry import ENTRY_TYPES, MAX_PRIORITY, MIN_PRIORITY, RECURRENCES
from zenbullet.model.tag import TAG_COLORS


def validate_priority(priority: Optional[int]) -> Optional[int]:
    if priority is None:
        return None
    if not (MIN_PRIORITY <= priority <= MAX_PRIORITY):
        raise typer.BadParameter(
            f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY} (inclusive)"
        )
    return priority


def validate_recurrence(recurrence: Optional[str]) -> Optional[str]:
    if recurrence is None:
        return None
    if recurrence not in RECURRENCES:
        raise typer.BadParameter(f"valid input: {', '.join(RECURRENCES)}")
    return recurrence


def validate_entry_type(entry_type: Optional[str]) -> Optional[str]:
    if entry_type is None:
        return None
    if entry_type not in ENTRY_TYPES:
        raise typer.BadParameter(f"valid input: {', '.join(ENTRY_TYPES)}")
    return entry_type


def validate_color(color: Optional[str]) -> Optional[str]:
    if color is None:
        return None
    if color not in TAG_COLORS:
        raise typer.BadParameter(f"valid input: {', '.join(TAG_COLORS)}")
    return color
