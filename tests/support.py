# SPDX-License-Identifier: MIT

from typing import Any

import pendulum

from zenbullet.model.entry import Entry
from zenbullet.template.entry import get_entry_template


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: pendulum.DateTime | None = None) -> None:
        self.now = start or pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="UTC")

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now.add(seconds=seconds)


def make_entry(**fields: Any) -> Entry:
    created_at = fields.pop("created_at", pendulum.datetime(2024, 1, 1, tz="UTC"))
    entry = get_entry_template(created_at)
    entry.update(fields)  # type: ignore[typeddict-item]
    if "updated_at" not in fields:
        entry["updated_at"] = created_at
    return entry
