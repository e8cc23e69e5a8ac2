# SPDX-License-Identifier: MIT

import pendulum

from zenbullet.model.entity_id import generate_entity_id
from zenbullet.model.entry import DEFAULT_PRIORITY, Entry
from zenbullet.model.tag import INBOX_TAG


def get_entry_template(now: pendulum.DateTime) -> Entry:
    return {
        "id": generate_entity_id(),
        "created_at": now,
        "updated_at": now,
        "date": None,
        "type": "task",
        "content": "",
        "status": "todo",
        "tag": INBOX_TAG,
        "recurrence": None,
        "recurrence_end": None,
        "priority": DEFAULT_PRIORITY,
        "parent_id": None,
        "color": None,
        "custom_title": None,
    }
