# SPDX-License-Identifier: MIT

import datetime
import uuid

type EntityId = str

GHOST_ID_PREFIX = "ghost-"


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())


def ghost_entity_id(source_id: EntityId, date: datetime.date) -> EntityId:
    """Stable id of a projected occurrence: 'ghost-<sourceId>-<YYYY-MM-DD>'."""
    return f"{GHOST_ID_PREFIX}{source_id}-{date.year:04d}-{date.month:02d}-{date.day:02d}"


def is_ghost_entity_id(entity_id: EntityId) -> bool:
    return entity_id.startswith(GHOST_ID_PREFIX)
