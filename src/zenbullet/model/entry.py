# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict, get_args

import pendulum

from zenbullet.model.entity_id import EntityId
from zenbullet.model.tag import TagColor

EntryType = Literal["task", "event", "note", "project", "weekly-review"]
EntryStatus = Literal["todo", "done", "canceled"]
Recurrence = Literal["daily", "weekly", "monthly"]
DeleteMode = Literal["single", "series"]

ENTRY_TYPES: tuple[EntryType, ...] = get_args(EntryType)
ENTRY_STATUSES: tuple[EntryStatus, ...] = get_args(EntryStatus)
RECURRENCES: tuple[Recurrence, ...] = get_args(Recurrence)

DEFAULT_PRIORITY = 2
MIN_PRIORITY = 1
MAX_PRIORITY = 4


class Entry(TypedDict):
    id: EntityId
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime  # sync merge key, bumped on every mutation
    date: Optional[pendulum.Date]  # None means unscheduled (inbox)
    type: EntryType
    content: str  # first line is the title, the rest is the notes body
    status: EntryStatus
    tag: str  # Tag name, not an id
    recurrence: Optional[Recurrence]
    recurrence_end: Optional[pendulum.Date]
    priority: int  # 1=low ... 4=critical
    parent_id: Optional[EntityId]  # owning project entry
    color: Optional[TagColor]  # project colour, independent of the tag
    custom_title: Optional[str]  # weekly-review header label
    is_ghost: NotRequired[bool]  # only present on projected occurrences


class EntryFields(TypedDict, total=False):
    """Caller supplied fields for creating or updating an entry."""

    date: Optional[pendulum.Date]
    type: EntryType
    content: str
    status: EntryStatus
    tag: str
    recurrence: Optional[Recurrence]
    recurrence_end: Optional[pendulum.Date]
    priority: Optional[int]
    parent_id: Optional[EntityId]
    color: Optional[TagColor]
    custom_title: Optional[str]
