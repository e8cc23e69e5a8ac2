# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

TagColor = Literal[
    "blue",
    "green",
    "red",
    "yellow",
    "purple",
    "orange",
    "stone",
    "teal",
    "pink",
]

TAG_COLORS: tuple[TagColor, ...] = get_args(TagColor)

# Entries whose tag is missing or was removed fall back to this name.
INBOX_TAG = "Inbox"


class Tag(TypedDict):
    name: str
    color: TagColor
    icon: Optional[str]  # symbolic icon name, e.g. "Briefcase"
