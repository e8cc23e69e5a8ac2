# SPDX-License-Identifier: MIT

from zenbullet.model.tag import TagColor

COMPLETED_ENTRY_COLOR = "bright_black"
GHOST_ENTRY_COLOR = "grey50"
INBOX_COLOR = "grey62"

# Palette names stored on tags, rendered with the closest Rich colour
TAG_RICH_COLORS: dict[TagColor, str] = {
    "blue": "blue",
    "green": "green",
    "red": "red",
    "yellow": "yellow",
    "purple": "purple",
    "orange": "dark_orange",
    "stone": "grey62",
    "teal": "dark_cyan",
    "pink": "deep_pink3",
}

PRIORITY_COLORS: dict[int, str] = {
    4: "bold red",
    3: "bold yellow",
    2: "blue",
    1: "grey62",
}


def rich_color(color: TagColor) -> str:
    return TAG_RICH_COLORS.get(color, INBOX_COLOR)
