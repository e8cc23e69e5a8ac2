# SPDX-License-Identifier: MIT

from zenbullet.model.tag import Tag


def get_starter_tags() -> list[Tag]:
    return [
        {"name": "Work", "color": "blue", "icon": "Briefcase"},
        {"name": "Life", "color": "yellow", "icon": "Smile"},
        {"name": "Health", "color": "green", "icon": "Activity"},
        {"name": "Office", "color": "stone", "icon": "Building"},
        {"name": "Idea", "color": "purple", "icon": "Lightbulb"},
    ]
