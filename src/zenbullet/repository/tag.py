# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from zenbullet import serialization
from zenbullet.model.tag import Tag


class TagRepository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[list[Tag]]:
        """Return the stored tags in user order, or None if nothing was saved yet."""
        if not self.path.is_file():
            return None
        tags_data = load(self.path.read_text(), Loader=Loader)
        if tags_data is None:
            return None
        return serialization.tags_from_list(tags_data["tags"])

    def save(self, tags: list[Tag]) -> None:
        # Array order is the user-controlled order; never sort here
        tags_data: dict[str, Any] = {"tags": serialization.tags_to_list(tags)}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(tags_data, Dumper=Dumper, sort_keys=False))
