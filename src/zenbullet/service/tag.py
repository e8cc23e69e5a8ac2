# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from zenbullet.errors import TagConflictError
from zenbullet.model.tag import INBOX_TAG, Tag
from zenbullet.repository.tag import TagRepository
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.template.tag import get_starter_tags

logger = logging.getLogger(__name__)

INBOX_PSEUDO_TAG: Tag = {"name": INBOX_TAG, "color": "stone", "icon": "Inbox"}


def resolve_tag(name: Optional[str], tags: list[Tag]) -> Tag:
    """
    Look up the tag an entry refers to by name.

    Entries hold tag names rather than references, so a missing or removed
    tag resolves to the Inbox pseudo-tag.
    """
    for tag in tags:
        if tag["name"] == name:
            return tag
    return INBOX_PSEUDO_TAG


class TagStore:
    """
    Ordered collection of tags.

    Renames and removals re-point the entries of the given EntryStore by name;
    no referential integrity is kept beyond that.
    """

    def __init__(
        self,
        entry_store: EntryStore,
        tags: Optional[list[Tag]] = None,
        repository: Optional[TagRepository] = None,
        feedback: Optional[FeedbackChannel] = None,
    ) -> None:
        self._entry_store = entry_store
        self._repository = repository
        self._feedback = feedback

        if tags is not None:
            self._tags = deepcopy(tags)
        elif repository is not None:
            stored = repository.load()
            self._tags = stored if stored is not None else get_starter_tags()
        else:
            self._tags = get_starter_tags()

    def all(self) -> list[Tag]:
        return deepcopy(self._tags)

    def names(self) -> list[str]:
        return [tag["name"] for tag in self._tags]

    def get(self, name: str) -> Optional[Tag]:
        for tag in self._tags:
            if tag["name"] == name:
                return deepcopy(tag)
        return None

    def exists(self, name: str) -> bool:
        return name in self.names()

    def add(self, tag: Tag) -> None:
        self.__ensure_available(tag["name"])
        self._tags.append(deepcopy(tag))
        self.__persist()
        logger.debug("added tag %s", tag["name"])
        if self._feedback is not None:
            self._feedback.show(f'Collection "{tag["name"]}" added')

    def rename(self, old_name: str, new_name: str) -> int:
        """
        Rename a tag and move its entries along. Returns the number of entries moved.

        A name clash raises TagConflictError before anything changes.
        """
        if old_name == new_name:
            return 0
        self.__ensure_available(new_name, ignore=old_name)

        for tag in self._tags:
            if tag["name"] == old_name:
                tag["name"] = new_name
        self.__persist()
        moved = self._entry_store.retag(old_name, new_name)
        logger.debug("renamed tag %s to %s (%d entries)", old_name, new_name, moved)
        return moved

    def remove(self, name: str) -> int:
        """Delete a tag; its entries fall back to Inbox. Returns the number moved."""
        if name == INBOX_TAG:
            message = f'"{INBOX_TAG}" cannot be removed'
            if self._feedback is not None:
                self._feedback.error(message)
            raise TagConflictError(message)
        self._tags = [tag for tag in self._tags if tag["name"] != name]
        self.__persist()
        moved = self._entry_store.retag(name, INBOX_TAG)
        logger.debug("removed tag %s (%d entries to %s)", name, moved, INBOX_TAG)
        if self._feedback is not None:
            self._feedback.show(f'Collection "{name}" removed')
        return moved

    def reorder(self, tags: list[Tag]) -> None:
        self._tags = deepcopy(tags)
        self.__persist()

    def replace_all(self, tags: list[Tag]) -> None:
        self._tags = deepcopy(tags)
        self.__persist()

    def __ensure_available(self, name: str, ignore: Optional[str] = None) -> None:
        if name == INBOX_TAG:
            message = f'"{INBOX_TAG}" is reserved'
        elif any(tag["name"] == name and tag["name"] != ignore for tag in self._tags):
            message = "Collection name already exists"
        else:
            return
        if self._feedback is not None:
            self._feedback.error(message)
        raise TagConflictError(message)

    def __persist(self) -> None:
        if self._repository is not None:
            self._repository.save(self._tags)
