# SPDX-License-Identifier: MIT

import tempfile
import unittest
from pathlib import Path

from tests.support import FakeClock, make_entry
from zenbullet.errors import TagConflictError
from zenbullet.repository.tag import TagRepository
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.tag import INBOX_PSEUDO_TAG, TagStore, resolve_tag


class TestTagStore(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.entries = EntryStore(
            entries=[
                make_entry(id="a", tag="Work"),
                make_entry(id="b", tag="Work"),
                make_entry(id="c", tag="Life"),
            ],
            clock=self.clock,
        )
        self.feedback = FeedbackChannel(self.clock)
        self.tags = TagStore(self.entries, feedback=self.feedback)

    def test_starts_with_starter_collections(self) -> None:
        self.assertEqual(
            self.tags.names(), ["Work", "Life", "Health", "Office", "Idea"]
        )

    def test_add_appends_and_rejects_duplicates(self) -> None:
        self.tags.add({"name": "Reading", "color": "red", "icon": None})
        self.assertEqual(self.tags.names()[-1], "Reading")
        with self.assertRaises(TagConflictError):
            self.tags.add({"name": "Reading", "color": "blue", "icon": None})
        with self.assertRaises(TagConflictError):
            self.tags.add({"name": "Inbox", "color": "blue", "icon": None})

    def test_rename_moves_entries(self) -> None:
        moved = self.tags.rename("Work", "Job")
        self.assertEqual(moved, 2)
        self.assertIn("Job", self.tags.names())
        self.assertNotIn("Work", self.tags.names())
        self.assertEqual(
            sorted(e["id"] for e in self.entries.all() if e["tag"] == "Job"), ["a", "b"]
        )

    def test_rename_into_existing_name_changes_nothing(self) -> None:
        with self.assertRaises(TagConflictError):
            self.tags.rename("Work", "Life")
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.level, "error")
        self.assertEqual(
            [e["tag"] for e in self.entries.all()], ["Work", "Work", "Life"]
        )

    def test_rename_to_same_name_is_noop(self) -> None:
        self.assertEqual(self.tags.rename("Work", "Work"), 0)

    def test_remove_moves_entries_to_inbox(self) -> None:
        moved = self.tags.remove("Work")
        self.assertEqual(moved, 2)
        self.assertNotIn("Work", self.tags.names())
        self.assertEqual(
            [e["tag"] for e in self.entries.all()], ["Inbox", "Inbox", "Life"]
        )
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.message, 'Collection "Work" removed')

    def test_removing_inbox_is_refused_and_leaves_entries_untouched(self) -> None:
        self.entries.add({"content": "loose end"})
        before = self.entries.all()
        self.clock.advance(3600)

        with self.assertRaises(TagConflictError):
            self.tags.remove("Inbox")
        self.assertEqual(self.entries.all(), before)
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.level, "error")

    def test_retag_to_same_name_changes_nothing(self) -> None:
        before = self.entries.all()
        self.clock.advance(3600)
        self.assertEqual(self.entries.retag("Work", "Work"), 0)
        self.assertEqual(self.entries.all(), before)

    def test_reorder_keeps_given_order(self) -> None:
        reordered = list(reversed(self.tags.all()))
        self.tags.reorder(reordered)
        self.assertEqual(self.tags.names(), ["Idea", "Office", "Health", "Life", "Work"])

    def test_order_survives_persistence(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            repository = TagRepository(Path(tmp) / "tags.yaml")
            tags = TagStore(self.entries, repository=repository)
            tags.reorder(list(reversed(tags.all())))
            reopened = TagStore(self.entries, repository=repository)
            self.assertEqual(reopened.names(), ["Idea", "Office", "Health", "Life", "Work"])


class TestResolveTag(unittest.TestCase):
    def test_unknown_name_resolves_to_inbox(self) -> None:
        tags = [{"name": "Work", "color": "blue", "icon": None}]
        self.assertEqual(resolve_tag("Work", tags)["color"], "blue")  # type: ignore[arg-type]
        self.assertEqual(resolve_tag("Gone", tags), INBOX_PSEUDO_TAG)  # type: ignore[arg-type]
        self.assertEqual(resolve_tag(None, []), INBOX_PSEUDO_TAG)
