# SPDX-License-Identifier: MIT

import json
import tempfile
import unittest
from pathlib import Path

import pendulum

from tests.support import FakeClock, make_entry
from zenbullet.errors import ImportRejectedError
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.tag import TagStore
from zenbullet.service.transfer import (
    export_data,
    export_to_path,
    import_data,
    import_from_path,
)


class TestTransfer(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.feedback = FeedbackChannel(self.clock)
        self.entries = EntryStore(
            entries=[
                make_entry(
                    id="a",
                    content="Dentist",
                    date=pendulum.date(2024, 3, 12),
                    type="event",
                    tag="Health",
                )
            ],
            clock=self.clock,
        )
        self.tags = TagStore(self.entries)

    def test_export_shape(self) -> None:
        data = export_data(self.entries, self.tags)
        self.assertEqual(set(data), {"entries", "tags"})
        self.assertEqual(data["entries"][0]["date"], "2024-03-12")
        self.assertEqual(data["entries"][0]["type"], "event")
        self.assertEqual(data["tags"][0]["name"], "Work")

    def test_export_then_import_restores_everything(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "backup.json"
            export_to_path(self.entries, self.tags, path)

            other_entries = EntryStore(clock=self.clock)
            other_tags = TagStore(other_entries, tags=[])
            counts = import_from_path(other_entries, other_tags, path, self.feedback)

        self.assertEqual(counts, (1, 5))
        self.assertEqual(other_entries.all(), self.entries.all())
        self.assertEqual(other_tags.all(), self.tags.all())
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.message, "Data imported successfully")

    def test_import_missing_arrays_is_rejected(self) -> None:
        before = self.entries.all()
        with self.assertRaises(ImportRejectedError) as ctx:
            import_data(self.entries, self.tags, {"entries": []})
        self.assertIn("Missing entries or tags array", str(ctx.exception))
        self.assertEqual(self.entries.all(), before)

    def test_import_with_one_bad_entry_applies_nothing(self) -> None:
        payload = {
            "entries": [
                {"id": "x", "createdAt": "2024-01-01T00:00:00+00:00", "content": "ok"},
                {"id": "y", "createdAt": "2024-01-01T00:00:00+00:00", "type": "bogus"},
            ],
            "tags": [],
        }
        before_tags = self.tags.all()
        with self.assertRaises(ImportRejectedError):
            import_data(self.entries, self.tags, payload)
        self.assertEqual(len(self.entries), 1)
        self.assertEqual(self.tags.all(), before_tags)

    def test_import_unparseable_file_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{not json")
            with self.assertRaises(ImportRejectedError):
                import_from_path(self.entries, self.tags, path)

    def test_export_is_valid_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "backup.json"
            export_to_path(self.entries, self.tags, path)
            self.assertIsInstance(json.loads(path.read_text()), dict)
