# SPDX-License-Identifier: MIT

import json
import threading
import unittest
from typing import Optional

import pendulum

from tests.support import FakeClock, make_entry
from zenbullet.errors import TransportError
from zenbullet.model.sync import DEFAULT_SYNC_FILENAME, SyncOutcome
from zenbullet.remote.blob_store import MemoryBlobStore
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.sync import (
    SyncReconciler,
    decode_document,
    encode_document,
    merge_entries,
    merge_tags,
)
from zenbullet.service.tag import TagStore

T0 = pendulum.datetime(2024, 3, 1, 10, 0, 0, tz="UTC")
T1 = T0.add(minutes=5)
T2 = T0.add(minutes=10)


class FailingBlobStore(MemoryBlobStore):
    def __init__(self, fail_get: bool = False, fail_put: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.fail_get = fail_get
        self.fail_put = fail_put

    def get(self, key: str) -> Optional[bytes]:
        if self.fail_get:
            raise TransportError("Could not reach server")
        return super().get(key)

    def put(self, key: str, data: bytes) -> None:
        if self.fail_put:
            raise TransportError("Authentication failed (401) during upload")
        super().put(key, data)


class BlockingBlobStore(MemoryBlobStore):
    """Holds get() until released so a second caller can overlap."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def get(self, key: str) -> Optional[bytes]:
        self.entered.set()
        self.release.wait(timeout=5)
        return super().get(key)


def remote_blob(entries, tags=None) -> bytes:
    return encode_document(entries, tags or [], T0)


class TestMerge(unittest.TestCase):
    def test_newer_remote_wins(self) -> None:
        local = [make_entry(id="a", content="local", updated_at=T0)]
        remote = [make_entry(id="a", content="remote", updated_at=T1)]
        self.assertEqual(merge_entries(local, remote)[0]["content"], "remote")

    def test_newer_local_wins(self) -> None:
        local = [make_entry(id="a", content="local", updated_at=T2)]
        remote = [make_entry(id="a", content="remote", updated_at=T1)]
        self.assertEqual(merge_entries(local, remote)[0]["content"], "local")

    def test_tie_keeps_local(self) -> None:
        local = [make_entry(id="a", content="local", updated_at=T1)]
        remote = [make_entry(id="a", content="remote", updated_at=T1)]
        self.assertEqual(merge_entries(local, remote)[0]["content"], "local")

    def test_union_keeps_local_order_then_remote(self) -> None:
        local = [make_entry(id="b"), make_entry(id="a")]
        remote = [make_entry(id="c"), make_entry(id="a")]
        self.assertEqual([e["id"] for e in merge_entries(local, remote)], ["b", "a", "c"])

    def test_mixed_merge_keeps_newer_and_disjoint_entries(self) -> None:
        def at(minute: int) -> pendulum.DateTime:
            return T0.add(minutes=minute)

        local = [
            make_entry(id="A", content="local A", updated_at=at(5)),
            make_entry(id="B", updated_at=at(3)),
        ]
        remote = [
            make_entry(id="A", content="remote A", updated_at=at(2)),
            make_entry(id="C", updated_at=at(9)),
        ]
        merged = {e["id"]: e for e in merge_entries(local, remote)}
        self.assertEqual(sorted(merged), ["A", "B", "C"])
        self.assertEqual(merged["A"]["content"], "local A")
        self.assertEqual(merged["B"]["updated_at"], at(3))
        self.assertEqual(merged["C"]["updated_at"], at(9))

    def test_merge_is_idempotent(self) -> None:
        local = [make_entry(id="a", updated_at=T0), make_entry(id="b", updated_at=T2)]
        remote = [make_entry(id="a", updated_at=T1), make_entry(id="c", updated_at=T0)]
        merged = merge_entries(local, remote)
        self.assertEqual(merge_entries(merged, remote), merged)

    def test_remote_tag_overwrites_local(self) -> None:
        local = [{"name": "Work", "color": "blue", "icon": None}]
        remote = [
            {"name": "Work", "color": "red", "icon": None},
            {"name": "Travel", "color": "green", "icon": None},
        ]
        merged = merge_tags(local, remote)  # type: ignore[arg-type]
        self.assertEqual([t["name"] for t in merged], ["Work", "Travel"])
        self.assertEqual(merged[0]["color"], "red")


class TestDocumentCodec(unittest.TestCase):
    def test_document_shape(self) -> None:
        raw = encode_document([make_entry(id="a")], [], T1)
        document = json.loads(raw)
        self.assertEqual(document["version"], 1)
        self.assertEqual(document["timestamp"], T1.isoformat())
        self.assertEqual(document["entries"][0]["id"], "a")
        self.assertIn("createdAt", document["entries"][0])

    def test_malformed_documents_raise(self) -> None:
        from zenbullet.errors import MalformedDocumentError

        for raw in (b"not json", b"[]", b'{"entries": []}', b'{"entries": [{}], "tags": []}'):
            with self.assertRaises(MalformedDocumentError):
                decode_document(raw)


class TestSyncReconciler(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock(T2.add(hours=1))
        self.feedback = FeedbackChannel(self.clock)
        self.entries = EntryStore(clock=self.clock)
        self.tags = TagStore(self.entries, tags=[])

    def reconciler(self, blob_store) -> SyncReconciler:
        return SyncReconciler(
            self.entries,
            self.tags,
            blob_store,
            feedback=self.feedback,
            clock=self.clock,
        )

    def test_first_sync_uploads_local_data(self) -> None:
        self.entries.replace_all([make_entry(id="a", updated_at=T0)])
        blobs = MemoryBlobStore()
        result = self.reconciler(blobs).reconcile()

        self.assertTrue(result.ok)
        self.assertEqual(result.outcome, SyncOutcome.LOCAL_UPDATED)
        self.assertEqual(result.synced_at, self.clock.now)
        entries, _ = decode_document(blobs.blobs[DEFAULT_SYNC_FILENAME])
        self.assertEqual([e["id"] for e in entries], ["a"])
        self.assertEqual([e["id"] for e in result.entries], ["a"])
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.message, "Sync completed successfully")

    def test_newer_remote_is_pulled(self) -> None:
        self.entries.replace_all([make_entry(id="a", content="old", updated_at=T0)])
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="a", content="new", updated_at=T1)])}
        )
        result = self.reconciler(blobs).reconcile()

        self.assertEqual(result.outcome, SyncOutcome.CLOUD_UPDATED)
        entry = self.entries.get("a")
        assert entry is not None
        self.assertEqual(entry["content"], "new")

    def test_tie_keeps_local_copy_everywhere(self) -> None:
        self.entries.replace_all([make_entry(id="a", content="local", updated_at=T1)])
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="a", content="remote", updated_at=T1)])}
        )
        self.reconciler(blobs).reconcile()

        entry = self.entries.get("a")
        assert entry is not None
        self.assertEqual(entry["content"], "local")
        remote_entries, _ = decode_document(blobs.blobs[DEFAULT_SYNC_FILENAME])
        self.assertEqual(remote_entries[0]["content"], "local")

    def test_identical_data_reports_no_change(self) -> None:
        entry = make_entry(id="a", updated_at=T1)
        self.entries.replace_all([entry])
        blobs = MemoryBlobStore({DEFAULT_SYNC_FILENAME: remote_blob([entry])})
        result = self.reconciler(blobs).reconcile()
        self.assertEqual(result.outcome, SyncOutcome.NO_CHANGE)

    def test_converges_after_second_sync(self) -> None:
        self.entries.replace_all([make_entry(id="a", updated_at=T2)])
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="b", updated_at=T0)])}
        )
        reconciler = self.reconciler(blobs)
        first = reconciler.reconcile()
        second = reconciler.reconcile()

        self.assertEqual(first.outcome, SyncOutcome.LOCAL_UPDATED)
        self.assertEqual(second.outcome, SyncOutcome.NO_CHANGE)
        self.assertEqual(sorted(e["id"] for e in self.entries.all()), ["a", "b"])

    def test_deleted_entry_is_resurrected(self) -> None:
        # No tombstones: a copy still held remotely comes back
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="gone", updated_at=T0)])}
        )
        self.reconciler(blobs).reconcile()
        self.assertIsNotNone(self.entries.get("gone"))

    def test_remote_tags_are_merged(self) -> None:
        self.tags.replace_all([{"name": "Work", "color": "blue", "icon": None}])
        blobs = MemoryBlobStore(
            {
                DEFAULT_SYNC_FILENAME: remote_blob(
                    [], [{"name": "Work", "color": "red", "icon": None}]
                )
            }
        )
        self.reconciler(blobs).reconcile()
        work = self.tags.get("Work")
        assert work is not None
        self.assertEqual(work["color"], "red")

    def test_failed_download_leaves_local_state(self) -> None:
        self.entries.replace_all([make_entry(id="a", updated_at=T0)])
        before = self.entries.all()
        result = self.reconciler(FailingBlobStore(fail_get=True)).reconcile()

        self.assertFalse(result.ok)
        self.assertIsNone(result.outcome)
        self.assertIn("Could not reach server", result.error or "")
        self.assertEqual(self.entries.all(), before)
        notice = self.feedback.current()
        assert notice is not None
        self.assertEqual(notice.level, "error")

    def test_failed_upload_leaves_local_state(self) -> None:
        self.entries.replace_all([make_entry(id="a", content="local", updated_at=T0)])
        blobs = FailingBlobStore(
            fail_put=True,
            blobs={
                DEFAULT_SYNC_FILENAME: remote_blob(
                    [make_entry(id="a", content="remote", updated_at=T1)]
                )
            },
        )
        result = self.reconciler(blobs).reconcile()

        self.assertFalse(result.ok)
        entry = self.entries.get("a")
        assert entry is not None
        self.assertEqual(entry["content"], "local")

    def test_malformed_remote_is_an_error(self) -> None:
        blobs = MemoryBlobStore({DEFAULT_SYNC_FILENAME: b"{broken"})
        result = self.reconciler(blobs).reconcile()
        self.assertFalse(result.ok)
        self.assertEqual(blobs.put_count, 0)

    def test_upload_overwrites_remote(self) -> None:
        self.entries.replace_all([make_entry(id="mine", updated_at=T0)])
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="theirs", updated_at=T2)])}
        )
        result = self.reconciler(blobs).upload()

        self.assertEqual(result.outcome, SyncOutcome.LOCAL_UPDATED)
        remote_entries, _ = decode_document(blobs.blobs[DEFAULT_SYNC_FILENAME])
        self.assertEqual([e["id"] for e in remote_entries], ["mine"])

    def test_download_merges_without_uploading(self) -> None:
        self.entries.replace_all([make_entry(id="mine", updated_at=T0)])
        blobs = MemoryBlobStore(
            {DEFAULT_SYNC_FILENAME: remote_blob([make_entry(id="theirs", updated_at=T2)])}
        )
        result = self.reconciler(blobs).download()

        self.assertEqual(result.outcome, SyncOutcome.CLOUD_UPDATED)
        self.assertEqual(blobs.put_count, 0)
        self.assertEqual(sorted(e["id"] for e in self.entries.all()), ["mine", "theirs"])

    def test_download_without_remote_is_no_change(self) -> None:
        result = self.reconciler(MemoryBlobStore()).download()
        self.assertTrue(result.ok)
        self.assertEqual(result.outcome, SyncOutcome.NO_CHANGE)

    def test_overlapping_sync_is_refused(self) -> None:
        blobs = BlockingBlobStore()
        reconciler = self.reconciler(blobs)
        results = []
        worker = threading.Thread(target=lambda: results.append(reconciler.reconcile()))
        worker.start()
        self.assertTrue(blobs.entered.wait(timeout=5))

        self.assertTrue(reconciler.is_syncing)
        overlapping = reconciler.reconcile()
        blobs.release.set()
        worker.join(timeout=5)

        self.assertFalse(overlapping.ok)
        self.assertEqual(overlapping.error, "Sync already in progress")
        self.assertTrue(results[0].ok)
        self.assertFalse(reconciler.is_syncing)
