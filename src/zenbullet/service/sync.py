# SPDX-License-Identifier: MIT

"""
Reconciliation of the local entry/tag set with a remote copy.

The remote side is one JSON document stored wholesale in a blob store. Entries
merge by id with last-write-wins on `updated_at`; tags merge by name with the
remote copy winning. Deletions are not propagated: there are no tombstones, so
an entry deleted on one device comes back from any copy that still has it.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pendulum

from zenbullet import serialization, time
from zenbullet.errors import MalformedDocumentError, SyncError, SyncInProgressError
from zenbullet.model.entry import Entry
from zenbullet.model.sync import (
    DEFAULT_SYNC_FILENAME,
    SYNC_DOCUMENT_VERSION,
    SyncDocument,
    SyncOutcome,
)
from zenbullet.model.tag import Tag
from zenbullet.remote.blob_store import BlobStore
from zenbullet.repository.sync import SyncSettingsRepository
from zenbullet.service.entry import EntryStore
from zenbullet.service.feedback import FeedbackChannel
from zenbullet.service.tag import TagStore
from zenbullet.time import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    outcome: Optional[SyncOutcome] = None
    error: Optional[str] = None
    synced_at: Optional[pendulum.DateTime] = None
    entries: list[Entry] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


def entry_timestamp(entry: Entry) -> pendulum.DateTime:
    return entry.get("updated_at") or entry["created_at"]


def latest_timestamp(entries: list[Entry]) -> Optional[pendulum.DateTime]:
    if not entries:
        return None
    return max(entry_timestamp(entry) for entry in entries)


def merge_entries(local: list[Entry], remote: list[Entry]) -> list[Entry]:
    """
    Union by id; on collision the strictly newer copy wins wholesale.

    Equal timestamps keep the local copy. Local order is kept, remote-only
    entries are appended in remote order.
    """
    merged: dict[str, Entry] = {entry["id"]: entry for entry in local}
    for remote_entry in remote:
        local_entry = merged.get(remote_entry["id"])
        if local_entry is None:
            merged[remote_entry["id"]] = remote_entry
        elif entry_timestamp(remote_entry) > entry_timestamp(local_entry):
            merged[remote_entry["id"]] = remote_entry
    return list(merged.values())


def merge_tags(local: list[Tag], remote: list[Tag]) -> list[Tag]:
    """Union by name; tags carry no timestamp so the remote copy always wins."""
    merged: dict[str, Tag] = {tag["name"]: tag for tag in local}
    for remote_tag in remote:
        merged[remote_tag["name"]] = remote_tag
    return list(merged.values())


def encode_document(
    entries: list[Entry], tags: list[Tag], timestamp: pendulum.DateTime
) -> bytes:
    document: SyncDocument = {
        "version": SYNC_DOCUMENT_VERSION,
        "timestamp": time.datetime_to_iso_str(timestamp),
        "entries": serialization.entries_to_list(entries),
        "tags": serialization.tags_to_list(tags),
    }
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


def decode_document(raw: bytes) -> tuple[list[Entry], list[Tag]]:
    try:
        document: Any = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Remote document is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError("Remote document is not an object")
    raw_entries = document.get("entries")
    raw_tags = document.get("tags")
    if not isinstance(raw_entries, list) or not isinstance(raw_tags, list):
        raise MalformedDocumentError("Remote document is missing entries or tags")

    try:
        entries = serialization.entries_from_list(raw_entries)
        tags = serialization.tags_from_list(raw_tags)
    except (ValueError, TypeError) as e:
        raise MalformedDocumentError(f"Remote document is malformed: {e}") from e
    return entries, tags


def _fingerprint(entries: list[Entry], tags: list[Tag]) -> tuple[Any, ...]:
    entry_versions = sorted(
        (entry["id"], time.datetime_to_iso_str(entry_timestamp(entry)))
        for entry in entries
    )
    return (tuple(entry_versions), tuple(tuple(sorted(t.items())) for t in tags))


class SyncReconciler:
    """
    Runs sync, upload and download against one remote document.

    At most one operation runs at a time; an overlapping call is refused with
    an error result instead of racing the one in flight. Failures never touch
    local state and are reported as a message, never raised.
    """

    def __init__(
        self,
        entry_store: EntryStore,
        tag_store: TagStore,
        blob_store: BlobStore,
        filename: str = DEFAULT_SYNC_FILENAME,
        feedback: Optional[FeedbackChannel] = None,
        settings_repository: Optional[SyncSettingsRepository] = None,
        clock: Callable[[], pendulum.DateTime] = now_utc,
    ) -> None:
        self._entry_store = entry_store
        self._tag_store = tag_store
        self._blob_store = blob_store
        self.filename = filename
        self._feedback = feedback
        self._settings_repository = settings_repository
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def is_syncing(self) -> bool:
        return self._lock.locked()

    def reconcile(self) -> SyncResult:
        return self.__run("Sync", self.__reconcile, "Sync completed successfully")

    def upload(self) -> SyncResult:
        return self.__run("Upload", self.__upload, "Uploaded local data")

    def download(self) -> SyncResult:
        return self.__run("Download", self.__download, "Downloaded remote data")

    def __run(
        self,
        name: str,
        operation: Callable[[pendulum.DateTime], SyncOutcome],
        success_message: str,
    ) -> SyncResult:
        if not self._lock.acquire(blocking=False):
            message = str(SyncInProgressError())
            logger.warning("%s refused: %s", name, message)
            return SyncResult(error=message)

        try:
            started_at = self._clock()
            outcome = operation(started_at)
        except SyncError as e:
            logger.error("%s failed: %s", name, e)
            if self._feedback is not None:
                self._feedback.error(f"{name} failed: {e}")
            return SyncResult(error=str(e) or f"{name} failed")
        finally:
            self._lock.release()

        if self._settings_repository is not None:
            self._settings_repository.set_last_sync(started_at)
        logger.info("%s finished: %s", name, outcome.value)
        if self._feedback is not None:
            self._feedback.show(success_message)
        return SyncResult(
            outcome=outcome,
            synced_at=started_at,
            entries=self._entry_store.all(),
            tags=self._tag_store.all(),
        )

    def __fetch(self) -> Optional[tuple[list[Entry], list[Tag]]]:
        raw = self._blob_store.get(self.filename)
        if raw is None:
            logger.info("no remote document %s yet", self.filename)
            return None
        return decode_document(raw)

    def __reconcile(self, now: pendulum.DateTime) -> SyncOutcome:
        local_entries = self._entry_store.all()
        local_tags = self._tag_store.all()

        remote = self.__fetch()
        remote_entries, remote_tags = remote if remote is not None else ([], [])

        merged_entries = merge_entries(local_entries, remote_entries)
        merged_tags = merge_tags(local_tags, remote_tags)

        remote_latest = latest_timestamp(remote_entries)
        local_latest = latest_timestamp(local_entries)
        if remote_latest is not None and (
            local_latest is None or remote_latest > local_latest
        ):
            outcome = SyncOutcome.CLOUD_UPDATED
        elif remote is None or _fingerprint(merged_entries, merged_tags) != _fingerprint(
            remote_entries, remote_tags
        ):
            outcome = SyncOutcome.LOCAL_UPDATED
        else:
            outcome = SyncOutcome.NO_CHANGE

        # Upload before applying so a failed upload leaves local state as it was
        self._blob_store.put(
            self.filename, encode_document(merged_entries, merged_tags, now)
        )
        self._entry_store.replace_all(merged_entries)
        self._tag_store.replace_all(merged_tags)
        return outcome

    def __upload(self, now: pendulum.DateTime) -> SyncOutcome:
        self._blob_store.put(
            self.filename,
            encode_document(self._entry_store.all(), self._tag_store.all(), now),
        )
        return SyncOutcome.LOCAL_UPDATED

    def __download(self, now: pendulum.DateTime) -> SyncOutcome:
        remote = self.__fetch()
        if remote is None:
            return SyncOutcome.NO_CHANGE
        remote_entries, remote_tags = remote

        local_entries = self._entry_store.all()
        remote_latest = latest_timestamp(remote_entries)
        local_latest = latest_timestamp(local_entries)

        self._entry_store.replace_all(merge_entries(local_entries, remote_entries))
        self._tag_store.replace_all(merge_tags(self._tag_store.all(), remote_tags))

        if remote_latest is not None and (
            local_latest is None or remote_latest > local_latest
        ):
            return SyncOutcome.CLOUD_UPDATED
        return SyncOutcome.NO_CHANGE
