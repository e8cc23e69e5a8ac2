# SPDX-License-Identifier: MIT

from typing import Optional, Protocol


class BlobStore(Protocol):
    """Opaque key/value document storage on the remote side."""

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None when the key does not exist."""
        ...

    def put(self, key: str, data: bytes) -> None: ...


class MemoryBlobStore:
    def __init__(self, blobs: Optional[dict[str, bytes]] = None) -> None:
        self.blobs: dict[str, bytes] = dict(blobs or {})
        self.put_count = 0

    def get(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def put(self, key: str, data: bytes) -> None:
        self.blobs[key] = data
        self.put_count += 1
