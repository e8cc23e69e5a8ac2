# SPDX-License-Identifier: MIT


class TagConflictError(ValueError):
    """A tag with the requested name already exists (or the name is reserved)."""


class ImportRejectedError(ValueError):
    """An import payload was malformed; nothing was applied."""


class SyncError(Exception):
    """Base class for failures on the remote sync path."""


class TransportError(SyncError):
    """Network, authentication or HTTP status failure talking to the blob store."""


class MalformedDocumentError(SyncError):
    """The remote document could not be decoded."""


class SyncInProgressError(SyncError):
    def __init__(self) -> None:
        super().__init__("Sync already in progress")
