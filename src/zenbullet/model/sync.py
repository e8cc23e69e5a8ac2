# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Any, Optional, TypedDict

SYNC_DOCUMENT_VERSION = 1
DEFAULT_SYNC_FILENAME = "zenbullet_backup.json"


class SyncOutcome(Enum):
    CLOUD_UPDATED = "cloud_updated"
    LOCAL_UPDATED = "local_updated"
    NO_CHANGE = "no_change"


class SyncDocument(TypedDict):
    """Remote document shape. `version` is written but never checked."""

    version: int
    timestamp: str
    entries: list[dict[str, Any]]
    tags: list[dict[str, Any]]


class SyncSettings(TypedDict):
    url: Optional[str]
    username: Optional[str]
    password: Optional[str]
    filename: str
    timeout: float
    last_sync: Optional[str]
