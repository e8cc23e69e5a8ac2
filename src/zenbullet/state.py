# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from pathlib import Path
from typing import Optional

_config_dir: ContextVar[Optional[Path]] = ContextVar("config_dir", default=None)


def set_config_dir(value: Optional[Path]) -> None:
    _config_dir.set(value)


def get_config_dir() -> Optional[Path]:
    return _config_dir.get()
