# SPDX-License-Identifier: MIT

"""Per-invocation rendering switches, set once by the CLI callback."""

from contextvars import ContextVar

_show_header: ContextVar[bool] = ContextVar("zenbullet_show_header", default=True)


def set_show_header(enabled: bool) -> None:
    _show_header.set(enabled)


def get_show_header() -> bool:
    return _show_header.get()
