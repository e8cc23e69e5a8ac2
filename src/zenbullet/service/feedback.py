# SPDX-License-Identifier: MIT

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

import pendulum

from zenbullet.time import now_utc

NoticeLevel = Literal["info", "error"]

DEFAULT_NOTICE_WINDOW_SECONDS = 5.0


@dataclass(frozen=True)
class Notice:
    id: int
    message: str
    level: NoticeLevel
    shown_at: pendulum.DateTime
    action_label: Optional[str] = None
    action: Optional[Callable[[], Any]] = None


class FeedbackChannel:
    """
    Transient, single-slot notification of the last user-visible outcome.

    A new notice replaces the previous one. A notice disappears once its window
    elapses, and its optional action can be triggered at most once.
    """

    def __init__(
        self,
        clock: Callable[[], pendulum.DateTime] = now_utc,
        window_seconds: float = DEFAULT_NOTICE_WINDOW_SECONDS,
    ) -> None:
        self._clock = clock
        self.window_seconds = window_seconds
        self._notice: Optional[Notice] = None
        self._ids = itertools.count(1)

    def show(
        self,
        message: str,
        action_label: Optional[str] = None,
        action: Optional[Callable[[], Any]] = None,
        level: NoticeLevel = "info",
    ) -> Notice:
        self._notice = Notice(
            id=next(self._ids),
            message=message,
            level=level,
            shown_at=self._clock(),
            action_label=action_label,
            action=action,
        )
        return self._notice

    def error(self, message: str) -> Notice:
        return self.show(message, level="error")

    def hide(self) -> None:
        self._notice = None

    def current(self) -> Optional[Notice]:
        if self._notice is None:
            return None
        elapsed = (self._clock() - self._notice.shown_at).total_seconds()
        if elapsed > self.window_seconds:
            self._notice = None
        return self._notice

    def trigger(self) -> bool:
        """Run the current notice's action, if any, and dismiss the notice."""
        notice = self.current()
        if notice is None or notice.action is None:
            return False
        self.hide()
        notice.action()
        return True
