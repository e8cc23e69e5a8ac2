# SPDX-License-Identifier: MIT

from rich.console import Console

from zenbullet.service.feedback import FeedbackChannel


def show_notice(feedback: FeedbackChannel) -> None:
    notice = feedback.current()
    if notice is None:
        return
    console = Console()
    style = "red" if notice.level == "error" else "green"
    message = f"[{style}]{notice.message}[/{style}]"
    if notice.action_label is not None:
        message += f"  [dim]({notice.action_label.lower()}: zenbullet entry undo)[/dim]"
    console.print(message)
