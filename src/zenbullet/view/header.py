# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from zenbullet.view.state import get_show_header

APP_TITLE_STYLE = "dark_orange"
REPORT_TITLE_STYLE = "sandy_brown"


def header(report_name: Optional[str] = None) -> None:
    """Print the app title and, below it, the name of the report being shown."""
    if not get_show_header():
        return

    print(Padding(f"[{APP_TITLE_STYLE}]zenbullet[/{APP_TITLE_STYLE}]", (1, 0, 0, 1)))
    if report_name is not None:
        print(Padding(f"[{REPORT_TITLE_STYLE}]{report_name}[/{REPORT_TITLE_STYLE}]", (0, 1)))
