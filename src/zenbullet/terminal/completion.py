# SPDX-License-Identifier: MIT

from zenbullet.model.tag import INBOX_TAG
from zenbullet.terminal.session import current_workspace


def complete_tag(incomplete: str) -> list[str]:
    """Return list of available tags for shell completion."""
    names = [INBOX_TAG] + current_workspace().tags.names()
    return [name for name in names if name.startswith(incomplete)]
