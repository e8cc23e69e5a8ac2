# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """Typer group whose command names may list aliases, e.g. "entry, e"."""

    _ALIAS_SEPARATOR = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        cmd_name = self._resolve_alias(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _resolve_alias(self, typed_name: str) -> str:
        for registered_name in self.commands:
            if typed_name in self._ALIAS_SEPARATOR.split(registered_name):
                return registered_name
        return typed_name


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists the top-level groups in workflow order rather than alphabetically."""

    desired_order = [
        "entry, e",
        "tag, t",
        "view, v",
        "review, r",
        "sync, s",
        "data, d",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        result = [name for name in self.desired_order if name in self.commands]
        result += [name for name in self.commands.keys() if name not in result]
        return result
