"""Subcommand modules for yamlmenu.

Provides register_commands() which uses deferred imports to keep
``yamlmenu --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from yamlmenu.commands.show import commands, menu, show, version

    cli.add_command(show)
    cli.add_command(menu)
    cli.add_command(commands)
    cli.add_command(version)
