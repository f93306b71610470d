"""Commands: show a document, or just its menu, commands, or version."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from yamlmenu.commands._base import MenuCommand

if TYPE_CHECKING:
    from yamlmenu.commands._context import AppContext

_FILE_ARGUMENT = click.argument(
    "file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)


@click.command(
    cls=MenuCommand,
    examples="""\
  yamlmenu show
  yamlmenu show config.yml
  yamlmenu --json show config.yml""",
)
@_FILE_ARGUMENT
@click.pass_obj
def show(app: AppContext, file: Path | None) -> None:
    """Print the version, menu, and start commands of FILE.

    Without FILE, reads [source] path from yamlmenu.toml, or the bundled sample.
    """
    app.emit(app.service.show(file))


@click.command(
    cls=MenuCommand,
    examples="""\
  yamlmenu menu config.yml
  yamlmenu -q menu config.yml""",
)
@_FILE_ARGUMENT
@click.pass_obj
def menu(app: AppContext, file: Path | None) -> None:
    """Print the menu items of FILE with their selectors."""
    app.emit(app.service.menu(file))


@click.command(
    cls=MenuCommand,
    examples="""\
  yamlmenu commands config.yml
  yamlmenu --json commands config.yml""",
)
@_FILE_ARGUMENT
@click.pass_obj
def commands(app: AppContext, file: Path | None) -> None:
    """Print the start commands of FILE."""
    app.emit(app.service.commands(file))


@click.command(
    cls=MenuCommand,
    examples="""\
  yamlmenu version config.yml
  yamlmenu -q version config.yml""",
)
@_FILE_ARGUMENT
@click.pass_obj
def version(app: AppContext, file: Path | None) -> None:
    """Print the config version of FILE."""
    app.emit(app.service.version(file))
