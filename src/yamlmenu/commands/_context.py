"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the MenuService and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from yamlmenu.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from yamlmenu.config.settings import MenuSettings
    from yamlmenu.services.menu import MenuService
    from yamlmenu.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The service is created
    lazily so ``--help`` and ``--version`` never touch the input document.
    """

    def __init__(self, settings: MenuSettings) -> None:
        self.settings = settings
        self._service: MenuService | None = None

        from yamlmenu.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> MenuService:
        """The menu service (created lazily on first access)."""
        if self._service is None:
            from yamlmenu.services.menu import MenuService

            self._service = MenuService(default_path=self.settings.default_source())
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            no_color=self.settings.no_color,
            color=sys.stdout.isatty(),
            width=self.settings.display.width,
            except_placeholder=self.settings.display.except_placeholder,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
