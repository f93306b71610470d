"""Rich Console factory and theme for yamlmenu output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MENU_THEME = Theme(
    {
        "menu.ok": "bold green",
        "menu.error": "bold red",
        "menu.op": "bold cyan",
        "menu.version": "bold",
        "menu.heading": "bold",
        "menu.selector": "bold",
        "menu.label": "default",
        "menu.command": "yellow",
        "menu.prop": "cyan",
        "menu.value": "white",
        "menu.placeholder": "dim white",
    }
)


def create_console(
    *,
    no_color: bool = False,
    width: int | None = None,
    force_color: bool = False,
) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
        force_color: Emit ANSI codes even though the buffer is not a TTY.
            Set when the real destination stream is a terminal.
    """
    return Console(
        file=StringIO(),
        force_terminal=force_color or None,
        theme=MENU_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
