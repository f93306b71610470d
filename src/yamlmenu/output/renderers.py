"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from yamlmenu.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from yamlmenu.services.result import ServiceResult

DEFAULT_EXCEPT_PLACEHOLDER = "No exceptions"

# Width of the property-name column in a start-command block.
_PROP_WIDTH = 10


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    no_color: bool = False,
    force_color: bool = False,
    width: int | None = None,
    except_placeholder: str = DEFAULT_EXCEPT_PLACEHOLDER,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) unless *force_color* is set.
    """
    console = create_console(no_color=no_color, width=width, force_color=force_color)

    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, except_placeholder=except_placeholder)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Menus print one selector per line, commands one name per line, and
    ``show``/``version`` print the bare version string.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "menu":
        return "\n".join(item["selector"] for item in result.data.get("items", []))
    if result.op == "commands":
        return "\n".join(cmd["name"] for cmd in result.data.get("items", []))
    return str(result.data.get("version", ""))


# ── Building blocks ───────────────────────────────────────────────────


def _version_line(console: Console, version: str) -> None:
    console.print(Text("Config is version "), Text(version, style="menu.version"), sep="")


def _menu_lines(console: Console, items: list[dict[str, Any]]) -> None:
    for item in items:
        selector = Text(f"{item['selector']}.", style="menu.selector")
        label = Text(str(item["label"]), style="menu.label")
        console.print(selector, label)


def _prop(console: Console, name: str, value: Text) -> None:
    key = Text(f"   {name:<{_PROP_WIDTH}}", style="menu.prop")
    console.print(key, value, sep="")


def _command_block(console: Console, command: dict[str, Any], except_placeholder: str) -> None:
    console.print(Text(f" {command['name']}", style="menu.command"))
    _prop(console, "Path", Text(str(command["path"]), style="menu.value"))
    excluded = command.get("except")
    if excluded is None:
        _prop(console, "Except", Text(except_placeholder, style="menu.placeholder"))
    else:
        _prop(console, "Except", Text(str(excluded), style="menu.value"))
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="menu.error")
    op = Text(f"  {result.op}", style="menu.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_show(result: ServiceResult, console: Console, *, except_placeholder: str) -> None:
    _version_line(console, result.data["version"])
    console.print()
    _menu_lines(console, result.data.get("menu", []))
    console.print()
    console.print(Text("Commands", style="menu.heading"))
    for command in result.data.get("start_commands", []):
        _command_block(console, command, except_placeholder)


def _render_menu(result: ServiceResult, console: Console, *, except_placeholder: str) -> None:
    _menu_lines(console, result.data.get("items", []))


def _render_commands(result: ServiceResult, console: Console, *, except_placeholder: str) -> None:
    for command in result.data.get("items", []):
        _command_block(console, command, except_placeholder)


def _render_version(result: ServiceResult, console: Console, *, except_placeholder: str) -> None:
    _version_line(console, result.data["version"])


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "show": _render_show,
    "menu": _render_menu,
    "commands": _render_commands,
    "version": _render_version,
}
