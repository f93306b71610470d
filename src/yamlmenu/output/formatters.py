"""Human/quiet/JSON output selection.

The CLI renders ServiceResult for humans (Rich output, colors) or
machines (--json).  The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from yamlmenu.output.renderers import DEFAULT_EXCEPT_PLACEHOLDER, render_quiet, render_result

if TYPE_CHECKING:
    from yamlmenu.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    no_color: bool = False
    color: bool = False
    width: int | None = None
    except_placeholder: str = DEFAULT_EXCEPT_PLACEHOLDER


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the Rich renderer.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        no_color=settings.no_color,
        force_color=settings.color and not settings.no_color,
        width=settings.width,
        except_placeholder=settings.except_placeholder,
    )
