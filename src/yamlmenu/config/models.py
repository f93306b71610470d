"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, yamlmenu.toml only contains
overrides.  An empty file is a valid config.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    """[source] section."""

    model_config = {"frozen": True}

    # Document read when no FILE argument is given; None means the bundled sample.
    path: Path | None = None


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    except_placeholder: str = "No exceptions"
    width: int = Field(default=120, ge=20)
