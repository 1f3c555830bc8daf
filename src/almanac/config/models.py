"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, almanac.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PipelineConfig(BaseModel):
    """[pipeline] section."""

    model_config = {"frozen": True}

    workers: int = Field(default=1, ge=1)
    chunk_size: int = Field(default=256, ge=1)
    strict: bool = True


class SolveConfig(BaseModel):
    """[solve] section."""

    model_config = {"frozen": True}

    mode: Literal["points", "ranges", "both"] = "both"
