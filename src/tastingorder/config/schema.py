"""Pydantic schema for engine configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EngineConfig(BaseModel):
    """Validated runtime configuration with defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_separator: str = Field(default=".", min_length=1)
    id_path: str = Field(default="id", min_length=1)

    date_window_days: int = Field(default=30, gt=0)
    equal_range_score: float = Field(default=50.0, ge=0.0, le=100.0)

    min_weight: int = Field(default=1, ge=0)
    max_weight: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def _check_weight_bounds(self) -> EngineConfig:
        if self.min_weight > self.max_weight:
            raise ValueError("min_weight cannot exceed max_weight.")
        return self
