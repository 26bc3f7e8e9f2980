"""Settings loaded from the environment (and an optional .env file)."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Grid size -> default cell size in pixels for the renderer
GRID_PRESETS: dict[int, int] = {
    10: 28,
    15: 24,
    20: 22,
    25: 18,
}
DEFAULT_CELL_SIZE = 22


class Settings(BaseModel):
    grid_sizes: list[int] = Field(default_factory=lambda: list(GRID_PRESETS))
    default_grid_size: int = 20
    actions_per_turn: int = Field(default=3, ge=1)
    log_level: str = "WARNING"

    @field_validator("grid_sizes")
    @classmethod
    def _check_sizes(cls, sizes: list[int]) -> list[int]:
        if not sizes:
            raise ValueError("At least one grid size is required")
        if any(s < 2 for s in sizes):
            raise ValueError("Grid sizes must be at least 2")
        return sorted(set(sizes))

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, level: str) -> str:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {level}")
        return level

    @model_validator(mode="after")
    def _check_default_size(self) -> Settings:
        if self.default_grid_size not in self.grid_sizes:
            raise ValueError(
                f"Default grid size {self.default_grid_size} is not one of {self.grid_sizes}"
            )
        return self

    def cell_size_for(self, grid_size: int) -> int:
        return GRID_PRESETS.get(grid_size, DEFAULT_CELL_SIZE)


def load_settings() -> Settings:
    load_dotenv()

    values: dict[str, object] = {}
    grid_sizes = os.getenv("KLOPY_GRID_SIZES")
    if grid_sizes:
        values["grid_sizes"] = [int(s.strip()) for s in grid_sizes.split(",") if s.strip()]
    default_size = os.getenv("KLOPY_DEFAULT_GRID_SIZE")
    if default_size:
        values["default_grid_size"] = int(default_size)
    actions = os.getenv("KLOPY_ACTIONS_PER_TURN")
    if actions:
        values["actions_per_turn"] = int(actions)
    log_level = os.getenv("KLOPY_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level
    return Settings.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
