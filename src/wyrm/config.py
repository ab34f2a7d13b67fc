"""Game configuration with validation and JSON persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wyrm.geometry import GridGeometry

logger = logging.getLogger(__name__)


class GameConfig(BaseModel):
    """Tunable settings for a game session.

    Supports JSON serialization so a setup can be shared and replayed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Drawing surface
    surface_width: int = Field(default=400, ge=80)
    surface_height: int = Field(default=400, ge=80)
    cell_size: int = Field(default=20, ge=4, le=200)
    show_grid: bool = True

    # Simulation
    tick_interval_ms: int = Field(default=150, ge=10, le=2000)
    initial_length: int = Field(default=3, ge=1)
    max_spawn_attempts: int = Field(default=100, ge=1)
    seed: int | None = None

    # Input
    swipe_threshold: int = Field(default=30, ge=0)

    @model_validator(mode="after")
    def _creature_fits_grid(self) -> GameConfig:
        geometry = self.geometry()
        if geometry.width < self.initial_length or geometry.height < 1:
            raise ValueError(
                f"A {geometry.width}x{geometry.height} grid cannot hold a "
                f"creature of length {self.initial_length}.",
            )
        return self

    def geometry(self) -> GridGeometry:
        """Grid derived from the surface size and cell size."""
        return GridGeometry.from_surface(
            self.surface_width, self.surface_height, self.cell_size,
        )

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    def with_overrides(self, **overrides: object) -> GameConfig:
        """Return a copy with every non-``None`` override applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig.model_validate(data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.model_dump_json(indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())
