from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import List, Tuple

from meshworld import config
from meshworld.util.math import clamp


class WorldSizeMode(enum.Enum):
    SINGLE_CHUNK = "single"
    BOUNDED = "bounded"


@dataclass(frozen=True)
class GenerationParameters:
    """Everything one generation pass reads.

    The core consumes these as already valid. Use ``validate()`` to list
    problems or ``clamped()`` to pull values into range the way the property
    panel does before a pass is started.
    """

    rows: int = config.DEFAULT_ROWS
    columns: int = config.DEFAULT_COLUMNS
    piece_size: Tuple[float, float] = (config.DEFAULT_PIECE_SIZE_X, config.DEFAULT_PIECE_SIZE_Y)
    frequency: float = config.DEFAULT_FREQUENCY
    octaves: int = config.DEFAULT_OCTAVES
    seed: int = config.DEFAULT_SEED
    max_height: float = config.DEFAULT_MAX_HEIGHT
    invert: bool = config.DEFAULT_INVERT
    thresholds: Tuple[float, float] = (config.DEFAULT_FIRST_MATERIAL_MAX, config.DEFAULT_SECOND_MATERIAL_MAX)
    world_size: WorldSizeMode = WorldSizeMode.BOUNDED
    view_distance: int = config.DEFAULT_VIEW_DISTANCE
    world_size_multiplier: int = config.DEFAULT_WORLD_SIZE_MULTIPLIER
    noise: str = config.DEFAULT_NOISE

    # Water plane placement (consumed by extents.water_plane only)
    create_water: bool = config.DEFAULT_CREATE_WATER
    water_level: float = config.DEFAULT_WATER_LEVEL
    water_size: float = config.DEFAULT_WATER_SIZE

    @property
    def chunk_span(self) -> Tuple[float, float]:
        """World size of one chunk along X (columns) and Y (rows)."""
        return self.columns * float(self.piece_size[0]), self.rows * float(self.piece_size[1])

    @property
    def chunk_count(self) -> int:
        if self.world_size is WorldSizeMode.SINGLE_CHUNK:
            return 1
        return (2 * self.view_distance + 1) ** 2

    def validate(self) -> List[str]:
        errors: List[str] = []
        if self.rows < 1:
            errors.append(f"rows must be >= 1, got {self.rows}")
        if self.columns < 1:
            errors.append(f"columns must be >= 1, got {self.columns}")
        if len(self.piece_size) != 2 or min(self.piece_size) <= 0:
            errors.append(f"piece size must be two positive values, got {self.piece_size}")
        if not (config.FREQUENCY_MIN <= self.frequency <= config.FREQUENCY_MAX):
            errors.append(
                f"frequency must be in [{config.FREQUENCY_MIN}, {config.FREQUENCY_MAX}], got {self.frequency}"
            )
        if not (config.OCTAVES_MIN <= self.octaves <= config.OCTAVES_MAX):
            errors.append(f"octaves must be in [{config.OCTAVES_MIN}, {config.OCTAVES_MAX}], got {self.octaves}")
        if not (0 <= self.seed <= 0xFFFFFFFF):
            errors.append(f"seed must be a 32-bit unsigned value, got {self.seed}")
        if self.max_height < 0:
            errors.append(f"max height must be >= 0, got {self.max_height}")
        t1, t2 = self.thresholds
        if not (0.0 <= t1 <= t2 <= 1.0):
            errors.append(f"thresholds must be ascending within [0, 1], got {self.thresholds}")
        if self.view_distance < 1:
            errors.append(f"view distance must be >= 1, got {self.view_distance}")
        if self.world_size_multiplier < 0:
            errors.append(f"world size multiplier must be >= 0, got {self.world_size_multiplier}")
        if self.noise not in ("perlin", "simplex"):
            errors.append(f"noise must be 'perlin' or 'simplex', got {self.noise!r}")
        if not (0.0 <= self.water_level <= 1.0):
            errors.append(f"water level must be in [0, 1], got {self.water_level}")
        return errors

    def clamped(self) -> "GenerationParameters":
        """Return a copy with every field pulled into its allowed range."""
        t1 = clamp(float(self.thresholds[0]), 0.0, 1.0)
        t2 = clamp(float(self.thresholds[1]), 0.0, 1.0)
        return replace(
            self,
            rows=max(1, int(self.rows)),
            columns=max(1, int(self.columns)),
            frequency=clamp(float(self.frequency), config.FREQUENCY_MIN, config.FREQUENCY_MAX),
            octaves=int(clamp(int(self.octaves), config.OCTAVES_MIN, config.OCTAVES_MAX)),
            seed=int(clamp(int(self.seed), 0, 0xFFFFFFFF)),
            max_height=max(0.0, float(self.max_height)),
            thresholds=(min(t1, t2), max(t1, t2)),
            view_distance=max(1, int(self.view_distance)),
            world_size_multiplier=max(0, int(self.world_size_multiplier)),
            water_level=clamp(float(self.water_level), 0.0, 1.0),
        )
