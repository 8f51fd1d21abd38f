from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from meshworld.config import WATER_PLANE_THICKNESS
from meshworld.world.chunk import Chunk
from meshworld.world.mesh_builder import Vec3
from meshworld.world.params import GenerationParameters, WorldSizeMode


@dataclass(frozen=True)
class WorldExtents:
    """Axis-aligned bounds of everything one pass generated."""

    min_corner: Vec3
    max_corner: Vec3

    @property
    def center(self) -> Vec3:
        return tuple((lo + hi) / 2.0 for lo, hi in zip(self.min_corner, self.max_corner))  # type: ignore[return-value]

    @property
    def size(self) -> Vec3:
        return tuple(hi - lo for lo, hi in zip(self.min_corner, self.max_corner))  # type: ignore[return-value]

    @property
    def height_range(self) -> Tuple[float, float]:
        return self.min_corner[2], self.max_corner[2]

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> "WorldExtents":
        lo = np.full(3, np.inf)
        hi = np.full(3, -np.inf)
        for ch in chunks:
            pos = ch.mesh.positions
            lo = np.minimum(lo, pos.min(axis=0))
            hi = np.maximum(hi, pos.max(axis=0))
        if not np.all(np.isfinite(lo)):
            raise ValueError("no chunks to measure")
        return cls(tuple(float(v) for v in lo), tuple(float(v) for v in hi))  # type: ignore[arg-type]


@dataclass(frozen=True)
class Box:
    center: Vec3
    half_extent: Vec3


@dataclass(frozen=True)
class WaterPlane:
    location: Vec3
    scale: Vec3
    visible: bool


def preview_bounds(params: GenerationParameters, origin: Vec3 = (0.0, 0.0, 0.0)) -> Box:
    """Box the world will occupy, computed without generating anything.

    A positive world size multiplier M widens a bounded world's box to
    2*M*V + 1 chunks per side. Generation itself always covers 2*V + 1.
    """
    span_x, span_y = params.chunk_span
    if params.world_size is WorldSizeMode.SINGLE_CHUNK:
        chunks = 1
    elif params.world_size_multiplier > 0:
        chunks = params.world_size_multiplier * params.view_distance * 2 + 1
    else:
        chunks = params.view_distance * 2 + 1
    half_z = float(params.max_height) / 2.0
    return Box(
        center=(float(origin[0]), float(origin[1]), float(origin[2]) + half_z),
        half_extent=(chunks * span_x / 2.0, chunks * span_y / 2.0, half_z),
    )


def water_plane(params: GenerationParameters, origin: Vec3 = (0.0, 0.0, 0.0)) -> WaterPlane:
    """Where an external water plane goes: ``water_level`` of the way up the height range.

    Scale assumes the engine's 100x100 unit plane mesh, so ``water_size`` is
    the plane width measured in chunks.
    """
    span_x, span_y = params.chunk_span
    factor = float(params.water_size) / 100.0
    return WaterPlane(
        location=(
            float(origin[0]),
            float(origin[1]),
            float(origin[2]) + float(params.max_height) * float(params.water_level),
        ),
        scale=(span_x * factor, span_y * factor, WATER_PLANE_THICKNESS),
        visible=bool(params.create_water),
    )
