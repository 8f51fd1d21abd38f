from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np


class ChunkCoord(NamedTuple):
    x: int
    y: int


@dataclass
class ChunkMeshData:
    """CPU-side buffers for one chunk, vertex i of every array describes the same point.

    positions (N,3) float32, world space
    normals   (N,3) float32, always +Z: flat shading, not derived from slope
    uvs       (N,2) float32, raw (row, column) indices, not normalized to 0..1
    colors    (N,4) float32, RGB constant, alpha = material blend weight
    tangents  (N,3) float32, always +Y
    triangles (M,)  uint32, three indices per triangle
    heights   (N,)  float64, relative height 0..1 after inversion
    """

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    colors: np.ndarray
    tangents: np.ndarray
    triangles: np.ndarray
    heights: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.triangles.shape[0] // 3)

    @property
    def blend_weights(self) -> np.ndarray:
        return self.colors[:, 3]


@dataclass
class Chunk:
    coord: ChunkCoord
    section_index: int
    mesh: ChunkMeshData
    section: Any = None  # opaque handle returned by the mesh owner
