from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from meshworld.config import VERTEX_COLOR_RGB
from meshworld.world.chunk import Chunk, ChunkCoord, ChunkMeshData
from meshworld.world.mesh_owner import MeshOwner
from meshworld.world.noise import NoiseField
from meshworld.world.params import GenerationParameters

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

UP_NORMAL = (0.0, 0.0, 1.0)
TANGENT = (0.0, 1.0, 0.0)


def build_indices(rows: int, columns: int) -> np.ndarray:
    """Build triangle indices for a (rows+1) x (columns+1) vertex grid.

    Vertices are row-major, idx(i, j) = i * (columns + 1) + j. Every quad is
    split along the same diagonal, from (i-1, j+1) to (i, j):

        j = 0,   1,   2,   3  ...
    i-1:    +----+----+----+- ...
            |   /|   /|   /|
            |  / |  / |  / |
            | /  | /  | /  |
    i:      +----+----+----+- ...

    Walking a row, column 0 emits the upper triangle of the first quad, each
    inner column emits the lower triangle of the quad on its left and the
    upper triangle of the quad on its right, and the last column emits only
    the lower one. That is 2 * columns triangles per row. The emission order
    is part of the output and must not change: neighbouring chunks rely on
    identical winding along their shared edge.
    """
    cols = columns + 1
    idx: list[int] = []
    for i in range(1, rows + 1):
        top = (i - 1) * cols
        cur = i * cols
        for j in range(cols):
            if j == 0:
                idx.extend([top, cur, top + 1])
            else:
                idx.extend([top + j, cur + j - 1, cur + j])
                if j < cols - 1:
                    idx.extend([top + j, cur + j, top + j + 1])
    return np.array(idx, dtype=np.uint32)


def chunk_origin(coord: ChunkCoord, params: GenerationParameters, origin: Vec3) -> Vec3:
    span_x, span_y = params.chunk_span
    return (
        float(origin[0]) + coord.x * span_x,
        float(origin[1]) + coord.y * span_y,
        float(origin[2]),
    )


def blend_weights(h: np.ndarray, thresholds: Tuple[float, float]) -> np.ndarray:
    """0.0 below t1, 0.5 on [t1, t2], 1.0 above t2."""
    t1, t2 = thresholds
    w = np.full(h.shape, 0.5, dtype=np.float32)
    w[h < t1] = 0.0
    w[h > t2] = 1.0
    return w


def build_chunk_mesh(
    coord: ChunkCoord,
    params: GenerationParameters,
    noise: NoiseField,
    origin: Vec3,
    indices: np.ndarray | None = None,
) -> ChunkMeshData:
    """Sample the height field over one chunk and return its buffers.

    Pure: reads only its arguments, so it can run on any thread.
    """
    rows, columns = int(params.rows), int(params.columns)
    sx, sy = float(params.piece_size[0]), float(params.piece_size[1])
    if rows < 1 or columns < 1:
        raise ValueError(f"chunk needs at least one row and column, got {rows}x{columns}")
    if params.frequency <= 0:
        raise ValueError(f"frequency must be > 0, got {params.frequency}")

    # Domain scale: one chunk spans `frequency` noise units on each axis
    fx = (columns * sx) / params.frequency
    fy = (rows * sy) / params.frequency

    # Positions are built from integer piece offsets relative to the origin
    # chunk's centre. Chunks sharing an edge compute bit-identical X/Y there.
    pieces_x = coord.x * columns - columns / 2.0 + np.arange(columns + 1, dtype=np.float64)
    pieces_y = coord.y * rows - rows / 2.0 + np.arange(rows + 1, dtype=np.float64)
    xs = float(origin[0]) + pieces_x * sx
    ys = float(origin[1]) + pieces_y * sy
    grid_x, grid_y = np.meshgrid(xs, ys, indexing="xy")  # (rows+1, columns+1)

    h = noise.grid(grid_x / fx, grid_y / fy, params.octaves)
    if params.invert:
        h = 1.0 - h

    base_z = float(origin[2])
    z = base_z + float(params.max_height) * h

    pos = np.stack([grid_x, grid_y, z], axis=-1).reshape(-1, 3).astype(np.float32)
    n = pos.shape[0]

    ii, jj = np.meshgrid(
        np.arange(rows + 1, dtype=np.float32),
        np.arange(columns + 1, dtype=np.float32),
        indexing="ij",
    )
    uvs = np.stack([ii, jj], axis=-1).reshape(-1, 2)

    h_v = h.reshape(-1)
    colors = np.empty((n, 4), dtype=np.float32)
    colors[:, :3] = VERTEX_COLOR_RGB
    colors[:, 3] = blend_weights(h_v, params.thresholds)

    if indices is None:
        indices = build_indices(rows, columns)

    return ChunkMeshData(
        positions=pos,
        normals=np.tile(np.array(UP_NORMAL, dtype=np.float32), (n, 1)),
        uvs=uvs,
        colors=colors,
        tangents=np.tile(np.array(TANGENT, dtype=np.float32), (n, 1)),
        triangles=indices,
        heights=h_v,
    )


class ChunkGenerator:
    """Builds chunks for one generation pass.

    Holds the pass-wide inputs (parameters, shared noise field, world origin)
    and the index buffer, which is the same for every chunk of the pass.
    """

    def __init__(self, params: GenerationParameters, noise: NoiseField, origin: Vec3 = (0.0, 0.0, 0.0)) -> None:
        if params.frequency <= 0:
            raise ValueError(f"frequency must be > 0, got {params.frequency}")
        self.params = params
        self.noise = noise
        self.origin = (float(origin[0]), float(origin[1]), float(origin[2]))
        self.indices = build_indices(int(params.rows), int(params.columns))

    def build(self, coord: ChunkCoord) -> ChunkMeshData:
        return build_chunk_mesh(ChunkCoord(*coord), self.params, self.noise, self.origin, self.indices)

    def attach(self, coord: ChunkCoord, mesh: ChunkMeshData, section_index: int, mesh_owner: MeshOwner) -> Chunk:
        """Hand finished buffers to the mesh owner and wrap them in a Chunk."""
        handle = mesh_owner.create_section(
            section_index,
            mesh.positions,
            mesh.triangles,
            mesh.normals,
            mesh.uvs,
            mesh.colors,
            mesh.tangents,
            True,
        )
        logger.debug("chunk %s -> section %d (%d verts)", tuple(coord), section_index, mesh.vertex_count)
        return Chunk(coord=ChunkCoord(*coord), section_index=int(section_index), mesh=mesh, section=handle)

    def generate(self, coord: ChunkCoord, section_index: int, mesh_owner: MeshOwner) -> Chunk:
        return self.attach(coord, self.build(coord), section_index, mesh_owner)
