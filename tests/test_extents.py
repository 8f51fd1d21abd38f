"""Tests for world bounds and water plane placement."""
from dataclasses import replace

import numpy as np
import pytest

from meshworld.world.chunk import Chunk, ChunkCoord, ChunkMeshData
from meshworld.world.extents import WorldExtents, preview_bounds, water_plane
from meshworld.world.params import WorldSizeMode


def _chunk_at(points):
    pos = np.array(points, dtype=np.float32)
    n = len(pos)
    mesh = ChunkMeshData(
        positions=pos,
        normals=np.zeros((n, 3), np.float32),
        uvs=np.zeros((n, 2), np.float32),
        colors=np.zeros((n, 4), np.float32),
        tangents=np.zeros((n, 3), np.float32),
        triangles=np.zeros(0, np.uint32),
        heights=np.zeros(n),
    )
    return Chunk(coord=ChunkCoord(0, 0), section_index=0, mesh=mesh)


class TestWorldExtents:

    def test_from_chunks(self):
        ext = WorldExtents.from_chunks([
            _chunk_at([(0, 0, 5), (10, 20, 7)]),
            _chunk_at([(-4, 2, 1), (3, 30, 2)]),
        ])
        assert ext.min_corner == (-4.0, 0.0, 1.0)
        assert ext.max_corner == (10.0, 30.0, 7.0)
        assert ext.center == (3.0, 15.0, 4.0)
        assert ext.size == (14.0, 30.0, 6.0)
        assert ext.height_range == (1.0, 7.0)

    def test_empty(self):
        with pytest.raises(ValueError):
            WorldExtents.from_chunks([])


class TestPreviewBounds:

    def test_single(self, small_params):
        box = preview_bounds(small_params, (10.0, 20.0, 30.0))
        assert box.half_extent == (100.0, 100.0, 250.0)
        assert box.center == (10.0, 20.0, 280.0)

    def test_bounded(self, small_params):
        p = replace(small_params, world_size=WorldSizeMode.BOUNDED, view_distance=2)
        assert preview_bounds(p).half_extent[:2] == (500.0, 500.0)

    def test_multiplier(self, small_params):
        p = replace(small_params, world_size=WorldSizeMode.BOUNDED, view_distance=1, world_size_multiplier=3)
        assert preview_bounds(p).half_extent[:2] == (700.0, 700.0)


class TestWaterPlane:

    def test_placement(self, grid_params):
        p = replace(grid_params, water_level=0.2, water_size=2.0, create_water=True)
        plane = water_plane(p, (5.0, 6.0, 100.0))
        assert plane.location == (5.0, 6.0, pytest.approx(200.0))
        assert plane.scale == (pytest.approx(4.0), pytest.approx(4.8), 0.1)
        assert plane.visible

    def test_hidden(self, small_params):
        assert not water_plane(replace(small_params, create_water=False)).visible
