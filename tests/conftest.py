"""Shared pytest fixtures for all test modules."""
import pytest

from meshworld.world.mesh_builder import ChunkGenerator
from meshworld.world.mesh_owner import InMemoryMeshOwner
from meshworld.world.noise import NoiseField
from meshworld.world.params import GenerationParameters, WorldSizeMode


@pytest.fixture
def small_params():
    """2x2 quads of 100 units, seed 42, single chunk."""
    return GenerationParameters(
        rows=2,
        columns=2,
        piece_size=(100.0, 100.0),
        frequency=4.0,
        octaves=3,
        seed=42,
        max_height=500.0,
        invert=False,
        thresholds=(0.3, 0.6),
        world_size=WorldSizeMode.SINGLE_CHUNK,
        view_distance=1,
    )


@pytest.fixture
def grid_params(small_params):
    """Rectangular 6x8 chunk, better for seam and coverage checks."""
    from dataclasses import replace
    return replace(small_params, rows=6, columns=8, piece_size=(25.0, 40.0))


@pytest.fixture
def noise42():
    return NoiseField(42)


@pytest.fixture
def generator(small_params, noise42):
    return ChunkGenerator(small_params, noise42, (0.0, 0.0, 0.0))


@pytest.fixture
def owner():
    return InMemoryMeshOwner()
