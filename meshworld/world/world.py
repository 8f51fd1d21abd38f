from __future__ import annotations

import enum
import logging
import time
from typing import Optional

from meshworld.world.chunk import Chunk, ChunkCoord
from meshworld.world.chunk_manager import ChunkManager, chunk_coordinates, world_to_chunk
from meshworld.world.chunk_map import ChunkMap
from meshworld.world.extents import WorldExtents
from meshworld.world.mesh_builder import ChunkGenerator, Vec3
from meshworld.world.mesh_owner import MeshOwner
from meshworld.world.noise import NoiseConfig, NoiseField
from meshworld.world.params import GenerationParameters
from meshworld.world.seed import resolve_seed

logger = logging.getLogger(__name__)


class WorldState(enum.Enum):
    EMPTY = "empty"
    GENERATED = "generated"


class TerrainComposer:
    """Owns the chunk map and runs whole-world generation passes.

    Every pass tears the previous world down first, so the map is either
    empty or holds exactly the chunks of the last completed pass.
    """

    def __init__(self, *, workers: int = 0) -> None:
        self.chunk_map = ChunkMap()
        self.cm = ChunkManager(workers=workers)
        self.state = WorldState.EMPTY
        self.seed: Optional[int] = None
        self.params: Optional[GenerationParameters] = None
        self.origin: Vec3 = (0.0, 0.0, 0.0)
        self.extents: Optional[WorldExtents] = None

    def __enter__(self) -> "TerrainComposer":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def shutdown(self) -> None:
        self.cm.shutdown()

    def clear(self, mesh_owner: MeshOwner) -> None:
        self.chunk_map.clear_world(mesh_owner)
        self.state = WorldState.EMPTY
        self.extents = None

    def generate_world(
        self,
        params: GenerationParameters,
        mesh_owner: MeshOwner,
        origin: Vec3 = (0.0, 0.0, 0.0),
    ) -> WorldExtents:
        """Regenerate the whole world and return its bounds.

        Chunk meshes may be built in parallel, but sections are created and
        chunks committed here, one at a time, in enumeration order.
        """
        t0 = time.perf_counter()
        self.clear(mesh_owner)

        seed = resolve_seed(params.seed)
        self.seed = seed
        self.params = params
        self.origin = (float(origin[0]), float(origin[1]), float(origin[2]))

        noise = NoiseField(seed, NoiseConfig(mode=params.noise))
        generator = ChunkGenerator(params, noise, self.origin)
        coords = chunk_coordinates(params)

        meshes = self.cm.build_all(generator, coords)
        try:
            for section_index, (coord, mesh) in enumerate(zip(coords, meshes)):
                self.chunk_map.add_chunk(generator.attach(coord, mesh, section_index, mesh_owner))
        except Exception:
            # Never leave a half-built world behind
            self.clear(mesh_owner)
            raise

        self.extents = WorldExtents.from_chunks(self.chunk_map)
        self.state = WorldState.GENERATED
        logger.info(
            "generated %d chunk(s) seed=%d in %.1f ms",
            len(self.chunk_map),
            seed,
            (time.perf_counter() - t0) * 1000.0,
        )
        return self.extents

    def chunk_at(self, x: float, y: float) -> Optional[Chunk]:
        """Chunk covering world point (x, y), or None outside the generated world."""
        if self.params is None or self.state is WorldState.EMPTY:
            return None
        return self.chunk_map.lookup(world_to_chunk(x, y, self.params, self.origin))

    def lookup(self, coord: ChunkCoord) -> Optional[Chunk]:
        return self.chunk_map.lookup(coord)
