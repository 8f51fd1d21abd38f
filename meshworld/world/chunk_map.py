from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from meshworld.world.chunk import Chunk, ChunkCoord
from meshworld.world.mesh_owner import MeshOwner

logger = logging.getLogger(__name__)


class DuplicateCoordinateError(KeyError):
    def __init__(self, coord: ChunkCoord) -> None:
        super().__init__(f"chunk {tuple(coord)} is already in the map")
        self.coord = coord


class ChunkMap:
    """All chunks of the current world, keyed by grid coordinate."""

    def __init__(self) -> None:
        self._chunks: Dict[ChunkCoord, Chunk] = {}

    def add_chunk(self, chunk: Chunk) -> None:
        key = ChunkCoord(*chunk.coord)
        if key in self._chunks:
            raise DuplicateCoordinateError(key)
        self._chunks[key] = chunk

    def clear_world(self, mesh_owner: MeshOwner) -> None:
        """Clear every chunk's section on the mesh owner, then forget the chunks."""
        if self._chunks:
            logger.debug("clearing %d chunk sections", len(self._chunks))
        for chunk in self._chunks.values():
            mesh_owner.clear_section(chunk.section_index)
        self._chunks.clear()

    def lookup(self, coord: ChunkCoord) -> Optional[Chunk]:
        return self._chunks.get(ChunkCoord(*coord))

    def coordinates(self) -> List[ChunkCoord]:
        return list(self._chunks.keys())

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, coord) -> bool:
        return ChunkCoord(*coord) in self._chunks

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks.values())
