from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import numpy as np

logger = logging.getLogger(__name__)


class MeshOwner(Protocol):
    """Anything that can hold independently creatable/clearable mesh sections.

    Calls are always issued from one thread, in section-index order.
    """

    def create_section(
        self,
        index: int,
        vertices: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray,
        uvs: np.ndarray,
        colors: np.ndarray,
        tangents: np.ndarray,
        build_collision: bool,
    ) -> Any: ...

    def clear_section(self, index: int) -> None: ...

    def get_section(self, index: int) -> Any: ...


@dataclass
class MeshSection:
    index: int
    vertices: np.ndarray
    triangles: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    colors: np.ndarray
    tangents: np.ndarray
    build_collision: bool


class InMemoryMeshOwner:
    """MeshOwner that keeps sections in a dict. Used by the CLI and tests."""

    def __init__(self) -> None:
        self.sections: Dict[int, MeshSection] = {}
        self.created = 0
        self.cleared = 0

    def create_section(self, index, vertices, triangles, normals, uvs, colors, tangents, build_collision=True) -> MeshSection:
        n = len(vertices)
        for name, arr in (("normals", normals), ("uvs", uvs), ("colors", colors), ("tangents", tangents)):
            if len(arr) != n:
                raise ValueError(f"section {index}: {name} has {len(arr)} entries, expected {n}")
        if len(triangles) % 3 != 0:
            raise ValueError(f"section {index}: triangle index count {len(triangles)} is not a multiple of 3")

        section = MeshSection(
            index=int(index),
            vertices=vertices,
            triangles=triangles,
            normals=normals,
            uvs=uvs,
            colors=colors,
            tangents=tangents,
            build_collision=bool(build_collision),
        )
        # Re-creating an index replaces it, like an engine mesh component
        self.sections[int(index)] = section
        self.created += 1
        return section

    def clear_section(self, index: int) -> None:
        if self.sections.pop(int(index), None) is not None:
            self.cleared += 1
        else:
            logger.debug("clear_section(%d): no such section", index)

    def get_section(self, index: int) -> Optional[MeshSection]:
        return self.sections.get(int(index))
