from __future__ import annotations

import logging
import math
import queue
import threading
from typing import List, Sequence, Tuple

from meshworld.world.chunk import ChunkCoord, ChunkMeshData
from meshworld.world.mesh_builder import ChunkGenerator, Vec3
from meshworld.world.params import GenerationParameters, WorldSizeMode

logger = logging.getLogger(__name__)

Task = Tuple[int, ChunkCoord, ChunkGenerator]
Result = Tuple[int, ChunkCoord, object]  # payload is ChunkMeshData or the exception raised


def chunk_coordinates(params: GenerationParameters) -> List[ChunkCoord]:
    """Chunks of one pass in commit order; list position is the section index.

    Bounded worlds walk x from -V to V in the outer loop and y in the inner one.
    """
    if params.world_size is WorldSizeMode.SINGLE_CHUNK:
        return [ChunkCoord(0, 0)]
    v = int(params.view_distance)
    return [ChunkCoord(x, y) for x in range(-v, v + 1) for y in range(-v, v + 1)]


def world_to_chunk(x: float, y: float, params: GenerationParameters, origin: Vec3 = (0.0, 0.0, 0.0)) -> ChunkCoord:
    """Grid coordinate of the chunk covering world point (x, y).

    Chunks are centred on their logical origin, so chunk (0, 0) spans half a
    chunk either side of ``origin``. Points on a shared edge go to the chunk
    with the larger coordinate.
    """
    span_x, span_y = params.chunk_span
    cx = int(math.floor((x - float(origin[0])) / span_x + 0.5))
    cy = int(math.floor((y - float(origin[1])) / span_y + 0.5))
    return ChunkCoord(cx, cy)


class ChunkWorker(threading.Thread):
    def __init__(self, task_q: "queue.Queue[Task]", out_q: "queue.Queue[Result]") -> None:
        super().__init__(daemon=True)
        self.task_q = task_q
        self.out_q = out_q
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                order, coord, generator = self.task_q.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                self.out_q.put((order, coord, generator.build(coord)))
            except Exception as exc:
                # Handed back to the committing thread, which re-raises it
                self.out_q.put((order, coord, exc))
            finally:
                self.task_q.task_done()


class ChunkManager:
    """Builds chunk meshes on a pool of worker threads.

    Only the pure mesh build runs on workers. Results come back keyed by
    their enumeration position so the caller can commit them in order, and
    nothing here touches the mesh owner or the chunk map.
    With ``workers=0`` everything runs on the calling thread.
    """

    def __init__(self, *, workers: int = 0) -> None:
        self.workers = max(0, int(workers))
        self.task_q: "queue.Queue[Task]" = queue.Queue()
        self.out_q: "queue.Queue[Result]" = queue.Queue()
        self._threads: List[ChunkWorker] = []

    def _ensure_started(self) -> None:
        if self._threads or self.workers == 0:
            return
        for _ in range(self.workers):
            w = ChunkWorker(self.task_q, self.out_q)
            w.start()
            self._threads.append(w)
        logger.debug("started %d chunk workers", self.workers)

    def shutdown(self) -> None:
        for w in self._threads:
            w.stop()
        for w in self._threads:
            w.join(timeout=1.0)
        self._threads = []

    def build_all(self, generator: ChunkGenerator, coords: Sequence[ChunkCoord]) -> List[ChunkMeshData]:
        """Build every coordinate and return meshes in the order of ``coords``."""
        if self.workers == 0 or len(coords) <= 1:
            return [generator.build(c) for c in coords]

        self._ensure_started()
        for order, coord in enumerate(coords):
            self.task_q.put((order, coord, generator))

        results: List[ChunkMeshData | None] = [None] * len(coords)
        first_error: Tuple[int, ChunkCoord, BaseException] | None = None
        for _ in range(len(coords)):
            order, coord, payload = self.out_q.get()
            if isinstance(payload, BaseException):
                if first_error is None or order < first_error[0]:
                    first_error = (order, coord, payload)
                continue
            results[order] = payload

        if first_error is not None:
            _, coord, exc = first_error
            logger.error("building chunk %s failed: %s", tuple(coord), exc)
            raise exc
        return results  # type: ignore[return-value]
