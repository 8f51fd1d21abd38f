from __future__ import annotations

import argparse
import logging

from meshworld.config import (
    APP_VERSION,
    DEFAULT_COLUMNS,
    DEFAULT_CREATE_WATER,
    DEFAULT_FIRST_MATERIAL_MAX,
    DEFAULT_FREQUENCY,
    DEFAULT_INVERT,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_NOISE,
    DEFAULT_OCTAVES,
    DEFAULT_PIECE_SIZE_X,
    DEFAULT_PIECE_SIZE_Y,
    DEFAULT_ROWS,
    DEFAULT_SECOND_MATERIAL_MAX,
    DEFAULT_SEED,
    DEFAULT_SINGLE_CHUNK,
    DEFAULT_VIEW_DISTANCE,
    DEFAULT_WATER_LEVEL,
    DEFAULT_WATER_SIZE,
    DEFAULT_WORKERS,
    DEFAULT_WORLD_SIZE_MULTIPLIER,
)
from meshworld.world.extents import water_plane
from meshworld.world.mesh_owner import InMemoryMeshOwner
from meshworld.world.params import GenerationParameters, WorldSizeMode
from meshworld.world.world import TerrainComposer

logger = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="meshworld", description=f"Chunked procedural terrain mesh generator v{APP_VERSION}")
    p.add_argument("--seed", default=str(DEFAULT_SEED), help="int seed, 0 or 'random' for a fresh one each run (default: 0)")
    p.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="quads per chunk along Y")
    p.add_argument("--columns", type=int, default=DEFAULT_COLUMNS, help="quads per chunk along X")
    p.add_argument(
        "--piece-size",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=(DEFAULT_PIECE_SIZE_X, DEFAULT_PIECE_SIZE_Y),
        help="world size of one quad",
    )
    p.add_argument("--frequency", type=float, default=DEFAULT_FREQUENCY, help="noise features per chunk (clamped to 0.1..64)")
    p.add_argument("--octaves", type=int, default=DEFAULT_OCTAVES, help="fractal layers (clamped to 1..16)")
    p.add_argument("--max-height", type=float, default=DEFAULT_MAX_HEIGHT, help="height range above origin Z")
    p.add_argument("--invert", action="store_true", default=DEFAULT_INVERT, help="flip the height field upside down")
    p.add_argument(
        "--thresholds",
        type=float,
        nargs=2,
        metavar=("T1", "T2"),
        default=(DEFAULT_FIRST_MATERIAL_MAX, DEFAULT_SECOND_MATERIAL_MAX),
        help="relative heights where the material blend weight steps to 0.5 and 1.0",
    )
    p.add_argument("--single", action="store_true", default=DEFAULT_SINGLE_CHUNK, help="generate only chunk (0,0)")
    p.add_argument("--view-distance", type=int, default=DEFAULT_VIEW_DISTANCE, help="chunk radius around the origin chunk")
    p.add_argument(
        "--world-size",
        type=int,
        default=DEFAULT_WORLD_SIZE_MULTIPLIER,
        help="preview bounds multiplier for bounded worlds (0 = none)",
    )
    p.add_argument("--noise", choices=["perlin", "simplex"], default=DEFAULT_NOISE, help="gradient noise backend")
    p.add_argument("--workers", type=int, default=DEFAULT_WORKERS, help="chunk build threads (0 = inline)")
    p.add_argument("--origin", type=float, nargs=3, metavar=("X", "Y", "Z"), default=(0.0, 0.0, 0.0), help="world origin")
    p.add_argument("--water-level", type=float, default=DEFAULT_WATER_LEVEL, help="water height as a fraction of max height")
    p.add_argument("--water-size", type=float, default=DEFAULT_WATER_SIZE, help="water plane width in chunks")
    p.add_argument("--no-water", dest="water", action="store_false", default=DEFAULT_CREATE_WATER, help="no water plane")
    p.add_argument("--debug", action="store_true", help="verbose logging")
    return p.parse_args(argv)


def params_from_args(args: argparse.Namespace) -> GenerationParameters:
    if isinstance(args.seed, str) and args.seed.lower() == "random":
        seed = 0
    else:
        seed = int(args.seed)

    raw = GenerationParameters(
        rows=int(args.rows),
        columns=int(args.columns),
        piece_size=(float(args.piece_size[0]), float(args.piece_size[1])),
        frequency=float(args.frequency),
        octaves=int(args.octaves),
        seed=seed,
        max_height=float(args.max_height),
        invert=bool(args.invert),
        thresholds=(float(args.thresholds[0]), float(args.thresholds[1])),
        world_size=WorldSizeMode.SINGLE_CHUNK if args.single else WorldSizeMode.BOUNDED,
        view_distance=int(args.view_distance),
        world_size_multiplier=int(args.world_size),
        noise=str(args.noise),
        create_water=bool(args.water),
        water_level=float(args.water_level),
        water_size=float(args.water_size),
    )
    params = raw.clamped()
    if params != raw:
        logger.warning("some parameters were out of range and have been clamped")
    problems = params.validate()
    if problems:
        raise SystemExit("invalid parameters: " + "; ".join(problems))
    return params


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    params = params_from_args(args)
    origin = (float(args.origin[0]), float(args.origin[1]), float(args.origin[2]))

    owner = InMemoryMeshOwner()
    with TerrainComposer(workers=int(args.workers)) as composer:
        ext = composer.generate_world(params, owner, origin)
        verts = sum(ch.mesh.vertex_count for ch in composer.chunk_map)
        tris = sum(ch.mesh.triangle_count for ch in composer.chunk_map)

    lo, hi = ext.height_range
    print(f"[meshworld] seed={composer.seed} chunks={len(composer.chunk_map)} sections={len(owner.sections)}")
    print(f"[meshworld] vertices={verts} triangles={tris} height={lo:.2f}..{hi:.2f}")
    print(f"[meshworld] bounds min={_fmt(ext.min_corner)} max={_fmt(ext.max_corner)}")
    water = water_plane(params, origin)
    if water.visible:
        print(f"[meshworld] water at={_fmt(water.location)} scale={_fmt(water.scale)}")


def _fmt(v) -> str:
    return "(" + ", ".join(f"{c:.2f}" for c in v) + ")"


if __name__ == "__main__":
    main()
