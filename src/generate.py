"""Generates a tilemap without the GUI and writes it to an image file."""

from __future__ import annotations

import argparse
import os
import random
import sys

import structlog

import constants
from enums import SeedPattern
from exceptions import ConfigurationError, ContradictionError, TilemapSaveError
from logging_config import setup_logging
from model.grid import Grid, seed_coords
from model.tile_types import load_tile_types, TileTypeRegistry
from model.tilemap_renderer import TilemapRenderer
from model.wfc import WFC


logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a tilemap with the Wave Function Collapse algorithm.")
    parser.add_argument("--width", type=int, default=constants.TILEMAP_SIZE_DEFAULT, help="Tilemap width in cells")
    parser.add_argument("--height", type=int, default=constants.TILEMAP_SIZE_DEFAULT, help="Tilemap height in cells")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (random if omitted)")
    parser.add_argument(
        "--seed-pattern",
        choices=[pattern.name.lower() for pattern in SeedPattern],
        default=constants.SEED_PATTERN_DEFAULT.name.lower(),
        help="Placement of the initially open cells",
    )
    parser.add_argument(
        "--seed-stride", type=int, default=constants.SEED_STRIDE_DEFAULT, help="Distance between lattice seeds"
    )
    parser.add_argument("--tile-types", default=None, help="CSV file with tile types (built-in palette if omitted)")
    parser.add_argument("--output", default="out.png", help="Path of the tilemap image")
    parser.add_argument("--tilemap-csv", default=None, help="Also save the tile type indices to this CSV file")
    parser.add_argument("--cell-size", type=int, default=constants.CELL_SIZE_DEFAULT, help="Pixels per cell")
    parser.add_argument("--snapshot-dir", default=None, help="Save partial tilemap images to this directory")
    parser.add_argument("--snapshot-interval", type=int, default=1, help="Steps between two snapshots")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def generate(
    tile_types: TileTypeRegistry,
    width: int,
    height: int,
    random_seed: int,
    seed_pattern: SeedPattern = constants.SEED_PATTERN_DEFAULT,
    seed_stride: int = constants.SEED_STRIDE_DEFAULT,
    renderer: TilemapRenderer | None = None,
    snapshot_dir: str | None = None,
    snapshot_interval: int = 1,
) -> WFC:
    """Runs a complete generation and returns the finished engine.

    Args:
        tile_types: The tile types to place.
        width: Tilemap width in cells.
        height: Tilemap height in cells.
        random_seed: Seed of the random number generator; equal seeds give identical tilemaps.
        seed_pattern: Placement of the initially open cells.
        seed_stride: Distance between lattice seeds.
        renderer: Used to render snapshots. Required if 'snapshot_dir' is given.
        snapshot_dir: If given, a partial tilemap image 'img{i}.png' is saved every 'snapshot_interval' steps.
        snapshot_interval: Steps between two snapshots.

    Raises:
        ConfigurationError: If the parameters are invalid.
        ContradictionError: If generation runs into a cell without possible tile types.
        TilemapSaveError: If a snapshot cannot be written.
    """
    grid = Grid(width, height, tile_types, seed_coords(seed_pattern, width, height, seed_stride))
    wfc = WFC(grid, random.Random(random_seed))

    on_step = None
    if snapshot_dir is not None:
        if renderer is None:
            raise ConfigurationError("Saving snapshots requires a renderer")
        if snapshot_interval < 1:
            raise ConfigurationError(f"Snapshot interval must be at least 1, got {snapshot_interval}")
        os.makedirs(snapshot_dir, exist_ok=True)

        def on_step(engine: WFC) -> None:
            if engine.step_count % snapshot_interval == 0:
                img = renderer.get_tilemap_img(engine.grid.tilemap())
                renderer.save_tilemap_img(img, os.path.join(snapshot_dir, f"img{engine.step_count}.png"))

    wfc.run(on_step)
    return wfc


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, json_logs=args.json_logs)

    random_seed = args.seed if args.seed is not None else random.randint(0, constants.RANDOM_SEED_MAX)

    try:
        if args.tile_types is not None:
            tile_types = load_tile_types(args.tile_types)
        else:
            tile_types = TileTypeRegistry.from_definitions(constants.DEFAULT_TILE_TYPES)
        renderer = TilemapRenderer(tile_types, args.cell_size)

        logger.info("Generating tilemap", width=args.width, height=args.height, random_seed=random_seed)
        wfc = generate(
            tile_types,
            args.width,
            args.height,
            random_seed,
            seed_pattern=SeedPattern[args.seed_pattern.upper()],
            seed_stride=args.seed_stride,
            renderer=renderer,
            snapshot_dir=args.snapshot_dir,
            snapshot_interval=args.snapshot_interval,
        )
        print(f"Generated with {wfc.step_count} iterations!")

        tilemap = wfc.grid.tilemap()
        renderer.save_tilemap_img(renderer.get_tilemap_img(tilemap), args.output)
        if args.tilemap_csv is not None:
            renderer.save_tilemap(tilemap, args.tilemap_csv)
    except (ConfigurationError, ContradictionError) as err:
        logger.error("Generation failed", error=str(err))
        return 1
    except TilemapSaveError as err:
        logger.error("Saving failed", error=str(err), path=err.path)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
