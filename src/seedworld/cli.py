"""Command-line interface for world generation."""

import argparse
import sys
import time
from pathlib import Path

import structlog

from .campus import generate_campus
from .config import GeneratorConfig, load_config
from .exceptions import ConfigurationError
from .generator import generate_world
from .persistence import save_map, save_world
from .tiles import CampusTile, TileType

logger = structlog.get_logger()

# One character per tile code for --preview
PREVIEW_CHARS: dict[int, str] = {
    TileType.GRASS: ".",
    TileType.TREE: "T",
    TileType.WATER: "~",
    TileType.FLOOR: "_",
    TileType.PATH: "=",
    TileType.DOOR: "D",
    TileType.CARPET: "c",
    TileType.FLOWER: "*",
    TileType.ROCK: "o",
    TileType.HOUSE_WALL: "#",
    TileType.ROOF: "^",
    TileType.BUSH: "b",
    TileType.TALL_GRASS: ",",
    TileType.SAND: ":",
    TileType.DIRT: "-",
    CampusTile.ROAD: "=",
    CampusTile.BUILDING: "B",
    CampusTile.SIDEWALK: "+",
    CampusTile.PARKING: "P",
    CampusTile.PLAZA: "p",
    CampusTile.HEDGE: "h",
    CampusTile.SPORT_FIELD: "s",
    CampusTile.BUILDING_DARK: "K",
    CampusTile.BIG_TREE: "Y",
}


def render_preview(tiles) -> str:
    """Render a tile grid as ASCII, one character per tile."""
    return "\n".join(
        "".join(PREVIEW_CHARS.get(int(code), "?") for code in row) for row in tiles
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a seeded tile world with interiors and dungeons"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="World seed (default: derived from the clock)"
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="TOML configuration file"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the generated world (or campus map) as JSON to this path",
    )
    parser.add_argument(
        "--campus", action="store_true", help="Generate the campus map instead of a world"
    )
    parser.add_argument(
        "--preview", action="store_true", help="Print an ASCII preview of the exterior map"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for world generation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure structlog for CLI
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error("config_load_failed", error=str(e))
        return 2

    start_time = time.time()
    try:
        if args.campus:
            campus = generate_campus(args.seed, config)
            tiles = campus.tiles
        else:
            world = generate_world(args.seed, config)
            tiles = world.world_map.tiles
    except ConfigurationError as e:
        logger.error("generation_failed", error=str(e))
        return 2
    logger.info("generation_complete", seconds=round(time.time() - start_time, 2))

    if args.preview:
        print(render_preview(tiles))

    if args.output:
        if args.campus:
            save_map(args.output, campus)
        else:
            save_world(args.output, world)

    return 0


if __name__ == "__main__":
    sys.exit(main())
