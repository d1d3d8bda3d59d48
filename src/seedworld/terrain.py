"""Biome classification of the exterior grid from sampled noise channels."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import GeneratorConfig, TerrainConfig
from .grid import TileGrid
from .models import Enemy, EnemyKind, PoiKind, PointOfInterest
from .noise import NoiseChannels
from .rng import RandomStream
from .tiles import BORDER_TILE, TileType, is_solid
from .types import Position

logger = structlog.get_logger()


def protection_radius(kind: PoiKind, config: TerrainConfig) -> float:
    """Radius around a POI kept clear of obstacles."""
    return {
        PoiKind.SPAWN: config.spawn_radius,
        PoiKind.HOUSE: config.house_radius,
        PoiKind.RUIN: config.ruin_radius,
        PoiKind.DUNGEON: config.dungeon_radius,
    }[kind]


def protection_owners(
    width: int,
    height: int,
    pois: list[PointOfInterest],
    config: TerrainConfig,
) -> NDArray[np.int64]:
    """Index of the POI protecting each cell, or -1.

    Where radii overlap, the earlier POI wins.
    """
    owners = np.full((height, width), -1, dtype=np.int64)
    ys, xs = np.mgrid[0:height, 0:width]
    for index in range(len(pois) - 1, -1, -1):
        poi = pois[index]
        radius = protection_radius(poi.kind, config)
        dist_sq = (xs - poi.position.x) ** 2 + (ys - poi.position.y) ** 2
        owners[dist_sq <= radius * radius] = index
    return owners


def _dense_forest_tile(rng: RandomStream, t: TerrainConfig) -> TileType:
    return rng.weighted([
        (TileType.TREE, t.dense_tree_weight),
        (TileType.BUSH, t.dense_bush_weight),
        (TileType.GRASS, t.dense_grass_weight),
    ])


def _mixed_forest_tile(rng: RandomStream, t: TerrainConfig) -> TileType:
    return rng.weighted([
        (TileType.TREE, t.mixed_tree_weight),
        (TileType.BUSH, t.mixed_bush_weight),
        (TileType.FLOWER, t.mixed_flower_weight),
        (TileType.GRASS, t.mixed_grass_weight),
    ])


def _open_ground_tile(rng: RandomStream, t: TerrainConfig) -> TileType:
    return rng.weighted([
        (TileType.ROCK, t.open_rock_weight),
        (TileType.FLOWER, t.open_flower_weight),
        (TileType.TALL_GRASS, t.open_tall_grass_weight),
        (TileType.GRASS, t.open_grass_weight),
    ])


def _cleared_tile(kind: PoiKind, rng: RandomStream) -> TileType:
    if kind == PoiKind.RUIN:
        return TileType.DIRT if rng.chance(0.5) else TileType.GRASS
    if kind == PoiKind.DUNGEON:
        return TileType.FLOOR
    return TileType.GRASS


def synthesize_terrain(
    grid: TileGrid,
    pois: list[PointOfInterest],
    channels: NoiseChannels,
    rng: RandomStream,
    config: GeneratorConfig,
) -> list[Enemy]:
    """Classify every non-road cell of the exterior grid in place.

    Cells are visited in row-major order so the stream is consumed in a
    fixed sequence. Border cells become the border tile, cells near a POI
    are cleared to its base tile, the rest are classified by elevation and
    then by forest density. Enemy spawn rolls happen in the same visit as
    the tile draw for forest and open cells.

    Args:
        grid: Exterior grid, modified in place.
        pois: Placed POIs (spawn first).
        channels: Elevation, forest and detail noise fields.
        rng: World random stream.
        config: Generator configuration.

    Returns:
        Enemies spawned onto the exterior map.
    """
    t = config.terrain
    height, width = grid.shape

    detail = channels.detail.sample_grid(width, height, t.detail_scale)
    elevation = channels.elevation.sample_grid(width, height, t.elevation_scale)
    elevation = elevation + t.detail_weight * detail
    forest = channels.forest.sample_grid(width, height, t.forest_scale)
    owners = protection_owners(width, height, pois, t)

    enemies: list[Enemy] = []

    def roll_enemy(x: int, y: int, tile: TileType, chance: float, kind: EnemyKind) -> None:
        if is_solid(tile):
            return
        if rng.chance(chance):
            enemies.append(
                Enemy.spawn(
                    f"wild_{len(enemies)}", kind, Position(x=x, y=y), config.tile_size
                )
            )

    for y in range(height):
        for x in range(width):
            if x == 0 or y == 0 or x == width - 1 or y == height - 1:
                grid[y, x] = BORDER_TILE
                continue
            if grid[y, x] == TileType.PATH:
                continue

            owner = owners[y, x]
            if owner >= 0:
                grid[y, x] = _cleared_tile(pois[owner].kind, rng)
                continue

            e = elevation[y, x]
            if e < t.water_level:
                grid[y, x] = TileType.WATER
                continue
            if e < t.shore_level:
                grid[y, x] = TileType.SAND
                continue
            if e > t.mountain_level:
                grid[y, x] = TileType.TREE
                continue

            f = forest[y, x]
            if f > t.dense_forest:
                tile = _dense_forest_tile(rng, t)
                grid[y, x] = tile
                roll_enemy(x, y, tile, t.forest_enemy_chance, EnemyKind.BAT)
            elif f > t.mixed_forest:
                tile = _mixed_forest_tile(rng, t)
                grid[y, x] = tile
                roll_enemy(x, y, tile, t.forest_enemy_chance, EnemyKind.SLIME)
            else:
                if detail[y, x] > t.tall_grass_detail:
                    tile = TileType.TALL_GRASS
                else:
                    tile = _open_ground_tile(rng, t)
                grid[y, x] = tile
                roll_enemy(x, y, tile, t.open_enemy_chance, EnemyKind.SLIME)

    logger.debug(
        "terrain_synthesized",
        width=width,
        height=height,
        water=int(np.sum(grid == TileType.WATER)),
        trees=int(np.sum(grid == TileType.TREE)),
        enemies=len(enemies),
    )
    return enemies
