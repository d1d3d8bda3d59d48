"""Post-generation invariant checks.

Validation reports problems; it never repairs a world.
"""

import itertools

import numpy as np
import structlog
from scipy import ndimage

from .config import GeneratorConfig
from .footprints import road_anchor
from .models import EnemyKind, GeneratedWorld, MapData, PoiKind, to_tile
from .structures import interior_map_id
from .tiles import BORDER_TILE, WORLD_CODES, MapTheme, TileType, is_solid

logger = structlog.get_logger()

# 4-connected neighbourhood for road components
ROAD_STRUCTURE = ndimage.generate_binary_structure(2, 1)


class ValidationResult:
    """Result of world validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(world: GeneratedWorld, config: GeneratorConfig) -> ValidationResult:
    """Validate a generated world against its structural guarantees.

    Args:
        world: Generated world.
        config: Configuration it was generated with.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()
    world_map = world.world_map

    _check_shape(world_map, config, result)
    _check_border(world_map, result)
    _check_legend(world, result)
    _check_spacing(world, config, result)
    _check_road_connectivity(world, result)
    _check_portals(world, result)
    _check_return_portals(world, result)
    _check_bosses(world, result)
    _check_enemy_footing(world, result)

    if result.passed:
        logger.info("world_validation_passed", seed=world.seed, warnings=len(result.warnings))
    else:
        logger.warning("world_validation_failed", seed=world.seed, errors=result.errors)

    for warning in result.warnings:
        logger.warning("world_validation_warning", seed=world.seed, warning=warning)

    return result


def _check_shape(world_map: MapData, config: GeneratorConfig, result: ValidationResult) -> None:
    if (world_map.width, world_map.height) != (config.width, config.height):
        result.add_error(
            f"Exterior is {world_map.width}x{world_map.height}, "
            f"expected {config.width}x{config.height}"
        )


def _check_border(world_map: MapData, result: ValidationResult) -> None:
    """Check that every edge cell is the border tile."""
    tiles = world_map.tiles
    edges = np.concatenate([tiles[0, :], tiles[-1, :], tiles[:, 0], tiles[:, -1]])
    bad = int(np.sum(edges != BORDER_TILE))
    if bad:
        result.add_error(f"Border has {bad} non-border cells")


def _check_legend(world: GeneratedWorld, result: ValidationResult) -> None:
    """Check that no map uses campus-only codes."""
    highest = max(WORLD_CODES)
    for map_id, map_data in world.maps.items():
        top = int(map_data.tiles.max())
        if top > highest:
            result.add_error(f"Map {map_id} uses tile code {top} outside the world legend")


def _check_spacing(world: GeneratedWorld, config: GeneratorConfig, result: ValidationResult) -> None:
    for a, b in itertools.combinations(world.pois, 2):
        distance = a.position.distance(b.position)
        if distance < config.poi.min_distance:
            result.add_error(
                f"POIs at {a.position} and {b.position} only {distance:.1f} apart"
            )


def _check_road_connectivity(world: GeneratedWorld, result: ValidationResult) -> None:
    """Check that one road component reaches every POI's road anchor."""
    if len(world.pois) < 2:
        return

    tiles = world.world_map.tiles
    labeled, num_features = ndimage.label(tiles == TileType.PATH, structure=ROAD_STRUCTURE)
    if num_features == 0:
        result.add_error("No road tiles found")
        return

    labels = set()
    for poi in world.pois:
        anchor = road_anchor(poi)
        label = int(labeled[anchor.y, anchor.x])
        if label == 0:
            result.add_error(f"{poi.kind.value} at {poi.position} has no road at {anchor}")
        labels.add(label)
    labels.discard(0)

    if len(labels) > 1:
        result.add_error(f"POI roads split into {len(labels)} components")


def _check_portals(world: GeneratedWorld, result: ValidationResult) -> None:
    """Check that every portal lands on a walkable tile of an existing map."""
    maps = world.maps
    for map_id, map_data in maps.items():
        for portal in map_data.portals:
            target_map = maps.get(portal.target_map)
            if target_map is None:
                result.add_error(f"Portal in {map_id} targets unknown map {portal.target_map}")
                continue
            tile = to_tile(portal.target, world.tile_size)
            code = target_map.tile_at(tile.x, tile.y)
            if code < 0:
                result.add_error(f"Portal in {map_id} targets {tile} outside {portal.target_map}")
            elif is_solid(code):
                result.add_error(
                    f"Portal in {map_id} targets solid tile {code} at {tile} "
                    f"in {portal.target_map}"
                )


def _check_return_portals(world: GeneratedWorld, result: ValidationResult) -> None:
    """Check that each interior has one way back and one way in."""
    world_id = world.world_map.id
    entrances = {p.target_map for p in world.world_map.portals}
    for map_id, map_data in world.interior_maps.items():
        returns = sum(1 for p in map_data.portals if p.target_map == world_id)
        if returns != 1:
            result.add_error(f"Interior {map_id} has {returns} return portals")
        if map_id not in entrances:
            result.add_error(f"Interior {map_id} is unreachable from {world_id}")


def _check_bosses(world: GeneratedWorld, result: ValidationResult) -> None:
    dungeon_ids = {
        interior_map_id(poi)
        for poi in world.pois
        if poi.kind == PoiKind.DUNGEON
    }
    for map_id, map_data in world.interior_maps.items():
        if map_data.theme not in (MapTheme.DUNGEON, MapTheme.CAVE):
            continue
        bosses = sum(1 for e in map_data.enemies if e.kind == EnemyKind.BOSS)
        if bosses != 1:
            result.add_error(f"Dungeon {map_id} has {bosses} bosses")
        dungeon_ids.discard(map_id)
    for missing in sorted(dungeon_ids):
        result.add_error(f"Dungeon entrance has no map {missing}")


def _check_enemy_footing(world: GeneratedWorld, result: ValidationResult) -> None:
    for map_id, map_data in world.maps.items():
        stuck = 0
        for enemy in map_data.enemies:
            tile = to_tile(enemy.position, world.tile_size)
            if is_solid(map_data.tile_at(tile.x, tile.y)):
                stuck += 1
        if stuck:
            result.add_warning(f"{stuck} enemies on solid tiles in {map_id}")
