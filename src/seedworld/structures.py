"""Structures stamped around POIs, their interior maps and portal pairs."""

from dataclasses import dataclass, field

import numpy as np
import structlog

from .config import GeneratorConfig
from .dungeon import generate_dungeon
from .footprints import HOUSE_ROOF_ROWS, Rect, house_door, house_rect, rim_rect
from .grid import (
    TileGrid,
    fill_rect,
    get_tile,
    new_grid,
    outline_rect,
    ring_cells,
    set_interior_tile,
)
from .models import (
    Interactable,
    InteractableKind,
    MapData,
    PoiKind,
    PointOfInterest,
    Portal,
    Trigger,
)
from .rng import RandomStream, derive_seed
from .terrain import protection_radius
from .tiles import MapTheme, TileType
from .types import FACING_DELTAS, Facing, Position

logger = structlog.get_logger()

WORLD_MAP_ID = "overworld"

# Steps a door path may walk before giving up on finding a road
DOOR_PATH_LIMIT = 6

NPC_LINES: tuple[tuple[str, ...], ...] = (
    ("Welcome, traveller!", "The road outside leads back to the village square."),
    ("I heard something moving in the old ruins.", "Be careful out there."),
    ("They say a dungeon lies beneath these hills.", "Only fools go in without a potion."),
    ("Make yourself at home.",),
)

WAYSIDE_LINES: tuple[str, ...] = (
    "I got lost in this forest...",
    "Do you know the way?",
)


@dataclass
class StructureResult:
    """Everything the structure pass adds to the exterior and the registry."""

    interactables: list[Interactable] = field(default_factory=list)
    portals: list[Portal] = field(default_factory=list)
    interiors: dict[str, MapData] = field(default_factory=dict)


def interior_map_id(poi: PointOfInterest) -> str:
    """Deterministic id of the map generated for a POI."""
    return f"{poi.kind.value}_{poi.position.x}_{poi.position.y}"


def _cuts_road(grid: TileGrid, rect: Rect) -> bool:
    region = grid[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width]
    return bool(np.any(region == TileType.PATH))


def _carve_bypass(grid: TileGrid, rect: Rect) -> None:
    """Surround a footprint with path so roads it cut stay connected."""
    for x, y in ring_cells(rect.x, rect.y, rect.width, rect.height):
        set_interior_tile(grid, x, y, TileType.PATH)


def _touches_road(grid: TileGrid, pos: Position, exclude: Position) -> bool:
    for dx, dy in FACING_DELTAS.values():
        x, y = pos.x + dx, pos.y + dy
        if (x, y) == (exclude.x, exclude.y):
            continue
        if get_tile(grid, x, y) == TileType.PATH:
            return True
    return False


def connect_door(grid: TileGrid, door: Position, outward: Facing) -> Position:
    """Carve path from the tile in front of a door outward to a road.

    Walks away from the door until it stands on or next to an existing
    road, or gives up after ``DOOR_PATH_LIMIT`` steps.

    Returns:
        The tile directly in front of the door.
    """
    front = door.offset(outward)
    previous, pos = door, front
    for _ in range(DOOR_PATH_LIMIT):
        was_road = get_tile(grid, pos.x, pos.y) == TileType.PATH
        if not set_interior_tile(grid, pos.x, pos.y, TileType.PATH):
            break
        if was_road or _touches_road(grid, pos, exclude=previous):
            break
        previous, pos = pos, pos.offset(outward)
    return front


def build_house_interior(
    map_id: str,
    rng: RandomStream,
    config: GeneratorConfig,
) -> tuple[MapData, Position, Position]:
    """Build a house interior without portals.

    A walled room with a carpet runner from the door in the bottom wall,
    and possibly one NPC.

    Returns:
        (map, arrival tile just inside the door, door tile).
    """
    s = config.structures
    width, height = s.interior_width, s.interior_height
    tile_size = config.tile_size

    grid = new_grid(width, height, TileType.FLOOR)
    outline_rect(grid, 0, 0, width, height, TileType.HOUSE_WALL)
    fill_rect(grid, width // 2, 1, 1, height - 2, TileType.CARPET)
    door = Position(x=width // 2, y=height - 1)
    grid[door.y, door.x] = TileType.DOOR
    arrival = door.offset(Facing.UP)

    interactables = []
    if rng.chance(s.npc_chance):
        # Rows above the arrival tile only
        tile = Position(x=1 + rng.below(width - 2), y=1 + rng.below(height - 3))
        interactables.append(
            Interactable(
                id=f"{map_id}_npc",
                position=tile.scaled(tile_size),
                width=tile_size,
                height=tile_size,
                kind=InteractableKind.NPC,
                trigger=Trigger.PRESS,
                text=rng.choice(NPC_LINES),
            )
        )

    interior = MapData(
        id=map_id,
        tiles=grid,
        interactables=tuple(interactables),
        theme=MapTheme.INDOOR,
    )
    return interior, arrival, door


def _build_house(
    grid: TileGrid,
    poi: PointOfInterest,
    rng: RandomStream,
    config: GeneratorConfig,
    result: StructureResult,
) -> None:
    center = poi.position
    rect = house_rect(center)
    cut = _cuts_road(grid, rect)

    fill_rect(grid, rect.x, rect.y, rect.width, HOUSE_ROOF_ROWS, TileType.ROOF)
    fill_rect(
        grid,
        rect.x,
        rect.y + HOUSE_ROOF_ROWS,
        rect.width,
        rect.height - HOUSE_ROOF_ROWS,
        TileType.HOUSE_WALL,
    )
    door = house_door(center)
    grid[door.y, door.x] = TileType.DOOR
    if cut:
        _carve_bypass(grid, rect)
    front = connect_door(grid, door, Facing.DOWN)

    map_id = interior_map_id(poi)
    interior, arrival, interior_door = build_house_interior(map_id, rng, config)
    tile_size = config.tile_size

    result.portals.append(
        Portal.between(door, map_id, arrival, Facing.UP, tile_size)
    )
    result.interiors[map_id] = interior.model_copy(
        update={
            "portals": (
                Portal.between(interior_door, WORLD_MAP_ID, front, Facing.DOWN, tile_size),
            )
        }
    )


def _build_ruin(
    grid: TileGrid,
    poi: PointOfInterest,
    rng: RandomStream,
    config: GeneratorConfig,
    result: StructureResult,
) -> None:
    s = config.structures
    center = poi.position
    radius = s.rubble_radius

    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if (dx == 0 and dy == 0) or dx * dx + dy * dy > radius * radius:
                continue
            x, y = center.x + dx, center.y + dy
            if get_tile(grid, x, y) in (-1, TileType.PATH):
                continue
            if rng.chance(s.rubble_chance):
                set_interior_tile(grid, x, y, TileType.ROCK)

    tile_size = config.tile_size
    result.interactables.append(
        Interactable(
            id=f"{interior_map_id(poi)}_loot",
            position=center.scaled(tile_size),
            width=tile_size,
            height=tile_size,
            kind=InteractableKind.ITEM,
            trigger=Trigger.PRESS,
            item_key=rng.choice(s.loot_keys),
        )
    )


def _build_dungeon_entrance(
    grid: TileGrid,
    poi: PointOfInterest,
    world_seed: int,
    config: GeneratorConfig,
    result: StructureResult,
) -> None:
    center = poi.position
    rect = rim_rect(center)
    cut = _cuts_road(grid, rect)

    fill_rect(grid, rect.x, rect.y, rect.width, rect.height, TileType.ROCK)
    grid[center.y, center.x] = TileType.DOOR
    if cut:
        _carve_bypass(grid, rect)
    outside = connect_door(grid, center, Facing.DOWN)

    map_id = interior_map_id(poi)
    layout = generate_dungeon(
        derive_seed(world_seed, "dungeon", center.x, center.y), map_id, config
    )
    tile_size = config.tile_size

    result.portals.append(
        Portal.between(center, map_id, layout.start, Facing.DOWN, tile_size)
    )
    result.interiors[map_id] = layout.map.model_copy(
        update={
            "portals": (
                Portal.between(layout.exit, WORLD_MAP_ID, outside, Facing.DOWN, tile_size),
            )
        }
    )


def build_structures(
    grid: TileGrid,
    pois: list[PointOfInterest],
    rng: RandomStream,
    world_seed: int,
    config: GeneratorConfig,
) -> StructureResult:
    """Stamp structures for every POI and build their interior maps.

    Houses and dungeon entrances get portal pairs created together, one
    on the exterior and one on the interior. When a footprint is stamped
    over a road, a path ring around it keeps the network connected.
    Dungeons draw from their own stream seeded from the world seed and
    the entrance coordinates.

    Args:
        grid: Exterior grid, modified in place.
        pois: Placed POIs.
        rng: World random stream.
        world_seed: Normalized world seed, for dungeon sub-seeds.
        config: Generator configuration.

    Returns:
        StructureResult with exterior additions and interior maps.
    """
    result = StructureResult()
    for poi in pois:
        if poi.kind == PoiKind.HOUSE:
            _build_house(grid, poi, rng, config, result)
        elif poi.kind == PoiKind.RUIN:
            _build_ruin(grid, poi, rng, config, result)
        elif poi.kind == PoiKind.DUNGEON:
            _build_dungeon_entrance(grid, poi, world_seed, config, result)

    logger.debug(
        "structures_built",
        interiors=len(result.interiors),
        portals=len(result.portals),
        interactables=len(result.interactables),
    )
    return result


def scatter_wayside(
    grid: TileGrid,
    pois: list[PointOfInterest],
    rng: RandomStream,
    config: GeneratorConfig,
) -> list[Interactable]:
    """Drop loose items and lost travellers on open grass.

    Each attempt draws a random interior cell; only grass cells outside
    every POI's protection radius are used.
    """
    height, width = grid.shape
    tile_size = config.tile_size
    placed: list[Interactable] = []

    for i in range(config.structures.wayside_attempts):
        tile = Position(x=1 + rng.below(width - 2), y=1 + rng.below(height - 2))
        if grid[tile.y, tile.x] != TileType.GRASS:
            continue
        if any(
            tile.distance(poi.position) <= protection_radius(poi.kind, config.terrain)
            for poi in pois
        ):
            continue

        if rng.chance(0.5):
            placed.append(
                Interactable(
                    id=f"wayside_item_{i}",
                    position=tile.scaled(tile_size),
                    width=tile_size,
                    height=tile_size,
                    kind=InteractableKind.ITEM,
                    trigger=Trigger.PRESS,
                    item_key="potion" if rng.chance(0.5) else "old_key",
                )
            )
        else:
            placed.append(
                Interactable(
                    id=f"wayside_npc_{i}",
                    position=tile.scaled(tile_size),
                    width=tile_size,
                    height=tile_size,
                    kind=InteractableKind.NPC,
                    trigger=Trigger.PRESS,
                    text=WAYSIDE_LINES,
                )
            )
    return placed
