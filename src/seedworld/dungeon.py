"""Room-and-corridor dungeon generation from an independent sub-seed."""

from dataclasses import dataclass

import structlog

from .config import GeneratorConfig
from .grid import TileGrid, fill_rect, new_grid, set_interior_tile
from .models import (
    Enemy,
    EnemyKind,
    Interactable,
    InteractableKind,
    MapData,
    Room,
    Trigger,
)
from .rng import RandomStream
from .tiles import MapTheme, TileType
from .types import Facing, Position

logger = structlog.get_logger()

WALL = TileType.TREE


@dataclass(frozen=True)
class DungeonLayout:
    """Generated dungeon with the anchors its portals need.

    ``map`` carries no portals; the caller attaches the return portal at
    ``exit`` and points the entrance portal at ``start``.
    """

    map: MapData
    rooms: tuple[Room, ...]
    start: Position
    exit: Position


def carve_corridor(grid: TileGrid, start: Position, end: Position) -> None:
    """Carve an L-shaped corridor: along x first, then along y."""
    step = 1 if end.x >= start.x else -1
    for x in range(start.x, end.x + step, step):
        set_interior_tile(grid, x, start.y, TileType.FLOOR)
    step = 1 if end.y >= start.y else -1
    for y in range(start.y, end.y + step, step):
        set_interior_tile(grid, end.x, y, TileType.FLOOR)


# Draws per wandering enemy or loot item before the spawn is skipped
FREE_TILE_ATTEMPTS = 10

# Sides of the start tried in order for the exit door
EXIT_SIDES = (Facing.UP, Facing.LEFT, Facing.RIGHT, Facing.DOWN)


def _free_tile_in(
    room: Room, rng: RandomStream, reserved: set[Position]
) -> Position | None:
    """Random room tile outside ``reserved``, or None after a few misses."""
    for _ in range(FREE_TILE_ATTEMPTS):
        tile = Position(x=room.x + rng.below(room.width), y=room.y + rng.below(room.height))
        if tile not in reserved:
            return tile
    return None


def _boss_tile(room: Room, start: Position) -> Position:
    if room.center != start:
        return room.center
    # Last room shares the first room's center
    return next(
        Position(x=x, y=y)
        for y in range(room.y, room.y + room.height)
        for x in range(room.x, room.x + room.width)
        if (x, y) != (start.x, start.y)
    )


def _exit_tile(first_room: Room, start: Position, boss: Position) -> Position:
    """Tile beside the start, inside the first room and clear of the boss."""
    return next(
        tile
        for tile in (start.offset(side) for side in EXIT_SIDES)
        if tile != boss and first_room.contains(tile.x, tile.y)
    )


def generate_dungeon(seed: int, map_id: str, config: GeneratorConfig) -> DungeonLayout:
    """Generate a dungeon map.

    Rooms are placed at random without overlap rejection; overlapping
    rooms merge into larger floor areas. Consecutive rooms are joined by
    L-shaped corridors. The last room holds the single boss, interior
    rooms may hold a wandering enemy and a loot item.

    Args:
        seed: Sub-seed for this dungeon.
        map_id: Id for the resulting map.
        config: Generator configuration (``dungeon`` section and tile size).

    Returns:
        DungeonLayout with the map and its start/exit tiles.
    """
    d = config.dungeon
    tile_size = config.tile_size
    rng = RandomStream(seed)
    grid = new_grid(d.width, d.height, WALL)

    rooms: list[Room] = []
    for _ in range(rng.between(d.room_count_min, d.room_count_max)):
        width = rng.between(d.room_min_size, d.room_max_size)
        height = rng.between(d.room_min_size, d.room_max_size)
        room = Room(
            x=1 + rng.below(d.width - width - 1),
            y=1 + rng.below(d.height - height - 1),
            width=width,
            height=height,
        )
        fill_rect(grid, room.x, room.y, room.width, room.height, TileType.FLOOR)
        rooms.append(room)

    for a, b in zip(rooms, rooms[1:]):
        carve_corridor(grid, a.center, b.center)

    start = rooms[0].center
    boss_tile = _boss_tile(rooms[-1], start)
    # Beside the start so arriving players do not stand on the exit
    exit_tile = _exit_tile(rooms[0], start, boss_tile)
    grid[exit_tile.y, exit_tile.x] = TileType.DOOR
    reserved = {start, exit_tile, boss_tile}

    enemies = [Enemy.spawn(f"{map_id}_boss", EnemyKind.BOSS, boss_tile, tile_size)]
    interactables: list[Interactable] = []

    for index, room in enumerate(rooms[1:-1], start=1):
        if rng.chance(d.enemy_chance):
            kind = rng.weighted([
                (EnemyKind.SLIME, 0.4),
                (EnemyKind.BAT, 0.3),
                (EnemyKind.SKELETON, 0.3),
            ])
            tile = _free_tile_in(room, rng, reserved)
            if tile is not None:
                enemies.append(Enemy.spawn(f"{map_id}_enemy_{index}", kind, tile, tile_size))
        if rng.chance(d.loot_chance):
            tile = _free_tile_in(room, rng, reserved)
            if tile is None:
                continue
            interactables.append(
                Interactable(
                    id=f"{map_id}_loot_{index}",
                    position=tile.scaled(tile_size),
                    width=tile_size,
                    height=tile_size,
                    kind=InteractableKind.ITEM,
                    trigger=Trigger.TOUCH,
                    item_key=rng.choice(config.structures.loot_keys),
                )
            )

    theme = MapTheme.CAVE if rng.chance(d.cave_chance) else MapTheme.DUNGEON

    logger.debug(
        "dungeon_generated",
        map_id=map_id,
        rooms=len(rooms),
        enemies=len(enemies),
        loot=len(interactables),
        theme=theme.value,
    )
    return DungeonLayout(
        map=MapData(
            id=map_id,
            tiles=grid,
            interactables=tuple(interactables),
            enemies=tuple(enemies),
            theme=theme,
        ),
        rooms=tuple(rooms),
        start=start,
        exit=exit_tile,
    )
