"""Tile codes and their properties.

Two legends share one numbering: the generated world uses codes 0-14
(``TileType``), the campus map adds urban codes 15-23 (``CampusTile``).
A generated world never contains campus codes.
"""

from enum import Enum, IntEnum


class TileType(IntEnum):
    """Tile codes emitted by the world, interior and dungeon generators."""

    GRASS = 0
    TREE = 1  # Also the wall/mountain code: borders, dungeon walls
    WATER = 2
    FLOOR = 3
    PATH = 4
    DOOR = 5
    CARPET = 6
    FLOWER = 7
    ROCK = 8
    HOUSE_WALL = 9
    ROOF = 10
    BUSH = 11
    TALL_GRASS = 12
    SAND = 13
    DIRT = 14

    @property
    def solid(self) -> bool:
        """Whether the tile blocks movement."""
        return int(self) in SOLID_CODES


class CampusTile(IntEnum):
    """Urban tile codes used only by the campus generator."""

    ROAD = 15
    BUILDING = 16
    SIDEWALK = 17
    PARKING = 18
    PLAZA = 19
    HEDGE = 20
    SPORT_FIELD = 21
    BUILDING_DARK = 22
    BIG_TREE = 23


class MapTheme(str, Enum):
    """Renderer overlay theme, copied through untouched by the generators."""

    OUTDOOR = "outdoor"
    INDOOR = "indoor"
    DUNGEON = "dungeon"
    CAVE = "cave"


WORLD_CODES = frozenset(int(t) for t in TileType)
CAMPUS_CODES = frozenset(int(t) for t in CampusTile)

# Define sets for O(1) lookup
SOLID_CODES = frozenset({
    int(TileType.TREE),
    int(TileType.WATER),
    int(TileType.ROCK),
    int(TileType.HOUSE_WALL),
    int(TileType.ROOF),
    int(TileType.BUSH),
    int(CampusTile.BUILDING),
    int(CampusTile.BUILDING_DARK),
    int(CampusTile.HEDGE),
    int(CampusTile.BIG_TREE),
})

BORDER_TILE = TileType.TREE


def is_solid(code: int) -> bool:
    """Whether a raw tile code blocks movement."""
    return int(code) in SOLID_CODES
