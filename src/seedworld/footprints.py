"""Structure geometry relative to a POI.

Houses are 5x4: two roof rows over two wall rows, door at the bottom
center. Dungeon entrances are a 3x2 rock rim with the entrance tile at the
POI itself. Roads attach to the tile in front of each entrance.
"""

from typing import NamedTuple

from .models import PoiKind, PointOfInterest
from .types import Facing, Position

HOUSE_WIDTH = 5
HOUSE_HEIGHT = 4
HOUSE_ROOF_ROWS = 2

RIM_WIDTH = 3
RIM_HEIGHT = 2


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


def house_rect(center: Position) -> Rect:
    return Rect(center.x - HOUSE_WIDTH // 2, center.y - HOUSE_ROOF_ROWS, HOUSE_WIDTH, HOUSE_HEIGHT)


def house_door(center: Position) -> Position:
    rect = house_rect(center)
    return Position(x=center.x, y=rect.y + rect.height - 1)


def rim_rect(center: Position) -> Rect:
    return Rect(center.x - RIM_WIDTH // 2, center.y - 1, RIM_WIDTH, RIM_HEIGHT)


def footprint(poi: PointOfInterest) -> Rect | None:
    """Solid footprint stamped for a POI, if it has one."""
    if poi.kind == PoiKind.HOUSE:
        return house_rect(poi.position)
    if poi.kind == PoiKind.DUNGEON:
        return rim_rect(poi.position)
    return None


def road_anchor(poi: PointOfInterest) -> Position:
    """Tile where roads attach to a POI."""
    if poi.kind == PoiKind.HOUSE:
        return house_door(poi.position).offset(Facing.DOWN)
    if poi.kind == PoiKind.DUNGEON:
        return poi.position.offset(Facing.DOWN)
    return poi.position
