"""Road network: greedy spanning tree over POI road anchors."""

import structlog

from .config import GeneratorConfig
from .footprints import road_anchor
from .grid import TileGrid, set_interior_tile
from .models import PointOfInterest
from .rng import RandomStream
from .tiles import TileType
from .types import Position

logger = structlog.get_logger()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def carve_path(
    grid: TileGrid,
    start: Position,
    end: Position,
    rng: RandomStream,
    widen_chance: float = 0.0,
    tile: int = TileType.PATH,
) -> int:
    """Carve a monotone axis-aligned path from start to end.

    While both axes still differ, each step picks x or y at random, so the
    path wanders but every step moves closer to the target. Consecutive
    cells are always 4-adjacent. With ``widen_chance`` the cell beside the
    new position is marked as well. Border cells are never written.

    Args:
        grid: Grid to carve into.
        start: First cell of the path.
        end: Last cell of the path.
        rng: Random stream for axis choice and widening.
        widen_chance: Probability of widening each step.
        tile: Tile code to write.

    Returns:
        Number of steps taken.
    """
    x, y = start.x, start.y
    steps = 0
    while True:
        set_interior_tile(grid, x, y, tile)
        if x == end.x and y == end.y:
            return steps

        dx = _sign(end.x - x)
        dy = _sign(end.y - y)
        if dx and dy:
            step_x = rng.chance(0.5)
        else:
            step_x = dx != 0

        if step_x:
            x += dx
        else:
            y += dy
        steps += 1

        if widen_chance > 0 and rng.chance(widen_chance):
            if step_x:
                set_interior_tile(grid, x, y + 1, tile)
            else:
                set_interior_tile(grid, x + 1, y, tile)


def build_road_network(
    grid: TileGrid,
    pois: list[PointOfInterest],
    rng: RandomStream,
    config: GeneratorConfig,
) -> list[tuple[Position, Position]]:
    """Connect every POI to the spawn with carved roads.

    Prim-style: starting from the spawn, repeatedly join the closest
    (connected, unconnected) pair by Manhattan distance between road
    anchors. Ties go to the earliest pair in placement order.

    Args:
        grid: Exterior grid, modified in place.
        pois: Placed POIs, spawn first.
        rng: World random stream.
        config: Generator configuration.

    Returns:
        Tree edges as (from anchor, to anchor) pairs in carving order.
    """
    if not pois:
        return []

    anchors = [road_anchor(poi) for poi in pois]
    connected = [0]
    unconnected = list(range(1, len(pois)))
    edges: list[tuple[Position, Position]] = []
    total_steps = 0

    while unconnected:
        best: tuple[int, int, int] | None = None
        for c in connected:
            for u in unconnected:
                d = anchors[c].manhattan(anchors[u])
                if best is None or d < best[0]:
                    best = (d, c, u)

        _, c, u = best
        total_steps += carve_path(
            grid, anchors[c], anchors[u], rng, config.roads.widen_chance
        )
        edges.append((anchors[c], anchors[u]))
        connected.append(u)
        unconnected.remove(u)

    logger.debug("roads_built", edges=len(edges), length=total_steps)
    return edges
