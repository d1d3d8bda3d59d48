"""Campus-style urban map: a road grid of building blocks and green spaces.

Uses the urban legend (codes 15-23) on top of the grass, tree, path,
flower and tall grass codes of the world legend. Independent of the world
generator; it draws from its own stream.
"""

from collections.abc import Callable

import structlog

from .config import CampusConfig, GeneratorConfig
from .exceptions import ConfigurationError
from .footprints import Rect
from .grid import TileGrid, fill_rect, in_bounds, new_grid, outline_rect
from .models import MapData
from .rng import RandomStream, derive_seed, resolve_seed
from .tiles import CampusTile, MapTheme, TileType

logger = structlog.get_logger()

CAMPUS_MAP_ID = "campus"

# Blocks keep this many grass tiles between their edge and any building
BLOCK_INSET = 2
DARK_CHANCE = 0.4
BIG_TREE_SHARE = 0.55


def _spans(total: int, block: int, edge: int, gap: int) -> list[tuple[int, int]]:
    """Split the span between the perimeter roads into blocks and road gaps.

    Returns:
        (start, length) per block; the last block takes any remainder.
    """
    available = total - 2 * edge
    count = max(1, (available + gap) // (block + gap))
    length = (available - (count - 1) * gap) // count
    spans = []
    start = edge
    for i in range(count):
        size = length if i < count - 1 else total - edge - start
        spans.append((start, size))
        start += size + gap
    return spans


def _set_if_grass(grid: TileGrid, x: int, y: int, code: int) -> None:
    if in_bounds(grid, x, y) and grid[y, x] == TileType.GRASS:
        grid[y, x] = code


def _tree(rng: RandomStream) -> int:
    return CampusTile.BIG_TREE if rng.chance(BIG_TREE_SHARE) else TileType.TREE


def tree_area(grid: TileGrid, area: Rect, density: float, rng: RandomStream) -> None:
    """Plant a mix of big and regular trees on the grass inside an area."""
    for y in range(area.y, area.y + area.height):
        for x in range(area.x, area.x + area.width):
            if rng.chance(density):
                _set_if_grass(grid, x, y, _tree(rng))


def tree_row(grid: TileGrid, x: int, y: int, length: int, vertical: bool = False) -> None:
    """Line of alternating big and regular trees."""
    for i in range(length):
        code = CampusTile.BIG_TREE if i % 2 == 0 else TileType.TREE
        if vertical:
            _set_if_grass(grid, x, y + i, code)
        else:
            _set_if_grass(grid, x + i, y, code)


def scatter(grid: TileGrid, area: Rect, code: int, density: float, rng: RandomStream) -> None:
    """Sprinkle a tile over the grass of an area."""
    for y in range(area.y, area.y + area.height):
        for x in range(area.x, area.x + area.width):
            if rng.chance(density):
                _set_if_grass(grid, x, y, code)


def _building_code(dark: bool) -> int:
    return CampusTile.BUILDING_DARK if dark else CampusTile.BUILDING


def u_building(grid: TileGrid, area: Rect, open_side: str, thickness: int, dark: bool) -> None:
    """U-shaped building open on one side ('n', 's', 'e' or 'w')."""
    code = _building_code(dark)
    x, y, w, h = area
    if open_side in ("n", "s"):
        fill_rect(grid, x, y, thickness, h, code)
        fill_rect(grid, x + w - thickness, y, thickness, h, code)
        bar_y = y + h - thickness if open_side == "n" else y
        fill_rect(grid, x, bar_y, w, thickness, code)
    else:
        fill_rect(grid, x, y, w, thickness, code)
        fill_rect(grid, x, y + h - thickness, w, thickness, code)
        bar_x = x if open_side == "e" else x + w - thickness
        fill_rect(grid, bar_x, y, thickness, h, code)


def l_building(
    grid: TileGrid, area: Rect, corner: str, arm_width: int, arm_height: int, dark: bool
) -> None:
    """L-shaped building whose arms meet at a corner ('nw', 'ne', 'sw', 'se')."""
    code = _building_code(dark)
    x, y, w, h = area
    bar_y = y if corner[0] == "n" else y + h - arm_height
    arm_x = x if corner[1] == "w" else x + w - arm_width
    fill_rect(grid, x, bar_y, w, arm_height, code)
    fill_rect(grid, arm_x, y, arm_width, h, code)


def _solid_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    top = h // 2
    fill_rect(grid, x, y, w, top, _building_code(rng.chance(DARK_CHANCE)))
    fill_rect(grid, x, y + top + 1, w, 2, CampusTile.PLAZA)
    tree_area(grid, Rect(x, y + top + 3, w, h - top - 3), config.tree_density, rng)


def _u_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    thickness = max(3, min(inner.width, inner.height) // 4)
    u_building(grid, inner, rng.choice("nsew"), thickness, rng.chance(DARK_CHANCE))
    courtyard = Rect(
        inner.x + thickness,
        inner.y + thickness,
        inner.width - 2 * thickness,
        inner.height - 2 * thickness,
    )
    tree_area(grid, courtyard, config.tree_density * 0.8, rng)


def _l_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    corner = rng.choice(("nw", "ne", "sw", "se"))
    arm_width, arm_height = max(3, w // 3), max(3, h // 3)
    l_building(grid, inner, corner, arm_width, arm_height, rng.chance(DARK_CHANCE))

    # Open quadrant faces away from the corner
    open_x = x + arm_width + 1 if corner[1] == "w" else x
    open_y = y + arm_height + 1 if corner[0] == "n" else y
    plaza = Rect(open_x, open_y, w - arm_width - 1, h - arm_height - 1)
    fill_rect(grid, plaza.x, plaza.y, plaza.width, plaza.height, CampusTile.PLAZA)
    for py in range(plaza.y, plaza.y + plaza.height):
        for px in range(plaza.x, plaza.x + plaza.width):
            if rng.chance(0.08):
                grid[py, px] = CampusTile.HEDGE


def _pair_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    left = (w - 3) // 2
    fill_rect(grid, x, y, left, h, _building_code(rng.chance(DARK_CHANCE)))
    fill_rect(grid, x + left + 1, y, 2, h, TileType.PATH)
    fill_rect(grid, x + left + 3, y, w - left - 3, h, _building_code(rng.chance(DARK_CHANCE)))
    tree_row(grid, x + left, y, h, vertical=True)


def _park_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    fill_rect(grid, x, y + h // 2, w, 1, TileType.PATH)
    fill_rect(grid, x + w // 2, y, 1, h, TileType.PATH)
    tree_area(grid, inner, config.tree_density * 0.6, rng)
    scatter(grid, inner, TileType.FLOWER, 0.06, rng)
    scatter(grid, inner, TileType.TALL_GRASS, 0.08, rng)
    for hx in range(x, x + w):
        _set_if_grass(grid, hx, y, CampusTile.HEDGE)
        _set_if_grass(grid, hx, y + h - 1, CampusTile.HEDGE)


def _sport_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    outline_rect(grid, x, y, w, h, CampusTile.HEDGE)
    fill_rect(grid, x + 1, y + 1, w - 2, h - 2, CampusTile.SPORT_FIELD)


def _parking_block(grid: TileGrid, inner: Rect, rng: RandomStream, config: CampusConfig) -> None:
    x, y, w, h = inner
    half = h // 2
    fill_rect(grid, x, y, w, half, CampusTile.PARKING)
    fill_rect(grid, x, y + half + 1, w, h - half - 1, _building_code(rng.chance(DARK_CHANCE)))


BlockDesign = Callable[[TileGrid, Rect, RandomStream, CampusConfig], None]

BLOCK_DESIGNS: list[tuple[BlockDesign, float]] = [
    (_solid_block, 0.25),
    (_u_block, 0.25),
    (_l_block, 0.2),
    (_pair_block, 0.15),
    (_park_block, 0.15),
]


def _avenue_trees(grid: TileGrid, block: Rect, rng: RandomStream) -> None:
    """Trees on every other grass tile of a block's outer ring."""
    x, y, w, h = block
    for i in range(0, w, 2):
        _set_if_grass(grid, x + i, y, _tree(rng))
        _set_if_grass(grid, x + i, y + h - 1, _tree(rng))
    for i in range(0, h, 2):
        _set_if_grass(grid, x, y + i, _tree(rng))
        _set_if_grass(grid, x + w - 1, y + i, _tree(rng))


def generate_campus(
    seed: int | None = None,
    config: GeneratorConfig | None = None,
) -> MapData:
    """Generate a campus map.

    A perimeter road with sidewalks encloses a grid of blocks separated by
    internal roads. One block holds a sport field, one a parking lot, the
    rest get a building layout drawn from ``BLOCK_DESIGNS``. Blocks are
    lined with trees.

    Args:
        seed: Campus seed. ``None`` derives one from the clock.
        config: Generator configuration (``campus`` section).

    Returns:
        MapData with id ``campus`` and the outdoor theme.

    Raises:
        ConfigurationError: If the campus cannot hold a single block.
    """
    config = config or GeneratorConfig()
    c = config.campus
    seed = resolve_seed(seed)
    rng = RandomStream(derive_seed(seed, "campus"))

    edge = c.road_width + 1
    gap = c.road_width + 2
    if c.width - 2 * edge < c.block_width or c.height - 2 * edge < c.block_height:
        raise ConfigurationError(
            f"Campus {c.width}x{c.height} cannot hold a {c.block_width}x{c.block_height} block"
        )

    grid = new_grid(c.width, c.height, TileType.GRASS)
    columns = _spans(c.width, c.block_width, edge, gap)
    rows = _spans(c.height, c.block_height, edge, gap)

    # Sidewalks first so roads win where they cross
    outline_rect(grid, c.road_width, c.road_width, c.width - 2 * c.road_width,
                 c.height - 2 * c.road_width, CampusTile.SIDEWALK)
    for start, length in columns[:-1]:
        fill_rect(grid, start + length, edge, 1, c.height - 2 * edge, CampusTile.SIDEWALK)
        fill_rect(grid, start + length + gap - 1, edge, 1, c.height - 2 * edge, CampusTile.SIDEWALK)
    for start, length in rows[:-1]:
        fill_rect(grid, edge, start + length, c.width - 2 * edge, 1, CampusTile.SIDEWALK)
        fill_rect(grid, edge, start + length + gap - 1, c.width - 2 * edge, 1, CampusTile.SIDEWALK)

    fill_rect(grid, 0, 0, c.width, c.road_width, CampusTile.ROAD)
    fill_rect(grid, 0, c.height - c.road_width, c.width, c.road_width, CampusTile.ROAD)
    fill_rect(grid, 0, 0, c.road_width, c.height, CampusTile.ROAD)
    fill_rect(grid, c.width - c.road_width, 0, c.road_width, c.height, CampusTile.ROAD)
    for start, length in columns[:-1]:
        fill_rect(grid, start + length + 1, c.road_width, c.road_width,
                  c.height - 2 * c.road_width, CampusTile.ROAD)
    for start, length in rows[:-1]:
        fill_rect(grid, c.road_width, start + length + 1, c.width - 2 * c.road_width,
                  c.road_width, CampusTile.ROAD)

    blocks = [
        Rect(bx, by, bw, bh) for by, bh in rows for bx, bw in columns
    ]
    sport_index = rng.below(len(blocks))
    parking_index = (sport_index + 1 + rng.below(max(1, len(blocks) - 1))) % len(blocks)

    for index, block in enumerate(blocks):
        inner = Rect(
            block.x + BLOCK_INSET,
            block.y + BLOCK_INSET,
            block.width - 2 * BLOCK_INSET,
            block.height - 2 * BLOCK_INSET,
        )
        if index == sport_index:
            design = _sport_block
        elif index == parking_index:
            design = _parking_block
        else:
            design = rng.weighted(BLOCK_DESIGNS)
        design(grid, inner, rng, c)
        _avenue_trees(grid, block, rng)

    logger.info(
        "campus_generated",
        seed=seed,
        width=c.width,
        height=c.height,
        blocks=len(blocks),
    )
    return MapData(id=CAMPUS_MAP_ID, tiles=grid, theme=MapTheme.OUTDOOR)
