"""Bounds-checked helpers for uint8 tile grids indexed [y, x]."""

import numpy as np
from numpy.typing import NDArray

TileGrid = NDArray[np.uint8]


def new_grid(width: int, height: int, fill: int) -> TileGrid:
    """Allocate a (height, width) grid filled with one tile code."""
    return np.full((height, width), fill, dtype=np.uint8)


def in_bounds(grid: TileGrid, x: int, y: int) -> bool:
    """Whether (x, y) lies inside the grid."""
    height, width = grid.shape
    return 0 <= x < width and 0 <= y < height


def is_border(grid: TileGrid, x: int, y: int) -> bool:
    """Whether (x, y) is an edge cell of the grid."""
    height, width = grid.shape
    return x == 0 or y == 0 or x == width - 1 or y == height - 1


def get_tile(grid: TileGrid, x: int, y: int, default: int = -1) -> int:
    """Tile code at (x, y), or default when out of bounds."""
    if not in_bounds(grid, x, y):
        return default
    return int(grid[y, x])


def set_tile(grid: TileGrid, x: int, y: int, code: int) -> bool:
    """Write a tile code; writes outside the grid are dropped.

    Returns:
        True if the write landed.
    """
    if not in_bounds(grid, x, y):
        return False
    grid[y, x] = code
    return True


def set_interior_tile(grid: TileGrid, x: int, y: int, code: int) -> bool:
    """Write a tile code unless (x, y) is outside the grid or on its border."""
    if not in_bounds(grid, x, y) or is_border(grid, x, y):
        return False
    grid[y, x] = code
    return True


def fill_rect(grid: TileGrid, x: int, y: int, width: int, height: int, code: int) -> None:
    """Fill a rectangle, clipped to the grid."""
    grid_height, grid_width = grid.shape
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + width, grid_width), min(y + height, grid_height)
    if x0 < x1 and y0 < y1:
        grid[y0:y1, x0:x1] = code


def outline_rect(grid: TileGrid, x: int, y: int, width: int, height: int, code: int) -> None:
    """Draw the one-tile perimeter of a rectangle, clipped to the grid."""
    for cx in range(x, x + width):
        set_tile(grid, cx, y, code)
        set_tile(grid, cx, y + height - 1, code)
    for cy in range(y, y + height):
        set_tile(grid, x, cy, code)
        set_tile(grid, x + width - 1, cy, code)


def ring_cells(x: int, y: int, width: int, height: int) -> list[tuple[int, int]]:
    """Cells of the one-tile ring surrounding a rectangle, corners included."""
    cells = []
    for cx in range(x - 1, x + width + 1):
        cells.append((cx, y - 1))
        cells.append((cx, y + height))
    for cy in range(y, y + height):
        cells.append((x - 1, cy))
        cells.append((x + width, cy))
    return cells
