"""Core coordinate types shared by the generators."""

from enum import Enum

from pydantic import BaseModel


class Facing(str, Enum):
    """Four-way facing direction used by players, enemies and portals."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Coordinate system: +X is right, +Y is down
FACING_DELTAS: dict[Facing, tuple[int, int]] = {
    Facing.UP: (0, -1),
    Facing.DOWN: (0, 1),
    Facing.LEFT: (-1, 0),
    Facing.RIGHT: (1, 0),
}


class Position(BaseModel, frozen=True):
    """Immutable 2D coordinate (tile or pixel space depending on context)."""

    x: int
    y: int

    def offset(self, facing: Facing) -> "Position":
        """Return new position one step in the given direction."""
        dx, dy = FACING_DELTAS[facing]
        return Position(x=self.x + dx, y=self.y + dy)

    def manhattan(self, other: "Position") -> int:
        """Manhattan distance to another position."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def distance(self, other: "Position") -> float:
        """Euclidean distance to another position."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def scaled(self, factor: int) -> "Position":
        """Return position multiplied by factor (tile -> pixel conversion)."""
        return Position(x=self.x * factor, y=self.y * factor)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y})"
