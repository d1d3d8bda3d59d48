"""Output data model consumed by rendering, physics and AI collaborators.

All records are frozen pydantic models. Collections are tuples, built once
by the generators and never mutated afterwards. Field names serialize in
camelCase, matching the game client's JSON schema.
"""

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .grid import TileGrid
from .tiles import MapTheme
from .types import Facing, Position


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PoiKind(str, Enum):
    """Point-of-interest types."""

    SPAWN = "spawn"
    HOUSE = "house"
    RUIN = "ruin"
    DUNGEON = "dungeon"


class PointOfInterest(_Record):
    """Feature anchor in tile space."""

    position: Position
    kind: PoiKind


class Room(_Record):
    """Rectangular dungeon room (interior tiles only)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Position:
        return Position(x=self.x + self.width // 2, y=self.y + self.height // 2)

    def contains(self, x: int, y: int) -> bool:
        """Whether a tile lies inside the room."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class Portal(_Record):
    """One side of a link between two maps.

    The origin rectangle and the target are in pixels. ``direction`` is
    the facing the player takes on arrival.
    """

    x: int
    y: int
    width: int
    height: int
    target_map: str
    target_x: int
    target_y: int
    direction: Facing | None = None

    @classmethod
    def between(
        cls,
        origin: Position,
        target_map: str,
        target: Position,
        facing: Facing,
        tile_size: int,
    ) -> "Portal":
        """Build a one-tile portal from tile coordinates."""
        return cls(
            x=origin.x * tile_size,
            y=origin.y * tile_size,
            width=tile_size,
            height=tile_size,
            target_map=target_map,
            target_x=target.x * tile_size,
            target_y=target.y * tile_size,
            direction=facing,
        )

    @property
    def target(self) -> Position:
        return Position(x=self.target_x, y=self.target_y)


class InteractableKind(str, Enum):
    SIGN = "sign"
    NPC = "npc"
    ITEM = "item"


class Trigger(str, Enum):
    """How the interaction collaborator fires an interactable."""

    PRESS = "press"  # Player must face it and press action
    TOUCH = "touch"  # Player merely overlaps it


class Interactable(_Record):
    """Placed sign, NPC or item."""

    id: str
    position: Position
    width: int
    height: int
    kind: InteractableKind = Field(alias="type")
    active: bool = True
    trigger: Trigger = Trigger.PRESS
    text: tuple[str, ...] = ()
    item_key: str | None = None
    req_flag: str | None = None


class EnemyKind(str, Enum):
    """Enemy types understood by the AI collaborator."""

    SLIME = "slime"
    BAT = "bat"
    SKELETON = "skeleton"
    BOSS = "boss"

    @property
    def stats(self) -> "EnemyStats":
        return ENEMY_STATS[self]


class EnemyStats(BaseModel, frozen=True):
    """Per-kind defaults copied onto each spawned enemy."""

    speed: float
    hp: int
    detection_range: float
    attack_range: float


ENEMY_STATS: dict[EnemyKind, EnemyStats] = {
    EnemyKind.SLIME: EnemyStats(speed=0.05, hp=10, detection_range=150, attack_range=24),
    EnemyKind.BAT: EnemyStats(speed=0.08, hp=6, detection_range=200, attack_range=20),
    EnemyKind.SKELETON: EnemyStats(speed=0.06, hp=20, detection_range=180, attack_range=32),
    EnemyKind.BOSS: EnemyStats(speed=0.07, hp=80, detection_range=260, attack_range=48),
}


class Enemy(_Record):
    """Hostile entity with its behaviour parameters."""

    id: str
    kind: EnemyKind = Field(alias="type")
    position: Position
    direction: Facing = Facing.DOWN
    state: str = "idle"
    hp: int
    speed: float
    detection_range: float
    attack_range: float

    @classmethod
    def spawn(cls, enemy_id: str, kind: EnemyKind, tile: Position, tile_size: int) -> "Enemy":
        """Create an enemy of a kind at a tile, with that kind's stats."""
        stats = kind.stats
        return cls(
            id=enemy_id,
            kind=kind,
            position=tile.scaled(tile_size),
            hp=stats.hp,
            speed=stats.speed,
            detection_range=stats.detection_range,
            attack_range=stats.attack_range,
        )


class MapData(_Record):
    """One playable map: tiles plus everything placed on it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    tiles: np.ndarray
    interactables: tuple[Interactable, ...] = ()
    enemies: tuple[Enemy, ...] = ()
    portals: tuple[Portal, ...] = ()
    theme: MapTheme

    @field_validator("tiles", mode="before")
    @classmethod
    def _freeze_tiles(cls, value: object) -> TileGrid:
        # Copy so the map never aliases a grid still being edited
        grid = np.array(value, dtype=np.uint8)
        if grid.ndim != 2:
            raise ValueError(f"tiles must be 2D, got shape {grid.shape}")
        grid.flags.writeable = False
        return grid

    @field_serializer("tiles")
    def _serialize_tiles(self, tiles: TileGrid) -> list[list[int]]:
        return tiles.tolist()

    @property
    def width(self) -> int:
        return int(self.tiles.shape[1])

    @property
    def height(self) -> int:
        return int(self.tiles.shape[0])

    def tile_at(self, x: int, y: int) -> int:
        """Tile code at a tile coordinate, or -1 outside the map."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return int(self.tiles[y, x])
        return -1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapData):
            return NotImplemented
        return self.model_dump() == other.model_dump()


class GeneratedWorld(_Record):
    """Top-level generator output."""

    seed: int
    tile_size: int
    world_map: MapData
    interior_maps: dict[str, MapData]
    spawn: Position
    pois: tuple[PointOfInterest, ...] = ()

    @property
    def spawn_tile(self) -> Position:
        return to_tile(self.spawn, self.tile_size)

    @property
    def maps(self) -> dict[str, MapData]:
        """Every map keyed by id, exterior first."""
        return {self.world_map.id: self.world_map, **self.interior_maps}


def to_tile(position: Position, tile_size: int) -> Position:
    """Convert a pixel position to the tile containing it."""
    return Position(x=position.x // tile_size, y=position.y // tile_size)
