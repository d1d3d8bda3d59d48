"""Tests for core types and the output data model."""

import numpy as np
import pytest
from pydantic import ValidationError

from seedworld.models import (
    ENEMY_STATS,
    Enemy,
    EnemyKind,
    Interactable,
    InteractableKind,
    MapData,
    Portal,
    Room,
    Trigger,
    to_tile,
)
from seedworld.tiles import MapTheme, TileType, is_solid
from seedworld.types import Facing, Position


class TestPosition:
    """Tests for Position."""

    def test_offset(self) -> None:
        pos = Position(x=5, y=5)
        assert pos.offset(Facing.UP) == Position(x=5, y=4)
        assert pos.offset(Facing.DOWN) == Position(x=5, y=6)
        assert pos.offset(Facing.LEFT) == Position(x=4, y=5)
        assert pos.offset(Facing.RIGHT) == Position(x=6, y=5)

    def test_distances(self) -> None:
        a = Position(x=0, y=0)
        b = Position(x=3, y=4)
        assert a.manhattan(b) == 7
        assert a.distance(b) == 5.0

    def test_scaled(self) -> None:
        assert Position(x=2, y=3).scaled(32) == Position(x=64, y=96)

    def test_hashable(self) -> None:
        assert len({Position(x=1, y=1), Position(x=1, y=1)}) == 1

    def test_frozen(self) -> None:
        pos = Position(x=1, y=1)
        with pytest.raises(ValidationError):
            pos.x = 2

    def test_to_tile(self) -> None:
        assert to_tile(Position(x=70, y=31), 32) == Position(x=2, y=0)


class TestTiles:
    """Tests for tile solidity."""

    def test_solid_codes(self) -> None:
        for tile in (TileType.TREE, TileType.WATER, TileType.ROCK, TileType.HOUSE_WALL,
                     TileType.ROOF, TileType.BUSH):
            assert tile.solid
            assert is_solid(int(tile))

    def test_walkable_codes(self) -> None:
        for tile in (TileType.GRASS, TileType.FLOOR, TileType.PATH, TileType.DOOR,
                     TileType.CARPET, TileType.FLOWER, TileType.TALL_GRASS,
                     TileType.SAND, TileType.DIRT):
            assert not tile.solid


class TestRoom:
    """Tests for Room geometry."""

    def test_center_and_contains(self) -> None:
        room = Room(x=2, y=3, width=5, height=4)
        assert room.center == Position(x=4, y=5)
        assert room.contains(2, 3)
        assert room.contains(6, 6)
        assert not room.contains(7, 6)


class TestPortal:
    """Tests for Portal construction."""

    def test_between_converts_to_pixels(self) -> None:
        portal = Portal.between(
            Position(x=3, y=4), "house_3_2", Position(x=5, y=6), Facing.UP, 32
        )
        assert (portal.x, portal.y) == (96, 128)
        assert (portal.width, portal.height) == (32, 32)
        assert portal.target == Position(x=160, y=192)
        assert portal.direction == Facing.UP

    def test_camel_case_keys(self) -> None:
        portal = Portal.between(Position(x=1, y=1), "m", Position(x=2, y=2), Facing.DOWN, 32)
        data = portal.model_dump(by_alias=True, mode="json")
        assert data["targetMap"] == "m"
        assert data["targetX"] == 64
        assert data["direction"] == "down"


class TestEntities:
    """Tests for interactables and enemies."""

    def test_interactable_type_alias(self) -> None:
        item = Interactable(
            id="loot",
            position=Position(x=32, y=32),
            width=32,
            height=32,
            kind=InteractableKind.ITEM,
            trigger=Trigger.TOUCH,
            item_key="potion",
        )
        data = item.model_dump(by_alias=True, mode="json")
        assert data["type"] == "item"
        assert data["trigger"] == "touch"
        assert data["itemKey"] == "potion"
        assert data["reqFlag"] is None
        assert data["active"] is True

    def test_interactable_from_client_json(self) -> None:
        item = Interactable.model_validate({
            "id": "sign",
            "position": {"x": 0, "y": 0},
            "width": 32,
            "height": 32,
            "type": "sign",
            "text": ["Hello"],
        })
        assert item.kind == InteractableKind.SIGN
        assert item.text == ("Hello",)

    def test_enemy_spawn_copies_stats(self) -> None:
        enemy = Enemy.spawn("e1", EnemyKind.BAT, Position(x=2, y=3), 32)
        stats = ENEMY_STATS[EnemyKind.BAT]
        assert enemy.position == Position(x=64, y=96)
        assert enemy.speed == stats.speed
        assert enemy.hp == stats.hp
        assert enemy.state == "idle"
        assert enemy.direction == Facing.DOWN

    def test_enemy_speeds(self) -> None:
        assert ENEMY_STATS[EnemyKind.SLIME].speed == 0.05
        assert ENEMY_STATS[EnemyKind.BAT].speed == 0.08
        assert ENEMY_STATS[EnemyKind.SKELETON].speed == 0.06
        assert ENEMY_STATS[EnemyKind.BOSS].speed == 0.07


class TestMapData:
    """Tests for MapData."""

    def test_tiles_copied_and_read_only(self) -> None:
        grid = np.zeros((4, 5), dtype=np.uint8)
        map_data = MapData(id="m", tiles=grid, theme=MapTheme.OUTDOOR)
        grid[0, 0] = TileType.TREE

        assert map_data.tiles[0, 0] == TileType.GRASS
        assert map_data.tiles.dtype == np.uint8
        with pytest.raises(ValueError):
            map_data.tiles[0, 0] = 1

    def test_dimensions_and_lookup(self) -> None:
        map_data = MapData(id="m", tiles=[[0, 1, 2], [3, 4, 5]], theme=MapTheme.INDOOR)
        assert (map_data.width, map_data.height) == (3, 2)
        assert map_data.tile_at(2, 1) == 5
        assert map_data.tile_at(3, 0) == -1
        assert map_data.tile_at(0, -1) == -1

    def test_rejects_non_2d_tiles(self) -> None:
        with pytest.raises(ValidationError):
            MapData(id="m", tiles=[0, 1, 2], theme=MapTheme.OUTDOOR)

    def test_equality_by_content(self) -> None:
        a = MapData(id="m", tiles=[[0, 1]], theme=MapTheme.CAVE)
        b = MapData(id="m", tiles=[[0, 1]], theme=MapTheme.CAVE)
        c = MapData(id="m", tiles=[[1, 1]], theme=MapTheme.CAVE)
        assert a == b
        assert a != c

    def test_serializes_client_schema(self) -> None:
        map_data = MapData(id="m", tiles=[[0, 1]], theme=MapTheme.DUNGEON)
        data = map_data.model_dump(by_alias=True, mode="json")
        assert set(data) == {"id", "tiles", "interactables", "enemies", "portals", "theme"}
        assert data["tiles"] == [[0, 1]]
        assert data["theme"] == "dungeon"
