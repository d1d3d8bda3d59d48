"""Tests for biome classification of the exterior grid."""

import numpy as np
import pytest

from seedworld.config import GeneratorConfig, TerrainConfig
from seedworld.grid import new_grid
from seedworld.models import PoiKind, PointOfInterest, to_tile
from seedworld.noise import NoiseChannels
from seedworld.rng import RandomStream
from seedworld.terrain import protection_owners, protection_radius, synthesize_terrain
from seedworld.tiles import BORDER_TILE, TileType, is_solid
from seedworld.types import Position


def _poi(x: int, y: int, kind: PoiKind) -> PointOfInterest:
    return PointOfInterest(position=Position(x=x, y=y), kind=kind)


def _synthesize(config: GeneratorConfig, pois: list[PointOfInterest], seed: int = 1):
    grid = new_grid(config.width, config.height, TileType.GRASS)
    enemies = synthesize_terrain(
        grid, pois, NoiseChannels.from_seed(seed), RandomStream(seed), config
    )
    return grid, enemies


class TestProtection:
    """Tests for protection radii."""

    def test_radius_per_kind(self) -> None:
        t = TerrainConfig()
        assert protection_radius(PoiKind.SPAWN, t) == t.spawn_radius
        assert protection_radius(PoiKind.HOUSE, t) == t.house_radius

    def test_earlier_poi_wins(self) -> None:
        pois = [_poi(5, 5, PoiKind.SPAWN), _poi(8, 5, PoiKind.HOUSE)]
        owners = protection_owners(20, 20, pois, TerrainConfig())
        assert owners[5, 6] == 0
        assert owners[5, 10] == 1
        assert owners[18, 18] == -1


class TestSynthesizeTerrain:
    """Tests for synthesize_terrain."""

    def test_border_is_wall(self, default_config: GeneratorConfig) -> None:
        grid, _ = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)])
        assert np.all(grid[0, :] == BORDER_TILE)
        assert np.all(grid[-1, :] == BORDER_TILE)
        assert np.all(grid[:, 0] == BORDER_TILE)
        assert np.all(grid[:, -1] == BORDER_TILE)

    def test_only_world_codes(self, default_config: GeneratorConfig) -> None:
        grid, _ = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)])
        assert int(grid.max()) <= max(TileType)

    def test_roads_preserved(self, default_config: GeneratorConfig) -> None:
        """Cells already holding road are never reclassified."""
        grid = new_grid(default_config.width, default_config.height, TileType.GRASS)
        grid[20, 10:40] = TileType.PATH
        synthesize_terrain(
            grid, [_poi(50, 50, PoiKind.SPAWN)], NoiseChannels.from_seed(3),
            RandomStream(3), default_config,
        )
        assert np.all(grid[20, 10:40] == TileType.PATH)

    def test_spawn_area_cleared(self, default_config: GeneratorConfig) -> None:
        grid, _ = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)])
        radius = int(default_config.terrain.spawn_radius)
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy <= radius * radius:
                    assert grid[50 + dy, 50 + dx] == TileType.GRASS

    def test_dungeon_area_is_floor(self, default_config: GeneratorConfig) -> None:
        pois = [_poi(50, 50, PoiKind.SPAWN), _poi(20, 20, PoiKind.DUNGEON)]
        grid, _ = _synthesize(default_config, pois)
        assert grid[20, 20] == TileType.FLOOR
        assert grid[22, 21] == TileType.FLOOR

    def test_ruin_area_dirt_or_grass(self, default_config: GeneratorConfig) -> None:
        pois = [_poi(50, 50, PoiKind.SPAWN), _poi(20, 70, PoiKind.RUIN)]
        grid, _ = _synthesize(default_config, pois)
        area = grid[68:73, 18:23]
        assert set(np.unique(area)) <= {TileType.DIRT, TileType.GRASS}

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_enemies_on_walkable_tiles(self, seed: int, default_config: GeneratorConfig) -> None:
        grid, enemies = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)], seed)
        for enemy in enemies:
            tile = to_tile(enemy.position, default_config.tile_size)
            assert not is_solid(int(grid[tile.y, tile.x]))
            assert enemy.id.startswith("wild_")

    def test_produces_varied_biomes(self, default_config: GeneratorConfig) -> None:
        grid, _ = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)])
        assert len(np.unique(grid)) >= 4

    def test_deterministic(self, default_config: GeneratorConfig) -> None:
        a, enemies_a = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)], 5)
        b, enemies_b = _synthesize(default_config, [_poi(50, 50, PoiKind.SPAWN)], 5)
        np.testing.assert_array_equal(a, b)
        assert enemies_a == enemies_b
