"""Shared test fixtures for world generation tests."""

import pytest

from seedworld.config import DungeonConfig, GeneratorConfig, PoiConfig
from seedworld.generator import generate_world
from seedworld.grid import TileGrid, new_grid, outline_rect
from seedworld.models import GeneratedWorld
from seedworld.tiles import TileType


@pytest.fixture
def default_config() -> GeneratorConfig:
    """Stock 100x100 configuration."""
    return GeneratorConfig()


@pytest.fixture
def small_config() -> GeneratorConfig:
    """60x48 world with fewer POIs and a smaller dungeon."""
    return GeneratorConfig(
        width=60,
        height=48,
        poi=PoiConfig(count=6, margin=6, min_distance=12.0),
        dungeon=DungeonConfig(width=30, height=24, room_count_min=4, room_count_max=6),
    )


@pytest.fixture
def open_grid() -> TileGrid:
    """60x60 grass grid with a tree border."""
    grid = new_grid(60, 60, TileType.GRASS)
    outline_rect(grid, 0, 0, 60, 60, TileType.TREE)
    return grid


@pytest.fixture(scope="module")
def world_seed_1() -> GeneratedWorld:
    """Default world for seed 1, shared within a test module."""
    return generate_world(1)
