"""Seeded procedural world generation.

This package turns one integer seed into a tile world: noise-based terrain,
points of interest joined by roads, houses and ruins, interior maps linked
by portals, and room-and-corridor dungeons.
"""

from .campus import generate_campus
from .config import GeneratorConfig, check_layout, load_config
from .dungeon import DungeonLayout, generate_dungeon
from .exceptions import ConfigurationError, WorldGenError
from .generator import generate_world
from .models import (
    Enemy,
    EnemyKind,
    GeneratedWorld,
    Interactable,
    InteractableKind,
    MapData,
    PoiKind,
    PointOfInterest,
    Portal,
    Room,
    Trigger,
)
from .noise import NoiseChannels, ValueNoiseField
from .persistence import load_map, load_world, save_map, save_world, world_to_dict
from .rng import RandomStream, derive_seed, normalize_seed, resolve_seed
from .tiles import CampusTile, MapTheme, TileType, is_solid
from .types import FACING_DELTAS, Facing, Position
from .validation import ValidationResult, validate_world

__all__ = [
    # Types
    "Facing",
    "Position",
    "FACING_DELTAS",
    # Tiles
    "TileType",
    "CampusTile",
    "MapTheme",
    "is_solid",
    # Config
    "GeneratorConfig",
    "check_layout",
    "load_config",
    # Randomness
    "RandomStream",
    "derive_seed",
    "normalize_seed",
    "resolve_seed",
    "NoiseChannels",
    "ValueNoiseField",
    # Models
    "Enemy",
    "EnemyKind",
    "GeneratedWorld",
    "Interactable",
    "InteractableKind",
    "MapData",
    "PoiKind",
    "PointOfInterest",
    "Portal",
    "Room",
    "Trigger",
    # Generation
    "generate_world",
    "generate_dungeon",
    "DungeonLayout",
    "generate_campus",
    # Validation
    "ValidationResult",
    "validate_world",
    # Persistence
    "load_map",
    "load_world",
    "save_map",
    "save_world",
    "world_to_dict",
    # Exceptions
    "WorldGenError",
    "ConfigurationError",
]
