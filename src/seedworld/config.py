"""Generator configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class TerrainConfig(BaseModel):
    """Noise sampling and biome classification thresholds."""

    elevation_scale: float = Field(default=0.08, gt=0, description="Elevation noise frequency")
    forest_scale: float = Field(default=0.05, gt=0, description="Forest density noise frequency")
    detail_scale: float = Field(default=0.25, gt=0, description="Detail noise frequency")
    detail_weight: float = Field(
        default=0.15, description="Weight of detail noise added to elevation"
    )

    water_level: float = Field(default=-0.25, description="Elevation below this is water")
    shore_level: float = Field(default=-0.18, description="Elevation below this is sand")
    mountain_level: float = Field(default=0.38, description="Elevation above this is impassable")

    dense_forest: float = Field(default=0.25, description="Forest density for dense forest")
    mixed_forest: float = Field(default=0.05, description="Forest density for mixed forest")
    tall_grass_detail: float = Field(
        default=0.35, description="Detail noise above this grows tall grass in the open"
    )

    dense_tree_weight: float = Field(default=0.70, ge=0)
    dense_bush_weight: float = Field(default=0.15, ge=0)
    dense_grass_weight: float = Field(default=0.15, ge=0)
    mixed_tree_weight: float = Field(default=0.25, ge=0)
    mixed_bush_weight: float = Field(default=0.10, ge=0)
    mixed_flower_weight: float = Field(default=0.05, ge=0)
    mixed_grass_weight: float = Field(default=0.60, ge=0)
    open_rock_weight: float = Field(default=0.02, ge=0)
    open_flower_weight: float = Field(default=0.05, ge=0)
    open_tall_grass_weight: float = Field(default=0.03, ge=0)
    open_grass_weight: float = Field(default=0.90, ge=0)

    forest_enemy_chance: float = Field(
        default=0.006, ge=0, le=1, description="Enemy spawn roll per walkable forest cell"
    )
    open_enemy_chance: float = Field(
        default=0.003, ge=0, le=1, description="Enemy spawn roll per walkable open cell"
    )

    spawn_radius: float = Field(default=3.0, ge=0, description="Cleared radius around spawn")
    house_radius: float = Field(default=5.0, ge=0, description="Cleared radius around houses")
    ruin_radius: float = Field(default=4.0, ge=0, description="Cleared radius around ruins")
    dungeon_radius: float = Field(default=4.0, ge=0, description="Cleared radius around entrances")


class PoiConfig(BaseModel):
    """Point-of-interest placement parameters."""

    count: int = Field(default=10, ge=0, description="POIs attempted besides spawn")
    margin: int = Field(default=8, ge=1, description="Minimum distance from the grid edges")
    min_distance: float = Field(default=14.0, gt=0, description="Minimum pairwise distance")
    max_attempts: int = Field(default=50, ge=1, description="Rejected draws before giving up")
    ruin_weight: float = Field(default=0.6, ge=0, description="Weight of ruins vs houses")
    house_weight: float = Field(default=0.4, ge=0)
    dungeon_cap: int = Field(default=2, ge=0, description="Maximum dungeon entrances")
    dungeon_chance: float = Field(default=0.2, ge=0, le=1, description="Dungeon roll per POI")


class RoadConfig(BaseModel):
    """Road carving parameters."""

    widen_chance: float = Field(
        default=0.3, ge=0, le=1, description="Chance to widen a road step"
    )


class StructureConfig(BaseModel):
    """Houses, ruins and wayside decoration."""

    interior_width: int = Field(default=10, ge=5, description="House interior width")
    interior_height: int = Field(default=8, ge=4, description="House interior height")
    npc_chance: float = Field(default=0.6, ge=0, le=1, description="Chance of an NPC indoors")
    rubble_radius: int = Field(default=3, ge=1, description="Ruin rubble scatter radius")
    rubble_chance: float = Field(default=0.35, ge=0, le=1, description="Rubble chance per cell")
    loot_keys: list[str] = Field(
        default_factory=lambda: ["potion", "old_key", "flower", "berry"],
        min_length=1,
        description="Item keys for ruin and dungeon loot",
    )
    wayside_attempts: int = Field(
        default=20, ge=0, description="Random draws for roadside items and NPCs"
    )


class DungeonConfig(BaseModel):
    """Dungeon room-and-corridor parameters."""

    width: int = Field(default=40, gt=0, description="Dungeon grid width")
    height: int = Field(default=30, gt=0, description="Dungeon grid height")
    room_count_min: int = Field(default=6, ge=2, description="Minimum rooms carved")
    room_count_max: int = Field(default=9, ge=2, description="Maximum rooms carved")
    room_min_size: int = Field(default=3, ge=3, description="Minimum room side")
    room_max_size: int = Field(default=7, ge=3, description="Maximum room side")
    enemy_chance: float = Field(default=0.6, ge=0, le=1, description="Enemy roll per room")
    loot_chance: float = Field(default=0.4, ge=0, le=1, description="Loot roll per room")
    cave_chance: float = Field(default=0.3, ge=0, le=1, description="Chance of cave theme")


class CampusConfig(BaseModel):
    """Campus-style urban map parameters."""

    width: int = Field(default=132, gt=0, description="Campus width in tiles")
    height: int = Field(default=100, gt=0, description="Campus height in tiles")
    block_width: int = Field(default=30, ge=12, description="Building block width")
    block_height: int = Field(default=24, ge=12, description="Building block height")
    road_width: int = Field(default=4, ge=1, description="Internal road width")
    tree_density: float = Field(default=0.5, ge=0, le=1, description="Tree area fill")


class GeneratorConfig(BaseModel):
    """Complete world generation configuration."""

    width: int = Field(default=100, gt=0, description="World width in tiles")
    height: int = Field(default=100, gt=0, description="World height in tiles")
    tile_size: int = Field(default=32, gt=0, description="Tile edge in pixels")

    terrain: TerrainConfig = Field(default_factory=TerrainConfig)
    poi: PoiConfig = Field(default_factory=PoiConfig)
    roads: RoadConfig = Field(default_factory=RoadConfig)
    structures: StructureConfig = Field(default_factory=StructureConfig)
    dungeon: DungeonConfig = Field(default_factory=DungeonConfig)
    campus: CampusConfig = Field(default_factory=CampusConfig)


# Footprints reach this far from a POI (house bypass ring)
STRUCTURE_REACH = 3


def check_layout(config: GeneratorConfig) -> None:
    """Reject configurations that cannot hold every structure.

    Args:
        config: Configuration to check.

    Raises:
        ConfigurationError: If margins, spacing or room bounds are inconsistent.
    """
    poi = config.poi
    if poi.margin < STRUCTURE_REACH + 1:
        raise ConfigurationError(
            f"POI margin {poi.margin} leaves no room for structures "
            f"(need at least {STRUCTURE_REACH + 1})"
        )
    if config.width <= 2 * poi.margin or config.height <= 2 * poi.margin:
        raise ConfigurationError(
            f"Grid {config.width}x{config.height} too small for margin {poi.margin}"
        )
    min_spacing = max(3 * STRUCTURE_REACH, config.structures.rubble_radius + 2 * STRUCTURE_REACH + 1)
    if poi.min_distance < min_spacing:
        raise ConfigurationError(
            f"POI min_distance {poi.min_distance} below {min_spacing}; footprints would collide"
        )

    dungeon = config.dungeon
    if dungeon.room_count_min > dungeon.room_count_max:
        raise ConfigurationError("dungeon.room_count_min exceeds room_count_max")
    if dungeon.room_min_size > dungeon.room_max_size:
        raise ConfigurationError("dungeon.room_min_size exceeds room_max_size")
    if dungeon.width < dungeon.room_max_size + 2 or dungeon.height < dungeon.room_max_size + 2:
        raise ConfigurationError(
            f"Dungeon {dungeon.width}x{dungeon.height} cannot hold rooms of "
            f"size {dungeon.room_max_size}"
        )


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from a TOML file.

    Missing keys fall back to the defaults.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GeneratorConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        ConfigurationError: If values fail validation.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {config_path}: {e}") from e
