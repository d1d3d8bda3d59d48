"""Tests for configuration models, layout checks and TOML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from seedworld.config import (
    DungeonConfig,
    GeneratorConfig,
    PoiConfig,
    StructureConfig,
    check_layout,
    load_config,
)
from seedworld.exceptions import ConfigurationError, WorldGenError

CONFIGS_DIR = Path(__file__).parent.parent / "configs"


class TestDefaults:
    """Tests for the default configuration."""

    def test_default_dimensions(self, default_config: GeneratorConfig) -> None:
        assert default_config.width == 100
        assert default_config.height == 100
        assert default_config.tile_size == 32

    def test_default_passes_layout_check(self, default_config: GeneratorConfig) -> None:
        check_layout(default_config)

    def test_sections_independent(self) -> None:
        """Nested sections are separate instances per config."""
        a = GeneratorConfig()
        b = GeneratorConfig()
        assert a.structures.loot_keys == b.structures.loot_keys
        assert a.structures.loot_keys is not b.structures.loot_keys


class TestFieldConstraints:
    """Tests for pydantic field constraints."""

    def test_zero_width_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GeneratorConfig(width=0)

    def test_negative_poi_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PoiConfig(count=-1)

    def test_probability_above_one_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DungeonConfig(enemy_chance=1.5)

    def test_empty_loot_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StructureConfig(loot_keys=[])


class TestCheckLayout:
    """Tests for layout consistency checks."""

    def test_small_margin_rejected(self) -> None:
        config = GeneratorConfig(poi=PoiConfig(margin=3))
        with pytest.raises(ConfigurationError, match="margin"):
            check_layout(config)

    def test_grid_too_small_for_margin(self) -> None:
        config = GeneratorConfig(width=16, height=16, poi=PoiConfig(margin=8))
        with pytest.raises(ConfigurationError, match="too small"):
            check_layout(config)

    def test_tight_spacing_rejected(self) -> None:
        config = GeneratorConfig(poi=PoiConfig(min_distance=5.0))
        with pytest.raises(ConfigurationError, match="min_distance"):
            check_layout(config)

    def test_spacing_grows_with_rubble_radius(self) -> None:
        config = GeneratorConfig(
            poi=PoiConfig(min_distance=12.0),
            structures=StructureConfig(rubble_radius=6),
        )
        with pytest.raises(ConfigurationError):
            check_layout(config)

    def test_room_count_bounds(self) -> None:
        config = GeneratorConfig(dungeon=DungeonConfig(room_count_min=8, room_count_max=4))
        with pytest.raises(ConfigurationError, match="room_count"):
            check_layout(config)

    def test_room_size_bounds(self) -> None:
        config = GeneratorConfig(dungeon=DungeonConfig(room_min_size=6, room_max_size=4))
        with pytest.raises(ConfigurationError, match="room_min_size"):
            check_layout(config)

    def test_dungeon_too_small_for_rooms(self) -> None:
        config = GeneratorConfig(dungeon=DungeonConfig(width=8, height=30, room_max_size=7))
        with pytest.raises(ConfigurationError, match="cannot hold"):
            check_layout(config)

    def test_configuration_error_is_worldgen_error(self) -> None:
        assert issubclass(ConfigurationError, WorldGenError)


class TestLoadConfig:
    """Tests for loading TOML configuration."""

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "world.toml"
        path.write_text("width = 80\n\n[poi]\ncount = 4\n")

        config = load_config(path)

        assert config.width == 80
        assert config.height == 100
        assert config.poi.count == 4
        assert config.poi.margin == 8

    def test_invalid_values_raise_configuration_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("width = -5\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_bundled_small_config(self) -> None:
        """The example config in configs/ loads and passes the layout check."""
        config = load_config(CONFIGS_DIR / "small.toml")
        assert config.width == 60
        assert config.poi.count == 6
        check_layout(config)
